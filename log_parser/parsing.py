"""
Parsing of pipe-delimited access log lines.

A line has exactly five fields, ``date|ip|request|status|userAgent``, with
the date written as ``YYYY-MM-DD.HH:MM:SS``. Parsing is pure: ids are
assigned later by the store.
"""
import re
from dataclasses import dataclass
from datetime import datetime

from .exceptions import MalformedLineError, MalformedTimestampError

DELIMITER = '|'
FIELD_NAMES = ('date', 'ip', 'request', 'status', 'user_agent')
TIMESTAMP_FORMAT = '%Y-%m-%d.%H:%M:%S'

# strptime alone accepts single-digit fields, the log format does not
TIMESTAMP_PATTERN = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}\.[0-9]{2}:[0-9]{2}:[0-9]{2}')


@dataclass(frozen=True)
class ParsedLine:
    """A validated log line, not yet identified"""
    timestamp: datetime
    ip: str
    request: str
    status: str
    user_agent: str


def parse_timestamp(text):
    """Parse a ``YYYY-MM-DD.HH:MM:SS`` value into a naive datetime."""
    value = text.strip()
    if not TIMESTAMP_PATTERN.fullmatch(value):
        raise MalformedTimestampError(
            f"Invalid timestamp {value!r}, expected YYYY-MM-DD.HH:MM:SS",
            details={'value': value},
        )
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise MalformedTimestampError(
            f"Invalid timestamp {value!r}: {e}",
            details={'value': value},
        )


def parse_line(line, line_number=None):
    """
    Turn one raw log line into a ParsedLine.

    Raises MalformedLineError when the line does not have exactly five
    fields and MalformedTimestampError when the date field is invalid.
    ``line_number`` only enriches the error details.
    """
    text = line.rstrip('\r\n')
    context = {'line': text}
    if line_number is not None:
        context['line_number'] = line_number
    where = f" at line {line_number}" if line_number is not None else ""

    fields = [field.strip() for field in text.split(DELIMITER)]
    if len(fields) != len(FIELD_NAMES):
        raise MalformedLineError(
            f"Expected {len(FIELD_NAMES)} fields{where}, found {len(fields)}: {text!r}",
            details=context,
        )

    date, ip, request, status, user_agent = fields
    try:
        timestamp = parse_timestamp(date)
    except MalformedTimestampError as e:
        raise MalformedTimestampError(f"{e.message}{where}", details={**e.details, **context})

    return ParsedLine(
        timestamp=timestamp,
        ip=ip,
        request=request,
        status=status,
        user_agent=user_agent,
    )
