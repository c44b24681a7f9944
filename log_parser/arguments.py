"""
Validation of the job parameters.

Arguments are written ``--name=value``; the four parameters are
``accesslog``, ``startDate``, ``duration`` and ``threshold``.
"""
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .exceptions import ConfigurationError, MalformedTimestampError
from .parsing import parse_timestamp
from .windows import Duration

ARGUMENT_PATTERN = re.compile(r'-{1,2}[A-Za-z]+=.+')
PARAMETERS = ('accesslog', 'startDate', 'duration', 'threshold')


@dataclass(frozen=True)
class ParserOptions:
    accesslog: Path
    start_date: datetime
    duration: Duration
    threshold: int


def split_arguments(argv):
    """
    Split ``--name=value`` arguments into a name -> value mapping.

    Names lose their leading dashes. Arguments of any other shape and
    unknown names are rejected.
    """
    values = {}
    for arg in argv:
        if not ARGUMENT_PATTERN.fullmatch(arg):
            raise ConfigurationError(
                "malformed_argument",
                f"Arguments must follow the format --argument=value, got {arg!r}",
                details={'argument': arg},
            )
        name, value = arg.split('=', 1)
        name = name.lstrip('-').strip()
        if name not in PARAMETERS:
            raise ConfigurationError(
                "unknown_argument",
                f"Unknown argument {name!r}, expected one of: {', '.join(PARAMETERS)}",
                details={'argument': arg},
            )
        values[name] = value.strip()
    return values


def build_options(accesslog=None, start_date=None, duration=None, threshold=None):
    """Validate raw parameter values into ParserOptions"""
    provided = {
        'accesslog': accesslog,
        'startDate': start_date,
        'duration': duration,
        'threshold': threshold,
    }
    missing = [name for name, value in provided.items() if value is None or str(value).strip() == '']
    if missing:
        raise ConfigurationError(
            "missing_argument",
            f"Missing required arguments: {', '.join('--' + name for name in missing)}",
            details={'missing': missing},
        )

    if isinstance(start_date, datetime):
        start = start_date
    else:
        try:
            start = parse_timestamp(start_date)
        except MalformedTimestampError as e:
            raise ConfigurationError(
                "malformed_start_date",
                f"startDate must follow YYYY-MM-DD.HH:MM:SS, got {start_date!r}",
                details=e.details,
            )

    if isinstance(duration, Duration):
        unit = duration
    else:
        # UnsupportedDurationError is already a ConfigurationError
        unit = Duration.from_token(str(duration).strip())

    try:
        limit = int(str(threshold).strip())
    except ValueError:
        raise ConfigurationError(
            "malformed_threshold",
            f"threshold must be a number, got {threshold!r}",
            details={'threshold': threshold},
        )

    return ParserOptions(
        accesslog=Path(str(accesslog).strip()),
        start_date=start,
        duration=unit,
        threshold=limit,
    )
