"""
Log store backed by the ``user_log`` table.

The store owns every LogRecord: it truncates the table before a run,
assigns sequential ids in insertion order and answers the per-IP window
aggregation used by the detector.
"""
import logging
from contextlib import contextmanager

from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models import Count

from .exceptions import StoreError
from .models import LogRecord

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1000


class LogStore:
    """
    Append-only holder of ingested log records.

    Ids start at 1 after every reset. Writing before any reset performs an
    implicit reset first. Not safe for concurrent writers.
    """

    def __init__(self, chunk_size=None):
        if chunk_size is None:
            chunk_size = getattr(settings, 'LOG_PARSER', {}).get('CHUNK_SIZE', DEFAULT_CHUNK_SIZE)
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size
        self._last_id = None

    def reset(self):
        """Discard all records and restart id assignment"""
        try:
            deleted, _ = LogRecord.objects.all().delete()
        except DatabaseError as e:
            raise StoreError("reset_failed", f"Failed to empty log store: {e}")
        self._last_id = 0
        logger.info(f"Emptied log store ({deleted} records removed)")

    def _ensure_started(self):
        if self._last_id is None:
            self.reset()

    def _identify(self, parsed):
        self._last_id += 1
        return LogRecord(
            id=self._last_id,
            timestamp=parsed.timestamp,
            ip=parsed.ip,
            request=parsed.request,
            status=parsed.status,
            user_agent=parsed.user_agent,
        )

    def append(self, parsed):
        """Store one parsed line and return it with its id"""
        self._ensure_started()
        record = self._identify(parsed)
        try:
            with transaction.atomic():
                record.save(force_insert=True)
        except DatabaseError as e:
            self._last_id -= 1
            raise StoreError(
                "append_failed",
                f"Failed to store record {record.id}: {e}",
                details={'id': record.id},
            )
        return record

    def extend(self, parsed_records):
        """Bulk load parsed lines in chunks; ids follow iteration order"""
        self._ensure_started()
        first_id = self._last_id
        records = [self._identify(parsed) for parsed in parsed_records]
        try:
            with transaction.atomic():
                LogRecord.objects.bulk_create(records, batch_size=self.chunk_size)
        except DatabaseError as e:
            self._last_id = first_id
            raise StoreError(
                "append_failed",
                f"Failed to store records {first_id + 1}-{first_id + len(records)}: {e}",
            )
        return records

    @contextmanager
    def loading(self):
        """
        Run a load inside one transaction.

        If the block raises, the inserted rows are rolled back and id
        assignment restarts, leaving the store empty after a reset.
        """
        self._ensure_started()
        first_id = self._last_id
        try:
            with transaction.atomic():
                yield self
        except Exception:
            self._last_id = first_id
            raise

    def count_by_ip_in_window(self, window):
        """Count records with ``start <= timestamp < end``, grouped by ip"""
        try:
            rows = LogRecord.objects.filter(
                timestamp__gte=window.start,
                timestamp__lt=window.end,
            ).values('ip').annotate(
                requests=Count('id')
            ).order_by('ip')
            return {row['ip']: row['requests'] for row in rows}
        except DatabaseError as e:
            raise StoreError(
                "query_failed",
                f"Failed to aggregate requests between {window.start} and {window.end}: {e}",
            )

    def count(self):
        try:
            return LogRecord.objects.count()
        except DatabaseError as e:
            raise StoreError("query_failed", f"Failed to count log records: {e}")
