import logging
from dataclasses import dataclass, field
from typing import List

from django.db import DatabaseError, transaction
from django.utils import timezone

from .exceptions import PersistenceError
from .models import BlockedEntry

logger = logging.getLogger(__name__)

COMMENT_TEMPLATE = "blocked because it exceeded the threshold of {threshold} requests in 1 {unit}"


def save_blocked_entry(entry):
    """Default sink: append one entry to the blocked_user audit table"""
    try:
        with transaction.atomic():
            entry.save(force_insert=True)
    except DatabaseError as e:
        raise PersistenceError(
            "blocked_entry_not_saved",
            f"Failed to record blocked IP {entry.ip}: {e}",
            details={'ip': entry.ip, 'requests': entry.requests},
        )


@dataclass
class DetectionResult:
    entries: List[BlockedEntry] = field(default_factory=list)
    persistence_failures: List[PersistenceError] = field(default_factory=list)

    @property
    def ok(self):
        return not self.persistence_failures

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)


class ThresholdDetector:
    """
    Flags IPs whose request count in a window reaches the threshold.

    Comparison is inclusive. Entries are ordered by ip and, when a sink is
    set, handed to it one at a time; a failed write is recorded and the
    remaining entries are still processed.
    """

    def __init__(self, sink=save_blocked_entry, clock=timezone.now):
        self.sink = sink
        self.clock = clock

    def detect(self, store, window, threshold):
        counts = store.count_by_ip_in_window(window)
        comment = COMMENT_TEMPLATE.format(threshold=threshold, unit=window.unit)
        blocked_date = self.clock()

        result = DetectionResult()
        for ip in sorted(counts):
            requests = counts[ip]
            if requests < threshold:
                continue

            entry = BlockedEntry(
                ip=ip,
                requests=requests,
                blocked_date=blocked_date,
                comment=comment,
            )
            result.entries.append(entry)
            logger.warning(f"IP BLOCKED {ip} ({requests} requests in 1 {window.unit} from {window.start})")

            if self.sink is None:
                continue
            try:
                self.sink(entry)
            except PersistenceError as e:
                result.persistence_failures.append(e)
                logger.error(f"Could not record blocked IP {ip}: {e}")

        return result
