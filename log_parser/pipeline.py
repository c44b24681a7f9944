"""
Ingestion pipeline: reset the store, load the access log, detect abusive IPs.

A run walks NOT_STARTED -> RESETTING -> LOADING -> DETECTING -> COMPLETED.
Any failure moves it to FAILED and raises PipelineError naming the phase.
A malformed line aborts the whole run; the load is rolled back so the
store ends empty rather than partially loaded.
"""
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .detection import ThresholdDetector
from .exceptions import MalformedLineError, PipelineError
from .parsing import parse_line
from .store import LogStore
from .windows import WindowResolver

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    NOT_STARTED = "NOT_STARTED"
    RESETTING = "RESETTING"
    LOADING = "LOADING"
    DETECTING = "DETECTING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass
class PipelineResult:
    state: PipelineState
    records_loaded: int
    entries: list = field(default_factory=list)
    persistence_failures: List[Exception] = field(default_factory=list)

    @property
    def entries_blocked(self):
        return len(self.entries)

    @property
    def ok(self):
        return self.state is PipelineState.COMPLETED and not self.persistence_failures

    def summary(self):
        return {
            'state': self.state.value,
            'records_loaded': self.records_loaded,
            'entries_blocked': self.entries_blocked,
            'blocked': [{'ip': entry.ip, 'requests': entry.requests} for entry in self.entries],
            'persistence_failures': [failure.to_dict() for failure in self.persistence_failures],
        }


class IngestionPipeline:
    """Runs one ingestion and detection job against an exclusively owned store"""

    def __init__(self, store, resolver, detector):
        self.store = store
        self.resolver = resolver
        self.detector = detector
        self.state = PipelineState.NOT_STARTED

    def _enter(self, state):
        self.state = state
        logger.info(f"Pipeline entering {state.value}")

    def run(self, source, start, duration, threshold):
        """
        Ingest ``source`` and flag IPs with at least ``threshold`` requests
        in ``[start, start + 1 duration)``.

        ``source`` is a path to the access log or an iterable of lines.
        """
        if self.state in (PipelineState.RESETTING, PipelineState.LOADING, PipelineState.DETECTING):
            raise PipelineError(
                PipelineState.NOT_STARTED.value,
                RuntimeError(f"pipeline is already running ({self.state.value})"),
            )

        self.state = PipelineState.NOT_STARTED
        try:
            self._enter(PipelineState.RESETTING)
            self.store.reset()

            self._enter(PipelineState.LOADING)
            records_loaded = self._load(source)
            logger.info(f"Loaded {records_loaded} records")

            self._enter(PipelineState.DETECTING)
            window = self.resolver.resolve(start, duration)
            detection = self.detector.detect(self.store, window, threshold)
            rows = self.store.count()
        except Exception as e:
            failed_phase = self.state
            self.state = PipelineState.FAILED
            logger.error(f"Pipeline failed during {failed_phase.value}: {e}")
            raise PipelineError(failed_phase.value, e) from e

        self._enter(PipelineState.COMPLETED)
        result = PipelineResult(
            state=self.state,
            records_loaded=records_loaded,
            entries=list(detection.entries),
            persistence_failures=list(detection.persistence_failures),
        )
        self._report(result, rows)
        return result

    def _load(self, source):
        loaded = 0
        chunk = []
        with self.store.loading():
            for line_number, line in enumerate(self._lines(source), 1):
                if not line.strip():
                    continue
                chunk.append(parse_line(line, line_number=line_number))
                if len(chunk) >= self.store.chunk_size:
                    loaded += len(self.store.extend(chunk))
                    chunk = []
            if chunk:
                loaded += len(self.store.extend(chunk))
        return loaded

    def _lines(self, source):
        if isinstance(source, (str, bytes, os.PathLike)):
            with open(source, 'rb') as f:
                for line_number, raw in enumerate(f, 1):
                    try:
                        line = raw.decode('utf-8')
                    except UnicodeDecodeError as e:
                        text = raw.decode('utf-8', errors='replace').rstrip('\r\n')
                        raise MalformedLineError(
                            f"Line {line_number} is not valid UTF-8: {e}",
                            details={'line': text, 'line_number': line_number},
                        )
                    yield line
        else:
            yield from source

    def _report(self, result, rows):
        logger.info(f"Job finished: {rows} rows held in user_log, {result.entries_blocked} IPs blocked")
        if result.persistence_failures:
            logger.warning(f"{len(result.persistence_failures)} blocked IPs could not be recorded")


def build_pipeline(chunk_size=None, sink=None, clock=None):
    """Assemble a pipeline with its own store, resolver and detector"""
    detector_options = {}
    if sink is not None:
        detector_options['sink'] = sink
    if clock is not None:
        detector_options['clock'] = clock
    return IngestionPipeline(
        store=LogStore(chunk_size=chunk_size),
        resolver=WindowResolver(),
        detector=ThresholdDetector(**detector_options),
    )
