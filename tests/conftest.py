from datetime import datetime

import pytest
from django.db import OperationalError

SCENARIO_LINES = [
    "2017-01-01.13:20:00|192.168.1.1|GET /a|200|UA1",
    "2017-01-01.13:40:00|192.168.1.1|GET /b|200|UA1",
    "2017-01-01.13:50:00|192.168.1.1|GET /c|200|UA1",
]

WINDOW_START = datetime(2017, 1, 1, 13, 0, 0)


@pytest.fixture
def scenario_lines():
    return list(SCENARIO_LINES)


@pytest.fixture
def write_log(tmp_path):
    """Write lines to an access log file and return its path."""
    def _write(lines, name="access.log"):
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path
    return _write


class FakeStore:
    """Store double answering the window query from a fixed mapping."""

    def __init__(self, counts):
        self.counts = dict(counts)
        self.queries = []

    def count_by_ip_in_window(self, window):
        self.queries.append(window)
        return dict(self.counts)


@pytest.fixture
def fake_store():
    return FakeStore


class UnavailableManager:
    """Stands in for LogRecord.objects when the database connection is gone."""

    def _fail(self, *args, **kwargs):
        raise OperationalError("server has gone away")

    def all(self):
        return self

    def filter(self, *args, **kwargs):
        return self

    def values(self, *args):
        return self

    def annotate(self, **kwargs):
        return self

    def order_by(self, *args):
        return self

    delete = _fail
    bulk_create = _fail
    count = _fail

    def __iter__(self):
        self._fail()


@pytest.fixture
def database_down(monkeypatch):
    """Call to make every LogRecord query fail with a DatabaseError."""
    from log_parser.models import LogRecord

    def _down():
        monkeypatch.setattr(LogRecord, "objects", UnavailableManager())
    return _down
