import pytest

from log_parser.exceptions import ConfigurationError, PipelineError
from log_parser.models import BlockedEntry
from log_parser.tasks import run_parser_job

pytestmark = pytest.mark.django_db


class TestRunParserJob:

    def test_returns_summary(self, scenario_lines, write_log):
        path = write_log(scenario_lines)

        summary = run_parser_job(str(path), "2017-01-01.13:00:00", "hourly", "3")

        assert summary["state"] == "COMPLETED"
        assert summary["records_loaded"] == 3
        assert summary["entries_blocked"] == 1
        assert summary["blocked"] == [{"ip": "192.168.1.1", "requests": 3}]
        assert BlockedEntry.objects.count() == 1

    def test_runs_eagerly_through_celery(self, scenario_lines, write_log):
        path = write_log(scenario_lines)

        result = run_parser_job.apply(args=(str(path), "2017-01-01.13:00:00", "daily", 4))

        assert result.successful()
        assert result.get()["entries_blocked"] == 0

    def test_rejects_bad_arguments(self, scenario_lines, write_log):
        path = write_log(scenario_lines)

        with pytest.raises(ConfigurationError):
            run_parser_job(str(path), "2017-01-01", "hourly", 3)

    def test_pipeline_failures_propagate(self, write_log):
        path = write_log(["not|a|log"])

        with pytest.raises(PipelineError):
            run_parser_job(str(path), "2017-01-01.13:00:00", "hourly", 3)
