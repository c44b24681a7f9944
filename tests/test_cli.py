from django.core.management.base import CommandError
from django.db import OperationalError

from log_parser import cli


class TestMain:

    def test_rejects_malformed_argument_before_setup(self, monkeypatch, capsys):
        def fail_setup():
            raise AssertionError("django must not be set up")

        monkeypatch.setattr("django.setup", fail_setup)

        assert cli.main(["--accesslog", "/tmp/access.log"]) == 2
        assert "--argument=value" in capsys.readouterr().err

    def test_runs_parse_log_with_named_values(self, monkeypatch):
        calls = []
        monkeypatch.setattr("django.setup", lambda: None)
        monkeypatch.setattr(
            "django.core.management.call_command",
            lambda name, **options: calls.append((name, options)),
        )

        status = cli.main([
            "--threshold=3",
            "--accesslog=/tmp/access.log",
            "--duration=hourly",
            "--startDate=2017-01-01.13:00:00",
        ])

        assert status == 0
        assert calls[-1] == ("parse_log", {
            "threshold": "3",
            "accesslog": "/tmp/access.log",
            "duration": "hourly",
            "startDate": "2017-01-01.13:00:00",
        })
        assert calls[0][0] == "migrate"

    def test_command_errors_give_non_zero_exit(self, monkeypatch, capsys):
        def failing_command(name, **options):
            if name == "parse_log":
                raise CommandError("Parser job failed: LOADING failed: boom")

        monkeypatch.setattr("django.setup", lambda: None)
        monkeypatch.setattr("django.core.management.call_command", failing_command)

        assert cli.main(["--accesslog=/tmp/a.log"]) == 1
        assert "LOADING failed: boom" in capsys.readouterr().err

    def test_database_errors_give_non_zero_exit(self, monkeypatch, capsys):
        def unreachable_database(name, **options):
            if name == "migrate":
                raise OperationalError("unable to open database file")

        monkeypatch.setattr("django.setup", lambda: None)
        monkeypatch.setattr("django.core.management.call_command", unreachable_database)

        assert cli.main(["--accesslog=/tmp/a.log"]) == 1
        assert "database error: unable to open database file" in capsys.readouterr().err
