from django.core.management.base import BaseCommand, CommandError

from log_parser.arguments import build_options
from log_parser.exceptions import ConfigurationError, PipelineError
from log_parser.pipeline import build_pipeline


class Command(BaseCommand):
    help = 'Load an access log and block IPs that reached the request threshold within a window'

    def add_arguments(self, parser):
        parser.add_argument(
            '--accesslog',
            type=str,
            help='Path to the pipe-delimited access log'
        )
        parser.add_argument(
            '--startDate',
            dest='start_date',
            type=str,
            help='Window start, formatted YYYY-MM-DD.HH:MM:SS'
        )
        parser.add_argument(
            '--duration',
            type=str,
            help='Window length: hourly or daily'
        )
        parser.add_argument(
            '--threshold',
            type=str,
            help='Minimum number of requests within the window to block an IP'
        )
        parser.add_argument(
            '--chunk-size',
            dest='chunk_size',
            type=int,
            help='Records inserted per batch (defaults to LOG_PARSER["CHUNK_SIZE"])'
        )

    def handle(self, *args, **options):
        try:
            job = build_options(
                accesslog=options.get('accesslog'),
                start_date=options.get('start_date'),
                duration=options.get('duration'),
                threshold=options.get('threshold'),
            )
        except ConfigurationError as e:
            raise CommandError(f'Invalid arguments: {e.message}')

        try:
            pipeline = build_pipeline(chunk_size=options.get('chunk_size'))
            result = pipeline.run(job.accesslog, job.start_date, job.duration, job.threshold)
        except ValueError as e:
            raise CommandError(f'Invalid arguments: {e}')
        except PipelineError as e:
            raise CommandError(f'Parser job failed: {e}')

        for entry in result.entries:
            self.stdout.write(f'IP BLOCKED {entry.ip} ({entry.requests} requests)')

        self.stdout.write('-' * 40)
        self.stdout.write(
            self.style.SUCCESS(
                f'Records loaded: {result.records_loaded}\n'
                f'IPs blocked: {result.entries_blocked}'
            )
        )

        if result.persistence_failures:
            for failure in result.persistence_failures:
                self.stderr.write(self.style.WARNING(failure.message))
            raise CommandError(
                f'{len(result.persistence_failures)} blocked IPs could not be recorded in the audit table'
            )
