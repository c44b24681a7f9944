from django.core.management.base import BaseCommand, CommandError

from log_parser.models import BlockedEntry


class Command(BaseCommand):
    help = 'List the audit trail of blocked IP addresses'

    def add_arguments(self, parser):
        parser.add_argument(
            '--ip',
            type=str,
            help='Only show entries for this IP address'
        )
        parser.add_argument(
            '--limit',
            type=int,
            default=50,
            help='Maximum number of entries to show (default 50)'
        )

    def handle(self, *args, **options):
        limit = options['limit']
        if limit < 1:
            raise CommandError('--limit must be a positive number')

        entries = BlockedEntry.objects.all().order_by('-blocked_date', 'ip')
        if options.get('ip'):
            entries = entries.filter(ip=options['ip'])
        entries = entries[:limit]

        if not entries:
            self.stdout.write(self.style.WARNING('No blocked IPs found'))
            return

        self.stdout.write(self.style.SUCCESS('Blocked IP Addresses:'))
        self.stdout.write('-' * 80)

        for entry in entries:
            self.stdout.write(
                f'IP: {entry.ip}\n'
                f'Requests: {entry.requests}\n'
                f'Blocked on: {entry.blocked_date}\n'
                f'Reason: {entry.comment}\n'
                f'{"-" * 40}'
            )
