"""
``parser`` console entry point.

    parser --accesslog=/path/to/access.log --startDate=2017-01-01.13:00:00 --duration=hourly --threshold=100
"""
import os
import sys

from .arguments import split_arguments
from .exceptions import ConfigurationError


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv

    try:
        values = split_arguments(argv)
    except ConfigurationError as e:
        sys.stderr.write(f"Error: {e.message}\n")
        return 2

    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'parser_site.settings')
    import django
    from django.core.management import call_command
    from django.core.management.base import CommandError
    from django.db import DatabaseError

    django.setup()
    try:
        call_command('migrate', interactive=False, verbosity=0)
        call_command('parse_log', **values)
    except CommandError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1
    except DatabaseError as e:
        sys.stderr.write(f"Error: database error: {e}\n")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
