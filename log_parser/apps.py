from django.apps import AppConfig


class LogParserConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'log_parser'
    verbose_name = 'Access Log Parser'
