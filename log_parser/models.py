from django.db import models
from django.utils import timezone


class LogRecord(models.Model):
    """One ingested access log line; ids are assigned by the loader, not the database"""
    id = models.PositiveIntegerField(primary_key=True)
    timestamp = models.DateTimeField(db_index=True)
    ip = models.CharField(max_length=255, db_index=True)
    request = models.TextField()
    status = models.TextField()
    user_agent = models.TextField()

    class Meta:
        db_table = 'user_log'
        ordering = ['id']

    def __str__(self):
        return f"#{self.id} {self.ip} - {self.request} - {self.timestamp}"


class BlockedEntry(models.Model):
    """Audit entry for an IP that reached the request threshold within a window"""
    ip = models.CharField(max_length=255, db_index=True)
    requests = models.PositiveIntegerField()
    blocked_date = models.DateTimeField(default=timezone.now)
    comment = models.TextField()

    class Meta:
        db_table = 'blocked_user'
        verbose_name = 'Blocked IP'
        verbose_name_plural = 'Blocked IPs'
        ordering = ['-blocked_date', 'ip']

    def __str__(self):
        return f"Blocked: {self.ip} ({self.requests} requests)"
