from django.contrib import admin
from .models import LogRecord, BlockedEntry


class ReadOnlyAdmin(admin.ModelAdmin):
    """Records are written by the parser job only"""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(LogRecord)
class LogRecordAdmin(ReadOnlyAdmin):
    list_display = ['id', 'timestamp', 'ip', 'request', 'status']
    list_filter = ['timestamp', 'status']
    search_fields = ['ip', 'request', 'user_agent']
    ordering = ['id']
    date_hierarchy = 'timestamp'


@admin.register(BlockedEntry)
class BlockedEntryAdmin(ReadOnlyAdmin):
    list_display = ['ip', 'requests', 'blocked_date', 'comment', 'get_loaded_requests']
    list_filter = ['blocked_date']
    search_fields = ['ip', 'comment']
    ordering = ['-blocked_date']

    def get_loaded_requests(self, obj):
        """Show how many requests from this IP the current log holds"""
        loaded_count = LogRecord.objects.filter(ip=obj.ip).count()
        return f"{loaded_count} requests"

    get_loaded_requests.short_description = "Requests in current log"


admin.site.site_header = "Access Log Parser Admin"
admin.site.site_title = "Access Log Parser"
admin.site.index_title = "Loaded requests and blocked IPs"
