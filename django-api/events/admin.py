from django.contrib import admin

from events.models import Event, Notification


class NotificationInline(admin.TabularInline):
    model = Notification
    extra = 0
    fields = ["title", "type", "is_read", "created_at"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "status", "start_date", "location", "created_at"]
    list_filter = ["status"]
    search_fields = ["name", "location"]
    inlines = [NotificationInline]


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["title", "event", "type", "is_read", "created_at"]
    list_filter = ["type", "is_read", "event"]
