from django.contrib import admin

from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("id", "listing", "sender", "receiver", "created_at")
    list_filter = ("created_at",)
    search_fields = ("content", "sender__email", "receiver__email")
    raw_id_fields = ("listing", "sender", "receiver")
    readonly_fields = ("created_at",)
