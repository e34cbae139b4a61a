# listings/admin.py
from django.contrib import admin
from listings.models import Favorite, Listing


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = ["title", "brand", "model", "year", "price", "user", "created_at", "deleted_at"]
    list_filter = ["brand", "fuel_type", "transmission", "created_at", "deleted_at"]
    search_fields = ["title", "description", "location", "user__email"]
    raw_id_fields = ["user"]
    readonly_fields = ["created_at", "updated_at"]
    fieldsets = [
        ("Basic Information", {"fields": ["user", "title", "description", "price", "images"]}),
        (
            "Vehicle",
            {
                "fields": [
                    "brand",
                    "model",
                    "year",
                    "mileage",
                    "fuel_type",
                    "transmission",
                    "color",
                    "engine_volume",
                    "power",
                    "location",
                ]
            },
        ),
        ("Timestamps", {"fields": ["created_at", "updated_at", "deleted_at"]}),
    ]


@admin.register(Favorite)
class FavoriteAdmin(admin.ModelAdmin):
    list_display = ["user", "listing", "created_at"]
    raw_id_fields = ["user", "listing"]
