from django.contrib import admin
from .models import Locator


@admin.register(Locator)
class LocatorAdmin(admin.ModelAdmin):
    list_display = ("title", "slug", "unit", "auto_geocode", "modal_window")
    list_filter = ("unit", "auto_geocode", "modal_window")
    search_fields = ("title", "slug")
    prepopulated_fields = {"slug": ("title",)}
    filter_horizontal = ("categories",)
    fieldsets = (
        (None, {"fields": ("title", "slug")}),
        ("Display Options", {"fields": ("unit", "auto_geocode", "modal_window")}),
        ("Location Filtering", {"fields": ("categories",)}),
    )
