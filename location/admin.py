from django.contrib import admin
from .models import Location, LocationCategory


@admin.register(LocationCategory)
class LocationCategoryAdmin(admin.ModelAdmin):
    list_display = ("name",)
    search_fields = ("name",)


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "state", "latitude", "longitude", "show_in_locator", "featured")
    list_filter = ("show_in_locator", "featured", "categories")
    search_fields = ("name", "address", "city", "postal_code")
    autocomplete_fields = ("categories",)
