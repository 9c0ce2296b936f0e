from django.apps import AppConfig


class LocationAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "location"
    verbose_name = "Locations"
