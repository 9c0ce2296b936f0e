from django.apps import AppConfig


class LocatorAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "locator"
    verbose_name = "Locators"
