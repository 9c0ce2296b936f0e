from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from django.conf import settings

from .exceptions import InvalidConfiguration

DEFAULT_MAPS_SCRIPT_URL = "https://maps.google.com/maps/api/js?key={key}"


@dataclass(frozen=True)
class LocatorConfig:
    google_api_key: str = ""
    full_list_store_limit: int = 1000
    auto_geocode_store_limit: int = 26
    maps_script_url: str = DEFAULT_MAPS_SCRIPT_URL

    @classmethod
    def from_settings(cls, values: Optional[dict] = None) -> "LocatorConfig":
        """Build the config from ``settings.LOCATOR``, validating it as it loads."""
        raw = dict(getattr(settings, "LOCATOR", {}) if values is None else values)
        known = {
            "GOOGLE_API_KEY": "google_api_key",
            "FULL_LIST_STORE_LIMIT": "full_list_store_limit",
            "AUTO_GEOCODE_STORE_LIMIT": "auto_geocode_store_limit",
            "MAPS_SCRIPT_URL": "maps_script_url",
        }
        unknown = sorted(set(raw) - set(known))
        if unknown:
            raise InvalidConfiguration(f"Unknown LOCATOR settings: {', '.join(unknown)}")

        kwargs = {known[k]: v for k, v in raw.items()}
        for name in ("full_list_store_limit", "auto_geocode_store_limit"):
            if name in kwargs:
                value = kwargs[name]
                if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                    raise InvalidConfiguration(f"{name} must be a positive integer, got {value!r}")
        if "{key}" not in kwargs.get("maps_script_url", DEFAULT_MAPS_SCRIPT_URL):
            raise InvalidConfiguration("MAPS_SCRIPT_URL must contain a {key} placeholder")
        return cls(**kwargs)


def get_locator_config() -> LocatorConfig:
    return LocatorConfig.from_settings()
