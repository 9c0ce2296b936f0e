from decimal import Decimal
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models


class LocationCategory(models.Model):
    name = models.CharField(max_length=100)

    class Meta:
        verbose_name = "Category"
        verbose_name_plural = "Categories"
        ordering = ["name"]

    def __str__(self):
        return self.name


class Location(models.Model):
    name = models.CharField(max_length=100)

    # 0 means "no coordinates set"; such locations never show on the map
    latitude = models.DecimalField(
        max_digits=9, decimal_places=6, default=Decimal("0"),
        validators=[MinValueValidator(-90), MaxValueValidator(90)]
    )
    longitude = models.DecimalField(
        max_digits=9, decimal_places=6, default=Decimal("0"),
        validators=[MinValueValidator(-180), MaxValueValidator(180)]
    )

    address = models.CharField(max_length=255, blank=True, default="")
    city = models.CharField(max_length=64, blank=True, default="")
    state = models.CharField(max_length=64, blank=True, default="")
    postal_code = models.CharField(max_length=16, blank=True, default="")
    country = models.CharField(max_length=64, blank=True, default="")
    phone = models.CharField(max_length=40, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    website = models.URLField(blank=True, default="")

    show_in_locator = models.BooleanField(default=True, db_index=True)
    featured = models.BooleanField(default=False, db_index=True)

    categories = models.ManyToManyField(LocationCategory, blank=True, related_name="locations")

    class Meta:
        verbose_name = "Location"
        verbose_name_plural = "Locations"
        ordering = ["name", "id"]
        indexes = [
            models.Index(fields=["latitude", "longitude"], name="location_lat_lng_idx"),
            models.Index(fields=["show_in_locator", "featured"], name="location_visible_featured_idx"),
        ]

    def __str__(self):
        return self.name or f"Lat: {self.latitude}, Lng: {self.longitude}"
