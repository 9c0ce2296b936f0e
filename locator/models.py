from django.core.exceptions import ValidationError
from django.db import models

from location import distance


class DistanceUnit(models.TextChoices):
    MILES = distance.MILES, "Miles"
    KILOMETERS = distance.KILOMETERS, "Kilometers"


class DisplayMode(models.TextChoices):
    INLINE = "inline", "Inline"
    MODAL = "modal", "Modal window"


class Locator(models.Model):
    """
    A configured map page: unit of measure, display mode and the categories
    its results are restricted to (none means every category).
    """
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=100, unique=True)

    auto_geocode = models.BooleanField(
        default=True,
        help_text="Automatically filter map results based on user location. "
                  "Disabled when any location is set as featured.",
    )
    modal_window = models.BooleanField(default=False, help_text="Show map results in a modal window.")
    unit = models.CharField(max_length=2, choices=DistanceUnit.choices, default=DistanceUnit.MILES)

    categories = models.ManyToManyField(
        "location.LocationCategory", blank=True, related_name="locators",
        help_text="Only show locations from the selected categories.",
    )

    class Meta:
        verbose_name = "Locator"
        verbose_name_plural = "Locators"
        ordering = ["title"]

    def __str__(self):
        return self.title

    def clean(self):
        super().clean()
        if self.unit not in DistanceUnit.values:
            raise ValidationError({"unit": f"Unknown unit of measure {self.unit!r}."})
