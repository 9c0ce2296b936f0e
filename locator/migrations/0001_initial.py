from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("location", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Locator",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("slug", models.SlugField(max_length=100, unique=True)),
                ("auto_geocode", models.BooleanField(default=True, help_text="Automatically filter map results based on user location. Disabled when any location is set as featured.")),
                ("modal_window", models.BooleanField(default=False, help_text="Show map results in a modal window.")),
                ("unit", models.CharField(choices=[("m", "Miles"), ("km", "Kilometers")], default="m", max_length=2)),
                ("categories", models.ManyToManyField(blank=True, help_text="Only show locations from the selected categories.", related_name="locators", to="location.locationcategory")),
            ],
            options={
                "verbose_name": "Locator",
                "verbose_name_plural": "Locators",
                "ordering": ["title"],
            },
        ),
    ]
