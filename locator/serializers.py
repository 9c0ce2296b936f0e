from rest_framework import serializers

from location.models import Location
from .models import Locator


class LocationFeedSerializer(serializers.ModelSerializer):
    lat = serializers.FloatField(source="latitude")
    lng = serializers.FloatField(source="longitude")
    categories = serializers.SlugRelatedField(slug_field="name", many=True, read_only=True)
    distance = serializers.SerializerMethodField()

    class Meta:
        model = Location
        fields = [
            "id", "name", "lat", "lng",
            "address", "city", "state", "postal_code", "country",
            "phone", "email", "website", "featured", "categories", "distance",
        ]
        read_only_fields = fields

    def get_distance(self, obj):
        return self.context.get("distances", {}).get(obj.pk)


class LocatorSerializer(serializers.ModelSerializer):
    categories = serializers.SlugRelatedField(slug_field="name", many=True, read_only=True)

    class Meta:
        model = Locator
        fields = ["id", "title", "slug", "auto_geocode", "modal_window", "unit", "categories"]
        read_only_fields = fields


class SearchFormSerializer(serializers.Serializer):
    address_field = serializers.BooleanField()
    category_options = serializers.ListField(child=serializers.CharField(), allow_null=True)
    extra_fields = serializers.ListField(child=serializers.DictField())
