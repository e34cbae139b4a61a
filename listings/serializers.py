# listings/serializers.py
from rest_framework import serializers
from django.db import transaction

from cars.catalog import get_brand_name, get_model_name
from users.serializers import UserSerializer
from .models import Listing
from .storage import delete_stored_images, save_listing_images
from .validators import validate_image_count, validate_listing_image
import logging

logger = logging.getLogger(__name__)


class ListingSerializer(serializers.ModelSerializer):
    """Read representation, also nested inside messages."""

    brandName = serializers.SerializerMethodField()
    modelName = serializers.SerializerMethodField()
    fuelType = serializers.CharField(source="fuel_type", read_only=True)
    engineVolume = serializers.DecimalField(
        source="engine_volume", max_digits=4, decimal_places=1, read_only=True
    )
    userId = serializers.UUIDField(source="user_id", read_only=True)
    user = UserSerializer(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    deletedAt = serializers.DateTimeField(source="deleted_at", read_only=True)
    price = serializers.DecimalField(
        max_digits=12, decimal_places=2, coerce_to_string=False, read_only=True
    )

    class Meta:
        model = Listing
        fields = [
            "id",
            "title",
            "description",
            "price",
            "brand",
            "model",
            "brandName",
            "modelName",
            "year",
            "mileage",
            "fuelType",
            "transmission",
            "color",
            "location",
            "engineVolume",
            "power",
            "images",
            "userId",
            "user",
            "createdAt",
            "updatedAt",
            "deletedAt",
        ]
        read_only_fields = fields

    def get_brandName(self, obj):
        return get_brand_name(obj.brand)

    def get_modelName(self, obj):
        return get_model_name(obj.brand, obj.model)


class ListingWriteSerializer(serializers.ModelSerializer):
    """Shared camelCase input fields for create and update."""

    fuelType = serializers.CharField(source="fuel_type", max_length=30)
    engineVolume = serializers.DecimalField(
        source="engine_volume",
        max_digits=4,
        decimal_places=1,
        required=False,
        allow_null=True,
    )
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    year = serializers.IntegerField(min_value=1900, max_value=2100)
    mileage = serializers.IntegerField(min_value=0)

    class Meta:
        model = Listing
        fields = [
            "title",
            "description",
            "price",
            "brand",
            "model",
            "year",
            "mileage",
            "fuelType",
            "transmission",
            "color",
            "location",
            "engineVolume",
            "power",
        ]


class ListingCreateSerializer(ListingWriteSerializer):
    images = serializers.ListField(
        child=serializers.FileField(validators=[validate_listing_image]),
        write_only=True,
        allow_empty=True,
        required=False,
        default=list,
    )

    class Meta(ListingWriteSerializer.Meta):
        fields = ListingWriteSerializer.Meta.fields + ["images"]

    def validate_images(self, value):
        return validate_image_count(value)

    def create(self, validated_data):
        files = validated_data.pop("images")
        names, urls = save_listing_images(files)
        try:
            with transaction.atomic():
                listing = Listing.objects.create(
                    images=urls, user=self.context["request"].user, **validated_data
                )
        except Exception:
            logger.error("Error creating listing, removing uploaded images")
            delete_stored_images(names)
            raise
        logger.info(f"Listing {listing.id} created by {listing.user_id}")
        return listing


class ListingUpdateSerializer(ListingWriteSerializer):
    images = serializers.ListField(
        child=serializers.CharField(max_length=500), required=False
    )

    ALLOWED_UPDATES = {
        "title",
        "description",
        "price",
        "brand",
        "model",
        "year",
        "mileage",
        "color",
        "fuelType",
        "transmission",
        "images",
        "location",
        "engineVolume",
        "power",
    }

    class Meta(ListingWriteSerializer.Meta):
        fields = ListingWriteSerializer.Meta.fields + ["images"]

    def validate(self, attrs):
        unknown = set(self.initial_data) - self.ALLOWED_UPDATES
        if unknown:
            raise serializers.ValidationError("Invalid updates")
        return attrs
