# listings/filters.py
import django_filters
from django.db.models import Q

from .models import Listing


class ListingFilter(django_filters.FilterSet):
    """Query-string filters for browsing listings (camelCase parameter names)."""

    search = django_filters.CharFilter(method="filter_search")
    brand = django_filters.CharFilter(field_name="brand")
    model = django_filters.CharFilter(field_name="model")
    minPrice = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    maxPrice = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    minYear = django_filters.NumberFilter(field_name="year", lookup_expr="gte")
    maxYear = django_filters.NumberFilter(field_name="year", lookup_expr="lte")
    minMileage = django_filters.NumberFilter(field_name="mileage", lookup_expr="gte")
    maxMileage = django_filters.NumberFilter(field_name="mileage", lookup_expr="lte")
    fuelType = django_filters.CharFilter(field_name="fuel_type", lookup_expr="iexact")
    transmission = django_filters.CharFilter(
        field_name="transmission", lookup_expr="iexact"
    )
    location = django_filters.CharFilter(field_name="location", lookup_expr="icontains")

    class Meta:
        model = Listing
        fields = []

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(title__icontains=value) | Q(description__icontains=value)
        )
