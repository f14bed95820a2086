"""FilterSet definitions for facility search and listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Facility


class FacilityFilterSet(django_filters.FilterSet):
    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")
    state = django_filters.CharFilter(field_name="state", lookup_expr="iexact")
    category = django_filters.CharFilter(field_name="category__slug", lookup_expr="exact")
    price_unit = django_filters.ChoiceFilter(field_name="price_unit", choices=Facility.PriceUnit.choices)

    price_min = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    capacity = django_filters.NumberFilter(field_name="capacity", lookup_expr="gte")

    class Meta:
        model = Facility
        fields = [
            "city",
            "state",
            "category",
            "price_unit",
            "status",
        ]
