# -*- mode: python -*-
from django_filters import rest_framework as filters

from animals.models import Animal


class AnimalFilter(filters.FilterSet):
    uuid = filters.CharFilter(field_name="uuid", lookup_expr="istartswith")
    name = filters.CharFilter(field_name="registered_name", lookup_expr="icontains")
    species = filters.CharFilter(field_name="species__code", lookup_expr="iexact")
    parent = filters.CharFilter(field_name="parents__uuid", lookup_expr="istartswith")
    child = filters.CharFilter(field_name="children__uuid", lookup_expr="istartswith")
    inbred = filters.BooleanFilter(method="is_inbred")

    def is_inbred(self, queryset, name, value):
        if value:
            return queryset.filter(inbreeding_coefficient__gt=0)
        return queryset.filter(inbreeding_coefficient=0)

    class Meta:
        model = Animal
        fields = ["sex"]
