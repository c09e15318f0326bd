# -*- mode: python -*-
import logging

from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from drf_link_header_pagination import LinkHeaderPagination
from rest_framework import generics, status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from animals import __version__, api_version, inbreeding
from animals.conf import get_setting
from animals.filters import AnimalFilter
from animals.models import Animal
from animals.serializers import (
    AnimalDetailSerializer,
    AnimalSerializer,
    GenerationsSerializer,
    InbreedingExplanationSerializer,
    PairingQuerySerializer,
)

log = logging.getLogger(__name__)


class LargeResultsSetPagination(LinkHeaderPagination):
    page_size = 1000
    page_size_query_param = "page_size"
    max_page_size = 10000


@api_view(["GET"])
def info(request, format=None):
    return Response(
        {
            "name": "django-animal-pedigree",
            "version": __version__,
            "api_version": api_version,
        }
    )


class AnimalsList(generics.ListAPIView):
    queryset = (
        Animal.objects.select_related("species")
        .prefetch_related("parents")
        .order_by("created", "uuid")
    )
    serializer_class = AnimalSerializer
    pagination_class = LargeResultsSetPagination
    filter_backends = (DjangoFilterBackend,)
    filterset_class = AnimalFilter


class AnimalChildList(AnimalsList):
    """List all the children of an animal"""

    def get_queryset(self):
        animal = get_object_or_404(Animal, uuid=self.kwargs["pk"])
        return (
            animal.children.select_related("species")
            .prefetch_related("parents")
            .order_by("created", "uuid")
        )


@api_view(["GET"])
def animal_detail(request, pk: str, format=None):
    animal = get_object_or_404(
        Animal.objects.select_related("species").prefetch_related("parents"), pk=pk
    )
    serializer = AnimalDetailSerializer(animal)
    return Response(serializer.data)


@api_view(["GET"])
def animal_inbreeding(request, pk: str, format=None):
    """Calculate the inbreeding coefficient of an animal from its recorded pedigree.

    The `generations` query parameter limits how far back the pedigree is
    traced. It cannot exceed the ANIMALS_MAX_ANIMAL_GENERATIONS setting.

    """
    animal = get_object_or_404(Animal, pk=pk)
    query = GenerationsSerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    max_generations = get_setting("MAX_ANIMAL_GENERATIONS")
    generations = min(
        query.validated_data.get("generations", max_generations), max_generations
    )
    coefficient = inbreeding.calculate_inbreeding_coefficient(
        animal.uuid, Animal.objects.get_record, generations
    )
    return Response(
        {
            "uuid": animal.uuid,
            "generations": generations,
            "inbreeding": coefficient,
        },
        status=status.HTTP_200_OK,
    )


def _parse_pairing_query(request, default_generations: int):
    query = PairingQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    data = query.validated_data
    return data["sire"], data["dam"], data.get("generations", default_generations)


@api_view(["GET"])
def pairing_inbreeding(request, format=None):
    """Predict the inbreeding coefficient of offspring from a sire and a dam"""
    sire, dam, generations = _parse_pairing_query(
        request, get_setting("PAIRING_GENERATIONS")
    )
    coefficient = inbreeding.calculate_pairing_inbreeding(
        sire.uuid, dam.uuid, Animal.objects.get_record, generations
    )
    log.debug("predicted inbreeding for %s x %s: %s%%", sire, dam, coefficient)
    return Response(
        {
            "sire": sire.uuid,
            "dam": dam.uuid,
            "generations": generations,
            "inbreeding": coefficient,
        },
        status=status.HTTP_200_OK,
    )


@api_view(["GET"])
def pairing_inbreeding_explain(request, format=None):
    """Predicted inbreeding for a pairing with the contribution of each common ancestor"""
    sire, dam, generations = _parse_pairing_query(
        request, get_setting("EXPLAIN_GENERATIONS")
    )
    explanation = inbreeding.explain_pairing_inbreeding(
        sire.uuid, dam.uuid, Animal.objects.get_record, generations
    )
    serializer = InbreedingExplanationSerializer(explanation)
    return Response(
        {
            "sire": sire.uuid,
            "dam": dam.uuid,
            "generations": generations,
            **serializer.data,
        },
        status=status.HTTP_200_OK,
    )
