# -*- mode: python -*-

import logging
import uuid
from collections import deque

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from animals import inbreeding
from animals.conf import get_setting

log = logging.getLogger(__name__)


class Species(models.Model):
    """Represents an animal species. Every animal belongs to a species."""

    id = models.AutoField(primary_key=True)
    common_name = models.CharField(max_length=45)
    code = models.CharField(max_length=4, unique=True)

    def __str__(self) -> str:
        return self.common_name

    class Meta:
        ordering = ("common_name",)
        verbose_name_plural = "species"


class AnimalManager(models.Manager):
    def create_from_parents(self, *, sire: "Animal", dam: "Animal", **animal_properties):
        species = sire.species
        if species != dam.species:
            raise ValueError(_("sire and dam species do not match"))
        animal = self.create(species=species, **animal_properties)
        animal.parents.set([sire, dam])
        return animal


class AnimalQuerySet(models.QuerySet):
    def with_parents(self):
        """Only animals with at least one recorded parent"""
        return self.filter(parents__isnull=False).distinct()

    def descendents_of(self, animal, generation: int = 1):
        """All descendents of animal at specified generation"""
        key = "__".join(("parents",) * generation)
        kwargs = {key: animal}
        return self.filter(**kwargs).distinct()

    def get_record(self, identifier) -> inbreeding.AnimalRecord | None:
        """Look up the pedigree record for an animal, or None if there isn't one.

        Malformed identifiers are treated the same as unknown ones. Any other
        database error is raised to the caller.
        """
        try:
            animal = (
                self.select_related("species")
                .prefetch_related("parents")
                .get(uuid=identifier)
            )
        except (Animal.DoesNotExist, ValidationError):
            return None
        sire = animal.sire()
        dam = animal.dam()
        return inbreeding.AnimalRecord(
            identifier=animal.uuid,
            name=animal.name,
            sire=sire.uuid if sire is not None else None,
            dam=dam.uuid if dam is not None else None,
        )


class Parent(models.Model):
    """Represents a parent-child relationship between animals.

    Duplicate relationships are not allowed. Animals should have no parents if
    their origin is unknown, or one male and one female parent. Parents of
    unknown sex are ignored when tracing pedigrees.

    """

    id = models.AutoField(primary_key=True)
    child = models.ForeignKey("Animal", related_name="+", on_delete=models.CASCADE)
    parent = models.ForeignKey("Animal", related_name="+", on_delete=models.CASCADE)

    def __str__(self) -> str:
        return f"{self.parent} -> {self.child}"

    class Meta:
        indexes = (
            models.Index(fields=("parent",), name="parent_idx"),
            models.Index(fields=("child",), name="child_idx"),
        )
        unique_together = ("parent", "child")


class Animal(models.Model):
    """Represents an individual animal"""

    class Sex(models.TextChoices):
        MALE = "M", _("male")
        FEMALE = "F", _("female")
        UNKNOWN_SEX = "U", _("unknown")

    uuid = models.UUIDField(primary_key=True, default=uuid.uuid4, unique=True)
    species = models.ForeignKey("Species", on_delete=models.PROTECT)
    sex = models.CharField(max_length=2, choices=Sex.choices, default=Sex.UNKNOWN_SEX)
    registered_name = models.CharField(max_length=128, blank=True)
    parents = models.ManyToManyField(
        "Animal",
        related_name="children",
        through="Parent",
        through_fields=("child", "parent"),
    )
    created = models.DateTimeField(auto_now_add=True)
    inbreeding_coefficient = models.FloatField(
        blank=True,
        null=True,
        help_text="cached inbreeding coefficient (percent); empty if not yet calculated",
    )
    objects = AnimalManager.from_queryset(AnimalQuerySet)()

    def short_uuid(self) -> str:
        return str(self.uuid).split("-")[0]

    @property
    def name(self) -> str:
        return self.registered_name or f"{self.species.code}_{self.short_uuid()}"

    def __str__(self) -> str:
        return self.name

    def sire(self):
        # find the male parent in python to avoid hitting the database again if
        # parents were prefetched
        return next((p for p in self.parents.all() if p.sex == Animal.Sex.MALE), None)

    def dam(self):
        return next((p for p in self.parents.all() if p.sex == Animal.Sex.FEMALE), None)

    def update_inbreeding(self, generations: int | None = None) -> float:
        """Recalculate the cached inbreeding coefficient from the recorded pedigree"""
        if generations is None:
            generations = get_setting("STORED_GENERATIONS")
        self.inbreeding_coefficient = inbreeding.calculate_inbreeding_coefficient(
            self.uuid, Animal.objects.get_record, generations
        )
        self.save(update_fields=["inbreeding_coefficient"])
        log.debug("%s: inbreeding coefficient %.2f%%", self, self.inbreeding_coefficient)
        return self.inbreeding_coefficient

    def update_descendent_inbreeding(self, generations: int | None = None) -> int:
        """Recalculate the cached coefficients of every descendent of this animal.

        A change in an animal's parents alters the pedigree of all of its
        descendents, not just its own. Each descendent is updated once, even if
        it descends from this animal through several lines. Returns the number
        updated.
        """
        seen = {self.pk}
        queue = deque([self])
        count = 0
        while queue:
            animal = queue.popleft()
            for child in animal.children.select_related("species"):
                if child.pk in seen:
                    continue
                seen.add(child.pk)
                child.update_inbreeding(generations)
                queue.append(child)
                count += 1
        return count

    class Meta:
        ordering = ("created",)
