# -*- mode: python -*-
from django.contrib import admin

from animals import models


class ParentInline(admin.TabularInline):
    model = models.Parent
    fk_name = "child"
    max_num = 2
    min_num = 0
    autocomplete_fields = ("parent",)


class AnimalAdmin(admin.ModelAdmin):
    fields = (
        "species",
        "sex",
        "registered_name",
        "inbreeding_coefficient",
    )
    readonly_fields = ("inbreeding_coefficient",)
    list_display = ("name", "species", "uuid", "sex", "inbreeding_coefficient")
    list_filter = ("species", "sex")
    search_fields = ("registered_name", "uuid", "species__code")
    inlines = (ParentInline,)


class SpeciesAdmin(admin.ModelAdmin):
    list_display = ("common_name", "code")


admin.site.register(models.Animal, AnimalAdmin)
admin.site.register(models.Species, SpeciesAdmin)
