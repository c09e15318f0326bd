# -*- mode: python -*-

from django.apps import AppConfig


class AnimalsConfig(AppConfig):
    name = "animals"
    default_auto_field = "django.db.models.AutoField"

    def ready(self):
        from animals import triggers  # noqa: F401
