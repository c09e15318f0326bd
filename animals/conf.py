# -*- mode: python -*-
"""App settings, overridable in the project settings with an ANIMALS_ prefix"""

from django.conf import settings

DEFAULTS = {
    # depth used when caching coefficients on animal records
    "STORED_GENERATIONS": 50,
    # upper bound for live single-animal queries through the api
    "MAX_ANIMAL_GENERATIONS": 4,
    "PAIRING_GENERATIONS": 5,
    "EXPLAIN_GENERATIONS": 50,
}


def get_setting(name: str):
    return getattr(settings, f"ANIMALS_{name}", DEFAULTS[name])
