# -*- mode: python -*-
"""A Django app for breeder records with pedigree inbreeding calculations"""

__version__ = "0.3.0"
api_version = "1.0"
