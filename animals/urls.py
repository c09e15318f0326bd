# -*- mode: python -*-
from django.urls import path

from animals import api_views

app_name = "animals"
urlpatterns = [
    path("api/info/", api_views.info, name="api_info"),
    path("api/animals/", api_views.AnimalsList.as_view(), name="animals_api"),
    path(
        "api/animals/<uuid:pk>/",
        api_views.animal_detail,
        name="animal_api",
    ),
    path(
        "api/animals/<uuid:pk>/children/",
        api_views.AnimalChildList.as_view(),
        name="children_api",
    ),
    path(
        "api/animals/<uuid:pk>/inbreeding/",
        api_views.animal_inbreeding,
        name="inbreeding_api",
    ),
    path(
        "api/pairings/inbreeding/",
        api_views.pairing_inbreeding,
        name="pairing_inbreeding_api",
    ),
    path(
        "api/pairings/inbreeding/explain/",
        api_views.pairing_inbreeding_explain,
        name="pairing_inbreeding_explain_api",
    ),
]
