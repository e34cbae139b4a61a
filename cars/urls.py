# cars/urls.py
from django.urls import re_path

from .views import CarBrandsView, CarModelsView

urlpatterns = [
    re_path(r"^models/?$", CarModelsView.as_view(), name="car-models"),
    re_path(r"^brands/?$", CarBrandsView.as_view(), name="car-brands"),
]
