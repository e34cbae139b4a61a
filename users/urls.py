# users/urls.py
from django.urls import re_path
from rest_framework_simplejwt.views import TokenRefreshView, TokenVerifyView

from .views import CheckEmailView, LoginView, MeView, RegisterView

urlpatterns = [
    re_path(r"^register/?$", RegisterView.as_view(), name="register"),
    re_path(r"^login/?$", LoginView.as_view(), name="login"),
    re_path(r"^me/?$", MeView.as_view(), name="me"),
    re_path(r"^check-email/?$", CheckEmailView.as_view(), name="check-email"),
    re_path(r"^token/refresh/?$", TokenRefreshView.as_view(), name="token_refresh"),
    re_path(r"^token/verify/?$", TokenVerifyView.as_view(), name="token_verify"),
]
