# users/views.py
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .serializers import (
    CurrentUserSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    auth_payload,
    issue_token,
)
import logging

logger = logging.getLogger(__name__)

CustomUser = get_user_model()


class RegisterView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        description="Register a new marketplace user and return an access token.",
        summary="Register",
        tags=["Auth"],
        request=RegisterSerializer,
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(auth_payload(user), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        description="Authenticate with email and password.",
        summary="Login",
        tags=["Auth"],
        request=LoginSerializer,
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        logger.info(f"User {user.id} logged in")
        return Response(auth_payload(user))


class MeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        description="Get the authenticated user and the token used for the request.",
        summary="Current User",
        tags=["Auth"],
    )
    def get(self, request):
        token = request.auth
        return Response(
            {
                "user": CurrentUserSerializer(request.user).data,
                "token": str(token) if token is not None else issue_token(request.user),
            }
        )

    @extend_schema(
        description="Update first name, last name or phone. Any other field is rejected.",
        summary="Update Profile",
        tags=["Auth"],
        request=ProfileUpdateSerializer,
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(
            request.user, data=request.data, partial=True
        )
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"Updated profile for user {user.id}")
        return Response(CurrentUserSerializer(user).data)


class CheckEmailView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        description="Check whether an email address is already registered.",
        summary="Check Email",
        tags=["Auth"],
        parameters=[
            OpenApiParameter(
                name="email", type=OpenApiTypes.EMAIL, description="Email to check"
            )
        ],
    )
    def get(self, request):
        email = request.query_params.get("email")
        if not email:
            return Response(
                {"error": "Email is required"}, status=status.HTTP_400_BAD_REQUEST
            )
        try:
            validate_email(email)
        except DjangoValidationError:
            return Response(
                {"error": "Invalid email format"}, status=status.HTTP_400_BAD_REQUEST
            )

        exists = CustomUser.objects.filter(email__iexact=email).exists()
        return Response({"exists": exists})
