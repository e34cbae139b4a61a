# users/serializers.py
from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import exceptions, serializers
from rest_framework_simplejwt.tokens import AccessToken
import logging

logger = logging.getLogger(__name__)
CustomUser = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public participant info embedded in listings and messages."""

    firstName = serializers.CharField(source="first_name", read_only=True)
    lastName = serializers.CharField(source="last_name", read_only=True)

    class Meta:
        model = CustomUser
        fields = ["id", "firstName", "lastName", "email", "phone"]
        read_only_fields = fields


class CurrentUserSerializer(UserSerializer):
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ["role", "createdAt"]
        read_only_fields = fields


class RegisterSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(max_length=254)
    password = serializers.CharField(
        write_only=True, style={"input_type": "password"}, max_length=128
    )
    firstName = serializers.CharField(source="first_name", max_length=150)
    lastName = serializers.CharField(source="last_name", max_length=150)
    phone = serializers.CharField(
        max_length=20, required=False, allow_blank=True, allow_null=True
    )

    class Meta:
        model = CustomUser
        fields = ["email", "password", "firstName", "lastName", "phone"]

    def validate_email(self, value):
        value = CustomUser.objects.normalize_email(value)
        if CustomUser.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("User already exists")
        return value

    def validate_password(self, value):
        validate_password(value)
        return value

    def create(self, validated_data):
        password = validated_data.pop("password")
        user = CustomUser.objects.create_user(password=password, **validated_data)
        logger.info(f"Registered user {user.id}")
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})

    def validate(self, attrs):
        request = self.context.get("request")
        user = authenticate(
            request, username=attrs["email"].strip(), password=attrs["password"]
        )
        if user is None:
            logger.info(f"Failed login attempt for {attrs['email']}")
            raise exceptions.AuthenticationFailed("Invalid credentials")
        attrs["user"] = user
        return attrs


class ProfileUpdateSerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(source="first_name", max_length=150, required=False)
    lastName = serializers.CharField(source="last_name", max_length=150, required=False)
    phone = serializers.CharField(
        max_length=20, required=False, allow_blank=True, allow_null=True
    )

    ALLOWED_UPDATES = {"firstName", "lastName", "phone"}

    class Meta:
        model = CustomUser
        fields = ["firstName", "lastName", "phone"]

    def validate(self, attrs):
        unknown = set(self.initial_data) - self.ALLOWED_UPDATES
        if unknown:
            raise serializers.ValidationError("Invalid updates")
        return attrs


def issue_token(user):
    """Access token used for both REST calls and the chat WebSocket."""
    return str(AccessToken.for_user(user))


def auth_payload(user):
    return {"user": UserSerializer(user).data, "token": issue_token(user)}
