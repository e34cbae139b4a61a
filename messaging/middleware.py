# messaging/middleware.py
import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.tokens import AccessToken

from messaging.exceptions import WebSocketAuthenticationError

logger = logging.getLogger(__name__)
User = get_user_model()


def _token_from_scope(scope):
    """Read the access token from ``?token=`` or an ``Authorization: Bearer`` header."""
    query = parse_qs(scope.get("query_string", b"").decode())
    token = query.get("token", [None])[0]
    if token:
        return token

    for name, value in scope.get("headers", []):
        if name == b"authorization":
            parts = value.decode().split()
            if len(parts) == 2 and parts[0].lower() == "bearer":
                return parts[1]
    return None


@database_sync_to_async
def get_user_for_token(raw_token):
    try:
        token = AccessToken(raw_token)
    except TokenError as e:
        raise WebSocketAuthenticationError(str(e)) from e

    user_id = token.get(jwt_settings.USER_ID_CLAIM)
    try:
        user = User.objects.get(**{jwt_settings.USER_ID_FIELD: user_id})
    except User.DoesNotExist:
        raise WebSocketAuthenticationError(f"User {user_id} not found")
    if not user.is_active:
        raise WebSocketAuthenticationError(f"User {user_id} is inactive")
    return user


class JWTAuthMiddleware(BaseMiddleware):
    """
    Populates ``scope["user"]`` from the same JWT access token used by the REST API.

    Missing or invalid tokens leave an ``AnonymousUser``; the consumer decides
    whether to reject the socket.
    """

    async def __call__(self, scope, receive, send):
        scope = dict(scope)
        raw_token = _token_from_scope(scope)
        scope["user"] = AnonymousUser()

        if raw_token:
            try:
                scope["user"] = await get_user_for_token(raw_token)
            except WebSocketAuthenticationError as e:
                logger.warning(f"WebSocket authentication failed: {str(e)}")

        return await super().__call__(scope, receive, send)


def JWTAuthMiddlewareStack(inner):
    return JWTAuthMiddleware(inner)
