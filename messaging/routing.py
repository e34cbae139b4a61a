# messaging/routing.py
from django.urls import re_path
from .consumers import ChatConsumer

websocket_urlpatterns = [
    # Single socket per client; listing rooms are joined with join_chat
    re_path(r"^ws/chat/?$", ChatConsumer.as_asgi()),
]
