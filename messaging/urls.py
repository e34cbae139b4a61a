# messaging/urls.py
from django.urls import re_path

from .views import ConversationListView, ListingMessagesView

urlpatterns = [
    re_path(r"^conversations/?$", ConversationListView.as_view(), name="conversations"),
    re_path(
        r"^listing/(?P<listing_id>[0-9a-fA-F-]{32,36})/?$",
        ListingMessagesView.as_view(),
        name="listing-messages",
    ),
]
