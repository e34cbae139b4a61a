# listings/urls.py
from django.urls import re_path
from .views import ListingViewSet

UUID = r"(?P<pk>[0-9a-fA-F-]{32,36})"

# Define explicit view mappings
listing_list = ListingViewSet.as_view({"get": "list", "post": "create"})
listing_detail = ListingViewSet.as_view(
    {"get": "retrieve", "patch": "partial_update", "delete": "destroy"}
)
listing_permanent = ListingViewSet.as_view({"delete": "permanent_destroy"})
listing_favorite = ListingViewSet.as_view({"post": "favorite", "delete": "unfavorite"})
user_listings = ListingViewSet.as_view({"get": "mine"})
favorite_listings = ListingViewSet.as_view({"get": "favorites"})

urlpatterns = [
    re_path(r"^$", listing_list, name="listing-list"),
    re_path(r"^user/?$", user_listings, name="listing-user"),
    re_path(r"^favorites/?$", favorite_listings, name="listing-favorites"),
    re_path(rf"^{UUID}/favorite/?$", listing_favorite, name="listing-favorite"),
    re_path(rf"^{UUID}/permanent/?$", listing_permanent, name="listing-permanent"),
    re_path(rf"^{UUID}/?$", listing_detail, name="listing-detail"),
]
