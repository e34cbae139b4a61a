# users/permissions.py
from rest_framework import permissions
import logging

logger = logging.getLogger(__name__)


class IsMarketplaceUser(permissions.BasePermission):
    """
    Admins moderate the marketplace but cannot own listings, favorite or message.
    """

    message = "Administrators cannot perform this action."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if getattr(user, "is_admin", False):
            logger.debug(f"Admin {user.id} blocked from {view.__class__.__name__}")
            return False
        return True

