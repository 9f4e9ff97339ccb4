"""
Permission classes for mess-scoped endpoints.

Nested routes (``/api/messes/{mess_id}/...``) carry the mess in the URL,
so membership is checked in ``has_permission`` from ``view.kwargs``.
"""

from django.core.exceptions import ValidationError
from rest_framework.permissions import BasePermission

from .models import Mess

# Object ids in routes are UUIDs; anything else falls through to a 404
UUID_LOOKUP_REGEX = r'[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'


def _mess_from_view(view):
    mess_id = view.kwargs.get('mess_id') or view.kwargs.get('pk')
    if not mess_id:
        return None
    try:
        return Mess.objects.get(id=mess_id)
    except (Mess.DoesNotExist, ValidationError, ValueError):
        return None


class IsMessMember(BasePermission):
    """
    Permission: User must be on the roster of the mess in the URL.
    """

    message = 'You must be a member of this mess.'

    def has_permission(self, request, view):
        mess = _mess_from_view(view)
        if mess is None:
            # Unknown mess - deny rather than leak existence
            return False
        return mess.has_member(request.user)

    def has_object_permission(self, request, view, obj):
        mess = obj if isinstance(obj, Mess) else obj.mess
        return mess.has_member(request.user)
