from rest_framework import permissions

from .models import Task


class IsOwner(permissions.BasePermission):
    """
    Object-level permission: only the owner of a project (or of the project
    a task belongs to) may act on it.
    """

    def has_object_permission(self, request, view, obj):
        owner_id = obj.project.owner_id if isinstance(obj, Task) else obj.owner_id

        # Compare as strings: request.user.id may be a UUID or its string form.
        if owner_id and request.user and request.user.is_authenticated:
            return str(owner_id) == str(request.user.id)

        return False
