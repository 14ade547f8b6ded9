from rest_framework import permissions


class IsOwnerOrReadOnly(permissions.BasePermission):
    """
    Anyone may read; only the owner of a listing or request may change or delete it.
    """

    message = 'You can only modify your own posts.'

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True

        owner_fields = ['seller', 'user']
        for field in owner_fields:
            if hasattr(obj, f'{field}_id'):
                return getattr(obj, f'{field}_id') == request.user.id

        return False
