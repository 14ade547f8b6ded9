from rest_framework import permissions


class HasCompletedProfile(permissions.BasePermission):
    """
    Signed-in users must finish the profile step before touching the marketplace.
    """

    message = {
        'detail': 'Complete your profile before using the marketplace.',
        'code': 'profile_incomplete',
    }

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        return request.user.has_profile
