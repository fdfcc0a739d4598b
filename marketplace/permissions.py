"""
Custom permission classes for the Community Help Marketplace.
"""

from rest_framework import permissions


class IsBookingParticipant(permissions.BasePermission):
    """
    Object-level permission: only the requester or the helper of a booking.

    Usage:
        class BookingDetailView(APIView):
            permission_classes = [IsAuthenticated, IsBookingParticipant]
    """

    message = 'You do not have permission to view this booking.'

    def has_object_permission(self, request, view, obj):
        return obj.is_participant(request.user)


class CanUpdateBookingStatus(permissions.BasePermission):
    """
    Permission class for booking status updates with role-based authorization.

    Authorization rules:
    - Only the requester can accept or decline
    - Either participant can complete or cancel
    - Nobody else can touch the booking

    The rules live on Booking.check_actor_permission(); this class only
    exposes them to DRF so a denied attempt is a 403 with a specific message.
    Unknown status values are let through so validation reports them as 400.
    """

    message = 'You do not have permission to update this booking status.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        new_status = request.data.get('status') if isinstance(request.data, dict) else None

        if not obj.is_participant(request.user):
            self.message = 'You do not have permission to modify this booking.'
            return False

        if new_status not in obj.VALID_TRANSITIONS:
            return True

        allowed, message = obj.check_actor_permission(request.user, new_status)
        if not allowed:
            self.message = message
        return allowed


class IsOwner(permissions.BasePermission):
    """
    Object-level permission for rows owned through a ``user`` field
    (user skills, notifications).
    """

    message = 'You do not own this resource.'

    def has_object_permission(self, request, view, obj):
        return obj.user_id == request.user.id


class IsRequestOwner(permissions.BasePermission):
    message = 'Only the requester can change this request.'

    def has_object_permission(self, request, view, obj):
        return obj.requester_id == request.user.id
