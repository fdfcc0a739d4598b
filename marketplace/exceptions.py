"""
Marketplace exceptions and the project-wide DRF exception handler.

Models raise Django exceptions (ValidationError, PermissionDenied,
DoesNotExist); the handler below turns them into the same response shapes
DRF uses for its own exceptions so every view reports errors consistently.
"""

import logging

from django.core.exceptions import ObjectDoesNotExist
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class BookingConflictError(Exception):
    """
    Raised when a booking changed status between being read and being written.

    The caller validated a transition against a status that is no longer
    current; the other writer won.
    """

    def __init__(self, booking_id, expected_status, message=None):
        self.booking_id = booking_id
        self.expected_status = expected_status
        self.message = message or (
            f'Booking {booking_id} is no longer {expected_status}; '
            f'it was updated by another request.'
        )
        super().__init__(self.message)


def marketplace_exception_handler(exc, context):
    """
    Convert Django-side exceptions to DRF responses.

    - ValidationError -> 400 with field errors
    - DoesNotExist -> 404
    - BookingConflictError -> 409
    - IntegrityError -> 400 (duplicate rows)
    - DatabaseError -> 503, logged with traceback
    PermissionDenied and Http404 are already handled by DRF.
    """
    if isinstance(exc, DjangoValidationError):
        if hasattr(exc, 'error_dict'):
            exc = ValidationError(detail=exc.message_dict)
        else:
            exc = ValidationError(detail={'non_field_errors': exc.messages})
    elif isinstance(exc, ObjectDoesNotExist):
        exc = NotFound(detail=str(exc) or 'Not found.')
    elif isinstance(exc, BookingConflictError):
        logger.warning(f"Booking status conflict: {exc.message}")
        return Response({'detail': exc.message}, status=status.HTTP_409_CONFLICT)
    elif isinstance(exc, IntegrityError):
        logger.warning(f"Integrity error: {exc}")
        return Response(
            {'detail': 'This record conflicts with existing data.'},
            status=status.HTTP_400_BAD_REQUEST
        )
    elif isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.error(
            f"Store error in {view.__class__.__name__ if view else 'unknown view'}: {exc}",
            exc_info=True
        )
        return Response(
            {'detail': 'The data store is unavailable. Please try again later.'},
            status=status.HTTP_503_SERVICE_UNAVAILABLE
        )

    return exception_handler(exc, context)
