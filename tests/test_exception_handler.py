"""
Tests for the project-wide DRF exception handler.
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError
from rest_framework import status
from rest_framework.exceptions import PermissionDenied

from marketplace.exceptions import BookingConflictError, marketplace_exception_handler
from marketplace.models import Booking


class TestExceptionHandler:

    def _handle(self, exc):
        return marketplace_exception_handler(exc, {'view': None})

    def test_django_field_errors_become_400(self):
        response = self._handle(DjangoValidationError({'title': ['This field cannot be blank.']}))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'title': ['This field cannot be blank.']}

    def test_django_plain_error_becomes_non_field_error(self):
        response = self._handle(DjangoValidationError('Something is wrong.'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'non_field_errors': ['Something is wrong.']}

    def test_does_not_exist_becomes_404(self):
        response = self._handle(Booking.DoesNotExist('Booking matching query does not exist.'))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_conflict_becomes_409(self):
        response = self._handle(BookingConflictError(7, 'pending'))

        assert response.status_code == status.HTTP_409_CONFLICT
        assert 'pending' in response.data['detail']

    def test_integrity_error_becomes_400(self):
        response = self._handle(IntegrityError('UNIQUE constraint failed'))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_database_error_becomes_503(self):
        response = self._handle(DatabaseError('connection lost'))
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE

    def test_drf_exceptions_pass_through(self):
        response = self._handle(PermissionDenied('Nope.'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['detail'] == 'Nope.'

    def test_unknown_exceptions_are_not_handled(self):
        assert self._handle(RuntimeError('boom')) is None
