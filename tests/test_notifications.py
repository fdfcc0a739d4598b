"""
Tests for notification dispatch and the notification endpoints.
"""

import pytest
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from marketplace import notifications
from marketplace.models import Booking, HelpRequest, Notification, Skill, UserSkill

User = get_user_model()


@pytest.mark.django_db
class TestNotificationDispatch:
    """Notifications created as side effects of marketplace activity."""

    @pytest.fixture(autouse=True)
    def setup(self):
        self.requester = User.objects.create_user(
            username='requester',
            email='requester@test.com',
            password='testpass123'
        )
        self.plumber = User.objects.create_user(
            username='plumber',
            email='plumber@test.com',
            password='testpass123'
        )
        self.tutor = User.objects.create_user(
            username='tutor',
            email='tutor@test.com',
            password='testpass123'
        )
        plumbing = Skill.objects.create(name='Plumbing', category='Home')
        tutoring = Skill.objects.create(name='Tutoring', category='Education')
        UserSkill.objects.create(user=self.plumber, skill=plumbing, experience_level='expert')
        UserSkill.objects.create(user=self.tutor, skill=tutoring, experience_level='expert')
        UserSkill.objects.create(user=self.requester, skill=plumbing, experience_level='beginner')

    def _post(self, skill_needed='Plumbing'):
        return HelpRequest.objects.create(
            requester=self.requester,
            title='Blocked drain',
            description='Water will not go down.',
            skill_needed=skill_needed
        )

    def test_new_request_notifies_members_with_skill(self):
        help_request = self._post()

        notification = Notification.objects.get(type=Notification.NEW_REQUEST)
        assert notification.user == self.plumber
        assert notification.related_id == help_request.id

    def test_new_request_does_not_notify_requester(self):
        self._post()
        assert not self.requester.notifications.filter(type=Notification.NEW_REQUEST).exists()

    def test_new_request_skill_match_is_case_insensitive(self):
        self._post(skill_needed='plumbing')
        assert self.plumber.notifications.filter(type=Notification.NEW_REQUEST).count() == 1

    def test_application_notifies_requester(self):
        help_request = self._post()
        booking = help_request.apply(self.tutor)

        notification = self.requester.notifications.get(type=Notification.BOOKING_REQUEST)
        assert notification.related_id == booking.id
        assert 'Blocked drain' in notification.message

    def test_status_changes_notify_helper(self):
        help_request = self._post()
        accepted = help_request.apply(self.tutor)
        declined = help_request.apply(self.plumber)

        accepted.transition_to(self.requester, Booking.ACCEPTED)
        declined.transition_to(self.requester, Booking.DECLINED)

        assert self.tutor.notifications.get(type=Notification.BOOKING_ACCEPTED).related_id == accepted.id
        assert self.plumber.notifications.get(type=Notification.BOOKING_DECLINED).related_id == declined.id

    def test_completion_and_cancellation_do_not_notify(self):
        help_request = self._post()
        booking = help_request.apply(self.tutor)
        booking.transition_to(self.requester, Booking.ACCEPTED)
        before = Notification.objects.count()

        booking.transition_to(self.tutor, Booking.COMPLETED)
        booking.transition_to(self.tutor, Booking.CANCELLED)

        assert Notification.objects.count() == before


@pytest.mark.django_db
class TestNotificationEndpoints:

    @pytest.fixture(autouse=True)
    def setup(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            username='member',
            email='member@test.com',
            password='testpass123'
        )
        self.other = User.objects.create_user(
            username='other',
            email='other@test.com',
            password='testpass123'
        )
        token = RefreshToken.for_user(self.user).access_token
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

    def _notify(self, user, title, is_read=False):
        notification = notifications.notify(user.id, Notification.OTHER, title)
        if is_read:
            notification.mark_as_read()
        return notification

    def test_list_returns_newest_first_then_marks_read(self):
        first = self._notify(self.user, 'First')
        second = self._notify(self.user, 'Second')
        self._notify(self.other, 'Not yours')

        response = self.client.get('/api/notifications/')

        assert response.status_code == status.HTTP_200_OK
        assert [n['id'] for n in response.data] == [second.id, first.id]
        assert all(n['is_read'] is False for n in response.data)
        assert not Notification.objects.filter(user=self.user, is_read=False).exists()
        assert Notification.objects.filter(user=self.other, is_read=False).count() == 1

    def test_unread_feed_caps_at_five(self):
        created = [self._notify(self.user, f'Note {i}') for i in range(7)]
        self._notify(self.user, 'Old', is_read=True)

        response = self.client.get('/api/notifications/unread/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['unread_count'] == 7
        assert [n['id'] for n in response.data['results']] == [n.id for n in reversed(created)][:5]

    def test_unread_feed_does_not_mark_read(self):
        self._notify(self.user, 'Pending')

        self.client.get('/api/notifications/unread/')

        assert Notification.objects.filter(user=self.user, is_read=False).count() == 1

    def test_mark_one_read(self):
        notification = self._notify(self.user, 'Hello')

        response = self.client.post(f'/api/notifications/{notification.id}/read/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_read'] is True
        notification.refresh_from_db()
        assert notification.is_read

    def test_mark_read_of_other_members_notification_is_404(self):
        notification = self._notify(self.other, 'Private')

        response = self.client.post(f'/api/notifications/{notification.id}/read/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        notification.refresh_from_db()
        assert not notification.is_read

    def test_requires_authentication(self):
        response = APIClient().get('/api/notifications/')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
