"""
Tests for discovery: skill matching, trending skills, recent members and the
discover, dashboard and stats endpoints.
"""

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from marketplace.matching import (
    matching_requests,
    recent_members,
    tally_skills,
    trending_skills,
)
from marketplace.models import Booking, HelpRequest, Skill, UserSkill

User = get_user_model()


class TallySkillsTestCase(TestCase):

    def test_counts_sorted_descending(self):
        self.assertEqual(
            tally_skills(['plumbing', 'plumbing', 'tutoring']),
            [('plumbing', 2), ('tutoring', 1)]
        )

    def test_ties_keep_first_seen_order(self):
        self.assertEqual(
            tally_skills(['gardening', 'tutoring', 'tutoring', 'gardening', 'painting']),
            [('gardening', 2), ('tutoring', 2), ('painting', 1)]
        )

    def test_empty(self):
        self.assertEqual(tally_skills([]), [])


class DiscoveryTestCase(TestCase):
    """Matching and trending against stored requests."""

    def setUp(self):
        self.viewer = User.objects.create_user(
            username='viewer',
            email='viewer@example.com',
            password='testpass123'
        )
        self.poster = User.objects.create_user(
            username='poster',
            email='poster@example.com',
            password='testpass123'
        )

        self.plumbing = Skill.objects.create(name='Plumbing', category='Home')
        self.tutoring = Skill.objects.create(name='Tutoring', category='Education')
        Skill.objects.create(name='Gardening', category='Outdoors')

    def _post(self, requester, skill_needed, title=None):
        return HelpRequest.objects.create(
            requester=requester,
            title=title or f'Need {skill_needed}',
            description='Details to follow.',
            skill_needed=skill_needed
        )

    # ========================================================================
    # Matching Tests
    # ========================================================================

    def test_no_skills_means_no_matches(self):
        self._post(self.poster, 'Plumbing')
        self._post(self.poster, 'Tutoring')

        self.assertEqual(matching_requests(self.viewer), [])

    def test_matches_open_requests_for_viewer_skills(self):
        UserSkill.objects.create(user=self.viewer, skill=self.plumbing, experience_level='expert')
        wanted = self._post(self.poster, 'Plumbing')
        self._post(self.poster, 'Gardening')
        closed = self._post(self.poster, 'Plumbing', title='Closed one')
        closed.close(self.poster)

        self.assertEqual(matching_requests(self.viewer), [wanted])

    def test_skill_match_ignores_case(self):
        UserSkill.objects.create(user=self.viewer, skill=self.plumbing, experience_level='expert')
        lower = self._post(self.poster, 'plumbing')
        upper = self._post(self.poster, 'PLUMBING')

        self.assertEqual(set(matching_requests(self.viewer)), {lower, upper})
        self.assertTrue(
            self.viewer.notifications.filter(related_id=lower.id, type='new_request').exists()
        )

    def test_own_requests_are_excluded(self):
        UserSkill.objects.create(user=self.viewer, skill=self.plumbing, experience_level='beginner')
        self._post(self.viewer, 'Plumbing')

        self.assertEqual(matching_requests(self.viewer), [])

    def test_newest_first_and_capped(self):
        UserSkill.objects.create(user=self.viewer, skill=self.plumbing, experience_level='advanced')
        UserSkill.objects.create(user=self.viewer, skill=self.tutoring, experience_level='advanced')
        posted = [self._post(self.poster, name) for name in ['Plumbing', 'Tutoring'] * 4]

        result = matching_requests(self.viewer)

        self.assertEqual(len(result), 6)
        self.assertEqual(result, list(reversed(posted))[:6])

    # ========================================================================
    # Trending Tests
    # ========================================================================

    def test_trending_counts_open_requests(self):
        for name in ['Plumbing', 'Plumbing', 'Tutoring', 'Gardening', 'Plumbing']:
            self._post(self.poster, name)
        closed = self._post(self.poster, 'Tutoring')
        closed.close(self.poster)

        trending = trending_skills()

        self.assertEqual(trending[0], ('Plumbing', 3))
        self.assertEqual(dict(trending), {'Plumbing': 3, 'Tutoring': 1, 'Gardening': 1})

    def test_trending_respects_top(self):
        for i in range(7):
            self._post(self.poster, f'Skill {i}')

        self.assertEqual(len(trending_skills(top=5)), 5)

    def test_trending_samples_newest_requests(self):
        self._post(self.poster, 'Gardening')
        self._post(self.poster, 'Plumbing')
        self._post(self.poster, 'Plumbing')

        self.assertEqual(trending_skills(sample_size=2), [('Plumbing', 2)])

    # ========================================================================
    # Recent Members Tests
    # ========================================================================

    def test_recent_members_exclude_viewer(self):
        members = recent_members(self.viewer)

        self.assertEqual([p.user_id for p in members], [self.poster.id])

    def test_recent_members_capped_at_six(self):
        for i in range(8):
            User.objects.create_user(
                username=f'member{i}',
                email=f'member{i}@example.com',
                password='testpass123'
            )

        members = recent_members(self.viewer)

        self.assertEqual(len(members), 6)
        self.assertEqual(members[0].user.username, 'member7')


class DiscoveryEndpointsTestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.viewer = User.objects.create_user(
            username='viewer',
            email='viewer@example.com',
            password='testpass123'
        )
        self.poster = User.objects.create_user(
            username='poster',
            email='poster@example.com',
            password='testpass123'
        )
        skill = Skill.objects.create(name='Plumbing', category='Home')
        UserSkill.objects.create(user=self.viewer, skill=skill, experience_level='expert')

        self.request = HelpRequest.objects.create(
            requester=self.poster,
            title='Fix the boiler',
            description='No hot water.',
            skill_needed='Plumbing'
        )

        token = RefreshToken.for_user(self.viewer).access_token
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

    def test_discover(self):
        response = self.client.get('/api/discover/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r['id'] for r in response.data['matching_requests']], [self.request.id])
        self.assertEqual(response.data['trending_skills'], [{'skill': 'Plumbing', 'count': 1}])
        self.assertEqual([m['id'] for m in response.data['recent_members']], [self.poster.id])

    def test_discover_requires_authentication(self):
        self.client.credentials()
        response = self.client.get('/api/discover/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_dashboard(self):
        own = HelpRequest.objects.create(
            requester=self.viewer,
            title='Tutor needed',
            description='Physics.',
            skill_needed='Tutoring'
        )

        response = self.client.get('/api/dashboard/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['profile']['id'], self.viewer.id)
        self.assertEqual([s['skill']['name'] for s in response.data['skills']], ['Plumbing'])
        self.assertEqual([r['id'] for r in response.data['recent_requests']], [own.id])

    def test_stats_are_public(self):
        booking = self.request.apply(self.viewer)
        booking.transition_to(self.poster, Booking.ACCEPTED)
        booking.transition_to(self.viewer, Booking.COMPLETED)

        response = APIClient().get('/api/stats/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_members'], 2)
        self.assertEqual(response.data['total_requests'], 1)
        self.assertEqual(response.data['completed_bookings'], 1)
        self.assertEqual([r['id'] for r in response.data['recent_requests']], [self.request.id])
        self.assertEqual(response.data['popular_skills'], [{'skill': 'Plumbing', 'count': 1}])
