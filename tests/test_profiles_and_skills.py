"""
Tests for users, profiles and skill management.
"""

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from marketplace.models import Profile, Skill, UserSkill

User = get_user_model()


class UserProfileModelTestCase(TestCase):

    def test_profile_created_with_user(self):
        user = User.objects.create_user(
            username='newbie',
            email='Newbie@Example.com',
            password='testpass123'
        )

        self.assertEqual(user.email, 'newbie@example.com')
        profile = Profile.objects.get(user=user)
        self.assertEqual(profile.display_name, 'newbie')
        self.assertTrue(profile.is_available)
        self.assertEqual(profile.rating, 0.0)
        self.assertEqual(profile.total_reviews, 0)

    def test_long_email_local_part_is_truncated_for_display_name(self):
        user = User.objects.create_user(
            username='longname',
            email='a' * 120 + '@example.com',
            password='testpass123'
        )

        profile = Profile.objects.get(user=user)
        self.assertEqual(profile.display_name, 'a' * 100)

    def test_invalid_phone_is_rejected(self):
        user = User.objects.create_user(username='a', email='a@example.com', password='testpass123')
        profile = user.profile
        profile.phone = '12345'

        with self.assertRaises(ValidationError) as ctx:
            profile.save()

        self.assertIn('phone', ctx.exception.message_dict)

    def test_duplicate_user_skill_is_rejected(self):
        user = User.objects.create_user(username='b', email='b@example.com', password='testpass123')
        skill = Skill.objects.create(name='Cleaning', category='Home')
        UserSkill.objects.create(user=user, skill=skill, experience_level='beginner')

        with self.assertRaises(ValidationError):
            UserSkill.objects.create(user=user, skill=skill, experience_level='expert')

    def test_negative_hourly_rate_is_rejected(self):
        user = User.objects.create_user(username='c', email='c@example.com', password='testpass123')
        skill = Skill.objects.create(name='Cleaning', category='Home')

        with self.assertRaises(ValidationError):
            UserSkill.objects.create(
                user=user,
                skill=skill,
                experience_level='beginner',
                hourly_rate=Decimal('-10.00')
            )


class ProfileAPITestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            username='member',
            email='member@example.com',
            password='testpass123'
        )
        self.other = User.objects.create_user(
            username='other',
            email='other@example.com',
            password='testpass123'
        )
        token = RefreshToken.for_user(self.user).access_token
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

    def test_get_own_profile(self):
        response = self.client.get('/api/profile/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], self.user.id)
        self.assertEqual(response.data['email'], 'member@example.com')

    def test_patch_profile(self):
        response = self.client.patch('/api/profile/', {
            'display_name': '  Sam  ',
            'bio': 'Handy with tools',
            'location': 'York',
            'phone': '+44 20 7946 0958',
            'avatar_url': 'https://example.com/sam.png',
            'is_available': False,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        profile = Profile.objects.get(user=self.user)
        self.assertEqual(profile.display_name, 'Sam')
        self.assertEqual(profile.location, 'York')
        self.assertFalse(profile.is_available)

    def test_invalid_phone_returns_400(self):
        response = self.client.patch('/api/profile/', {'phone': 'call me'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('phone', response.data)

    def test_invalid_avatar_url_returns_400(self):
        response = self.client.patch('/api/profile/', {'avatar_url': 'not a url'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_public_profile(self):
        skill = Skill.objects.create(name='Gardening', category='Outdoors')
        UserSkill.objects.create(user=self.other, skill=skill, experience_level='advanced')

        response = APIClient().get(f'/api/profiles/{self.other.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotIn('phone', response.data)
        self.assertNotIn('email', response.data)
        self.assertEqual(response.data['skills'][0]['skill']['name'], 'Gardening')

    def test_missing_public_profile_returns_404(self):
        response = self.client.get('/api/profiles/99999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class SkillAPITestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            username='member',
            email='member@example.com',
            password='testpass123'
        )
        self.other = User.objects.create_user(
            username='other',
            email='other@example.com',
            password='testpass123'
        )
        self.tutoring = Skill.objects.create(name='Tutoring', category='Education')
        self.painting = Skill.objects.create(name='Painting', category='Home')
        self.carpentry = Skill.objects.create(name='Carpentry', category='Home')

        token = RefreshToken.for_user(self.user).access_token
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

    def test_skills_ordered_by_category_then_name(self):
        response = APIClient().get('/api/skills/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [s['name'] for s in response.data],
            ['Tutoring', 'Carpentry', 'Painting']
        )

    def test_add_skill(self):
        response = self.client.post('/api/skills/mine/', {
            'skill_id': self.painting.id,
            'experience_level': 'advanced',
            'hourly_rate': '25.00',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['skill']['name'], 'Painting')
        self.assertTrue(UserSkill.objects.filter(user=self.user, skill=self.painting).exists())

    def test_add_duplicate_skill_returns_400(self):
        UserSkill.objects.create(user=self.user, skill=self.painting, experience_level='beginner')

        response = self.client.post('/api/skills/mine/', {
            'skill_id': self.painting.id,
            'experience_level': 'expert',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('skill_id', response.data)

    def test_add_skill_requires_experience_level(self):
        response = self.client.post('/api/skills/mine/', {'skill_id': self.painting.id}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('experience_level', response.data)

    def test_negative_hourly_rate_returns_400(self):
        response = self.client.post('/api/skills/mine/', {
            'skill_id': self.painting.id,
            'experience_level': 'expert',
            'hourly_rate': '-1.00',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_own_skills(self):
        UserSkill.objects.create(user=self.user, skill=self.painting, experience_level='beginner')
        UserSkill.objects.create(user=self.other, skill=self.tutoring, experience_level='beginner')

        response = self.client.get('/api/skills/mine/')

        self.assertEqual([s['skill']['name'] for s in response.data], ['Painting'])

    def test_remove_own_skill(self):
        user_skill = UserSkill.objects.create(user=self.user, skill=self.painting, experience_level='beginner')

        response = self.client.delete(f'/api/skills/mine/{user_skill.id}/')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(UserSkill.objects.filter(pk=user_skill.id).exists())

    def test_cannot_remove_other_members_skill(self):
        user_skill = UserSkill.objects.create(user=self.other, skill=self.painting, experience_level='beginner')

        response = self.client.delete(f'/api/skills/mine/{user_skill.id}/')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(UserSkill.objects.filter(pk=user_skill.id).exists())
