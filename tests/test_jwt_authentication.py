"""
Tests for email-based JWT authentication.
"""

import pytest
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def member(db):
    return User.objects.create_user(
        username='member',
        email='member@test.com',
        password='SecurePass123!'
    )


@pytest.mark.django_db
class TestTokenObtain:

    def test_obtain_tokens_with_email(self, api_client, member):
        response = api_client.post('/api/token/', {
            'email': 'member@test.com',
            'password': 'SecurePass123!'
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data
        assert 'refresh' in response.data

    def test_email_is_case_insensitive(self, api_client, member):
        response = api_client.post('/api/token/', {
            'email': 'MEMBER@test.com',
            'password': 'SecurePass123!'
        }, format='json')

        assert response.status_code == status.HTTP_200_OK

    def test_wrong_password_is_rejected(self, api_client, member):
        response = api_client.post('/api/token/', {
            'email': 'member@test.com',
            'password': 'wrong'
        }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_access_token_authenticates_api_calls(self, api_client, member):
        tokens = api_client.post('/api/token/', {
            'email': 'member@test.com',
            'password': 'SecurePass123!'
        }, format='json').data

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        response = api_client.get('/api/profile/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == member.id

    def test_refresh_and_verify(self, api_client, member):
        tokens = api_client.post('/api/token/', {
            'email': 'member@test.com',
            'password': 'SecurePass123!'
        }, format='json').data

        refreshed = api_client.post('/api/token/refresh/', {'refresh': tokens['refresh']}, format='json')
        verified = api_client.post('/api/token/verify/', {'token': tokens['access']}, format='json')

        assert refreshed.status_code == status.HTTP_200_OK
        assert 'access' in refreshed.data
        assert verified.status_code == status.HTTP_200_OK

    def test_invalid_token_is_rejected(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')

        response = api_client.get('/api/profile/')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
