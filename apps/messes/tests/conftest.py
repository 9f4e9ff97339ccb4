import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.messes.models import Mess, MessMember, MessRole


MESS_PASSWORD = 'rice-and-dal'


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def manager_user(db):
    """Create and return the mess manager."""
    return User.objects.create_user(
        email='manager@example.com',
        password='TestPass123!',
        display_name='Mess Manager',
    )


@pytest.fixture
def member_user(db):
    """Create and return a regular mess member."""
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Mess Member',
    )


@pytest.fixture
def outsider_user(db):
    """Create and return a user not in any mess."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
        display_name='Outsider',
    )


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def manager_client(manager_user):
    """Return API client authenticated as the manager."""
    return _client_for(manager_user)


@pytest.fixture
def member_client(member_user):
    """Return API client authenticated as a member."""
    return _client_for(member_user)


@pytest.fixture
def outsider_client(outsider_user):
    """Return API client authenticated as a non-member."""
    return _client_for(outsider_user)


@pytest.fixture
def mess(db, manager_user):
    """Create a mess with the manager on its roster."""
    mess = Mess(name='Green House', created_by=manager_user)
    mess.set_password(MESS_PASSWORD)
    mess.save()
    MessMember.objects.create(
        mess=mess,
        user=manager_user,
        name='Mess Manager',
        email=manager_user.email,
        role=MessRole.MANAGER,
    )
    return mess


@pytest.fixture
def mess_with_member(mess, member_user):
    """Mess with manager and one member."""
    MessMember.objects.create(
        mess=mess,
        user=member_user,
        name='Mess Member',
        email=member_user.email,
        role=MessRole.MEMBER,
    )
    return mess
