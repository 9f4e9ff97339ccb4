import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.messes.models import Mess, MessMember, MessRole


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def manager_user(db):
    return User.objects.create_user(email='manager@example.com', password='TestPass123!', display_name='Manager')


@pytest.fixture
def member_user(db):
    return User.objects.create_user(email='rahim@example.com', password='TestPass123!', display_name='Rahim')


@pytest.fixture
def other_member_user(db):
    return User.objects.create_user(email='karim@example.com', password='TestPass123!', display_name='Karim')


@pytest.fixture
def outsider_user(db):
    return User.objects.create_user(email='outsider@example.com', password='TestPass123!')


@pytest.fixture
def mess(db, manager_user, member_user, other_member_user):
    """Mess with a manager and two members."""
    mess = Mess(name='Green House', created_by=manager_user)
    mess.set_password('rice-and-dal')
    mess.save()
    MessMember.objects.create(
        mess=mess, user=manager_user, name='Manager', email=manager_user.email, role=MessRole.MANAGER
    )
    MessMember.objects.create(mess=mess, user=member_user, name='Rahim', email=member_user.email)
    MessMember.objects.create(mess=mess, user=other_member_user, name='Karim', email=other_member_user.email)
    return mess


@pytest.fixture
def member_entry(mess, member_user):
    return mess.get_member(member_user)


@pytest.fixture
def manager_client(manager_user):
    return _client_for(manager_user)


@pytest.fixture
def member_client(member_user):
    return _client_for(member_user)


@pytest.fixture
def other_member_client(other_member_user):
    return _client_for(other_member_user)


@pytest.fixture
def outsider_client(outsider_user):
    return _client_for(outsider_user)
