import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.messes.models import Mess, MessMember, MessRole
from apps.ledger.models import DebtRequest


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


def _user(email, name):
    return User.objects.create_user(email=email, password='TestPass123!', display_name=name)


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def manager_user(db):
    return _user('manager@example.com', 'Manager')


@pytest.fixture
def member_user(db):
    return _user('rahim@example.com', 'Rahim')


@pytest.fixture
def second_member_user(db):
    return _user('karim@example.com', 'Karim')


@pytest.fixture
def outsider_user(db):
    return _user('outsider@example.com', 'Outsider')


@pytest.fixture
def manager_client(manager_user):
    return _client_for(manager_user)


@pytest.fixture
def member_client(member_user):
    return _client_for(member_user)


@pytest.fixture
def second_member_client(second_member_user):
    return _client_for(second_member_user)


@pytest.fixture
def outsider_client(outsider_user):
    return _client_for(outsider_user)


@pytest.fixture
def mess(db, manager_user):
    """Mess with only its manager on the roster."""
    mess = Mess(name='Green House', created_by=manager_user)
    mess.set_password('rice-and-dal')
    mess.save()
    return mess


@pytest.fixture
def manager_entry(mess, manager_user):
    return MessMember.objects.create(
        mess=mess,
        user=manager_user,
        name='Manager',
        email=manager_user.email,
        role=MessRole.MANAGER,
    )


@pytest.fixture
def member_entry(mess, manager_entry, member_user):
    return MessMember.objects.create(
        mess=mess,
        user=member_user,
        name='Rahim',
        email=member_user.email,
        role=MessRole.MEMBER,
    )


@pytest.fixture
def second_member_entry(mess, member_entry, second_member_user):
    return MessMember.objects.create(
        mess=mess,
        user=second_member_user,
        name='Karim',
        email=second_member_user.email,
        role=MessRole.MEMBER,
    )


@pytest.fixture
def pending_request(mess, member_entry, second_member_entry):
    """Rahim (receiver) asks Karim (payer) for 250."""
    return DebtRequest.objects.create(
        mess=mess,
        from_member=second_member_entry,
        from_name=second_member_entry.name,
        from_email=second_member_entry.email,
        to_member=member_entry,
        to_name=member_entry.name,
        to_email=member_entry.email,
        amount=Decimal('250.00'),
        date=date(2024, 3, 15),
    )
