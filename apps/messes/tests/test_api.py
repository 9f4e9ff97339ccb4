"""
API integration tests for messes app.

Tests verify HTTP layer behavior:
- Status codes
- Response formats
- Permission enforcement
- Error messages
"""

import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status

from apps.messes.models import Mess, MessMember, MessRole

from .conftest import MESS_PASSWORD


@pytest.mark.django_db
class TestMessCreate:
    """POST /api/messes/"""

    def test_create_mess_success(self, manager_client):
        url = reverse('messes:mess-list')
        response = manager_client.post(url, {'name': 'Blue Flat', 'password': 'secret1'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Blue Flat'
        assert response.data['user_role'] == MessRole.MANAGER
        assert response.data['member_count'] == 1
        assert 'password' not in response.data

    def test_create_mess_duplicate_name(self, manager_client, mess):
        url = reverse('messes:mess-list')
        response = manager_client.post(url, {'name': mess.name, 'password': 'secret1'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_create_mess_blank_name(self, manager_client):
        url = reverse('messes:mess-list')
        response = manager_client.post(url, {'name': '   ', 'password': 'secret1'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_mess_unauthenticated(self, api_client):
        url = reverse('messes:mess-list')
        response = api_client.post(url, {'name': 'Blue Flat', 'password': 'secret1'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestMessRead:
    """GET /api/messes/, /api/messes/my/, /api/messes/{id}/"""

    def test_list_only_own_messes(self, manager_client, outsider_client, mess):
        response = manager_client.get(reverse('messes:mess-list'))
        assert response.status_code == status.HTTP_200_OK

        response = outsider_client.get(reverse('messes:my-messes'))
        assert response.status_code == status.HTTP_200_OK
        assert response.data == []

    def test_my_messes(self, member_client, mess_with_member):
        response = member_client.get(reverse('messes:my-messes'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['user_role'] == MessRole.MEMBER

    def test_retrieve_as_member(self, member_client, mess_with_member):
        url = reverse('messes:mess-detail', kwargs={'pk': mess_with_member.id})
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['member_count'] == 2

    def test_retrieve_as_outsider(self, outsider_client, mess):
        url = reverse('messes:mess-detail', kwargs={'pk': mess.id})
        response = outsider_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestJoinMess:
    """POST /api/messes/join/"""

    def test_join_success(self, member_client, mess, member_user):
        response = member_client.post(
            reverse('messes:join'),
            {'name': mess.name, 'password': MESS_PASSWORD},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['role'] == MessRole.MEMBER
        assert response.data['has_account'] is True
        assert mess.has_member(member_user)

    def test_join_wrong_password(self, member_client, mess):
        response = member_client.post(
            reverse('messes:join'),
            {'name': mess.name, 'password': 'nope'},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_join_unknown_mess(self, member_client):
        response = member_client.post(
            reverse('messes:join'),
            {'name': 'Nowhere', 'password': 'nope'},
            format='json',
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_join_twice(self, member_client, mess_with_member):
        response = member_client.post(
            reverse('messes:join'),
            {'name': mess_with_member.name, 'password': MESS_PASSWORD},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestMembers:
    """GET/POST /api/messes/{id}/members/"""

    def test_list_members(self, member_client, mess_with_member):
        url = reverse('messes:mess-members', kwargs={'pk': mess_with_member.id})
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [m['role'] for m in response.data] == [MessRole.MANAGER, MessRole.MEMBER]

    def test_manager_adds_roster_entry(self, manager_client, mess):
        url = reverse('messes:mess-members', kwargs={'pk': mess.id})
        response = manager_client.post(url, {'name': 'Karim', 'email': 'karim@example.com'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['has_account'] is False
        assert MessMember.objects.filter(mess=mess, email='karim@example.com').exists()

    def test_member_cannot_add(self, member_client, mess_with_member):
        url = reverse('messes:mess-members', kwargs={'pk': mess_with_member.id})
        response = member_client.post(url, {'name': 'Karim', 'email': 'karim@example.com'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_add_duplicate_email(self, manager_client, mess_with_member, member_user):
        url = reverse('messes:mess-members', kwargs={'pk': mess_with_member.id})
        response = manager_client.post(url, {'name': 'Again', 'email': member_user.email}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_outsider_cannot_list(self, outsider_client, mess):
        url = reverse('messes:mess-members', kwargs={'pk': mess.id})
        response = outsider_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestLeaveAndRemove:
    """POST /api/messes/{id}/leave/ and /remove_member/"""

    def test_member_leaves(self, member_client, mess_with_member, member_user):
        url = reverse('messes:mess-leave', kwargs={'pk': mess_with_member.id})
        response = member_client.post(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not mess_with_member.has_member(member_user)

    def test_manager_cannot_leave(self, manager_client, mess):
        url = reverse('messes:mess-leave', kwargs={'pk': mess.id})
        response = manager_client.post(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_manager_removes_member(self, manager_client, mess_with_member, member_user):
        target = mess_with_member.get_member(member_user)
        url = reverse('messes:mess-remove-member', kwargs={'pk': mess_with_member.id})
        response = manager_client.post(url, {'member_id': str(target.id)}, format='json')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not MessMember.objects.filter(id=target.id).exists()

    def test_manager_cannot_remove_self(self, manager_client, mess, manager_user):
        own = mess.get_member(manager_user)
        url = reverse('messes:mess-remove-member', kwargs={'pk': mess.id})
        response = manager_client.post(url, {'member_id': str(own.id)}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert MessMember.objects.filter(id=own.id).exists()

    def test_member_cannot_remove(self, member_client, mess_with_member, manager_user):
        target = mess_with_member.get_member(manager_user)
        url = reverse('messes:mess-remove-member', kwargs={'pk': mess_with_member.id})
        response = member_client.post(url, {'member_id': str(target.id)}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_remove_unknown_member(self, manager_client, mess):
        url = reverse('messes:mess-remove-member', kwargs={'pk': mess.id})
        response = manager_client.post(url, {'member_id': str(uuid4())}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestUpdateMember:
    """PATCH /api/messes/{id}/update_member/"""

    def test_manager_renames_member(self, manager_client, mess_with_member, member_user):
        target = mess_with_member.get_member(member_user)
        url = reverse('messes:mess-update-member', kwargs={'pk': mess_with_member.id})
        response = manager_client.patch(url, {'member_id': str(target.id), 'name': 'Rahim Uddin'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Rahim Uddin'

    def test_member_cannot_edit(self, member_client, mess_with_member, manager_user):
        target = mess_with_member.get_member(manager_user)
        url = reverse('messes:mess-update-member', kwargs={'pk': mess_with_member.id})
        response = member_client.patch(url, {'member_id': str(target.id), 'name': 'Boss'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_linked_email_change_rejected(self, manager_client, mess_with_member, member_user):
        target = mess_with_member.get_member(member_user)
        url = reverse('messes:mess-update-member', kwargs={'pk': mess_with_member.id})
        response = manager_client.patch(url, {'member_id': str(target.id), 'email': 'new@example.com'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_member(self, manager_client, mess):
        url = reverse('messes:mess-update-member', kwargs={'pk': mess.id})
        response = manager_client.patch(url, {'member_id': str(uuid4()), 'name': 'Ghost'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestMalformedMessId:

    def test_retrieve_with_malformed_id(self, member_client, mess_with_member):
        response = member_client.get('/api/messes/not-a-uuid/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
