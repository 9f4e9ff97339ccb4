"""
Membership management service.

Handles joining, roster edits and departures with concurrency protection.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.messes.models import Mess, MessMember, MessRole

from .exceptions import (
    MessNotFoundError,
    InvalidMessPasswordError,
    AlreadyMemberError,
    DuplicateMemberError,
    NotMemberError,
    ManagerCannotLeaveError,
    CannotRemoveSelfError,
    InsufficientPermissionsError,
    LinkedEmailChangeError,
)

logger = logging.getLogger(__name__)


def _lock_mess(**lookup) -> Mess:
    try:
        return Mess.objects.select_for_update().get(**lookup)
    except Mess.DoesNotExist:
        raise MessNotFoundError("Mess not found")


@transaction.atomic
def join_mess(*, name: str, password: str, user: User) -> MessMember:
    """
    Join a mess by name and password.

    If a manager already put the user's email on the roster, that entry
    is claimed instead of creating a second one.

    Args:
        name: Mess name as typed by the user
        password: Join password
        user: User joining the mess

    Returns:
        The user's MessMember entry

    Raises:
        MessNotFoundError: If no mess has this name
        InvalidMessPasswordError: If the password is wrong
        AlreadyMemberError: If the user already belongs to the mess
    """
    mess = _lock_mess(name=name.strip())

    if not mess.check_password(password):
        raise InvalidMessPasswordError("Incorrect mess password")

    if mess.has_member(user):
        raise AlreadyMemberError(f"You are already a member of {mess.name}")

    roster_entry = (
        MessMember.objects
        .select_for_update()
        .filter(mess=mess, email=user.email.lower(), user__isnull=True)
        .first()
    )
    if roster_entry is not None:
        roster_entry.user = user
        roster_entry.save(update_fields=['user'])
        logger.info("User %s claimed roster entry %s in mess %s", user.id, roster_entry.id, mess.id)
        return roster_entry

    try:
        with transaction.atomic():
            member = MessMember.objects.create(
                mess=mess,
                user=user,
                name=user.get_display_name(),
                email=user.email,
                role=MessRole.MEMBER,
            )
    except IntegrityError:
        raise AlreadyMemberError(f"{user.email} is already on the roster of {mess.name}")

    logger.info("User %s joined mess %s", user.id, mess.id)
    return member


@transaction.atomic
def add_member(
    *,
    mess_id: UUID,
    name: str,
    email: str,
    added_by: User
) -> MessMember:
    """
    Add a roster entry by name and email (manager only).

    Args:
        mess_id: UUID of the mess
        name: Member's display name
        email: Member's email, unique within the mess
        added_by: User performing the action (must be manager)

    Returns:
        Created MessMember instance

    Raises:
        MessNotFoundError: If mess doesn't exist
        InsufficientPermissionsError: If added_by is not a manager
        DuplicateMemberError: If the email is already on the roster
    """
    mess = _lock_mess(id=mess_id)

    if not mess.is_manager(added_by):
        raise InsufficientPermissionsError("Only the mess manager can add members")

    email = email.strip().lower()
    if mess.members.filter(email=email).exists():
        raise DuplicateMemberError(f"{email} is already on the roster")

    try:
        with transaction.atomic():
            member = MessMember.objects.create(
                mess=mess,
                name=name,
                email=email,
                role=MessRole.MEMBER,
            )
    except IntegrityError:
        raise DuplicateMemberError(f"{email} is already on the roster")

    return member


@transaction.atomic
def update_member(
    *,
    mess_id: UUID,
    member_id: UUID,
    updated_by: User,
    name: Optional[str] = None,
    email: Optional[str] = None
) -> MessMember:
    """
    Rename a roster entry or correct its email (manager only).

    Entries linked to an account keep the account's email. Records that
    already carry a name snapshot (deposits, meal counts) are not touched.

    Raises:
        MessNotFoundError: If mess doesn't exist
        InsufficientPermissionsError: If updated_by is not a manager
        NotMemberError: If the entry does not belong to the mess
        LinkedEmailChangeError: If the email of a linked entry would change
        DuplicateMemberError: If the new email is already on the roster
    """
    mess = _lock_mess(id=mess_id)

    if not mess.is_manager(updated_by):
        raise InsufficientPermissionsError("Only the mess manager can edit members")

    try:
        member = (
            MessMember.objects
            .select_for_update()
            .get(mess=mess, id=member_id)
        )
    except MessMember.DoesNotExist:
        raise NotMemberError("Member is not on the roster of this mess")

    update_fields = []

    if name is not None:
        member.name = name.strip()
        update_fields.append('name')

    if email is not None:
        email = email.strip().lower()
        if email != member.email.lower():
            if member.user_id is not None:
                raise LinkedEmailChangeError(
                    "This member has an account; their email follows the account"
                )
            if mess.members.filter(email=email).exclude(id=member.id).exists():
                raise DuplicateMemberError(f"{email} is already on the roster")
            member.email = email
            update_fields.append('email')

    if update_fields:
        member.save(update_fields=update_fields)
        logger.info("Member %s in mess %s updated by user %s", member.id, mess.id, updated_by.id)

    return member


@transaction.atomic
def remove_member(
    *,
    mess_id: UUID,
    member_id: UUID,
    removed_by: User
) -> None:
    """
    Remove a roster entry (manager only).

    A manager cannot remove their own entry through this path.

    Raises:
        MessNotFoundError: If mess doesn't exist
        InsufficientPermissionsError: If removed_by is not a manager
        NotMemberError: If the entry does not belong to the mess
        CannotRemoveSelfError: If the manager targets their own entry
    """
    mess = _lock_mess(id=mess_id)

    if not mess.is_manager(removed_by):
        raise InsufficientPermissionsError("Only the mess manager can remove members")

    try:
        member = (
            MessMember.objects
            .select_for_update()
            .get(mess=mess, id=member_id)
        )
    except MessMember.DoesNotExist:
        raise NotMemberError("Member is not on the roster of this mess")

    if member.user_id is not None and member.user_id == removed_by.id:
        raise CannotRemoveSelfError("You cannot remove yourself from the mess")

    member.delete()
    logger.info("Member %s removed from mess %s by user %s", member_id, mess.id, removed_by.id)


@transaction.atomic
def leave_mess(*, mess_id: UUID, user: User) -> None:
    """
    Leave a mess.

    Managers cannot leave; the mess would be left without anyone able to
    post expenses.

    Raises:
        MessNotFoundError: If mess doesn't exist
        NotMemberError: If user is not a member
        ManagerCannotLeaveError: If user is the manager
    """
    mess = _lock_mess(id=mess_id)

    member = mess.get_member(user)
    if member is None:
        raise NotMemberError(f"You are not a member of {mess.name}")

    if member.is_manager:
        raise ManagerCannotLeaveError("The mess manager cannot leave the mess")

    member.delete()
    logger.info("User %s left mess %s", user.id, mess.id)


def get_mess_members(*, mess_id: UUID) -> QuerySet[MessMember]:
    """
    Get the roster of a mess in join order.

    Raises:
        MessNotFoundError: If mess doesn't exist
    """
    if not Mess.objects.filter(id=mess_id).exists():
        raise MessNotFoundError(f"Mess with ID {mess_id} not found")

    return (
        MessMember.objects
        .filter(mess_id=mess_id)
        .select_related('user')
        .order_by('join_date', 'id')
    )
