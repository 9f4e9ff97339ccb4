"""Notice board service."""

import logging
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.messes.models import Mess, MessMember
from apps.household.models import Notice

from .exceptions import (
    MessNotFoundError,
    NotMessMemberError,
    NoticeNotFoundError,
    InsufficientPermissionsError,
    EmptyNoticeError,
)

logger = logging.getLogger(__name__)


def get_member_or_raise(*, mess_id: UUID, user: User) -> MessMember:
    """Resolve the acting user's roster entry in the mess."""
    try:
        mess = Mess.objects.get(id=mess_id)
    except Mess.DoesNotExist:
        raise MessNotFoundError("Mess not found")

    member = mess.get_member(user)
    if member is None:
        raise NotMessMemberError(f"You are not a member of {mess.name}")
    return member


def get_manager_or_raise(*, mess_id: UUID, user: User, action: str) -> MessMember:
    """Resolve the acting user's roster entry and require the manager role."""
    member = get_member_or_raise(mess_id=mess_id, user=user)
    if not member.is_manager:
        logger.warning("User %s tried to %s in mess %s without manager role", user.id, action, mess_id)
        raise InsufficientPermissionsError(f"Only the manager can {action}")
    return member


def list_notices(*, mess_id: UUID) -> QuerySet:
    """Notices of the mess, newest first."""
    return Notice.objects.filter(mess_id=mess_id).order_by('-created_at')


@transaction.atomic
def post_notice(*, mess_id: UUID, author: User, message: str) -> Notice:
    """
    Post a notice (manager only).

    Raises:
        EmptyNoticeError: If the message is blank
        MessNotFoundError: If mess doesn't exist
        NotMessMemberError: If author is not on the roster
        InsufficientPermissionsError: If author is not the manager
    """
    message = (message or '').strip()
    if not message:
        raise EmptyNoticeError("Notice message cannot be empty")

    member = get_manager_or_raise(mess_id=mess_id, user=author, action='post notices')

    return Notice.objects.create(
        mess_id=mess_id,
        message=message,
        author=author,
        author_name=member.name or author.get_display_name(),
    )


@transaction.atomic
def delete_notice(*, mess_id: UUID, notice_id: UUID, deleted_by: User) -> None:
    """
    Delete a notice (manager only).

    Raises:
        NoticeNotFoundError: If the notice is not in the mess
        InsufficientPermissionsError: If deleted_by is not the manager
    """
    get_manager_or_raise(mess_id=mess_id, user=deleted_by, action='delete notices')

    try:
        notice = Notice.objects.select_for_update().get(mess_id=mess_id, id=notice_id)
    except (Notice.DoesNotExist, ValidationError):
        raise NoticeNotFoundError("Notice not found")

    notice.delete()
    logger.info("Notice %s deleted by user %s", notice_id, deleted_by.id)
