"""Mess lookup and roster checks shared by ledger services."""

from uuid import UUID

from apps.accounts.models import User
from apps.messes.models import Mess, MessMember

from .exceptions import (
    MessNotFoundError,
    MemberNotFoundError,
    NotMessMemberError,
    InsufficientPermissionsError,
)


def get_mess(mess_id: UUID) -> Mess:
    try:
        return Mess.objects.get(id=mess_id)
    except Mess.DoesNotExist:
        raise MessNotFoundError("Mess not found")


def require_member(mess: Mess, user: User) -> MessMember:
    """Return the user's roster entry or raise NotMessMemberError."""
    member = mess.get_member(user)
    if member is None:
        raise NotMessMemberError(f"You are not a member of {mess.name}")
    return member


def require_manager(mess: Mess, user: User, action: str) -> MessMember:
    member = require_member(mess, user)
    if not member.is_manager:
        raise InsufficientPermissionsError(f"Only the mess manager can {action}")
    return member


def get_roster_member(mess: Mess, member_id: UUID) -> MessMember:
    try:
        return MessMember.objects.get(mess=mess, id=member_id)
    except MessMember.DoesNotExist:
        raise MemberNotFoundError("Member is not on the roster of this mess")


def require_self_or_manager(actor: MessMember, target: MessMember, action: str) -> None:
    """Members act on their own records; managers on anyone's."""
    if actor.is_manager or actor.id == target.id:
        return
    raise InsufficientPermissionsError(f"Only the mess manager can {action} for other members")
