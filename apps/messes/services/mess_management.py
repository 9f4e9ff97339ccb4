"""
Mess management service.

Handles mess creation and lookup with proper transaction safety.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import Prefetch, QuerySet

from apps.accounts.models import User
from apps.messes.models import Mess, MessMember, MessRole

from .exceptions import (
    MessNotFoundError,
    MessNameTakenError,
)

logger = logging.getLogger(__name__)


def create_mess(*, name: str, password: str, creator: User) -> Mess:
    """
    Create a new mess and add the creator as manager.

    This is a multi-step operation wrapped in a transaction:
    1. Create the mess with a hashed join password
    2. Create the manager roster entry

    Args:
        name: Mess name, also the id other people use to join
        password: Join password (stored hashed)
        creator: User who will manage the mess

    Returns:
        Created Mess instance

    Raises:
        MessNameTakenError: If a mess with this name already exists
    """
    name = name.strip()

    try:
        with transaction.atomic():
            mess = Mess(name=name, created_by=creator)
            mess.set_password(password)
            mess.save()

            MessMember.objects.create(
                mess=mess,
                user=creator,
                name=creator.get_display_name(),
                email=creator.email,
                role=MessRole.MANAGER,
            )
    except IntegrityError:
        raise MessNameTakenError(f"A mess named '{name}' already exists")

    logger.info("Mess %s created by user %s", mess.id, creator.id)
    return mess


def get_mess_by_id(*, mess_id: UUID) -> Mess:
    """
    Get a mess by ID with its roster prefetched.

    Args:
        mess_id: UUID of the mess

    Returns:
        Mess instance

    Raises:
        MessNotFoundError: If mess doesn't exist
    """
    try:
        return (
            Mess.objects
            .select_related('created_by')
            .prefetch_related(
                Prefetch(
                    'members',
                    queryset=MessMember.objects.select_related('user')
                )
            )
            .get(id=mess_id)
        )
    except Mess.DoesNotExist:
        raise MessNotFoundError(f"Mess with ID {mess_id} not found")


def get_user_messes(*, user: User) -> QuerySet[Mess]:
    """Return all messes where ``user`` holds a roster entry."""
    return (
        Mess.objects
        .filter(members__user=user)
        .prefetch_related('members')
        .distinct()
    )
