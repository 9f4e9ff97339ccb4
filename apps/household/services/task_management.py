"""
Task list service.

Tasks are chores assigned to a roster member with a due date. Any member
may create a task or toggle its status; the creator or the manager may
delete it.
"""

import logging
from datetime import date as date_type
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.messes.models import MessMember
from apps.household.models import Task

from .exceptions import (
    MemberNotFoundError,
    TaskNotFoundError,
    InsufficientPermissionsError,
)
from .notice_board import get_member_or_raise

logger = logging.getLogger(__name__)


def _lock_task(mess_id: UUID, task_id: UUID) -> Task:
    try:
        return Task.objects.select_for_update().get(mess_id=mess_id, id=task_id)
    except (Task.DoesNotExist, ValidationError):
        raise TaskNotFoundError("Task not found")


def list_tasks(*, mess_id: UUID, status: Optional[str] = None) -> QuerySet:
    """Tasks of the mess, latest due date first."""
    queryset = Task.objects.filter(mess_id=mess_id).select_related('assigned_to')
    if status:
        queryset = queryset.filter(status=status)
    return queryset.order_by('-due_date', '-created_at')


@transaction.atomic
def create_task(
    *,
    mess_id: UUID,
    created_by: User,
    name: str,
    assigned_to_id: UUID,
    due_date: date_type
) -> Task:
    """
    Create a pending task.

    Raises:
        NotMessMemberError: If created_by is not on the roster
        MemberNotFoundError: If the assignee is not on the roster
    """
    get_member_or_raise(mess_id=mess_id, user=created_by)

    try:
        assignee = MessMember.objects.get(mess_id=mess_id, id=assigned_to_id)
    except MessMember.DoesNotExist:
        raise MemberNotFoundError("Assignee is not on the roster of this mess")

    return Task.objects.create(
        mess_id=mess_id,
        name=name.strip(),
        assigned_to=assignee,
        assigned_to_name=assignee.name,
        due_date=due_date,
        created_by=created_by,
    )


@transaction.atomic
def toggle_task(*, mess_id: UUID, task_id: UUID, user: User) -> Task:
    """Flip a task between pending and completed."""
    get_member_or_raise(mess_id=mess_id, user=user)
    task = _lock_task(mess_id, task_id)

    task.toggle()
    task.save(update_fields=['status', 'updated_at'])
    return task


@transaction.atomic
def delete_task(*, mess_id: UUID, task_id: UUID, deleted_by: User) -> None:
    """
    Delete a task (its creator or the manager).

    Raises:
        TaskNotFoundError: If the task is not in the mess
        InsufficientPermissionsError: If deleted_by is neither creator nor manager
    """
    member = get_member_or_raise(mess_id=mess_id, user=deleted_by)
    task = _lock_task(mess_id, task_id)

    if task.created_by_id != deleted_by.id and not member.is_manager:
        raise InsufficientPermissionsError("Only the creator or the manager can delete this task")

    task.delete()
    logger.info("Task %s deleted by user %s", task_id, deleted_by.id)
