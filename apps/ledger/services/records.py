"""
Ledger record management.

Mess-scoped create/update/delete for deposits, expenses, shared expenses
and meal counts, plus listings for debt requests and debts. Every write
requires the acting user to be on the roster of the mess.

Rules:
    deposits        manager for anyone, members for themselves; delete by manager
    expenses        manager only
    shared expenses manager only
    meal counts     manager for anyone, members for themselves;
                    delete by manager or the counted member

Settlement deposits belong to their debt request and cannot be edited
or deleted here.
"""

import logging
from datetime import date as date_type
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.ledger.models import (
    Deposit,
    Expense,
    SharedExpense,
    MealCount,
    DebtRequest,
    Debt,
)

from .access import (
    get_mess,
    get_roster_member,
    require_member,
    require_manager,
    require_self_or_manager,
)
from .calculations import to_amount, to_meal_units
from .exceptions import (
    InvalidAmountError,
    InsufficientPermissionsError,
    RecordNotFoundError,
)

logger = logging.getLogger(__name__)


def _positive_amount(amount) -> Decimal:
    amount = to_amount(amount)
    if amount <= Decimal('0'):
        raise InvalidAmountError("Amount must be greater than zero")
    return amount


def _get_record(model, mess, record_id, label: str):
    try:
        return model.objects.select_for_update().get(mess=mess, id=record_id)
    except (model.DoesNotExist, ValidationError):
        raise RecordNotFoundError(f"{label} not found")


# =============================================================================
# Deposits
# =============================================================================

def list_deposits(*, mess_id: UUID, member_id: Optional[UUID] = None) -> QuerySet:
    queryset = Deposit.objects.filter(mess_id=mess_id).select_related('member')
    if member_id:
        queryset = queryset.filter(member_id=member_id)
    return queryset.order_by('-date', '-created_at')


@transaction.atomic
def add_deposit(
    *,
    mess_id: UUID,
    added_by: User,
    member_id: UUID,
    amount,
    date: date_type,
    note: str = ''
) -> Deposit:
    """
    Record money a member put into the pool.

    Raises:
        InvalidAmountError: If amount is not a positive finite number
        MessNotFoundError: If mess doesn't exist
        NotMessMemberError: If added_by is not on the roster
        MemberNotFoundError: If member_id is not on the roster
        InsufficientPermissionsError: If a member records for someone else
    """
    amount = _positive_amount(amount)
    mess = get_mess(mess_id)
    actor = require_member(mess, added_by)
    member = get_roster_member(mess, member_id)
    require_self_or_manager(actor, member, 'record deposits')

    deposit = Deposit.objects.create(
        mess=mess,
        member=member,
        member_name=member.name,
        member_email=member.email,
        amount=amount,
        date=date,
        note=note,
        created_by=added_by,
    )
    logger.info("Deposit %s of %s recorded for member %s", deposit.id, amount, member.id)
    return deposit


@transaction.atomic
def update_deposit(
    *,
    mess_id: UUID,
    deposit_id: UUID,
    updated_by: User,
    amount=None,
    date: Optional[date_type] = None,
    note: Optional[str] = None
) -> Deposit:
    """
    Change amount, date or note of a deposit. None leaves a field as is.

    Raises:
        RecordNotFoundError: If the deposit is not in the mess
        InsufficientPermissionsError: If a member edits someone else's
            deposit, or the deposit is a settlement offset
        InvalidAmountError: If the new amount is not positive and finite
    """
    mess = get_mess(mess_id)
    actor = require_member(mess, updated_by)
    deposit = _get_record(Deposit, mess, deposit_id, 'Deposit')

    if deposit.is_settlement:
        raise InsufficientPermissionsError("Settlement deposits cannot be edited")
    if not actor.is_manager and deposit.member_id != actor.id:
        raise InsufficientPermissionsError("You can only edit your own deposits")

    if amount is not None:
        deposit.amount = _positive_amount(amount)
    if date is not None:
        deposit.date = date
    if note is not None:
        deposit.note = note

    deposit.save()
    return deposit


@transaction.atomic
def delete_deposit(*, mess_id: UUID, deposit_id: UUID, deleted_by: User) -> None:
    """Delete a deposit (manager only, never a settlement offset)."""
    mess = get_mess(mess_id)
    require_manager(mess, deleted_by, 'delete deposits')
    deposit = _get_record(Deposit, mess, deposit_id, 'Deposit')

    if deposit.is_settlement:
        raise InsufficientPermissionsError("Settlement deposits cannot be deleted")

    deposit.delete()
    logger.info("Deposit %s deleted by user %s", deposit_id, deleted_by.id)


# =============================================================================
# Expenses and shared expenses
# =============================================================================

def _list_expenses(model, mess_id):
    return model.objects.filter(mess_id=mess_id).order_by('-date', '-created_at')


def _add_expense(model, *, mess_id, added_by, amount, date, description, category):
    amount = _positive_amount(amount)
    mess = get_mess(mess_id)
    require_manager(mess, added_by, 'add expenses')

    fields = {
        'mess': mess,
        'amount': amount,
        'date': date,
        'description': description,
        'created_by': added_by,
    }
    if category:
        fields['category'] = category

    expense = model.objects.create(**fields)
    logger.info("%s %s of %s added to mess %s", model.__name__, expense.id, amount, mess.id)
    return expense


def _update_expense(model, *, mess_id, expense_id, updated_by, changes):
    mess = get_mess(mess_id)
    require_manager(mess, updated_by, 'edit expenses')
    expense = _get_record(model, mess, expense_id, 'Expense')

    for field in ('amount', 'date', 'description', 'category'):
        value = changes.get(field)
        if value is None:
            continue
        if field == 'amount':
            value = _positive_amount(value)
        setattr(expense, field, value)

    expense.save()
    return expense


def _delete_expense(model, *, mess_id, expense_id, deleted_by):
    mess = get_mess(mess_id)
    require_manager(mess, deleted_by, 'delete expenses')
    expense = _get_record(model, mess, expense_id, 'Expense')
    expense.delete()
    logger.info("%s %s deleted by user %s", model.__name__, expense_id, deleted_by.id)


def list_expenses(*, mess_id: UUID) -> QuerySet:
    return _list_expenses(Expense, mess_id)


@transaction.atomic
def add_expense(
    *,
    mess_id: UUID,
    added_by: User,
    amount,
    date: date_type,
    description: str = '',
    category: str = ''
) -> Expense:
    """
    Add a meal expense (manager only).

    Raises:
        InvalidAmountError: If amount is not a positive finite number
        NotMessMemberError: If added_by is not on the roster
        InsufficientPermissionsError: If added_by is not the manager
    """
    return _add_expense(
        Expense,
        mess_id=mess_id,
        added_by=added_by,
        amount=amount,
        date=date,
        description=description,
        category=category,
    )


@transaction.atomic
def update_expense(*, mess_id: UUID, expense_id: UUID, updated_by: User, **changes) -> Expense:
    return _update_expense(
        Expense, mess_id=mess_id, expense_id=expense_id, updated_by=updated_by, changes=changes
    )


@transaction.atomic
def delete_expense(*, mess_id: UUID, expense_id: UUID, deleted_by: User) -> None:
    _delete_expense(Expense, mess_id=mess_id, expense_id=expense_id, deleted_by=deleted_by)


def list_shared_expenses(*, mess_id: UUID) -> QuerySet:
    return _list_expenses(SharedExpense, mess_id)


@transaction.atomic
def add_shared_expense(
    *,
    mess_id: UUID,
    added_by: User,
    amount,
    date: date_type,
    description: str = '',
    category: str = ''
) -> SharedExpense:
    """Add a cost split per head, such as rent (manager only)."""
    return _add_expense(
        SharedExpense,
        mess_id=mess_id,
        added_by=added_by,
        amount=amount,
        date=date,
        description=description,
        category=category,
    )


@transaction.atomic
def update_shared_expense(
    *,
    mess_id: UUID,
    expense_id: UUID,
    updated_by: User,
    **changes
) -> SharedExpense:
    return _update_expense(
        SharedExpense, mess_id=mess_id, expense_id=expense_id, updated_by=updated_by, changes=changes
    )


@transaction.atomic
def delete_shared_expense(*, mess_id: UUID, expense_id: UUID, deleted_by: User) -> None:
    _delete_expense(SharedExpense, mess_id=mess_id, expense_id=expense_id, deleted_by=deleted_by)


# =============================================================================
# Meal counts
# =============================================================================

def list_meal_counts(*, mess_id: UUID, member_id: Optional[UUID] = None) -> QuerySet:
    queryset = MealCount.objects.filter(mess_id=mess_id).select_related('member')
    if member_id:
        queryset = queryset.filter(member_id=member_id)
    return queryset.order_by('-date', '-created_at')


@transaction.atomic
def add_meal_count(
    *,
    mess_id: UUID,
    added_by: User,
    member_id: UUID,
    date: date_type,
    breakfast: int = 0,
    lunch: int = 0,
    dinner: int = 0
) -> MealCount:
    """
    Record the meals a member had on a date.

    Raises:
        InvalidMealCountError: If any count is negative or not whole
        MemberNotFoundError: If member_id is not on the roster
        InsufficientPermissionsError: If a member records for someone else
    """
    breakfast, lunch, dinner = (to_meal_units(n) for n in (breakfast, lunch, dinner))

    mess = get_mess(mess_id)
    actor = require_member(mess, added_by)
    member = get_roster_member(mess, member_id)
    require_self_or_manager(actor, member, 'record meals')

    meal_count = MealCount.objects.create(
        mess=mess,
        member=member,
        member_name=member.name,
        date=date,
        breakfast=breakfast,
        lunch=lunch,
        dinner=dinner,
        created_by=added_by,
    )
    return meal_count


@transaction.atomic
def delete_meal_count(*, mess_id: UUID, meal_count_id: UUID, deleted_by: User) -> None:
    """Delete a meal count (manager or the counted member)."""
    mess = get_mess(mess_id)
    actor = require_member(mess, deleted_by)
    meal_count = _get_record(MealCount, mess, meal_count_id, 'Meal count')

    if not actor.is_manager and meal_count.member_id != actor.id:
        raise InsufficientPermissionsError("You can only delete your own meal counts")

    meal_count.delete()


# =============================================================================
# Debt requests and debts
# =============================================================================

def list_debt_requests(*, mess_id: UUID, status: Optional[str] = None) -> QuerySet:
    queryset = DebtRequest.objects.filter(mess_id=mess_id)
    if status:
        queryset = queryset.filter(status=status)
    return queryset.order_by('-created_at')


def get_debt_request(*, mess_id: UUID, request_id: UUID) -> DebtRequest:
    try:
        return DebtRequest.objects.get(mess_id=mess_id, id=request_id)
    except (DebtRequest.DoesNotExist, ValidationError):
        raise RecordNotFoundError("Debt request not found")


def list_debts(*, mess_id: UUID) -> QuerySet:
    return Debt.objects.filter(mess_id=mess_id).select_related('request').order_by('-date', '-created_at')
