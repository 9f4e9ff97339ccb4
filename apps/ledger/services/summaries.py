"""
Summary service.

Loads a fresh snapshot of one mess and hands it to the pure calculations.
Nothing is cached between calls.
"""

from datetime import date as date_type
from uuid import UUID

from django.conf import settings

from apps.messes.models import MessMember
from apps.ledger.models import Deposit, Expense, SharedExpense, MealCount

from .access import get_mess
from .calculations import compute_mess_summary, calculate_range_meal_rate, to_date
from .exceptions import InvalidDateRangeError


def get_mess_summary(*, mess_id: UUID) -> dict:
    """Household summary plus one row per roster entry, in join order."""
    mess = get_mess(mess_id)

    members = list(MessMember.objects.filter(mess=mess).order_by('join_date', 'id'))
    summary = compute_mess_summary(
        members=members,
        expenses=Expense.objects.filter(mess=mess),
        shared_expenses=SharedExpense.objects.filter(mess=mess),
        meal_counts=MealCount.objects.filter(mess=mess),
        deposits=Deposit.objects.filter(mess=mess),
    )

    members_by_id = {member.id: member for member in members}
    for row in summary['members']:
        member = members_by_id[row['member_id']]
        row['name'] = member.name
        row['email'] = member.email
        row['role'] = member.role

    summary['currency'] = mess_currency()
    return summary


def get_range_meal_rate(*, mess_id: UUID, start_date, end_date) -> dict:
    """
    Meal rate between two dates, inclusive.

    Raises:
        MessNotFoundError: If mess doesn't exist
        InvalidDateRangeError: If a bound is missing or not a date
    """
    if not start_date or not end_date:
        raise InvalidDateRangeError("Both start_date and end_date are required")

    start: date_type = to_date(start_date)
    end: date_type = to_date(end_date)
    mess = get_mess(mess_id)

    result = calculate_range_meal_rate(
        expenses=Expense.objects.filter(mess=mess, date__range=(start, end)),
        meal_counts=MealCount.objects.filter(mess=mess, date__range=(start, end)),
        start_date=start,
        end_date=end,
    )
    result['start_date'] = start
    result['end_date'] = end
    return result


def mess_currency() -> str:
    return getattr(settings, 'MESS_LEDGER', {}).get('CURRENCY', 'BDT')
