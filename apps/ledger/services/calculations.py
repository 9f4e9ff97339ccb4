"""
Ledger calculations.

Pure functions over snapshots of ledger records. Nothing here touches the
database: callers pass iterables of objects exposing the attributes below
(model instances, saved or not, qualify).

    expenses, shared_expenses:  ``amount``, ``date``
    meal_counts:                ``total``, ``member_id``, ``date``
    deposits:                   ``amount``, ``member_id``, ``member_email``
    members:                    ``id``, ``email``

Amounts are handled as ``Decimal``. Results are quantized to the places
configured in ``settings.MESS_LEDGER`` (money and meal rate separately);
intermediate values keep full precision.

Functions:
    compute_household_summary: Totals, meal rate and remaining balance
    compute_per_member_shared_cost: Equal split of shared costs
    compute_member_summary: One member's deposits, costs and balance
    compute_mess_summary: Household plus one row per member
    calculate_range_meal_rate: Meal rate restricted to a date window

Example:
    >>> summary = compute_household_summary(expenses, [], meal_counts, deposits)
    >>> summary['meal_rate']
    Decimal('30.0000')
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.conf import settings

from .exceptions import InvalidAmountError, InvalidMealCountError, InvalidDateRangeError


ZERO = Decimal('0')

DEFAULT_MONEY_PLACES = 2
DEFAULT_RATE_PLACES = 4


# =============================================================================
# Numeric helpers
# =============================================================================

def _ledger_setting(key, default):
    return getattr(settings, 'MESS_LEDGER', {}).get(key, default)


def _quantize(value: Decimal, places: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def quantize_money(value: Decimal) -> Decimal:
    return _quantize(value, _ledger_setting('MONEY_PLACES', DEFAULT_MONEY_PLACES))


def quantize_rate(value: Decimal) -> Decimal:
    return _quantize(value, _ledger_setting('RATE_PLACES', DEFAULT_RATE_PLACES))


def to_amount(value) -> Decimal:
    """
    Convert a record amount to Decimal.

    Raises:
        InvalidAmountError: If value is missing, not numeric, NaN or infinite
    """
    if isinstance(value, bool) or value is None:
        raise InvalidAmountError(f"Invalid amount: {value!r}")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidAmountError(f"Invalid amount: {value!r}")
    else:
        raise InvalidAmountError(f"Invalid amount: {value!r}")

    if not amount.is_finite():
        raise InvalidAmountError(f"Amount must be a finite number, got {value!r}")

    return amount


def to_meal_units(value) -> int:
    """
    Validate a meal count total.

    Raises:
        InvalidMealCountError: If value is not a non-negative whole number
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidMealCountError(f"Meal count must be a whole number, got {value!r}")
    if value < 0:
        raise InvalidMealCountError(f"Meal count cannot be negative, got {value}")
    return value


def to_date(value) -> date:
    """Accept a date or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise InvalidDateRangeError(f"Invalid date: {value!r}")
    raise InvalidDateRangeError(f"Invalid date: {value!r}")


def _sum_amounts(records) -> Decimal:
    return sum((to_amount(r.amount) for r in records), ZERO)


def _sum_meal_units(meal_counts) -> int:
    return sum(to_meal_units(mc.total) for mc in meal_counts)


def _divide(numerator: Decimal, denominator) -> Decimal:
    if not denominator:
        return ZERO
    return numerator / Decimal(denominator)


# =============================================================================
# Household
# =============================================================================

def _household_totals(expenses, shared_expenses, meal_counts, deposits) -> dict:
    total_meal_cost = _sum_amounts(expenses)
    total_shared_cost = _sum_amounts(shared_expenses)
    total_cost = total_meal_cost + total_shared_cost
    total_meal_units = _sum_meal_units(meal_counts)
    total_deposits = _sum_amounts(deposits)

    return {
        'total_meal_cost': total_meal_cost,
        'total_shared_cost': total_shared_cost,
        'total_cost': total_cost,
        'total_meal_units': total_meal_units,
        'meal_rate': _divide(total_meal_cost, total_meal_units),
        'total_deposits': total_deposits,
        'remaining_balance': total_deposits - total_cost,
    }


def _present_household(totals: dict) -> dict:
    return {
        'total_meal_cost': quantize_money(totals['total_meal_cost']),
        'total_shared_cost': quantize_money(totals['total_shared_cost']),
        'total_cost': quantize_money(totals['total_cost']),
        'total_meal_units': totals['total_meal_units'],
        'meal_rate': quantize_rate(totals['meal_rate']),
        'total_deposits': quantize_money(totals['total_deposits']),
        'remaining_balance': quantize_money(totals['remaining_balance']),
    }


def compute_household_summary(expenses, shared_expenses, meal_counts, deposits) -> dict:
    """
    Compute household-level totals.

    Deposits are summed signed, so settlement offsets cancel out.
    With no meal units recorded the meal rate is zero.

    Returns:
        dict with total_meal_cost, total_shared_cost, total_cost,
        total_meal_units, meal_rate, total_deposits, remaining_balance
    """
    totals = _household_totals(
        list(expenses), list(shared_expenses), list(meal_counts), list(deposits)
    )
    return _present_household(totals)


def compute_per_member_shared_cost(total_shared_cost, member_count: int) -> Decimal:
    """Equal split of shared costs; zero when the mess has no members."""
    if member_count <= 0:
        return ZERO
    return quantize_money(_divide(to_amount(total_shared_cost), member_count))


# =============================================================================
# Members
# =============================================================================

def deposit_belongs_to(deposit, member) -> bool:
    """
    Match a deposit to a member.

    The member link is authoritative. Rows without a link (imported
    history) fall back to a case-insensitive email match.
    """
    member_id = getattr(deposit, 'member_id', None)
    if member_id is not None:
        return member_id == member.id

    email = (getattr(deposit, 'member_email', '') or '').strip().lower()
    return bool(email) and email == (member.email or '').strip().lower()


def _member_totals(member, meal_counts, meal_rate, per_member_shared_cost, deposits) -> dict:
    meal_units = _sum_meal_units(mc for mc in meal_counts if mc.member_id == member.id)
    deposit_total = _sum_amounts(d for d in deposits if deposit_belongs_to(d, member))

    meal_cost = to_amount(meal_rate) * meal_units
    shared_cost = to_amount(per_member_shared_cost)
    total_cost = meal_cost + shared_cost

    return {
        'member_id': member.id,
        'deposit_total': deposit_total,
        'meal_units': meal_units,
        'meal_cost': meal_cost,
        'shared_cost': shared_cost,
        'total_cost': total_cost,
        'remaining': deposit_total - total_cost,
    }


def _present_member(totals: dict) -> dict:
    return {
        key: quantize_money(value) if isinstance(value, Decimal) else value
        for key, value in totals.items()
    }


def compute_member_summary(member, meal_counts, meal_rate, per_member_shared_cost, deposits) -> dict:
    """
    Compute one member's share of the household costs.

    Args:
        member: Object with ``id`` and ``email``
        meal_counts: All meal counts of the mess
        meal_rate: Household meal rate
        per_member_shared_cost: Equal share of shared expenses
        deposits: All deposits of the mess

    Returns:
        dict with member_id, deposit_total, meal_units, meal_cost,
        shared_cost, total_cost, remaining
    """
    totals = _member_totals(member, list(meal_counts), meal_rate, per_member_shared_cost, list(deposits))
    return _present_member(totals)


def compute_mess_summary(members, expenses, shared_expenses, meal_counts, deposits) -> dict:
    """
    Compute the household summary and one row per member.

    Member rows follow the order of ``members``. Per-member figures are
    derived from the unrounded meal rate and shared split.

    Returns:
        {'household': {...}, 'per_member_shared_cost': Decimal, 'members': [...]}
    """
    members = list(members)
    meal_counts = list(meal_counts)
    deposits = list(deposits)

    totals = _household_totals(list(expenses), list(shared_expenses), meal_counts, deposits)
    shared_split = _divide(totals['total_shared_cost'], len(members))

    rows = []
    for member in members:
        row = _member_totals(member, meal_counts, totals['meal_rate'], shared_split, deposits)
        rows.append(_present_member(row))

    return {
        'household': _present_household(totals),
        'per_member_shared_cost': quantize_money(shared_split),
        'members': rows,
    }


# =============================================================================
# Date ranges
# =============================================================================

def calculate_range_meal_rate(expenses, meal_counts, start_date, end_date) -> dict:
    """
    Meal rate over an inclusive date window.

    A window whose start falls after its end selects nothing and yields zeros.

    Raises:
        InvalidDateRangeError: If a bound is not a date or ISO date string

    Returns:
        dict with total_expenses, total_meals, meal_rate
    """
    start = to_date(start_date)
    end = to_date(end_date)

    def in_range(record):
        return start <= to_date(record.date) <= end

    total_expenses = _sum_amounts(e for e in expenses if in_range(e))
    total_meals = _sum_meal_units(mc for mc in meal_counts if in_range(mc))

    return {
        'total_expenses': quantize_money(total_expenses),
        'total_meals': total_meals,
        'meal_rate': quantize_rate(_divide(total_expenses, total_meals)),
    }
