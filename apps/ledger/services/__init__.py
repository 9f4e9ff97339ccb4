"""
Ledger app services layer.

The calculations module is pure and database-free. Settlement and record
services run their writes inside transactions with row locks.
"""

from .exceptions import (
    LedgerServiceError,
    InvalidAmountError,
    InvalidMealCountError,
    MissingPayerError,
    SelfDebtRequestError,
    InvalidDateRangeError,
    InsufficientPermissionsError,
    NotPayerError,
    NotMessMemberError,
    DebtRequestStateError,
    MessNotFoundError,
    MemberNotFoundError,
    RecordNotFoundError,
)

from .calculations import (
    compute_household_summary,
    compute_per_member_shared_cost,
    compute_member_summary,
    compute_mess_summary,
    calculate_range_meal_rate,
)

from .settlement import (
    submit_debt_request,
    accept_debt_request,
    reject_debt_request,
    build_settlement,
)

from .records import (
    list_deposits,
    add_deposit,
    update_deposit,
    delete_deposit,
    list_expenses,
    add_expense,
    update_expense,
    delete_expense,
    list_shared_expenses,
    add_shared_expense,
    update_shared_expense,
    delete_shared_expense,
    list_meal_counts,
    add_meal_count,
    delete_meal_count,
    list_debt_requests,
    get_debt_request,
    list_debts,
)

from .summaries import (
    get_mess_summary,
    get_range_meal_rate,
)


__all__ = [
    # Exceptions
    'LedgerServiceError',
    'InvalidAmountError',
    'InvalidMealCountError',
    'MissingPayerError',
    'SelfDebtRequestError',
    'InvalidDateRangeError',
    'InsufficientPermissionsError',
    'NotPayerError',
    'NotMessMemberError',
    'DebtRequestStateError',
    'MessNotFoundError',
    'MemberNotFoundError',
    'RecordNotFoundError',

    # Calculations
    'compute_household_summary',
    'compute_per_member_shared_cost',
    'compute_member_summary',
    'compute_mess_summary',
    'calculate_range_meal_rate',

    # Settlement
    'submit_debt_request',
    'accept_debt_request',
    'reject_debt_request',
    'build_settlement',

    # Records
    'list_deposits',
    'add_deposit',
    'update_deposit',
    'delete_deposit',
    'list_expenses',
    'add_expense',
    'update_expense',
    'delete_expense',
    'list_shared_expenses',
    'add_shared_expense',
    'update_shared_expense',
    'delete_shared_expense',
    'list_meal_counts',
    'add_meal_count',
    'delete_meal_count',
    'list_debt_requests',
    'get_debt_request',
    'list_debts',

    # Summaries
    'get_mess_summary',
    'get_range_meal_rate',
]
