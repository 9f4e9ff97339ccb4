"""
Messes app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    MessesServiceError,
    MessNotFoundError,
    MessNameTakenError,
    InvalidMessPasswordError,
    AlreadyMemberError,
    DuplicateMemberError,
    NotMemberError,
    ManagerCannotLeaveError,
    CannotRemoveSelfError,
    InsufficientPermissionsError,
    LinkedEmailChangeError,
)

from .mess_management import (
    create_mess,
    get_mess_by_id,
    get_user_messes,
)

from .membership_management import (
    join_mess,
    add_member,
    update_member,
    remove_member,
    leave_mess,
    get_mess_members,
)


__all__ = [
    # Exceptions
    'MessesServiceError',
    'MessNotFoundError',
    'MessNameTakenError',
    'InvalidMessPasswordError',
    'AlreadyMemberError',
    'DuplicateMemberError',
    'NotMemberError',
    'ManagerCannotLeaveError',
    'CannotRemoveSelfError',
    'InsufficientPermissionsError',
    'LinkedEmailChangeError',

    # Mess Management
    'create_mess',
    'get_mess_by_id',
    'get_user_messes',

    # Membership Management
    'join_mess',
    'add_member',
    'update_member',
    'remove_member',
    'leave_mess',
    'get_mess_members',
]
