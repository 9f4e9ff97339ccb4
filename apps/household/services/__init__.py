"""
Household app services layer.

Notice board, shared task list and reviews of a mess.
"""

from .exceptions import (
    HouseholdServiceError,
    MessNotFoundError,
    NotMessMemberError,
    MemberNotFoundError,
    NoticeNotFoundError,
    TaskNotFoundError,
    InsufficientPermissionsError,
    EmptyNoticeError,
    ReviewNotFoundError,
    DuplicateReviewError,
    InvalidRatingError,
)

from .notice_board import (
    list_notices,
    post_notice,
    delete_notice,
)

from .task_management import (
    list_tasks,
    create_task,
    toggle_task,
    delete_task,
)

from .review_management import (
    list_reviews,
    get_rating_summary,
    create_review,
    update_review,
    delete_review,
)


__all__ = [
    # Exceptions
    'HouseholdServiceError',
    'MessNotFoundError',
    'NotMessMemberError',
    'MemberNotFoundError',
    'NoticeNotFoundError',
    'TaskNotFoundError',
    'InsufficientPermissionsError',
    'EmptyNoticeError',
    'ReviewNotFoundError',
    'DuplicateReviewError',
    'InvalidRatingError',

    # Notice board
    'list_notices',
    'post_notice',
    'delete_notice',

    # Tasks
    'list_tasks',
    'create_task',
    'toggle_task',
    'delete_task',

    # Reviews
    'list_reviews',
    'get_rating_summary',
    'create_review',
    'update_review',
    'delete_review',
]
