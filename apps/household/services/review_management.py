"""Review management service - members rate living in the mess."""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.db.models import Avg, Count, QuerySet

from apps.accounts.models import User
from apps.household.models import Review

from .exceptions import (
    ReviewNotFoundError,
    DuplicateReviewError,
    InvalidRatingError,
    InsufficientPermissionsError,
)
from .notice_board import get_member_or_raise

logger = logging.getLogger(__name__)


def _validate_rating(rating) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int) or not (1 <= rating <= 5):
        raise InvalidRatingError("Rating must be between 1 and 5")
    return rating


def _lock_review(mess_id: UUID, review_id: UUID) -> Review:
    try:
        return Review.objects.select_for_update().get(mess_id=mess_id, id=review_id)
    except (Review.DoesNotExist, ValidationError):
        raise ReviewNotFoundError("Review not found")


def list_reviews(*, mess_id: UUID, min_rating: Optional[int] = None) -> QuerySet:
    """Reviews of the mess, newest first."""
    queryset = Review.objects.filter(mess_id=mess_id)
    if min_rating:
        queryset = queryset.filter(rating__gte=min_rating)
    return queryset.order_by('-created_at')


def get_rating_summary(*, mess_id: UUID) -> dict:
    """Average rating and review count; average is 0 with no reviews."""
    aggregates = Review.objects.filter(mess_id=mess_id).aggregate(
        avg=Avg('rating'),
        count=Count('id')
    )
    average = aggregates['avg'] or 0
    return {
        'average_rating': Decimal(str(average)).quantize(Decimal('0.01')),
        'review_count': aggregates['count'],
    }


@transaction.atomic
def create_review(
    *,
    mess_id: UUID,
    author: User,
    rating: int,
    comment: str = ''
) -> Review:
    """
    Review the mess. One review per member.

    Args:
        mess_id: UUID of the mess
        author: Reviewing user (must be on the roster)
        rating: 1-5
        comment: Optional free text

    Returns:
        Created Review instance

    Raises:
        InvalidRatingError: If rating not in 1-5 range
        MessNotFoundError: If mess doesn't exist
        NotMessMemberError: If author is not on the roster
        DuplicateReviewError: If author already reviewed this mess
    """
    rating = _validate_rating(rating)
    member = get_member_or_raise(mess_id=mess_id, user=author)

    if Review.objects.filter(mess_id=mess_id, author=author).exists():
        raise DuplicateReviewError(
            "You have already reviewed this mess. Please update your existing review instead."
        )

    try:
        with transaction.atomic():
            review = Review.objects.create(
                mess_id=mess_id,
                author=author,
                author_name=member.name or author.get_display_name(),
                rating=rating,
                comment=(comment or '').strip(),
            )
    except IntegrityError:
        raise DuplicateReviewError("You have already reviewed this mess")

    logger.info("Review %s posted in mess %s", review.id, mess_id)
    return review


@transaction.atomic
def update_review(
    *,
    mess_id: UUID,
    review_id: UUID,
    user: User,
    rating: Optional[int] = None,
    comment: Optional[str] = None
) -> Review:
    """
    Update a review. Only its author can.

    Raises:
        ReviewNotFoundError: If the review is not in the mess
        InsufficientPermissionsError: If user is not the author
        InvalidRatingError: If rating not in 1-5 range
    """
    get_member_or_raise(mess_id=mess_id, user=user)
    review = _lock_review(mess_id, review_id)

    if review.author_id != user.id:
        raise InsufficientPermissionsError("You can only update your own review")

    if rating is not None:
        review.rating = _validate_rating(rating)
    if comment is not None:
        review.comment = comment.strip()

    review.save()
    return review


@transaction.atomic
def delete_review(*, mess_id: UUID, review_id: UUID, user: User) -> None:
    """
    Delete a review (its author or the manager).

    Raises:
        ReviewNotFoundError: If the review is not in the mess
        InsufficientPermissionsError: If user is neither author nor manager
    """
    member = get_member_or_raise(mess_id=mess_id, user=user)
    review = _lock_review(mess_id, review_id)

    if review.author_id != user.id and not member.is_manager:
        raise InsufficientPermissionsError("Only the author or the manager can delete this review")

    review.delete()
    logger.info("Review %s deleted by user %s", review_id, user.id)
