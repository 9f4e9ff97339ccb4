"""
Debt settlement service.

A receiver raises a debt request against a payer. When the payer accepts,
two offsetting deposits (+amount to the receiver, -amount to the payer)
and an immutable Debt row are written in the same transaction as the
status change, so a request settles at most once.
"""

import logging
from datetime import date as date_type
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.messes.models import MessMember
from apps.ledger.models import Deposit, Debt, DebtRequest, DebtStatus

from .access import get_mess, get_roster_member, require_member
from .calculations import to_amount
from .exceptions import (
    InvalidAmountError,
    MissingPayerError,
    SelfDebtRequestError,
    NotPayerError,
    DebtRequestStateError,
    RecordNotFoundError,
)

logger = logging.getLogger(__name__)


def _is_payer(request: DebtRequest, member: MessMember) -> bool:
    if request.from_member_id is not None:
        return request.from_member_id == member.id
    # Payer left the roster; the snapshot email still identifies them
    return bool(request.from_email) and request.from_email.lower() == member.email.lower()


@transaction.atomic
def submit_debt_request(
    *,
    mess_id: UUID,
    requested_by: User,
    from_member_id: Optional[UUID],
    amount,
    date: date_type,
    note: str = ''
) -> DebtRequest:
    """
    Ask a member of the mess to acknowledge a debt.

    The acting user is the receiver; ``from_member_id`` names the payer.

    Args:
        mess_id: UUID of the mess
        requested_by: User raising the request (receiver)
        from_member_id: Roster entry of the payer
        amount: Positive amount owed
        date: Date the settlement deposits will carry
        note: Optional free text

    Returns:
        Pending DebtRequest

    Raises:
        InvalidAmountError: If amount is not a positive finite number
        MissingPayerError: If no payer is given
        MessNotFoundError: If mess doesn't exist
        NotMessMemberError: If requested_by is not on the roster
        MemberNotFoundError: If the payer is not on the roster
        SelfDebtRequestError: If payer and receiver are the same member
    """
    amount = to_amount(amount)
    if amount <= Decimal('0'):
        raise InvalidAmountError("Amount must be greater than zero")

    if not from_member_id:
        raise MissingPayerError("Select the member who owes the money")

    mess = get_mess(mess_id)
    receiver = require_member(mess, requested_by)
    payer = get_roster_member(mess, from_member_id)

    if payer.id == receiver.id:
        raise SelfDebtRequestError("You cannot request money from yourself")

    request = DebtRequest.objects.create(
        mess=mess,
        from_member=payer,
        from_name=payer.name,
        from_email=payer.email,
        to_member=receiver,
        to_name=receiver.name,
        to_email=receiver.email,
        amount=amount,
        date=date,
        note=note,
    )

    logger.info(
        "Debt request %s: %s asks %s for %s in mess %s",
        request.id, receiver.id, payer.id, amount, mess.id
    )
    return request


def build_settlement(request: DebtRequest):
    """
    Build the unsaved records an accepted request produces.

    Returns:
        Tuple of (deposit_for_receiver, deposit_for_payer, debt). The two
        deposit amounts sum to zero.
    """
    amount = to_amount(request.amount)

    deposit_for_receiver = Deposit(
        mess_id=request.mess_id,
        member_id=request.to_member_id,
        member_name=request.to_name,
        member_email=request.to_email,
        amount=amount,
        date=request.date,
        note=f"Settlement from {request.from_name}",
        debt_request=request,
    )
    deposit_for_payer = Deposit(
        mess_id=request.mess_id,
        member_id=request.from_member_id,
        member_name=request.from_name,
        member_email=request.from_email,
        amount=-amount,
        date=request.date,
        note=f"Settlement to {request.to_name}",
        debt_request=request,
    )
    debt = Debt(
        mess_id=request.mess_id,
        request=request,
        from_member_id=request.from_member_id,
        from_name=request.from_name,
        to_member_id=request.to_member_id,
        to_name=request.to_name,
        amount=amount,
        date=request.date,
    )
    return deposit_for_receiver, deposit_for_payer, debt


def _lock_request(request_id: UUID, mess_id: Optional[UUID]) -> DebtRequest:
    queryset = DebtRequest.objects.select_for_update().select_related('mess')
    if mess_id is not None:
        queryset = queryset.filter(mess_id=mess_id)
    try:
        return queryset.get(id=request_id)
    except (DebtRequest.DoesNotExist, ValidationError):
        raise RecordNotFoundError("Debt request not found")


def _resolve(request: DebtRequest, acting_user: User, new_status: str) -> DebtRequest:
    """Authorize and move a locked request out of pending."""
    member = require_member(request.mess, acting_user)

    if not _is_payer(request, member):
        logger.warning(
            "User %s tried to resolve debt request %s without being the payer",
            acting_user.id, request.id
        )
        raise NotPayerError("Only the member who owes the money can respond to this request")

    if not request.is_pending:
        logger.warning("Debt request %s already %s", request.id, request.status)
        raise DebtRequestStateError(f"Debt request is already {request.status}")

    resolved_at = timezone.now()
    # Compare-and-set keeps the transition single even where row locks are unavailable
    updated = (
        DebtRequest.objects
        .filter(id=request.id, status=DebtStatus.PENDING)
        .update(status=new_status, resolved_at=resolved_at)
    )
    if updated != 1:
        raise DebtRequestStateError("Debt request was resolved by another action")

    request.status = new_status
    request.resolved_at = resolved_at
    return request


def accept_debt_request(
    *,
    request_id: UUID,
    acting_user: User,
    mess_id: Optional[UUID] = None
) -> dict:
    """
    Accept a pending debt request (payer only).

    Status change, both deposits and the debt row are written atomically;
    nothing is written when any check fails.
    When mess_id is given the request must belong to that mess.

    Returns:
        {'request': DebtRequest, 'deposits': [receiver, payer], 'debt': Debt}

    Raises:
        RecordNotFoundError: If the request doesn't exist
        NotMessMemberError: If acting_user is not on the roster
        NotPayerError: If acting_user is not the payer
        DebtRequestStateError: If the request is not pending
    """
    with transaction.atomic():
        request = _lock_request(request_id, mess_id)
        request = _resolve(request, acting_user, DebtStatus.ACCEPTED)

        deposit_for_receiver, deposit_for_payer, debt = build_settlement(request)
        deposit_for_receiver.save()
        deposit_for_payer.save()
        debt.save()

    logger.info(
        "Debt request %s accepted: %s settled %s with %s",
        request.id, request.from_member_id, request.amount, request.to_member_id
    )
    return {
        'request': request,
        'deposits': [deposit_for_receiver, deposit_for_payer],
        'debt': debt,
    }


def reject_debt_request(
    *,
    request_id: UUID,
    acting_user: User,
    mess_id: Optional[UUID] = None
) -> DebtRequest:
    """
    Deny a pending debt request (payer only). No ledger side effects.

    Raises:
        RecordNotFoundError: If the request doesn't exist
        NotMessMemberError: If acting_user is not on the roster
        NotPayerError: If acting_user is not the payer
        DebtRequestStateError: If the request is not pending
    """
    with transaction.atomic():
        request = _lock_request(request_id, mess_id)
        request = _resolve(request, acting_user, DebtStatus.DENIED)

    logger.info("Debt request %s denied", request.id)
    return request
