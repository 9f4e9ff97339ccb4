"""
Service tests for debt settlement.

Tests cover:
- Debt request submission rules
- Payer-only acceptance and rejection
- Conservation of money in settlement deposits
- Single settlement under repeated and concurrent accepts
"""

import pytest
import threading
from datetime import date
from decimal import Decimal
from uuid import uuid4
from django.test import TransactionTestCase

from apps.accounts.models import User
from apps.messes.models import Mess, MessMember, MessRole
from apps.ledger.models import Deposit, Debt, DebtRequest, DebtStatus
from apps.ledger.services import (
    submit_debt_request,
    accept_debt_request,
    reject_debt_request,
    build_settlement,
    get_mess_summary,
)
from apps.ledger.services.exceptions import (
    InvalidAmountError,
    MissingPayerError,
    SelfDebtRequestError,
    NotPayerError,
    NotMessMemberError,
    DebtRequestStateError,
    MemberNotFoundError,
    RecordNotFoundError,
)


# =============================================================================
# Pure settlement builder
# =============================================================================

class TestBuildSettlement:

    def test_deposits_sum_to_zero(self):
        request = DebtRequest(
            mess_id=uuid4(),
            from_member_id=uuid4(),
            from_name='Karim',
            from_email='karim@example.com',
            to_member_id=uuid4(),
            to_name='Rahim',
            to_email='rahim@example.com',
            amount=Decimal('99.95'),
            date=date(2024, 3, 15),
        )

        for_receiver, for_payer, debt = build_settlement(request)

        assert for_receiver.amount + for_payer.amount == Decimal('0')
        assert for_receiver.amount == Decimal('99.95')
        assert for_receiver.member_id == request.to_member_id
        assert for_payer.member_id == request.from_member_id
        assert for_receiver.date == for_payer.date == request.date
        assert debt.amount == Decimal('99.95')
        assert debt.from_member_id == request.from_member_id
        assert debt.to_member_id == request.to_member_id


# =============================================================================
# Submission
# =============================================================================

@pytest.mark.django_db
class TestSubmitDebtRequest:

    def test_submit_creates_pending_request(self, mess, member_user, member_entry, second_member_entry):
        request = submit_debt_request(
            mess_id=mess.id,
            requested_by=member_user,
            from_member_id=second_member_entry.id,
            amount=Decimal('120'),
            date=date(2024, 3, 1),
            note='Fish market',
        )

        assert request.status == DebtStatus.PENDING
        assert request.from_member == second_member_entry
        assert request.to_member == member_entry
        assert request.from_name == 'Karim'
        assert request.to_email == member_entry.email
        assert request.resolved_at is None

    @pytest.mark.parametrize('amount', [Decimal('0'), Decimal('-5'), float('nan'), 'lots'])
    def test_submit_rejects_bad_amount(self, mess, member_user, second_member_entry, amount):
        with pytest.raises(InvalidAmountError):
            submit_debt_request(
                mess_id=mess.id,
                requested_by=member_user,
                from_member_id=second_member_entry.id,
                amount=amount,
                date=date(2024, 3, 1),
            )

        assert DebtRequest.objects.count() == 0

    def test_submit_requires_payer(self, mess, member_user, member_entry):
        with pytest.raises(MissingPayerError):
            submit_debt_request(
                mess_id=mess.id,
                requested_by=member_user,
                from_member_id=None,
                amount=Decimal('10'),
                date=date(2024, 3, 1),
            )

    def test_submit_to_self_rejected(self, mess, member_user, member_entry):
        with pytest.raises(SelfDebtRequestError):
            submit_debt_request(
                mess_id=mess.id,
                requested_by=member_user,
                from_member_id=member_entry.id,
                amount=Decimal('10'),
                date=date(2024, 3, 1),
            )

    def test_submit_payer_from_other_mess(self, mess, member_user, member_entry, outsider_user):
        other = Mess.objects.create(name='Other House', password='x')
        stranger = MessMember.objects.create(
            mess=other, user=outsider_user, name='Stranger', email=outsider_user.email
        )

        with pytest.raises(MemberNotFoundError):
            submit_debt_request(
                mess_id=mess.id,
                requested_by=member_user,
                from_member_id=stranger.id,
                amount=Decimal('10'),
                date=date(2024, 3, 1),
            )

    def test_submit_by_outsider(self, mess, outsider_user, member_entry):
        with pytest.raises(NotMessMemberError):
            submit_debt_request(
                mess_id=mess.id,
                requested_by=outsider_user,
                from_member_id=member_entry.id,
                amount=Decimal('10'),
                date=date(2024, 3, 1),
            )


# =============================================================================
# Accept / reject
# =============================================================================

@pytest.mark.django_db
class TestAcceptDebtRequest:

    def test_accept_settles_with_offsetting_deposits(self, pending_request, second_member_user):
        result = accept_debt_request(request_id=pending_request.id, acting_user=second_member_user)

        request = result['request']
        assert request.status == DebtStatus.ACCEPTED
        assert request.resolved_at is not None

        for_receiver, for_payer = result['deposits']
        assert for_receiver.member_id == pending_request.to_member_id
        assert for_receiver.amount == Decimal('250.00')
        assert for_payer.member_id == pending_request.from_member_id
        assert for_payer.amount == Decimal('-250.00')
        assert for_receiver.date == for_payer.date == date(2024, 3, 15)

        deposits = Deposit.objects.filter(debt_request=pending_request)
        assert deposits.count() == 2
        assert sum(d.amount for d in deposits) == Decimal('0')

        debt = Debt.objects.get(request=pending_request)
        assert debt.amount == Decimal('250.00')
        assert debt == result['debt']

        pending_request.refresh_from_db()
        assert pending_request.status == DebtStatus.ACCEPTED

    def test_accept_keeps_household_deposits_constant(self, mess, pending_request, second_member_user):
        before = get_mess_summary(mess_id=mess.id)

        accept_debt_request(request_id=pending_request.id, acting_user=second_member_user)
        after = get_mess_summary(mess_id=mess.id)

        assert after['household']['total_deposits'] == before['household']['total_deposits']
        rows = {row['member_id']: row for row in after['members']}
        assert rows[pending_request.to_member_id]['deposit_total'] == Decimal('250.00')
        assert rows[pending_request.from_member_id]['deposit_total'] == Decimal('-250.00')

    def test_receiver_cannot_accept(self, pending_request, member_user):
        with pytest.raises(NotPayerError):
            accept_debt_request(request_id=pending_request.id, acting_user=member_user)

        pending_request.refresh_from_db()
        assert pending_request.status == DebtStatus.PENDING
        assert Deposit.objects.count() == 0
        assert Debt.objects.count() == 0

    def test_manager_cannot_accept_for_payer(self, pending_request, manager_user):
        with pytest.raises(NotPayerError):
            accept_debt_request(request_id=pending_request.id, acting_user=manager_user)

    def test_outsider_cannot_accept(self, pending_request, outsider_user):
        with pytest.raises(NotMessMemberError):
            accept_debt_request(request_id=pending_request.id, acting_user=outsider_user)

    def test_accept_twice_settles_once(self, pending_request, second_member_user):
        accept_debt_request(request_id=pending_request.id, acting_user=second_member_user)

        with pytest.raises(DebtRequestStateError):
            accept_debt_request(request_id=pending_request.id, acting_user=second_member_user)

        assert Deposit.objects.filter(debt_request=pending_request).count() == 2
        assert Debt.objects.count() == 1

    def test_accept_unknown_request(self, second_member_user):
        with pytest.raises(RecordNotFoundError):
            accept_debt_request(request_id=uuid4(), acting_user=second_member_user)

    def test_accept_malformed_id(self, second_member_user):
        with pytest.raises(RecordNotFoundError):
            accept_debt_request(request_id='abc', acting_user=second_member_user)

    def test_accept_request_from_other_mess(self, pending_request, second_member_user):
        with pytest.raises(RecordNotFoundError):
            accept_debt_request(
                request_id=pending_request.id,
                acting_user=second_member_user,
                mess_id=uuid4(),
            )

    def test_payer_matched_by_email_after_rejoin(self, mess, pending_request, second_member_user, second_member_entry):
        """A payer whose roster entry was replaced is still recognised by email."""
        second_member_entry.delete()
        MessMember.objects.create(
            mess=mess,
            user=second_member_user,
            name='Karim',
            email=second_member_user.email,
            role=MessRole.MEMBER,
        )

        result = accept_debt_request(request_id=pending_request.id, acting_user=second_member_user)

        assert result['request'].status == DebtStatus.ACCEPTED


@pytest.mark.django_db
class TestRejectDebtRequest:

    def test_reject_has_no_ledger_effect(self, pending_request, second_member_user):
        request = reject_debt_request(request_id=pending_request.id, acting_user=second_member_user)

        assert request.status == DebtStatus.DENIED
        assert request.resolved_at is not None
        assert Deposit.objects.count() == 0
        assert Debt.objects.count() == 0

    def test_receiver_cannot_reject(self, pending_request, member_user):
        with pytest.raises(NotPayerError):
            reject_debt_request(request_id=pending_request.id, acting_user=member_user)

    def test_reject_after_accept_fails(self, pending_request, second_member_user):
        accept_debt_request(request_id=pending_request.id, acting_user=second_member_user)

        with pytest.raises(DebtRequestStateError):
            reject_debt_request(request_id=pending_request.id, acting_user=second_member_user)

        pending_request.refresh_from_db()
        assert pending_request.status == DebtStatus.ACCEPTED

    def test_accept_after_reject_fails(self, pending_request, second_member_user):
        reject_debt_request(request_id=pending_request.id, acting_user=second_member_user)

        with pytest.raises(DebtRequestStateError):
            accept_debt_request(request_id=pending_request.id, acting_user=second_member_user)

        pending_request.refresh_from_db()
        assert pending_request.status == DebtStatus.DENIED
        assert Deposit.objects.count() == 0


# =============================================================================
# Concurrency Tests
# =============================================================================

class TestConcurrentSettlement(TransactionTestCase):
    """
    Concurrent accepts of one request must settle it once.

    TransactionTestCase is required so each thread commits its own
    transaction.
    """

    def setUp(self):
        manager = User.objects.create_user(email='manager@test.com', password='TestPass123!')
        self.receiver_user = User.objects.create_user(email='receiver@test.com', password='TestPass123!')
        self.payer_user = User.objects.create_user(email='payer@test.com', password='TestPass123!')

        self.mess = Mess.objects.create(name='Race House', password='x', created_by=manager)
        MessMember.objects.create(
            mess=self.mess, user=manager, name='Manager', email=manager.email, role=MessRole.MANAGER
        )
        receiver = MessMember.objects.create(
            mess=self.mess, user=self.receiver_user, name='Receiver', email=self.receiver_user.email
        )
        payer = MessMember.objects.create(
            mess=self.mess, user=self.payer_user, name='Payer', email=self.payer_user.email
        )
        self.request = DebtRequest.objects.create(
            mess=self.mess,
            from_member=payer,
            from_name=payer.name,
            from_email=payer.email,
            to_member=receiver,
            to_name=receiver.name,
            to_email=receiver.email,
            amount=Decimal('400.00'),
            date=date(2024, 3, 20),
        )

    def test_concurrent_accepts_settle_once(self):
        results = []
        errors = []

        def accept():
            try:
                results.append(
                    accept_debt_request(request_id=self.request.id, acting_user=self.payer_user)
                )
            except DebtRequestStateError as e:
                errors.append(str(e))
            except Exception as e:
                errors.append(f"Unexpected error: {str(e)}")

        threads = [threading.Thread(target=accept) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) <= 1
        assert Debt.objects.filter(request=self.request).count() == len(results)

        deposits = Deposit.objects.filter(debt_request=self.request)
        assert deposits.count() == 2 * len(results)
        assert sum((d.amount for d in deposits), Decimal('0')) == Decimal('0')

    def test_sequential_accept_after_race_is_rejected(self):
        accept_debt_request(request_id=self.request.id, acting_user=self.payer_user)

        with self.assertRaises(DebtRequestStateError):
            accept_debt_request(request_id=self.request.id, acting_user=self.payer_user)

        self.assertEqual(Debt.objects.count(), 1)
