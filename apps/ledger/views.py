from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.messes.permissions import IsMessMember, UUID_LOOKUP_REGEX

from .serializers import (
    DepositSerializer,
    ExpenseSerializer,
    SharedExpenseSerializer,
    MealCountSerializer,
    DebtRequestSerializer,
    DebtSerializer,
    SettlementSerializer,
    DepositInputSerializer,
    DepositUpdateSerializer,
    ExpenseInputSerializer,
    ExpenseUpdateSerializer,
    SharedExpenseInputSerializer,
    SharedExpenseUpdateSerializer,
    MealCountInputSerializer,
    DebtRequestInputSerializer,
    MemberFilterSerializer,
    DebtRequestFilterSerializer,
    MealRateQuerySerializer,
    MessSummarySerializer,
    RangeMealRateSerializer,
)
from .services import (
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
    submit_debt_request,
    accept_debt_request,
    reject_debt_request,
    get_mess_summary,
    get_range_meal_rate,
    # Exceptions
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


BAD_REQUEST_ERRORS = (
    InvalidAmountError,
    InvalidMealCountError,
    MissingPayerError,
    SelfDebtRequestError,
    InvalidDateRangeError,
    DebtRequestStateError,
)
FORBIDDEN_ERRORS = (
    InsufficientPermissionsError,
    NotPayerError,
    NotMessMemberError,
)
NOT_FOUND_ERRORS = (
    MessNotFoundError,
    MemberNotFoundError,
    RecordNotFoundError,
)


def error_response(error: LedgerServiceError) -> Response:
    """Translate a ledger service error into an HTTP response."""
    if isinstance(error, FORBIDDEN_ERRORS):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(error, NOT_FOUND_ERRORS):
        code = status.HTTP_404_NOT_FOUND
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(error)}, status=code)


def _date_or_today(validated_data):
    return validated_data.get('date') or timezone.localdate()


class LedgerViewSet(viewsets.GenericViewSet):
    """
    Base for mess-scoped ledger endpoints.

    The mess comes from the URL (``mess_id``); membership is checked by
    IsMessMember before any handler runs.
    """

    permission_classes = [IsAuthenticated, IsMessMember]
    lookup_value_regex = UUID_LOOKUP_REGEX


# =============================================================================
# Deposits
# =============================================================================

class DepositViewSet(LedgerViewSet):
    """
    list: Deposits of the mess (``?member=`` to filter)
    create: Record a deposit
    partial_update: Change amount, date or note
    destroy: Delete a deposit (manager)
    """

    serializer_class = DepositSerializer

    @extend_schema(parameters=[MemberFilterSerializer])
    def list(self, request, mess_id=None):
        filters = MemberFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        deposits = list_deposits(mess_id=mess_id, member_id=filters.validated_data.get('member'))
        return Response(DepositSerializer(deposits, many=True).data)

    @extend_schema(request=DepositInputSerializer, responses={201: DepositSerializer})
    def create(self, request, mess_id=None):
        serializer = DepositInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            deposit = add_deposit(
                mess_id=mess_id,
                added_by=request.user,
                member_id=data['member_id'],
                amount=data['amount'],
                date=_date_or_today(data),
                note=data['note'],
            )
        except LedgerServiceError as e:
            return error_response(e)

        return Response(DepositSerializer(deposit).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=DepositUpdateSerializer, responses={200: DepositSerializer})
    def partial_update(self, request, mess_id=None, pk=None):
        serializer = DepositUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            deposit = update_deposit(
                mess_id=mess_id,
                deposit_id=pk,
                updated_by=request.user,
                **serializer.validated_data
            )
        except LedgerServiceError as e:
            return error_response(e)

        return Response(DepositSerializer(deposit).data)

    def destroy(self, request, mess_id=None, pk=None):
        try:
            delete_deposit(mess_id=mess_id, deposit_id=pk, deleted_by=request.user)
        except LedgerServiceError as e:
            return error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Expenses
# =============================================================================

class BaseExpenseViewSet(LedgerViewSet):
    """Shared handlers for meal expenses and shared expenses (manager writes)."""

    input_serializer_class = None
    update_serializer_class = None

    def list_records(self, mess_id):
        raise NotImplementedError

    def add_record(self, **kwargs):
        raise NotImplementedError

    def update_record(self, **kwargs):
        raise NotImplementedError

    def delete_record(self, **kwargs):
        raise NotImplementedError

    def list(self, request, mess_id=None):
        serializer = self.get_serializer(self.list_records(mess_id), many=True)
        return Response(serializer.data)

    def create(self, request, mess_id=None):
        serializer = self.input_serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            expense = self.add_record(
                mess_id=mess_id,
                added_by=request.user,
                amount=data['amount'],
                date=_date_or_today(data),
                description=data['description'],
                category=data.get('category', ''),
            )
        except LedgerServiceError as e:
            return error_response(e)

        return Response(self.get_serializer(expense).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, mess_id=None, pk=None):
        serializer = self.update_serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            expense = self.update_record(
                mess_id=mess_id,
                expense_id=pk,
                updated_by=request.user,
                **serializer.validated_data
            )
        except LedgerServiceError as e:
            return error_response(e)

        return Response(self.get_serializer(expense).data)

    def destroy(self, request, mess_id=None, pk=None):
        try:
            self.delete_record(mess_id=mess_id, expense_id=pk, deleted_by=request.user)
        except LedgerServiceError as e:
            return error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)


class ExpenseViewSet(BaseExpenseViewSet):
    """Meal expenses, divided by meal units."""

    serializer_class = ExpenseSerializer
    input_serializer_class = ExpenseInputSerializer
    update_serializer_class = ExpenseUpdateSerializer

    def list_records(self, mess_id):
        return list_expenses(mess_id=mess_id)

    def add_record(self, **kwargs):
        return add_expense(**kwargs)

    def update_record(self, **kwargs):
        return update_expense(**kwargs)

    def delete_record(self, **kwargs):
        return delete_expense(**kwargs)


class SharedExpenseViewSet(BaseExpenseViewSet):
    """Shared expenses (rent, utilities), divided per head."""

    serializer_class = SharedExpenseSerializer
    input_serializer_class = SharedExpenseInputSerializer
    update_serializer_class = SharedExpenseUpdateSerializer

    def list_records(self, mess_id):
        return list_shared_expenses(mess_id=mess_id)

    def add_record(self, **kwargs):
        return add_shared_expense(**kwargs)

    def update_record(self, **kwargs):
        return update_shared_expense(**kwargs)

    def delete_record(self, **kwargs):
        return delete_shared_expense(**kwargs)


# =============================================================================
# Meal counts
# =============================================================================

class MealCountViewSet(LedgerViewSet):
    """
    list: Meal counts of the mess (``?member=`` to filter)
    create: Record meals for a member and date
    destroy: Delete a meal count (manager or the counted member)
    """

    serializer_class = MealCountSerializer

    @extend_schema(parameters=[MemberFilterSerializer])
    def list(self, request, mess_id=None):
        filters = MemberFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        meal_counts = list_meal_counts(mess_id=mess_id, member_id=filters.validated_data.get('member'))
        return Response(MealCountSerializer(meal_counts, many=True).data)

    @extend_schema(request=MealCountInputSerializer, responses={201: MealCountSerializer})
    def create(self, request, mess_id=None):
        serializer = MealCountInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            meal_count = add_meal_count(
                mess_id=mess_id,
                added_by=request.user,
                member_id=data['member_id'],
                date=_date_or_today(data),
                breakfast=data['breakfast'],
                lunch=data['lunch'],
                dinner=data['dinner'],
            )
        except LedgerServiceError as e:
            return error_response(e)

        return Response(MealCountSerializer(meal_count).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, mess_id=None, pk=None):
        try:
            delete_meal_count(mess_id=mess_id, meal_count_id=pk, deleted_by=request.user)
        except LedgerServiceError as e:
            return error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Debt requests
# =============================================================================

class DebtRequestViewSet(LedgerViewSet):
    """
    list: Debt requests of the mess (``?status=`` to filter)
    create: Ask a member to pay you
    accept: Payer accepts; writes the settlement deposits and debt
    reject: Payer denies; no ledger effect
    """

    serializer_class = DebtRequestSerializer

    @extend_schema(parameters=[DebtRequestFilterSerializer])
    def list(self, request, mess_id=None):
        filters = DebtRequestFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        requests = list_debt_requests(mess_id=mess_id, status=filters.validated_data.get('status'))
        return Response(DebtRequestSerializer(requests, many=True).data)

    def retrieve(self, request, mess_id=None, pk=None):
        try:
            debt_request = get_debt_request(mess_id=mess_id, request_id=pk)
        except LedgerServiceError as e:
            return error_response(e)

        return Response(DebtRequestSerializer(debt_request).data)

    @extend_schema(request=DebtRequestInputSerializer, responses={201: DebtRequestSerializer})
    def create(self, request, mess_id=None):
        serializer = DebtRequestInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            debt_request = submit_debt_request(
                mess_id=mess_id,
                requested_by=request.user,
                from_member_id=data.get('from_member_id'),
                amount=data['amount'],
                date=_date_or_today(data),
                note=data['note'],
            )
        except LedgerServiceError as e:
            return error_response(e)

        return Response(DebtRequestSerializer(debt_request).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: SettlementSerializer})
    @action(detail=True, methods=['post'])
    def accept(self, request, mess_id=None, pk=None):
        try:
            result = accept_debt_request(request_id=pk, acting_user=request.user, mess_id=mess_id)
        except LedgerServiceError as e:
            return error_response(e)

        return Response(SettlementSerializer(result).data)

    @extend_schema(request=None, responses={200: DebtRequestSerializer})
    @action(detail=True, methods=['post'])
    def reject(self, request, mess_id=None, pk=None):
        try:
            debt_request = reject_debt_request(request_id=pk, acting_user=request.user, mess_id=mess_id)
        except LedgerServiceError as e:
            return error_response(e)

        return Response(DebtRequestSerializer(debt_request).data)


class DebtViewSet(LedgerViewSet):
    """list: Settled debts of the mess"""

    serializer_class = DebtSerializer

    def list(self, request, mess_id=None):
        return Response(DebtSerializer(list_debts(mess_id=mess_id), many=True).data)


# =============================================================================
# Summaries
# =============================================================================

@extend_schema(
    responses={200: MessSummarySerializer},
    description="Household totals, meal rate and per-member balances.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsMessMember])
def summary(request, mess_id):
    """Get the ledger summary of a mess."""
    try:
        data = get_mess_summary(mess_id=mess_id)
    except LedgerServiceError as e:
        return error_response(e)

    return Response(MessSummarySerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('start_date', str, description='First day, YYYY-MM-DD'),
        OpenApiParameter('end_date', str, description='Last day, YYYY-MM-DD'),
    ],
    responses={200: RangeMealRateSerializer},
    description="Meal rate over an inclusive date range.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsMessMember])
def meal_rate(request, mess_id):
    """Get the meal rate for a date range."""
    query_serializer = MealRateQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    try:
        data = get_range_meal_rate(
            mess_id=mess_id,
            start_date=query_serializer.validated_data['start_date'],
            end_date=query_serializer.validated_data['end_date'],
        )
    except LedgerServiceError as e:
        return error_response(e)

    return Response(RangeMealRateSerializer(data).data)
