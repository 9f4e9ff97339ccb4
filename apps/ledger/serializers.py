from rest_framework import serializers
from .models import (
    Deposit,
    Expense,
    SharedExpense,
    MealCount,
    DebtRequest,
    Debt,
    DebtStatus,
    ExpenseCategory,
    SharedExpenseCategory,
)


class LedgerAmountField(serializers.DecimalField):
    """Decimal already quantized by the ledger; rendered without re-rounding."""

    def __init__(self, **kwargs):
        kwargs.setdefault('read_only', True)
        super().__init__(max_digits=None, decimal_places=None, **kwargs)


# =============================================================================
# Record Serializers
# =============================================================================

class DepositSerializer(serializers.ModelSerializer):
    is_settlement = serializers.BooleanField(read_only=True)

    class Meta:
        model = Deposit
        fields = [
            'id',
            'member',
            'member_name',
            'member_email',
            'amount',
            'date',
            'note',
            'is_settlement',
            'debt_request',
            'created_at',
        ]
        read_only_fields = fields


class ExpenseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Expense
        fields = ['id', 'date', 'amount', 'description', 'category', 'created_at', 'updated_at']
        read_only_fields = fields


class SharedExpenseSerializer(serializers.ModelSerializer):
    class Meta:
        model = SharedExpense
        fields = ['id', 'date', 'amount', 'description', 'category', 'created_at', 'updated_at']
        read_only_fields = fields


class MealCountSerializer(serializers.ModelSerializer):
    class Meta:
        model = MealCount
        fields = [
            'id',
            'member',
            'member_name',
            'date',
            'breakfast',
            'lunch',
            'dinner',
            'total',
            'created_at',
        ]
        read_only_fields = fields


class DebtRequestSerializer(serializers.ModelSerializer):
    class Meta:
        model = DebtRequest
        fields = [
            'id',
            'from_member',
            'from_name',
            'from_email',
            'to_member',
            'to_name',
            'to_email',
            'amount',
            'date',
            'note',
            'status',
            'created_at',
            'resolved_at',
        ]
        read_only_fields = fields


class DebtSerializer(serializers.ModelSerializer):
    class Meta:
        model = Debt
        fields = [
            'id',
            'request',
            'from_member',
            'from_name',
            'to_member',
            'to_name',
            'amount',
            'date',
            'created_at',
        ]
        read_only_fields = fields


class SettlementSerializer(serializers.Serializer):
    """Result of accepting a debt request."""

    request = DebtRequestSerializer()
    deposits = DepositSerializer(many=True)
    debt = DebtSerializer()


# =============================================================================
# Input Serializers
# =============================================================================

class DepositInputSerializer(serializers.Serializer):
    """
    Validate deposit creation.

    Amount positivity is checked by the ledger service so that every
    caller gets the same error.
    """

    member_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    date = serializers.DateField(required=False)
    note = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')


class DepositUpdateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    date = serializers.DateField(required=False)
    note = serializers.CharField(max_length=255, required=False, allow_blank=True)


class ExpenseInputSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    date = serializers.DateField(required=False)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    category = serializers.ChoiceField(choices=ExpenseCategory.choices, required=False)


class ExpenseUpdateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    date = serializers.DateField(required=False)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=ExpenseCategory.choices, required=False)


class SharedExpenseInputSerializer(ExpenseInputSerializer):
    category = serializers.ChoiceField(choices=SharedExpenseCategory.choices, required=False)


class SharedExpenseUpdateSerializer(ExpenseUpdateSerializer):
    category = serializers.ChoiceField(choices=SharedExpenseCategory.choices, required=False)


class MealCountInputSerializer(serializers.Serializer):
    member_id = serializers.UUIDField()
    date = serializers.DateField(required=False)
    breakfast = serializers.IntegerField(min_value=0, default=0)
    lunch = serializers.IntegerField(min_value=0, default=0)
    dinner = serializers.IntegerField(min_value=0, default=0)


class DebtRequestInputSerializer(serializers.Serializer):
    """The acting user is the receiver; from_member_id names the payer."""

    from_member_id = serializers.UUIDField(required=False, allow_null=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    date = serializers.DateField(required=False)
    note = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')


class MemberFilterSerializer(serializers.Serializer):
    member = serializers.UUIDField(required=False)


class DebtRequestFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=DebtStatus.choices, required=False)


class MealRateQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for the range meal rate.

    Query Parameters:
        start_date (date): First day of the window, inclusive
        end_date (date): Last day of the window, inclusive

    A start after the end is allowed and yields zeros.
    """

    start_date = serializers.DateField()
    end_date = serializers.DateField()


# =============================================================================
# Summary Serializers
# =============================================================================

class HouseholdSummarySerializer(serializers.Serializer):
    total_meal_cost = LedgerAmountField()
    total_shared_cost = LedgerAmountField()
    total_cost = LedgerAmountField()
    total_meal_units = serializers.IntegerField()
    meal_rate = LedgerAmountField()
    total_deposits = LedgerAmountField()
    remaining_balance = LedgerAmountField()


class MemberSummarySerializer(serializers.Serializer):
    member_id = serializers.UUIDField()
    name = serializers.CharField()
    email = serializers.EmailField()
    role = serializers.CharField()
    deposit_total = LedgerAmountField()
    meal_units = serializers.IntegerField()
    meal_cost = LedgerAmountField()
    shared_cost = LedgerAmountField()
    total_cost = LedgerAmountField()
    remaining = LedgerAmountField()


class MessSummarySerializer(serializers.Serializer):
    currency = serializers.CharField()
    household = HouseholdSummarySerializer()
    per_member_shared_cost = LedgerAmountField()
    members = MemberSummarySerializer(many=True)


class RangeMealRateSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    total_expenses = LedgerAmountField()
    total_meals = serializers.IntegerField()
    meal_rate = LedgerAmountField()
