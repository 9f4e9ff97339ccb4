# ==========================================
# apps/ledger/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class ExpenseCategory(models.TextChoices):
    GROCERY = 'grocery', 'Grocery'
    FISH_MEAT = 'fish_meat', 'Fish & Meat'
    VEGETABLES = 'vegetables', 'Vegetables'
    RICE = 'rice', 'Rice'
    SPICES = 'spices', 'Spices'
    OTHER = 'other', 'Other'


class SharedExpenseCategory(models.TextChoices):
    RENT = 'rent', 'Rent'
    ELECTRICITY = 'electricity', 'Electricity'
    GAS = 'gas', 'Gas'
    WATER = 'water', 'Water'
    INTERNET = 'internet', 'Internet'
    MAID = 'maid', 'Maid'
    OTHER = 'other', 'Other'


class DebtStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACCEPTED = 'accepted', 'Accepted'
    DENIED = 'denied', 'Denied'


class Deposit(models.Model):
    """
    Money a member put into the communal pool.

    Amounts are signed: negative rows are settlement offsets written
    when a debt request is accepted.
    """
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='deposits')
    
    # Member link; name/email snapshot survives roster removal
    member = models.ForeignKey(
        'messes.MessMember',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='deposits'
    )
    member_name = models.CharField(max_length=200)
    member_email = models.EmailField(max_length=255, blank=True)
    
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    date = models.DateField()
    note = models.CharField(max_length=255, blank=True)
    
    # Set only on settlement offsets
    debt_request = models.ForeignKey(
        'DebtRequest',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='deposits'
    )
    
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='recorded_deposits'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'deposits'
        indexes = [
            models.Index(fields=['mess', 'date'], name='deposits_mess_date_idx'),
            models.Index(fields=['member', 'date'], name='deposits_member_date_idx'),
        ]
        ordering = ['-date', '-created_at']
    
    def __str__(self):
        return f"{self.member_name}: {self.amount} on {self.date}"
    
    @property
    def is_settlement(self):
        return self.debt_request_id is not None


class BaseExpense(models.Model):
    """Common fields for meal expenses and shared expenses."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    date = models.DateField()
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    description = models.CharField(max_length=255, blank=True)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        abstract = True
        ordering = ['-date', '-created_at']
    
    def __str__(self):
        return f"{self.get_category_display()}: {self.amount} on {self.date}"


class Expense(BaseExpense):
    """Meal-related cost, shared by meal units."""
    
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='expenses')
    category = models.CharField(
        max_length=20,
        choices=ExpenseCategory.choices,
        default=ExpenseCategory.GROCERY
    )
    
    class Meta(BaseExpense.Meta):
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['mess', 'date'], name='expenses_mess_date_idx'),
        ]


class SharedExpense(BaseExpense):
    """Cost split equally per head (rent, utilities)."""
    
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='shared_expenses')
    category = models.CharField(
        max_length=20,
        choices=SharedExpenseCategory.choices,
        default=SharedExpenseCategory.OTHER
    )
    
    class Meta(BaseExpense.Meta):
        db_table = 'shared_expenses'
        indexes = [
            models.Index(fields=['mess', 'date'], name='shared_exp_mess_date_idx'),
        ]


class MealCount(models.Model):
    """Meal units a member consumed on a date."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='meal_counts')
    member = models.ForeignKey(
        'messes.MessMember',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='meal_counts'
    )
    member_name = models.CharField(max_length=200)
    date = models.DateField()
    
    breakfast = models.PositiveIntegerField(default=0)
    lunch = models.PositiveIntegerField(default=0)
    dinner = models.PositiveIntegerField(default=0)
    total = models.PositiveIntegerField(default=0, editable=False)
    
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='recorded_meal_counts'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'meal_counts'
        indexes = [
            models.Index(fields=['mess', 'date'], name='meal_counts_mess_date_idx'),
            models.Index(fields=['member', 'date'], name='meal_counts_member_idx'),
        ]
        ordering = ['-date', '-created_at']
    
    def __str__(self):
        return f"{self.member_name}: {self.total} meals on {self.date}"
    
    def save(self, *args, **kwargs):
        """Total is always derived from the three meals."""
        self.total = self.breakfast + self.lunch + self.dinner
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'total' not in update_fields:
            kwargs['update_fields'] = list(update_fields) + ['total']
        super().save(*args, **kwargs)


class DebtRequest(models.Model):
    """
    A receiver asks a payer to acknowledge owing them ``amount``.

    ``from_*`` is the payer, ``to_*`` the receiver who raised the request.
    """
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='debt_requests')
    
    # Payer
    from_member = models.ForeignKey(
        'messes.MessMember',
        on_delete=models.SET_NULL,
        null=True,
        related_name='debt_requests_to_pay'
    )
    from_name = models.CharField(max_length=200)
    from_email = models.EmailField(max_length=255, blank=True)
    
    # Receiver
    to_member = models.ForeignKey(
        'messes.MessMember',
        on_delete=models.SET_NULL,
        null=True,
        related_name='debt_requests_to_receive'
    )
    to_name = models.CharField(max_length=200)
    to_email = models.EmailField(max_length=255, blank=True)
    
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    date = models.DateField()
    note = models.CharField(max_length=255, blank=True)
    status = models.CharField(
        max_length=20,
        choices=DebtStatus.choices,
        default=DebtStatus.PENDING
    )
    
    created_at = models.DateTimeField(auto_now_add=True)
    resolved_at = models.DateTimeField(null=True, blank=True)
    
    class Meta:
        db_table = 'debt_requests'
        indexes = [
            models.Index(fields=['mess', 'status'], name='debt_req_mess_status_idx'),
            models.Index(fields=['from_member', 'status'], name='debt_req_payer_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.from_name} owes {self.to_name} {self.amount} ({self.status})"
    
    @property
    def is_pending(self):
        return self.status == DebtStatus.PENDING


class Debt(models.Model):
    """Settled debt. Written once by settlement, never edited."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='debts')
    request = models.OneToOneField(
        DebtRequest,
        on_delete=models.PROTECT,
        related_name='debt'
    )
    from_member = models.ForeignKey(
        'messes.MessMember',
        on_delete=models.SET_NULL,
        null=True,
        related_name='debts_paid'
    )
    from_name = models.CharField(max_length=200)
    to_member = models.ForeignKey(
        'messes.MessMember',
        on_delete=models.SET_NULL,
        null=True,
        related_name='debts_received'
    )
    to_name = models.CharField(max_length=200)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'debts'
        ordering = ['-date', '-created_at']
    
    def __str__(self):
        return f"{self.from_name} paid {self.to_name} {self.amount}"
