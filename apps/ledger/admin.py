# ==========================================
# apps/ledger/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import Deposit, Expense, SharedExpense, MealCount, DebtRequest, Debt, DebtStatus


@admin.register(Deposit)
class DepositAdmin(admin.ModelAdmin):
    list_display = ['member_name', 'mess', 'amount', 'date', 'is_settlement']
    list_filter = ['date']
    search_fields = ['member_name', 'member_email', 'mess__name']
    raw_id_fields = ['mess', 'member', 'debt_request', 'created_by']
    readonly_fields = ['created_at']

    def is_settlement(self, obj):
        return obj.is_settlement
    is_settlement.boolean = True
    is_settlement.short_description = 'Settlement'

    # Settlement offsets are owned by their debt request
    def get_readonly_fields(self, request, obj=None):
        if obj is not None and obj.is_settlement:
            return [field.name for field in obj._meta.fields]
        return super().get_readonly_fields(request, obj)

    def has_delete_permission(self, request, obj=None):
        if obj is not None and obj.is_settlement:
            return False
        return super().has_delete_permission(request, obj)

    def get_actions(self, request):
        actions = super().get_actions(request)
        actions.pop('delete_selected', None)
        return actions


class BaseExpenseAdmin(admin.ModelAdmin):
    list_display = ['mess', 'category', 'amount', 'date', 'description']
    list_filter = ['category', 'date']
    search_fields = ['description', 'mess__name']
    raw_id_fields = ['mess', 'created_by']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Expense)
class ExpenseAdmin(BaseExpenseAdmin):
    pass


@admin.register(SharedExpense)
class SharedExpenseAdmin(BaseExpenseAdmin):
    pass


@admin.register(MealCount)
class MealCountAdmin(admin.ModelAdmin):
    list_display = ['member_name', 'mess', 'date', 'breakfast', 'lunch', 'dinner', 'total']
    list_filter = ['date']
    search_fields = ['member_name', 'mess__name']
    raw_id_fields = ['mess', 'member', 'created_by']
    readonly_fields = ['total', 'created_at']


@admin.register(DebtRequest)
class DebtRequestAdmin(admin.ModelAdmin):
    list_display = ['from_name', 'to_name', 'amount', 'date', 'status_badge', 'resolved_at']
    list_filter = ['status']
    search_fields = ['from_name', 'to_name', 'from_email', 'to_email', 'mess__name']
    raw_id_fields = ['mess', 'from_member', 'to_member']
    # Status only changes through settlement
    readonly_fields = ['status', 'created_at', 'resolved_at']

    def get_readonly_fields(self, request, obj=None):
        if obj is not None and not obj.is_pending:
            return [field.name for field in obj._meta.fields]
        return super().get_readonly_fields(request, obj)

    def status_badge(self, obj):
        colors = {
            DebtStatus.PENDING: ('#E5C49A', '#2C1810'),
            DebtStatus.ACCEPTED: ('#6B8E5E', 'white'),
            DebtStatus.DENIED: ('#B85C5C', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'


@admin.register(Debt)
class DebtAdmin(admin.ModelAdmin):
    list_display = ['from_name', 'to_name', 'amount', 'date', 'mess']
    search_fields = ['from_name', 'to_name', 'mess__name']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
