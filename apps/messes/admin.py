# ==========================================
# apps/messes/admin.py
# ==========================================

from django.contrib import admin
from .models import Mess, MessMember


class MessMemberInline(admin.TabularInline):
    model = MessMember
    extra = 0
    fields = ['name', 'email', 'role', 'user', 'join_date']
    readonly_fields = ['join_date']


@admin.register(Mess)
class MessAdmin(admin.ModelAdmin):
    list_display = ['name', 'created_by', 'member_count', 'created_at']
    search_fields = ['name', 'created_by__email']
    readonly_fields = ['password', 'created_at', 'updated_at']
    inlines = [MessMemberInline]
    ordering = ['-created_at']

    def member_count(self, obj):
        return obj.members.count()
    member_count.short_description = 'Members'


@admin.register(MessMember)
class MessMemberAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'mess', 'role', 'join_date']
    list_filter = ['role']
    search_fields = ['name', 'email', 'mess__name']
    raw_id_fields = ['mess', 'user']
