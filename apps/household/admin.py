# ==========================================
# apps/household/admin.py
# ==========================================

from django.contrib import admin
from .models import Notice, Task, Review


@admin.register(Notice)
class NoticeAdmin(admin.ModelAdmin):
    list_display = ['author_name', 'mess', 'created_at']
    search_fields = ['message', 'author_name', 'mess__name']
    raw_id_fields = ['mess', 'author']


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ['name', 'assigned_to_name', 'due_date', 'status', 'mess']
    list_filter = ['status', 'due_date']
    search_fields = ['name', 'assigned_to_name', 'mess__name']
    raw_id_fields = ['mess', 'assigned_to', 'created_by']


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ['author_name', 'mess', 'rating', 'created_at']
    list_filter = ['rating']
    search_fields = ['author_name', 'comment', 'mess__name']
    raw_id_fields = ['mess', 'author']
