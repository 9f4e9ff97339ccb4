# ==========================================
# apps/household/models.py
# ==========================================

from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
import uuid


class TaskStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    COMPLETED = 'completed', 'Completed'


class Notice(models.Model):
    """Message pinned on the mess notice board."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='notices')
    message = models.TextField(max_length=2000)
    author = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='notices'
    )
    author_name = models.CharField(max_length=200)
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'notices'
        indexes = [
            models.Index(fields=['mess', 'created_at'], name='notices_mess_created_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.author_name}: {self.message[:40]}"


class Task(models.Model):
    """Household chore assigned to a roster member."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='tasks')
    name = models.CharField(max_length=200)
    assigned_to = models.ForeignKey(
        'messes.MessMember',
        on_delete=models.SET_NULL,
        null=True,
        related_name='tasks'
    )
    assigned_to_name = models.CharField(max_length=200)
    due_date = models.DateField()
    status = models.CharField(
        max_length=20,
        choices=TaskStatus.choices,
        default=TaskStatus.PENDING
    )
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='created_tasks'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'tasks'
        indexes = [
            models.Index(fields=['mess', 'due_date'], name='tasks_mess_due_idx'),
            models.Index(fields=['assigned_to', 'status'], name='tasks_assignee_status_idx'),
        ]
        ordering = ['-due_date', '-created_at']
    
    def __str__(self):
        return f"{self.name} ({self.assigned_to_name}, due {self.due_date})"
    
    def toggle(self):
        """Flip between pending and completed."""
        if self.status == TaskStatus.COMPLETED:
            self.status = TaskStatus.PENDING
        else:
            self.status = TaskStatus.COMPLETED


class Review(models.Model):
    """A member's rating of life in the mess."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mess = models.ForeignKey('messes.Mess', on_delete=models.CASCADE, related_name='reviews')
    author = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='mess_reviews'
    )
    author_name = models.CharField(max_length=200)
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField(max_length=2000, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'reviews'
        unique_together = [['mess', 'author']]
        indexes = [
            models.Index(fields=['mess', 'created_at'], name='reviews_mess_created_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.author_name} ({self.rating}/5)"
