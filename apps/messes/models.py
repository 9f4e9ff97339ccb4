# ==========================================
# apps/messes/models.py
# ==========================================

from django.contrib.auth.hashers import make_password, check_password
from django.db import models
from django.utils import timezone
import uuid


class MessRole(models.TextChoices):
    MANAGER = 'manager', 'Manager'
    MEMBER = 'member', 'Member'


class Mess(models.Model):
    """Household sharing meal and living costs."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    # Name doubles as the public mess id people type when joining
    name = models.CharField(max_length=100, unique=True)
    password = models.CharField(max_length=128)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='created_messes'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'messes'
        ordering = ['-created_at']
    
    def __str__(self):
        return self.name
    
    def set_password(self, raw_password):
        self.password = make_password(raw_password)
    
    def check_password(self, raw_password):
        return check_password(raw_password, self.password)
    
    def get_member(self, user):
        """Return the roster entry linked to ``user`` or None."""
        if user is None or not user.is_authenticated:
            return None
        return self.members.filter(user=user).first()
    
    def has_member(self, user):
        return self.get_member(user) is not None
    
    def get_user_role(self, user):
        member = self.get_member(user)
        return member.role if member else None
    
    def is_manager(self, user):
        return self.get_user_role(user) == MessRole.MANAGER


class MessMember(models.Model):
    """
    Roster entry of a mess.

    A manager may add people by name and email before they have an
    account; ``user`` stays empty until that person joins with the
    same email.
    """
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mess = models.ForeignKey(Mess, on_delete=models.CASCADE, related_name='members')
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='mess_memberships'
    )
    name = models.CharField(max_length=200)
    email = models.EmailField(max_length=255)
    role = models.CharField(max_length=20, choices=MessRole.choices, default=MessRole.MEMBER)
    join_date = models.DateTimeField(default=timezone.now)
    
    class Meta:
        db_table = 'mess_members'
        unique_together = [['mess', 'email']]
        indexes = [
            models.Index(fields=['mess', 'role'], name='mess_members_role_idx'),
            models.Index(fields=['user', 'join_date'], name='mess_members_user_idx'),
        ]
        ordering = ['join_date']
    
    def __str__(self):
        return f"{self.name} in {self.mess.name} ({self.role})"
    
    def save(self, *args, **kwargs):
        self.email = self.email.strip().lower()
        super().save(*args, **kwargs)
    
    @property
    def is_manager(self):
        return self.role == MessRole.MANAGER
