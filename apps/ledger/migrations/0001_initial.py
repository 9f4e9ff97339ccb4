# Generated manually for ledger app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('messes', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='DebtRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('from_name', models.CharField(max_length=200)),
                ('from_email', models.EmailField(blank=True, max_length=255)),
                ('to_name', models.CharField(max_length=200)),
                ('to_email', models.EmailField(blank=True, max_length=255)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.01'))])),
                ('date', models.DateField()),
                ('note', models.CharField(blank=True, max_length=255)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('accepted', 'Accepted'), ('denied', 'Denied')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('resolved_at', models.DateTimeField(blank=True, null=True)),
                ('from_member', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='debt_requests_to_pay', to='messes.messmember')),
                ('mess', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='debt_requests', to='messes.mess')),
                ('to_member', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='debt_requests_to_receive', to='messes.messmember')),
            ],
            options={
                'db_table': 'debt_requests',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['mess', 'status'], name='debt_req_mess_status_idx'),
                    models.Index(fields=['from_member', 'status'], name='debt_req_payer_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Debt',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('from_name', models.CharField(max_length=200)),
                ('to_name', models.CharField(max_length=200)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('date', models.DateField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('from_member', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='debts_paid', to='messes.messmember')),
                ('mess', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='debts', to='messes.mess')),
                ('request', models.OneToOneField(on_delete=django.db.models.deletion.PROTECT, related_name='debt', to='ledger.debtrequest')),
                ('to_member', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='debts_received', to='messes.messmember')),
            ],
            options={
                'db_table': 'debts',
                'ordering': ['-date', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Deposit',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('member_name', models.CharField(max_length=200)),
                ('member_email', models.EmailField(blank=True, max_length=255)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('date', models.DateField()),
                ('note', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recorded_deposits', to=settings.AUTH_USER_MODEL)),
                ('debt_request', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='deposits', to='ledger.debtrequest')),
                ('member', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='deposits', to='messes.messmember')),
                ('mess', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='deposits', to='messes.mess')),
            ],
            options={
                'db_table': 'deposits',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['mess', 'date'], name='deposits_mess_date_idx'),
                    models.Index(fields=['member', 'date'], name='deposits_member_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.01'))])),
                ('description', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.CharField(choices=[('grocery', 'Grocery'), ('fish_meat', 'Fish & Meat'), ('vegetables', 'Vegetables'), ('rice', 'Rice'), ('spices', 'Spices'), ('other', 'Other')], default='grocery', max_length=20)),
                ('created_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('mess', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='expenses', to='messes.mess')),
            ],
            options={
                'db_table': 'expenses',
                'ordering': ['-date', '-created_at'],
                'abstract': False,
                'indexes': [
                    models.Index(fields=['mess', 'date'], name='expenses_mess_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SharedExpense',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.01'))])),
                ('description', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.CharField(choices=[('rent', 'Rent'), ('electricity', 'Electricity'), ('gas', 'Gas'), ('water', 'Water'), ('internet', 'Internet'), ('maid', 'Maid'), ('other', 'Other')], default='other', max_length=20)),
                ('created_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('mess', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shared_expenses', to='messes.mess')),
            ],
            options={
                'db_table': 'shared_expenses',
                'ordering': ['-date', '-created_at'],
                'abstract': False,
                'indexes': [
                    models.Index(fields=['mess', 'date'], name='shared_exp_mess_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='MealCount',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('member_name', models.CharField(max_length=200)),
                ('date', models.DateField()),
                ('breakfast', models.PositiveIntegerField(default=0)),
                ('lunch', models.PositiveIntegerField(default=0)),
                ('dinner', models.PositiveIntegerField(default=0)),
                ('total', models.PositiveIntegerField(default=0, editable=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recorded_meal_counts', to=settings.AUTH_USER_MODEL)),
                ('member', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='meal_counts', to='messes.messmember')),
                ('mess', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='meal_counts', to='messes.mess')),
            ],
            options={
                'db_table': 'meal_counts',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['mess', 'date'], name='meal_counts_mess_date_idx'),
                    models.Index(fields=['member', 'date'], name='meal_counts_member_idx'),
                ],
            },
        ),
    ]
