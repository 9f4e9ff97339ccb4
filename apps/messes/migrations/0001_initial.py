# Generated manually for messes app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Mess',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100, unique=True)),
                ('password', models.CharField(max_length=128)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_messes', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'messes',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='MessMember',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('email', models.EmailField(max_length=255)),
                ('role', models.CharField(choices=[('manager', 'Manager'), ('member', 'Member')], default='member', max_length=20)),
                ('join_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('mess', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='members', to='messes.mess')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='mess_memberships', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'mess_members',
                'ordering': ['join_date'],
                'indexes': [
                    models.Index(fields=['mess', 'role'], name='mess_members_role_idx'),
                    models.Index(fields=['user', 'join_date'], name='mess_members_user_idx'),
                ],
                'unique_together': {('mess', 'email')},
            },
        ),
    ]
