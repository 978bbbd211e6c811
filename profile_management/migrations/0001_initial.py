import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


TIME_VALIDATOR = django.core.validators.RegexValidator(
    '^([01][0-9]|2[0-3]):[0-5][0-9]$',
    'Please enter a valid time in HH:MM format (24-hour)'
)


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Teacher',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('email', models.EmailField(max_length=254, unique=True)),
                ('contact_no', models.CharField(max_length=20)),
                ('address', models.TextField()),
                ('teacher_type', models.CharField(choices=[('full-time', 'Full Time'), ('part-time', 'Part Time'), ('visiting', 'Visiting')], default='full-time', max_length=20)),
                ('subjects', models.JSONField(blank=True, default=dict, help_text='Subjects taught with fees: {"physics": {"selected": true, "fee": 500}}')),
                ('joining_date', models.DateField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='teacher_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Teacher',
                'verbose_name_plural': 'Teachers',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['teacher_type'], name='teacher_type_idx')],
            },
        ),
        migrations.CreateModel(
            name='AvailabilityWindow',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_recurring', models.BooleanField(default=True)),
                ('day_of_week', models.PositiveSmallIntegerField(blank=True, choices=[(0, 'Sunday'), (1, 'Monday'), (2, 'Tuesday'), (3, 'Wednesday'), (4, 'Thursday'), (5, 'Friday'), (6, 'Saturday')], help_text='Day of the week for recurring windows (0=Sunday, 6=Saturday)', null=True)),
                ('specific_date', models.DateField(blank=True, help_text='Calendar date for one-off windows', null=True)),
                ('start_time', models.CharField(max_length=5, validators=[TIME_VALIDATOR])),
                ('end_time', models.CharField(max_length=5, validators=[TIME_VALIDATOR])),
                ('teacher', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='availability_windows', to='profile_management.teacher')),
            ],
            options={
                'verbose_name': 'Availability Window',
                'verbose_name_plural': 'Availability Windows',
                'ordering': ['teacher', 'id'],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(('day_of_week__isnull', False), ('is_recurring', True), ('specific_date__isnull', True)),
                            models.Q(('day_of_week__isnull', True), ('is_recurring', False), ('specific_date__isnull', False)),
                            _connector='OR'
                        ),
                        name='availability_window_day_variant'
                    ),
                    models.CheckConstraint(
                        condition=models.Q(('day_of_week__isnull', True), ('day_of_week__lte', 6), _connector='OR'),
                        name='availability_window_day_range'
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='Student',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('email', models.EmailField(max_length=254, unique=True)),
                ('contact_no', models.CharField(max_length=20)),
                ('address', models.TextField(blank=True)),
                ('class_name', models.CharField(blank=True, max_length=50)),
                ('courses', models.JSONField(blank=True, default=dict, help_text='Per-course fees: {"math": {"selected": true, "fee": 500, "classes": 4, "total": 2000}}')),
                ('course_mode', models.CharField(choices=[('OFFLINE', 'Offline'), ('ONLINE', 'Online'), ('HYBRID', 'Hybrid')], default='OFFLINE', max_length=20)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('total_amount', models.PositiveIntegerField(default=0)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='student_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Student',
                'verbose_name_plural': 'Students',
                'ordering': ['-created_at'],
            },
        ),
    ]
