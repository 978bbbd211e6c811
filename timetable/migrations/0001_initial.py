import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


TIME_VALIDATOR = django.core.validators.RegexValidator(
    '^([01][0-9]|2[0-3]):[0-5][0-9]$',
    'Please enter a valid time in HH:MM format (24-hour)'
)


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('profile_management', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='TimeSlot',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('teacher_name', models.CharField(max_length=200)),
                ('teacher_type', models.CharField(choices=[('full-time', 'Full Time'), ('part-time', 'Part Time'), ('visiting', 'Visiting')], max_length=20)),
                ('student_name', models.CharField(max_length=200)),
                ('date', models.DateField()),
                ('start_time', models.CharField(max_length=5, validators=[TIME_VALIDATOR])),
                ('end_time', models.CharField(max_length=5, validators=[TIME_VALIDATOR])),
                ('status', models.CharField(choices=[('scheduled', 'Scheduled'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='scheduled', max_length=20)),
                ('subject', models.CharField(max_length=100)),
                ('notes', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('student', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='time_slots', to='profile_management.student')),
                ('teacher', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='time_slots', to='profile_management.teacher')),
            ],
            options={
                'verbose_name': 'Time Slot',
                'verbose_name_plural': 'Time Slots',
                'ordering': ['date', 'start_time'],
                'indexes': [
                    models.Index(fields=['teacher', 'date', 'status'], name='timeslot_teacher_day_idx'),
                    models.Index(fields=['student', 'date', 'status'], name='timeslot_student_day_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('status', 'scheduled')), fields=('teacher', 'date', 'start_time', 'end_time'), name='unique_scheduled_teacher_slot'),
                    models.UniqueConstraint(condition=models.Q(('status', 'scheduled')), fields=('student', 'date', 'start_time', 'end_time'), name='unique_scheduled_student_slot'),
                ],
            },
        ),
    ]
