from django.db import models
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db.models import Q

from timetable.utils import day_of_week, time_format_validator


# ==================================================
# TEACHER
# ==================================================

class Teacher(models.Model):
    """
    Tutor who can be booked for lessons
    Part-time and visiting teachers are only bookable inside their availability windows
    """
    FULL_TIME = 'full-time'
    PART_TIME = 'part-time'
    VISITING = 'visiting'

    TEACHER_TYPE_CHOICES = [
        (FULL_TIME, 'Full Time'),
        (PART_TIME, 'Part Time'),
        (VISITING, 'Visiting'),
    ]

    RESTRICTED_TYPES = (PART_TIME, VISITING)

    # Login account issued by the identity service (optional)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="teacher_profile"
    )
    name = models.CharField(max_length=200)
    email = models.EmailField(unique=True)
    contact_no = models.CharField(max_length=20)
    address = models.TextField()
    teacher_type = models.CharField(
        max_length=20,
        choices=TEACHER_TYPE_CHOICES,
        default=FULL_TIME
    )
    subjects = models.JSONField(
        default=dict,
        blank=True,
        help_text='Subjects taught with fees: {"physics": {"selected": true, "fee": 500}}'
    )
    joining_date = models.DateField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['teacher_type'], name='teacher_type_idx'),
        ]
        verbose_name = "Teacher"
        verbose_name_plural = "Teachers"

    def __str__(self):
        return f"{self.name} ({self.get_teacher_type_display()})"

    @property
    def requires_availability_check(self):
        """Full-time teachers can be booked at any time"""
        return self.teacher_type in self.RESTRICTED_TYPES

    @property
    def is_part_time(self):
        return self.teacher_type == self.PART_TIME


# ==================================================
# AVAILABILITY WINDOW
# ==================================================

class AvailabilityWindow(models.Model):
    """
    Interval during which a teacher may be booked

    Either recurring every week on ``day_of_week`` or a one-off on
    ``specific_date``; exactly one of the two is stored.
    """
    DAY_CHOICES = [
        (0, 'Sunday'),
        (1, 'Monday'),
        (2, 'Tuesday'),
        (3, 'Wednesday'),
        (4, 'Thursday'),
        (5, 'Friday'),
        (6, 'Saturday'),
    ]

    teacher = models.ForeignKey(
        Teacher,
        on_delete=models.CASCADE,
        related_name="availability_windows"
    )
    is_recurring = models.BooleanField(default=True)
    day_of_week = models.PositiveSmallIntegerField(
        choices=DAY_CHOICES,
        null=True,
        blank=True,
        help_text="Day of the week for recurring windows (0=Sunday, 6=Saturday)"
    )
    specific_date = models.DateField(
        null=True,
        blank=True,
        help_text="Calendar date for one-off windows"
    )
    start_time = models.CharField(max_length=5, validators=[time_format_validator])
    end_time = models.CharField(max_length=5, validators=[time_format_validator])

    class Meta:
        ordering = ['teacher', 'id']
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(is_recurring=True, day_of_week__isnull=False, specific_date__isnull=True) |
                    Q(is_recurring=False, day_of_week__isnull=True, specific_date__isnull=False)
                ),
                name='availability_window_day_variant'
            ),
            models.CheckConstraint(
                condition=Q(day_of_week__isnull=True) | Q(day_of_week__lte=6),
                name='availability_window_day_range'
            ),
        ]
        verbose_name = "Availability Window"
        verbose_name_plural = "Availability Windows"

    def __str__(self):
        if self.is_recurring:
            day = self.get_day_of_week_display()
        else:
            day = self.specific_date.isoformat() if self.specific_date else '?'
        return f"{day} {self.start_time}-{self.end_time}"

    def clean(self):
        """Validate the day variant and the time interval"""
        if self.is_recurring:
            if self.day_of_week is None or not 0 <= self.day_of_week <= 6:
                raise ValidationError("Recurring windows need a day of week between 0 and 6")
            if self.specific_date is not None:
                raise ValidationError("Recurring windows cannot have a specific date")
        else:
            if self.specific_date is None:
                raise ValidationError("One-off windows need a specific date")
            if self.day_of_week is not None:
                raise ValidationError("One-off windows cannot have a day of week")

        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValidationError("End time must be after start time")

    def matches_date(self, value):
        """Whether this window applies to the given calendar date"""
        if self.is_recurring:
            return self.day_of_week == day_of_week(value)
        return self.specific_date == value

    def contains(self, start_time, end_time):
        """Whether [start_time, end_time) lies entirely inside this window"""
        return start_time >= self.start_time and end_time <= self.end_time


# ==================================================
# STUDENT
# ==================================================

class Student(models.Model):
    COURSE_MODE_CHOICES = [
        ('OFFLINE', 'Offline'),
        ('ONLINE', 'Online'),
        ('HYBRID', 'Hybrid'),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="student_profile"
    )
    name = models.CharField(max_length=200)
    email = models.EmailField(unique=True)
    contact_no = models.CharField(max_length=20)
    address = models.TextField(blank=True)
    class_name = models.CharField(max_length=50, blank=True)
    courses = models.JSONField(
        default=dict,
        blank=True,
        help_text='Per-course fees: {"math": {"selected": true, "fee": 500, "classes": 4, "total": 2000}}'
    )
    course_mode = models.CharField(
        max_length=20,
        choices=COURSE_MODE_CHOICES,
        default='OFFLINE'
    )
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    total_amount = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Student"
        verbose_name_plural = "Students"

    def __str__(self):
        return self.name

    def clean(self):
        """Validate that start_date is before end_date"""
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError("Start date must be before end date")
