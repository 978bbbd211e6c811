from django.db import models
from django.core.exceptions import ValidationError
from django.db.models import Q

from profile_management.models import Teacher, Student
from .utils import time_format_validator


# ==================================================
# TIME SLOT (Core Model)
# ==================================================

class TimeSlot(models.Model):
    """
    A booked lesson - which teacher meets which student, when

    ``teacher_name``, ``student_name`` and ``teacher_type`` are snapshots copied
    from the teacher and student when the booking is created or updated. They
    are not kept in sync if the profiles change later.
    """
    SCHEDULED = 'scheduled'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (SCHEDULED, 'Scheduled'),
        (COMPLETED, 'Completed'),
        (CANCELLED, 'Cancelled'),
    ]

    TERMINAL_STATUSES = (COMPLETED, CANCELLED)

    # Bookings outlive their teacher/student; the snapshot names remain
    teacher = models.ForeignKey(
        Teacher,
        on_delete=models.SET_NULL,
        null=True,
        related_name="time_slots"
    )
    teacher_name = models.CharField(max_length=200)
    teacher_type = models.CharField(max_length=20, choices=Teacher.TEACHER_TYPE_CHOICES)
    student = models.ForeignKey(
        Student,
        on_delete=models.SET_NULL,
        null=True,
        related_name="time_slots"
    )
    student_name = models.CharField(max_length=200)
    date = models.DateField()
    start_time = models.CharField(max_length=5, validators=[time_format_validator])
    end_time = models.CharField(max_length=5, validators=[time_format_validator])
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=SCHEDULED
    )
    subject = models.CharField(max_length=100)
    notes = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['date', 'start_time']
        constraints = [
            # Final arbiter against double booking when two requests race
            models.UniqueConstraint(
                fields=['teacher', 'date', 'start_time', 'end_time'],
                condition=Q(status='scheduled'),
                name='unique_scheduled_teacher_slot'
            ),
            models.UniqueConstraint(
                fields=['student', 'date', 'start_time', 'end_time'],
                condition=Q(status='scheduled'),
                name='unique_scheduled_student_slot'
            ),
        ]
        indexes = [
            models.Index(fields=['teacher', 'date', 'status'], name='timeslot_teacher_day_idx'),
            models.Index(fields=['student', 'date', 'status'], name='timeslot_student_day_idx'),
        ]
        verbose_name = "Time Slot"
        verbose_name_plural = "Time Slots"

    def __str__(self):
        return f"{self.teacher_name} / {self.student_name} - {self.date} {self.start_time}-{self.end_time}"

    def clean(self):
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValidationError("End time must be after start time")

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES
