from django.contrib import admin
from .models import TimeSlot


@admin.register(TimeSlot)
class TimeSlotAdmin(admin.ModelAdmin):
    """
    Browse bookings and edit their lesson details

    Bookings are created and rescheduled through the GraphQL API, where the
    availability and conflict checks run, so participants, schedule and
    status are read-only here.
    """
    list_display = [
        'date',
        'start_time',
        'end_time',
        'teacher_name',
        'student_name',
        'subject',
        'status'
    ]
    list_filter = [
        'status',
        'teacher_type',
        'date'
    ]
    search_fields = [
        'teacher_name',
        'student_name',
        'subject'
    ]
    readonly_fields = [
        'teacher', 'teacher_name', 'teacher_type', 'student', 'student_name',
        'date', 'start_time', 'end_time', 'status',
        'created_at', 'updated_at'
    ]
    date_hierarchy = 'date'
    fieldsets = (
        ('Participants', {
            'fields': ('teacher', 'teacher_name', 'teacher_type', 'student', 'student_name')
        }),
        ('Schedule', {
            'fields': ('date', 'start_time', 'end_time', 'status'),
        }),
        ('Lesson', {
            'fields': ('subject', 'notes')
        }),
        ('System Information', {
            'fields': ('created_at', 'updated_at')
        }),
    )

    def has_add_permission(self, request):
        return False
