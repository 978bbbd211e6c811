from django.contrib import admin
from .models import AvailabilityWindow, Student, Teacher


class AvailabilityWindowInline(admin.TabularInline):
    model = AvailabilityWindow
    extra = 0
    fields = ['is_recurring', 'day_of_week', 'specific_date', 'start_time', 'end_time']


@admin.register(Teacher)
class TeacherAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'teacher_type', 'contact_no', 'joining_date', 'is_active']
    list_filter = ['teacher_type', 'is_active']
    search_fields = ['name', 'email', 'contact_no']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [AvailabilityWindowInline]

    fieldsets = (
        ('Personal Information', {
            'fields': ('user', 'name', 'email', 'contact_no', 'address')
        }),
        ('Teaching', {
            'fields': ('teacher_type', 'subjects', 'joining_date')
        }),
        ('System Information', {
            'fields': ('is_active', 'created_at', 'updated_at')
        }),
    )


@admin.register(AvailabilityWindow)
class AvailabilityWindowAdmin(admin.ModelAdmin):
    list_display = ['teacher', 'is_recurring', 'day_of_week', 'specific_date', 'start_time', 'end_time']
    list_filter = ['is_recurring', 'day_of_week', 'teacher__teacher_type']
    search_fields = ['teacher__name', 'teacher__email']


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'class_name', 'course_mode', 'start_date', 'end_date', 'total_amount', 'is_active']
    list_filter = ['course_mode', 'class_name', 'is_active']
    search_fields = ['name', 'email', 'contact_no']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Personal Information', {
            'fields': ('user', 'name', 'email', 'contact_no', 'address')
        }),
        ('Enrolment', {
            'fields': ('class_name', 'courses', 'course_mode', 'start_date', 'end_date', 'total_amount')
        }),
        ('System Information', {
            'fields': ('is_active', 'created_at', 'updated_at')
        }),
    )
