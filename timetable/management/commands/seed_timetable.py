"""
Management command to seed sample bookings
Run seed_profiles first
"""
from datetime import date, timedelta

from django.core.management.base import BaseCommand, CommandError

from core.exceptions import SchedulingError
from profile_management.models import Student, Teacher
from timetable.services import BookingService
from timetable.slots import SlotGenerator
from timetable.utils import day_of_week


class Command(BaseCommand):
    help = 'Seed sample bookings for the coming days through the booking rules'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            type=int,
            default=7,
            help='Number of days to fill starting today (default: 7)',
        )

    def handle(self, *args, **options):
        teachers = list(Teacher.objects.filter(is_active=True).prefetch_related('availability_windows'))
        students = list(Student.objects.filter(is_active=True).order_by('name'))
        if not teachers or not students:
            raise CommandError('No teachers or students found. Run: python manage.py seed_profiles')

        self.stdout.write(self.style.WARNING('Starting booking seeding...'))

        service = BookingService()
        generator = SlotGenerator(service.config)
        created = 0
        rejected = 0
        student_index = 0

        for offset in range(options['days']):
            slot_date = date.today() + timedelta(days=offset)
            # Sunday is a day off
            if day_of_week(slot_date) == 0:
                continue

            for teacher in teachers:
                subject = next(iter(teacher.subjects or {}), 'general')
                for slot in self.candidate_slots(teacher, slot_date, service, generator):
                    student = students[student_index % len(students)]
                    student_index += 1
                    try:
                        service.create_booking(
                            teacher_id=teacher.pk,
                            student_id=student.pk,
                            date=slot_date,
                            start_time=slot.start,
                            end_time=slot.end,
                            subject=subject
                        )
                        created += 1
                    except SchedulingError as e:
                        rejected += 1
                        self.stdout.write(f'  - Skipped {teacher.name} {slot_date} {slot.start}: {e.message}')

        self.stdout.write('')
        self.stdout.write(self.style.SUCCESS('=' * 60))
        self.stdout.write(self.style.SUCCESS('SEEDING COMPLETED SUCCESSFULLY'))
        self.stdout.write(self.style.SUCCESS('=' * 60))
        self.stdout.write(self.style.SUCCESS(f'Bookings created: {created}'))
        self.stdout.write(self.style.WARNING(f'Requests rejected by booking rules: {rejected}'))
        self.stdout.write('')
        self.stdout.write(self.style.WARNING('Next steps:'))
        self.stdout.write('1. Run: python manage.py runserver')
        self.stdout.write('2. Access admin at: http://localhost:8000/admin/')
        self.stdout.write('3. Access GraphQL at: http://localhost:8000/graphql/')

    def candidate_slots(self, teacher, slot_date, service, generator):
        """Two morning slots for full-time teachers, the fixed slot for part-time"""
        if teacher.is_part_time:
            return [
                slot for slot in generator.generate_slots(teacher.pk, slot_date)
                if slot.start == service.config.part_time_slot_start
                and slot.end == service.config.part_time_slot_end
            ]
        return [slot for slot in generator.generate_slots(teacher.pk, slot_date) if slot.available][:2]
