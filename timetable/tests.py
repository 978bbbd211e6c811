"""
Tests for the booking system
"""
import itertools
import json
from datetime import date
from types import SimpleNamespace
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase, SimpleTestCase, override_settings

from core.exceptions import (
    AvailabilityError,
    BookingStateError,
    ConflictError,
    DailyLimitError,
    FormatError,
    NotFoundError,
)
from core.graphql.schema import schema
from core.tokens import issue_access_token
from profile_management.models import AvailabilityWindow, Student, Teacher
from timetable.config import SchedulingConfiguration
from timetable.models import TimeSlot
from timetable.services import BookingService
from timetable.slots import SlotGenerator
from timetable.utils import (
    TimeOrder,
    compare_times,
    day_of_week,
    minutes_to_time,
    overlaps,
    parse_date,
    parse_object_id,
    parse_time,
    time_to_minutes,
)

User = get_user_model()

MONDAY = date(2024, 6, 10)
NEXT_MONDAY = date(2024, 6, 17)


def make_teacher(name, teacher_type=Teacher.FULL_TIME, windows=()):
    teacher = Teacher.objects.create(
        name=name,
        email=f'{name.lower().replace(" ", ".")}@test.com',
        contact_no='555-0100',
        address='1 Main Street',
        teacher_type=teacher_type
    )
    for window in windows:
        AvailabilityWindow.objects.create(teacher=teacher, **window)
    return teacher


def make_student(name, **extra):
    return Student.objects.create(
        name=name,
        email=f'{name.lower().replace(" ", ".")}@test.com',
        contact_no='555-0200',
        **extra
    )


def weekly(day, start, end):
    return {'is_recurring': True, 'day_of_week': day, 'start_time': start, 'end_time': end}


class TimeUtilsTest(SimpleTestCase):
    """Test time and date helpers"""

    def test_parse_time_normalises(self):
        self.assertEqual(parse_time('9:05'), '09:05')
        self.assertEqual(parse_time('23:59'), '23:59')
        self.assertEqual(parse_time('00:00'), '00:00')

    def test_parse_time_rejects_malformed(self):
        for value in ['24:00', '12:60', '1200', '12:5', '', None, 900, 'ab:cd']:
            with self.assertRaises(FormatError):
                parse_time(value)

    def test_compare_times(self):
        self.assertIs(compare_times('09:00', '10:00'), TimeOrder.BEFORE)
        self.assertIs(compare_times('10:00', '10:00'), TimeOrder.EQUAL)
        self.assertIs(compare_times('18:00', '09:00'), TimeOrder.AFTER)

    def test_minutes_conversion(self):
        self.assertEqual(time_to_minutes('09:30'), 570)
        self.assertEqual(minutes_to_time(570), '09:30')
        with self.assertRaises(FormatError):
            minutes_to_time(24 * 60)

    def test_overlap_matches_three_clause_form(self):
        """The two-clause predicate agrees with the original three-clause check"""
        points = ['09:00', '09:30', '10:00', '10:30', '11:00']
        intervals = [(a, b) for a, b in itertools.combinations(points, 2)]

        for (a1, a2), (b1, b2) in itertools.product(intervals, repeat=2):
            three_clause = (
                (a1 < b2 and a2 > b1)
                or (a1 >= b1 and a1 < b2)
                or (a2 > b1 and a2 <= b2)
            )
            self.assertEqual(overlaps(a1, a2, b1, b2), three_clause, ((a1, a2), (b1, b2)))

    def test_back_to_back_intervals_do_not_overlap(self):
        self.assertFalse(overlaps('10:00', '11:00', '11:00', '12:00'))
        self.assertTrue(overlaps('10:00', '11:00', '10:59', '12:00'))

    def test_day_of_week_starts_on_sunday(self):
        self.assertEqual(day_of_week(date(2024, 6, 9)), 0)
        self.assertEqual(day_of_week(MONDAY), 1)
        self.assertEqual(day_of_week(date(2024, 6, 15)), 6)

    def test_parse_date(self):
        self.assertEqual(parse_date('2024-06-10'), MONDAY)
        self.assertEqual(parse_date('2024-06-10T15:30:00Z'), MONDAY)
        self.assertEqual(parse_date('2024-06-10 15:30'), MONDAY)
        for value in ['10/06/2024', '2024-06-10xyz', '2024-06-10Tnoon', '2024-06-31', '']:
            with self.assertRaises(FormatError):
                parse_date(value)

    def test_parse_object_id(self):
        self.assertEqual(parse_object_id('42'), 42)
        for value in ['abc', '0', -1, None, True]:
            with self.assertRaises(FormatError):
                parse_object_id(value)


class SchedulingConfigurationTest(SimpleTestCase):
    """Test scheduling configuration"""

    def test_defaults(self):
        config = SchedulingConfiguration()
        self.assertEqual(config.day_start_time, '09:00')
        self.assertEqual(config.day_end_time, '18:00')
        self.assertEqual(config.slot_duration, 60)
        self.assertEqual(config.working_minutes, 540)

    @override_settings(TIMETABLE={'day_start_time': '8:00', 'slot_duration': 30, 'unknown': 1})
    def test_from_settings(self):
        config = SchedulingConfiguration.from_settings()
        self.assertEqual(config.day_start_time, '08:00')
        self.assertEqual(config.slot_duration, 30)

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            SchedulingConfiguration(day_start_time='18:00', day_end_time='09:00')
        with self.assertRaises(ValueError):
            SchedulingConfiguration(slot_duration=0)


class BookingServiceTestBase(TestCase):

    def setUp(self):
        self.service = BookingService(SchedulingConfiguration())
        self.teacher = make_teacher('Tara Full')
        self.student1 = make_student('Sam One')
        self.student2 = make_student('Sue Two')

    def book(self, teacher, student, slot_date=MONDAY, start='09:00', end='10:00', **extra):
        return self.service.create_booking(
            teacher_id=teacher.pk,
            student_id=student.pk,
            date=slot_date,
            start_time=start,
            end_time=end,
            subject='math',
            **extra
        )


class CreateBookingTest(BookingServiceTestBase):
    """Test booking creation rules"""

    def test_create_copies_snapshot(self):
        booking = self.book(self.teacher, self.student1)

        self.assertEqual(booking.status, TimeSlot.SCHEDULED)
        self.assertEqual(booking.teacher_name, 'Tara Full')
        self.assertEqual(booking.teacher_type, Teacher.FULL_TIME)
        self.assertEqual(booking.student_name, 'Sam One')

        # Snapshot is not kept in sync
        self.teacher.name = 'Renamed'
        self.teacher.save()
        booking.refresh_from_db()
        self.assertEqual(booking.teacher_name, 'Tara Full')

    def test_end_to_end_scenario(self):
        first = self.book(self.teacher, self.student1, start='09:00', end='10:00')

        with self.assertRaises(ConflictError):
            self.book(self.teacher, self.student1, start='09:30', end='10:30')

        self.book(self.teacher, self.student2, start='10:00', end='11:00')

        self.service.delete_booking(first.pk)
        recreated = self.book(self.teacher, self.student1, start='09:00', end='10:00')
        self.assertEqual(recreated.start_time, '09:00')

    def test_student_double_booking_rejected(self):
        other_teacher = make_teacher('Omar Other')
        self.book(self.teacher, self.student1, start='09:00', end='10:00')

        with self.assertRaises(ConflictError) as cm:
            self.book(other_teacher, self.student1, start='09:30', end='10:30')
        self.assertIn('Student', cm.exception.details['reason'])

    def test_no_double_booking_after_many_requests(self):
        requests = [
            ('09:00', '10:00'), ('09:30', '10:30'), ('10:00', '11:00'),
            ('10:15', '10:45'), ('08:00', '12:00'), ('11:00', '12:00'),
        ]
        students = [make_student(f'Pupil {i}') for i in range(len(requests))]
        for (start, end), student in zip(requests, students):
            try:
                self.book(self.teacher, student, start=start, end=end)
            except ConflictError:
                pass

        intervals = list(
            TimeSlot.objects.filter(teacher=self.teacher, date=MONDAY, status=TimeSlot.SCHEDULED)
            .values_list('start_time', 'end_time')
        )
        self.assertEqual(len(intervals), 3)
        for (a1, a2), (b1, b2) in itertools.combinations(intervals, 2):
            self.assertFalse(overlaps(a1, a2, b1, b2))

    def test_cancelled_booking_frees_the_slot(self):
        booking = self.book(self.teacher, self.student1)
        self.service.update_booking(booking.pk, status=TimeSlot.CANCELLED)

        again = self.book(self.teacher, self.student1)
        self.assertEqual(again.status, TimeSlot.SCHEDULED)

    def test_missing_teacher_or_student(self):
        with self.assertRaises(NotFoundError):
            self.service.create_booking(9999, self.student1.pk, MONDAY, '09:00', '10:00', 'math')
        with self.assertRaises(NotFoundError):
            self.service.create_booking(self.teacher.pk, 9999, MONDAY, '09:00', '10:00', 'math')

    def test_malformed_input(self):
        with self.assertRaises(FormatError):
            self.book(self.teacher, self.student1, start='9am')
        with self.assertRaises(FormatError):
            self.book(self.teacher, self.student1, start='10:00', end='10:00')
        with self.assertRaises(FormatError):
            self.book(self.teacher, self.student1, slot_date='not-a-date')
        with self.assertRaises(FormatError):
            self.service.create_booking(self.teacher.pk, self.student1.pk, MONDAY, '09:00', '10:00', '  ')

    def test_unique_constraint_is_last_line_of_defence(self):
        """A request that slips past the checks is rejected by the database"""
        self.book(self.teacher, self.student1)

        with patch(
            'timetable.services.TimeSlotConflictValidator.find_conflict',
            return_value=(True, 'No conflicts found')
        ):
            with self.assertRaises(ConflictError):
                self.book(self.teacher, self.student2)

        self.assertEqual(TimeSlot.objects.filter(teacher=self.teacher).count(), 1)


class AvailabilityTest(BookingServiceTestBase):
    """Test availability rules for restricted teachers"""

    def setUp(self):
        super().setUp()
        self.visiting = make_teacher(
            'Vera Visiting', Teacher.VISITING, [weekly(1, '10:00', '12:00')]
        )
        self.part_time = make_teacher(
            'Paul Part', Teacher.PART_TIME, [weekly(1, '09:00', '12:00')]
        )

    def test_window_containment(self):
        self.book(self.visiting, self.student1, start='10:00', end='11:00')

        for start, end in [('09:30', '10:30'), ('11:00', '13:00')]:
            with self.assertRaises(AvailabilityError) as cm:
                self.book(self.visiting, self.student2, start=start, end=end)
            self.assertEqual(cm.exception.code, 'UNAVAILABLE')

    def test_window_only_applies_on_its_day(self):
        tuesday = date(2024, 6, 11)
        with self.assertRaises(AvailabilityError):
            self.book(self.visiting, self.student1, slot_date=tuesday, start='10:00', end='11:00')

    def test_one_off_window(self):
        one_off_day = date(2024, 6, 12)
        AvailabilityWindow.objects.create(
            teacher=self.visiting,
            is_recurring=False,
            specific_date=one_off_day,
            start_time='14:00',
            end_time='16:00'
        )
        booking = self.book(self.visiting, self.student1, slot_date=one_off_day, start='14:00', end='15:00')
        self.assertEqual(booking.date, one_off_day)

        with self.assertRaises(AvailabilityError):
            self.book(self.visiting, self.student1, slot_date=date(2024, 6, 19), start='14:00', end='15:00')

    def test_full_time_teacher_is_unrestricted(self):
        booking = self.book(self.teacher, self.student1, start='19:00', end='20:30')
        self.assertEqual(booking.end_time, '20:30')

    def test_part_time_one_booking_per_day(self):
        self.book(self.part_time, self.student1, start='09:00', end='10:00')

        for start, end in [('09:00', '10:00'), ('10:00', '11:00')]:
            with self.assertRaises(ConflictError) as cm:
                self.book(self.part_time, self.student2, start=start, end=end)
            self.assertIsInstance(cm.exception, DailyLimitError)

    def test_part_time_daily_limit_on_date_change(self):
        self.book(self.part_time, self.student1, slot_date=MONDAY)
        other = self.book(self.part_time, self.student2, slot_date=NEXT_MONDAY)

        with self.assertRaises(DailyLimitError):
            self.service.update_booking(other.pk, date=MONDAY)

    def test_part_time_fixed_slot_on_update(self):
        booking = self.book(self.part_time, self.student1, start='09:00', end='10:00')

        with self.assertRaises(AvailabilityError):
            self.service.update_booking(booking.pk, start_time='09:30', end_time='10:30')

        updated = self.service.update_booking(booking.pk, start_time='09:00', end_time='10:00')
        self.assertEqual((updated.start_time, updated.end_time), ('09:00', '10:00'))

    def test_part_time_update_outside_fixed_slot_rejected_even_for_status(self):
        booking = self.book(self.part_time, self.student1, start='10:00', end='11:00')

        with self.assertRaises(AvailabilityError):
            self.service.update_booking(booking.pk, status=TimeSlot.COMPLETED)

    def test_terminal_part_time_booking_outside_fixed_slot_takes_notes(self):
        booking = self.book(self.part_time, self.student1, start='10:00', end='11:00')
        TimeSlot.objects.filter(pk=booking.pk).update(status=TimeSlot.COMPLETED)

        updated = self.service.update_booking(booking.pk, notes='Covered chapter 3')
        self.assertEqual(updated.notes, 'Covered chapter 3')
        self.assertEqual((updated.start_time, updated.end_time), ('10:00', '11:00'))

        with self.assertRaises(BookingStateError):
            self.service.update_booking(booking.pk, start_time='09:00', end_time='10:00')

    @override_settings(TIMETABLE={'part_time_slot_start': '10:00', 'part_time_slot_end': '11:00'})
    def test_fixed_slot_comes_from_configuration(self):
        service = BookingService()
        booking = self.book(self.part_time, self.student1, start='10:00', end='11:00')

        updated = service.update_booking(booking.pk, notes='moved')
        self.assertEqual(updated.notes, 'moved')


class StoredTimeTest(BookingServiceTestBase):
    """Test that only zero-padded times reach the database"""

    def test_model_rejects_unpadded_times(self):
        booking = TimeSlot(
            teacher=self.teacher, teacher_name=self.teacher.name, teacher_type=self.teacher.teacher_type,
            student=self.student1, student_name=self.student1.name,
            date=MONDAY, start_time='9:00', end_time='9:30', subject='math'
        )
        with self.assertRaises(ValidationError) as cm:
            booking.full_clean()
        self.assertIn('start_time', cm.exception.message_dict)
        self.assertIn('end_time', cm.exception.message_dict)

        window = AvailabilityWindow(teacher=self.teacher, day_of_week=1, start_time='9:00', end_time='12:00')
        with self.assertRaises(ValidationError):
            window.full_clean()

    def test_admin_cannot_add_or_reschedule(self):
        admin_user = User.objects.create_superuser(username='root', email='root@test.com', password='Test@12345')
        self.client.force_login(admin_user)
        booking = self.book(self.teacher, self.student1, start='09:00', end='10:00')

        response = self.client.get('/admin/timetable/timeslot/add/')
        self.assertEqual(response.status_code, 403)

        response = self.client.post(f'/admin/timetable/timeslot/{booking.pk}/change/', {
            'subject': 'physics',
            'notes': 'Moved room',
            'start_time': '9:00',
            'end_time': '9:30',
            'status': TimeSlot.CANCELLED,
            '_save': 'Save',
        })
        self.assertEqual(response.status_code, 302)

        booking.refresh_from_db()
        self.assertEqual((booking.subject, booking.notes), ('physics', 'Moved room'))
        self.assertEqual((booking.start_time, booking.end_time), ('09:00', '10:00'))
        self.assertEqual(booking.status, TimeSlot.SCHEDULED)

        # The original slot still blocks an overlapping request
        with self.assertRaises(ConflictError):
            self.book(self.teacher, self.student2, start='09:00', end='10:00')


class UpdateBookingTest(BookingServiceTestBase):
    """Test booking updates and the status lifecycle"""

    def test_notes_update_does_not_conflict_with_itself(self):
        booking = self.book(self.teacher, self.student1)

        with patch('timetable.services.TimeSlotConflictValidator.find_conflict') as find_conflict:
            updated = self.service.update_booking(booking.pk, notes='Bring calculator')
        find_conflict.assert_not_called()
        self.assertEqual(updated.notes, 'Bring calculator')

    def test_same_time_update_excludes_itself(self):
        booking = self.book(self.teacher, self.student1)
        updated = self.service.update_booking(booking.pk, start_time='09:00', end_time='10:00')
        self.assertEqual(updated.pk, booking.pk)

    def test_reschedule_conflict(self):
        self.book(self.teacher, self.student1, start='09:00', end='10:00')
        second = self.book(self.teacher, self.student2, start='11:00', end='12:00')

        with self.assertRaises(ConflictError) as cm:
            self.service.update_booking(second.pk, start_time='09:30', end_time='10:30')
        self.assertEqual(cm.exception.message, 'Updated time slot conflicts with an existing booking')

        moved = self.service.update_booking(second.pk, start_time='10:00', end_time='11:00')
        self.assertEqual(moved.start_time, '10:00')

    def test_partial_time_update_uses_existing_values(self):
        booking = self.book(self.teacher, self.student1, start='09:00', end='10:00')

        with self.assertRaises(FormatError):
            self.service.update_booking(booking.pk, start_time='10:30')

        updated = self.service.update_booking(booking.pk, end_time='11:00')
        self.assertEqual((updated.start_time, updated.end_time), ('09:00', '11:00'))

    def test_update_refreshes_snapshot(self):
        booking = self.book(self.teacher, self.student1)
        self.student1.name = 'Samuel One'
        self.student1.save()

        updated = self.service.update_booking(booking.pk, notes='x')
        self.assertEqual(updated.student_name, 'Samuel One')

    def test_terminal_bookings_are_locked(self):
        booking = self.book(self.teacher, self.student1)
        self.service.update_booking(booking.pk, status=TimeSlot.COMPLETED)

        with self.assertRaises(BookingStateError):
            self.service.update_booking(booking.pk, start_time='11:00', end_time='12:00')
        with self.assertRaises(BookingStateError):
            self.service.update_booking(booking.pk, status=TimeSlot.SCHEDULED)

        updated = self.service.update_booking(booking.pk, notes='Went well')
        self.assertEqual(updated.notes, 'Went well')
        self.assertEqual(updated.status, TimeSlot.COMPLETED)

    def test_invalid_status(self):
        booking = self.book(self.teacher, self.student1)
        with self.assertRaises(FormatError):
            self.service.update_booking(booking.pk, status='postponed')

    def test_missing_booking(self):
        with self.assertRaises(NotFoundError):
            self.service.update_booking(9999, notes='x')
        with self.assertRaises(NotFoundError):
            self.service.delete_booking(9999)


class ListBookingsTest(BookingServiceTestBase):
    """Test booking listing filters"""

    def setUp(self):
        super().setUp()
        self.first = self.book(self.teacher, self.student1, slot_date=NEXT_MONDAY, start='09:00', end='10:00')
        self.second = self.book(self.teacher, self.student2, slot_date=MONDAY, start='11:00', end='12:00')
        self.third = self.book(self.teacher, self.student1, slot_date=MONDAY, start='09:00', end='10:00')
        self.service.update_booking(self.third.pk, status=TimeSlot.CANCELLED)

    def test_ordered_by_date_and_start(self):
        bookings = list(BookingService.list_bookings())
        self.assertEqual(
            [b.pk for b in bookings],
            [self.third.pk, self.second.pk, self.first.pk]
        )

    def test_filters(self):
        self.assertEqual(BookingService.list_bookings(student_id=self.student1.pk).count(), 2)
        self.assertEqual(BookingService.list_bookings(status=TimeSlot.CANCELLED).count(), 1)
        self.assertEqual(BookingService.list_bookings(start_date='2024-06-11', end_date=NEXT_MONDAY).count(), 1)
        self.assertEqual(BookingService.list_bookings(start_date=MONDAY, end_date='2024-06-16').count(), 2)
        self.assertEqual(
            BookingService.list_bookings(teacher_id=self.teacher.pk, start_date=MONDAY, end_date=MONDAY,
                                         status=TimeSlot.SCHEDULED).count(),
            1
        )

    def test_date_range_needs_both_ends(self):
        self.assertEqual(BookingService.list_bookings(start_date='2024-06-11').count(), 3)
        self.assertEqual(BookingService.list_bookings(end_date=MONDAY).count(), 3)

    def test_invalid_status_filter(self):
        with self.assertRaises(FormatError):
            BookingService.list_bookings(status='unknown')


class AvailableStudentsTest(BookingServiceTestBase):
    """Test the free-student lookup"""

    def test_excludes_overlapping_students(self):
        self.book(self.teacher, self.student1, start='09:00', end='10:00')
        make_student('Ina Active', is_active=False)

        free = self.service.available_students(self.teacher.pk, MONDAY, '09:30', '10:30')
        self.assertEqual([s.name for s in free], ['Sue Two'])

        back_to_back = self.service.available_students(self.teacher.pk, MONDAY, '10:00', '11:00')
        self.assertEqual([s.name for s in back_to_back], ['Sam One', 'Sue Two'])

        everyone = self.service.available_students(self.teacher.pk, MONDAY, '09:30', '10:30', exclude_booked=False)
        self.assertEqual(len(everyone), 2)

    def test_unknown_teacher(self):
        with self.assertRaises(NotFoundError):
            self.service.available_students(9999, MONDAY, '09:00', '10:00')


class SlotGeneratorTest(BookingServiceTestBase):
    """Test candidate slot generation"""

    def test_default_working_day(self):
        self.book(self.teacher, self.student1, start='09:00', end='10:00')
        self.book(self.teacher, self.student2, start='10:30', end='11:30')

        slots = SlotGenerator(SchedulingConfiguration()).generate_slots(self.teacher.pk, MONDAY)

        self.assertEqual(len(slots), 9)
        self.assertEqual((slots[0].start, slots[-1].end), ('09:00', '18:00'))
        self.assertFalse(slots[0].available)
        # Exact match only: 10:30-11:30 overlaps these but does not equal them
        self.assertTrue(slots[1].available)
        self.assertTrue(slots[2].available)

    def test_partial_slot_at_end_of_day_is_dropped(self):
        slots = SlotGenerator(SchedulingConfiguration(slot_duration=50)).generate_slots(self.teacher.pk, MONDAY)

        self.assertEqual(len(slots), 10)
        self.assertEqual(slots[-1].end, '17:20')

    def test_cancelled_bookings_do_not_block(self):
        booking = self.book(self.teacher, self.student1)
        self.service.update_booking(booking.pk, status=TimeSlot.CANCELLED)

        slots = SlotGenerator(SchedulingConfiguration()).generate_slots(self.teacher.pk, MONDAY)
        self.assertTrue(all(slot.available for slot in slots))

    def test_unknown_teacher(self):
        with self.assertRaises(NotFoundError):
            SlotGenerator().generate_slots(9999, MONDAY)


class TimetableGraphQLTest(TestCase):
    """Test the booking API"""

    CREATE_BOOKING = """
        mutation Create($teacherId: ID!, $studentId: ID!, $date: Date!, $start: String!, $end: String!) {
            createBooking(teacherId: $teacherId, studentId: $studentId, date: $date,
                          startTime: $start, endTime: $end, subject: "math") {
                id
                teacherName
                studentName
                status
                startTime
                endTime
            }
        }
    """

    def setUp(self):
        self.admin = User.objects.create_user(username='admin', password='Test@12345', is_staff=True)
        self.viewer = User.objects.create_user(username='viewer', password='Test@12345')
        self.teacher = make_teacher('Tara Full')
        self.student = make_student('Sam One')

    def execute(self, query, variables=None, user=None):
        context = SimpleNamespace(request=SimpleNamespace(user=user or self.admin))
        return schema.execute_sync(query, variable_values=variables, context_value=context)

    def booking_variables(self, start='09:00', end='10:00'):
        return {
            'teacherId': str(self.teacher.pk),
            'studentId': str(self.student.pk),
            'date': '2024-06-10',
            'start': start,
            'end': end,
        }

    def test_create_and_list(self):
        result = self.execute(self.CREATE_BOOKING, self.booking_variables())
        self.assertIsNone(result.errors)
        self.assertEqual(result.data['createBooking']['teacherName'], 'Tara Full')
        self.assertEqual(result.data['createBooking']['status'], 'scheduled')

        result = self.execute(
            'query { bookings(startDate: "2024-06-10", endDate: "2024-06-10") { id date startTime } }',
            user=self.viewer
        )
        self.assertIsNone(result.errors)
        self.assertEqual(result.data['bookings'][0]['date'], '2024-06-10')

    def test_conflict_error_code(self):
        self.execute(self.CREATE_BOOKING, self.booking_variables())
        result = self.execute(self.CREATE_BOOKING, self.booking_variables('09:30', '10:30'))

        self.assertEqual(result.errors[0].extensions['code'], 'CONFLICT')

    def test_bad_format_error_code(self):
        result = self.execute(self.CREATE_BOOKING, self.booking_variables('25:00', '26:00'))
        self.assertEqual(result.errors[0].extensions['code'], 'BAD_FORMAT')

    def test_update_and_delete(self):
        booking_id = self.execute(self.CREATE_BOOKING, self.booking_variables()).data['createBooking']['id']

        result = self.execute(
            'mutation($id: ID!) { updateBooking(bookingId: $id, status: "completed", notes: "done") { status notes } }',
            {'id': booking_id}
        )
        self.assertIsNone(result.errors)
        self.assertEqual(result.data['updateBooking'], {'status': 'completed', 'notes': 'done'})

        result = self.execute(
            'mutation($id: ID!) { updateBooking(bookingId: $id, startTime: "11:00", endTime: "12:00") { id } }',
            {'id': booking_id}
        )
        self.assertEqual(result.errors[0].extensions['code'], 'INVALID_STATE')

        result = self.execute('mutation($id: ID!) { deleteBooking(bookingId: $id) }', {'id': booking_id})
        self.assertTrue(result.data['deleteBooking'])
        self.assertFalse(TimeSlot.objects.exists())

        result = self.execute('mutation($id: ID!) { deleteBooking(bookingId: $id) }', {'id': booking_id})
        self.assertEqual(result.errors[0].extensions['code'], 'NOT_FOUND')

    def test_available_slots_and_students(self):
        self.execute(self.CREATE_BOOKING, self.booking_variables())

        result = self.execute(
            'query($id: ID!) { availableSlots(teacherId: $id, date: "2024-06-10") { start end available } }',
            {'id': str(self.teacher.pk)}
        )
        self.assertIsNone(result.errors)
        self.assertEqual(result.data['availableSlots'][0], {'start': '09:00', 'end': '10:00', 'available': False})

        result = self.execute(
            'query($id: ID!) { availableStudents(teacherId: $id, date: "2024-06-10", '
            'startTime: "09:00", endTime: "10:00") { name } }',
            {'id': str(self.teacher.pk)}
        )
        self.assertEqual(result.data['availableStudents'], [])

    def test_only_staff_can_book(self):
        result = self.execute(self.CREATE_BOOKING, self.booking_variables(), user=self.viewer)
        self.assertEqual(result.errors[0].extensions['code'], 'FORBIDDEN')
        self.assertFalse(TimeSlot.objects.exists())

    def test_http_status_codes(self):
        token = issue_access_token(self.admin)
        payload = {'query': self.CREATE_BOOKING, 'variables': self.booking_variables()}

        response = self.client.post('/graphql/', data=json.dumps(payload), content_type='application/json')
        self.assertEqual(response.status_code, 401)

        response = self.client.post(
            '/graphql/', data=json.dumps(payload), content_type='application/json',
            HTTP_AUTHORIZATION=f'Bearer {token}'
        )
        self.assertEqual(response.status_code, 200)

        response = self.client.post(
            '/graphql/', data=json.dumps(payload), content_type='application/json',
            HTTP_AUTHORIZATION=f'Bearer {token}'
        )
        self.assertEqual(response.status_code, 409)

        payload['variables']['teacherId'] = '9999'
        response = self.client.post(
            '/graphql/', data=json.dumps(payload), content_type='application/json',
            HTTP_AUTHORIZATION=f'Bearer {token}'
        )
        self.assertEqual(response.status_code, 404)
