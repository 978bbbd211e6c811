"""
Tests for teacher and student profiles
"""
from datetime import date
from io import StringIO
from types import SimpleNamespace

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.db import IntegrityError, transaction
from django.test import TestCase, SimpleTestCase

from core.graphql.schema import schema
from profile_management.models import AvailabilityWindow, Student, Teacher
from profile_management.utils import calculate_course_totals, replace_availability_windows
from profile_management.validators import TeacherProfileValidator
from timetable.models import TimeSlot

User = get_user_model()


class CourseTotalsTest(SimpleTestCase):
    """Test course fee calculation"""

    def test_selected_courses_are_charged(self):
        courses, total = calculate_course_totals({
            'math': {'selected': True, 'fee': 500, 'classes': 4},
            'physics': {'selected': True, 'fee': '300'},
            'art': {'selected': False, 'fee': 200, 'classes': 3},
        })

        self.assertEqual(courses['math']['total'], 2000)
        self.assertEqual(courses['physics']['classes'], 1)
        self.assertEqual(courses['physics']['total'], 300)
        self.assertEqual(courses['art'], {'selected': False, 'fee': 0, 'classes': 0, 'total': 0})
        self.assertEqual(total, 2300)

    def test_empty_courses(self):
        self.assertEqual(calculate_course_totals(None), ({}, 0))


class TeacherProfileValidatorTest(SimpleTestCase):
    """Test availability window validation"""

    def test_valid_windows(self):
        self.assertEqual(
            TeacherProfileValidator.validate_availability_window(
                {'is_recurring': True, 'day_of_week': 0, 'start_time': '9:00', 'end_time': '10:00'}
            ),
            (True, "")
        )
        self.assertTrue(TeacherProfileValidator.validate_availability_window(
            {'is_recurring': False, 'specific_date': date(2024, 6, 10), 'start_time': '14:00', 'end_time': '15:00'}
        )[0])

    def test_invalid_windows(self):
        invalid = [
            {'is_recurring': True, 'day_of_week': 7, 'start_time': '09:00', 'end_time': '10:00'},
            {'is_recurring': True, 'day_of_week': None, 'start_time': '09:00', 'end_time': '10:00'},
            {'is_recurring': False, 'start_time': '09:00', 'end_time': '10:00'},
            {'is_recurring': True, 'day_of_week': 1, 'start_time': '9am', 'end_time': '10:00'},
            {'is_recurring': True, 'day_of_week': 1, 'start_time': '10:00', 'end_time': '09:00'},
        ]
        for window in invalid:
            is_valid, error_message = TeacherProfileValidator.validate_availability_window(window)
            self.assertFalse(is_valid, window)
            self.assertTrue(error_message)

    def test_part_time_needs_a_window(self):
        is_valid, error_message = TeacherProfileValidator.validate_availability(Teacher.PART_TIME, [])
        self.assertFalse(is_valid)
        self.assertIn('part-time', error_message)

        self.assertTrue(TeacherProfileValidator.validate_availability(Teacher.VISITING, [])[0])
        self.assertTrue(TeacherProfileValidator.validate_availability(Teacher.FULL_TIME, [])[0])


class AvailabilityWindowModelTest(TestCase):
    """Test the availability window variants"""

    def setUp(self):
        self.teacher = Teacher.objects.create(
            name='Vera', email='vera@test.com', contact_no='1', address='x',
            teacher_type=Teacher.VISITING
        )

    def test_recurring_window(self):
        window = AvailabilityWindow(teacher=self.teacher, day_of_week=1, start_time='10:00', end_time='12:00')
        window.full_clean()

        self.assertTrue(window.matches_date(date(2024, 6, 10)))
        self.assertFalse(window.matches_date(date(2024, 6, 11)))
        self.assertTrue(window.contains('10:00', '12:00'))
        self.assertFalse(window.contains('11:00', '13:00'))

    def test_one_off_window(self):
        window = AvailabilityWindow(
            teacher=self.teacher, is_recurring=False, specific_date=date(2024, 6, 12),
            start_time='14:00', end_time='16:00'
        )
        window.full_clean()

        self.assertTrue(window.matches_date(date(2024, 6, 12)))
        self.assertFalse(window.matches_date(date(2024, 6, 19)))

    def test_mixed_variant_is_rejected(self):
        window = AvailabilityWindow(
            teacher=self.teacher, is_recurring=True, day_of_week=1,
            specific_date=date(2024, 6, 12), start_time='14:00', end_time='16:00'
        )
        with self.assertRaises(ValidationError):
            window.full_clean()

    def test_database_enforces_variant(self):
        with self.assertRaises(IntegrityError), transaction.atomic():
            AvailabilityWindow.objects.create(
                teacher=self.teacher, is_recurring=False, start_time='14:00', end_time='16:00'
            )

    def test_replace_windows(self):
        replace_availability_windows(self.teacher, [
            {'is_recurring': True, 'day_of_week': 1, 'start_time': '9:00', 'end_time': '10:00'},
        ])
        windows = replace_availability_windows(self.teacher, [
            {'is_recurring': True, 'day_of_week': 2, 'start_time': '9:00', 'end_time': '10:00'},
            {'is_recurring': False, 'specific_date': date(2024, 6, 12), 'start_time': '14:00', 'end_time': '16:00'},
        ])

        self.assertEqual(len(windows), 2)
        self.assertEqual(
            list(self.teacher.availability_windows.values_list('day_of_week', 'start_time')),
            [(2, '09:00'), (None, '14:00')]
        )


class ProfileGraphQLTest(TestCase):
    """Test the teacher and student API"""

    CREATE_TEACHER = """
        mutation($data: CreateTeacherInput!) {
            createTeacher(data: $data) {
                id
                teacherType
                availabilityWindows { dayOfWeek dayName startTime endTime }
            }
        }
    """

    def setUp(self):
        self.admin = User.objects.create_user(username='admin', password='Test@12345', is_staff=True)
        self.viewer = User.objects.create_user(username='viewer', password='Test@12345')

    def execute(self, query, variables=None, user=None):
        context = SimpleNamespace(request=SimpleNamespace(user=user or self.admin))
        return schema.execute_sync(query, variable_values=variables, context_value=context)

    def teacher_data(self, **overrides):
        data = {
            'name': 'Paul Part',
            'email': 'paul@test.com',
            'contactNo': '555-0100',
            'address': '1 Main Street',
            'teacherType': Teacher.PART_TIME,
            'availableTimeSlots': [{'dayOfWeek': 1, 'startTime': '09:00', 'endTime': '12:00'}],
        }
        data.update(overrides)
        return data

    def test_create_part_time_teacher(self):
        result = self.execute(self.CREATE_TEACHER, {'data': self.teacher_data()})

        self.assertIsNone(result.errors)
        teacher = result.data['createTeacher']
        self.assertEqual(teacher['teacherType'], 'part-time')
        self.assertEqual(
            teacher['availabilityWindows'],
            [{'dayOfWeek': 1, 'dayName': 'Monday', 'startTime': '09:00', 'endTime': '12:00'}]
        )

    def test_part_time_teacher_without_windows(self):
        result = self.execute(self.CREATE_TEACHER, {'data': self.teacher_data(availableTimeSlots=[])})
        self.assertEqual(result.errors[0].extensions['code'], 'BAD_FORMAT')
        self.assertFalse(Teacher.objects.exists())

    def test_invalid_teacher_type(self):
        result = self.execute(self.CREATE_TEACHER, {'data': self.teacher_data(teacherType='weekend')})
        self.assertEqual(result.errors[0].extensions['code'], 'BAD_FORMAT')

    def test_duplicate_email(self):
        self.execute(self.CREATE_TEACHER, {'data': self.teacher_data()})
        result = self.execute(self.CREATE_TEACHER, {'data': self.teacher_data(email='PAUL@test.com')})
        self.assertEqual(result.errors[0].extensions['code'], 'CONFLICT')

    def test_switch_to_full_time_clears_windows(self):
        teacher_id = self.execute(self.CREATE_TEACHER, {'data': self.teacher_data()}).data['createTeacher']['id']

        result = self.execute(
            'mutation($id: ID!) { updateTeacher(teacherId: $id, data: {teacherType: "full-time"}) '
            '{ teacherType availabilityWindows { id } } }',
            {'id': teacher_id}
        )

        self.assertIsNone(result.errors)
        self.assertEqual(result.data['updateTeacher'], {'teacherType': 'full-time', 'availabilityWindows': []})
        self.assertFalse(AvailabilityWindow.objects.exists())

    def test_switch_to_part_time_needs_windows(self):
        teacher_id = self.execute(
            self.CREATE_TEACHER, {'data': self.teacher_data(teacherType=Teacher.FULL_TIME, availableTimeSlots=None)}
        ).data['createTeacher']['id']

        result = self.execute(
            'mutation($id: ID!) { updateTeacher(teacherId: $id, data: {teacherType: "part-time"}) { id } }',
            {'id': teacher_id}
        )
        self.assertEqual(result.errors[0].extensions['code'], 'BAD_FORMAT')

    def test_teacher_queries(self):
        self.execute(self.CREATE_TEACHER, {'data': self.teacher_data()})
        self.execute(self.CREATE_TEACHER, {'data': self.teacher_data(
            name='Tara Full', email='tara@test.com', teacherType=Teacher.FULL_TIME, availableTimeSlots=None
        )})

        result = self.execute(
            'query { teachers(teacherType: "part-time") { name } teachersCount }',
            user=self.viewer
        )
        self.assertIsNone(result.errors)
        self.assertEqual(result.data, {'teachers': [{'name': 'Paul Part'}], 'teachersCount': 2})

        result = self.execute('query { teacher(teacherId: "9999") { id } }', user=self.viewer)
        self.assertEqual(result.errors[0].extensions['code'], 'NOT_FOUND')

    def test_create_student_computes_fees(self):
        result = self.execute(
            'mutation($data: CreateStudentInput!) { createStudent(data: $data) { id totalAmount courses } }',
            {'data': {
                'name': 'Sam One',
                'email': 'sam@test.com',
                'contactNo': '555-0200',
                'courses': {'math': {'selected': True, 'fee': 500, 'classes': 4}},
            }}
        )

        self.assertIsNone(result.errors)
        self.assertEqual(result.data['createStudent']['totalAmount'], 2000)
        self.assertEqual(result.data['createStudent']['courses']['math']['total'], 2000)

    def test_student_date_range(self):
        result = self.execute(
            'mutation($data: CreateStudentInput!) { createStudent(data: $data) { id } }',
            {'data': {
                'name': 'Sam One',
                'email': 'sam@test.com',
                'contactNo': '555-0200',
                'startDate': '2024-06-10',
                'endDate': '2024-06-01',
            }}
        )
        self.assertEqual(result.errors[0].extensions['code'], 'BAD_FORMAT')

    def test_update_and_count_students(self):
        student = Student.objects.create(name='Sam One', email='sam@test.com', contact_no='1')

        result = self.execute(
            'mutation($id: ID!) { updateStudent(studentId: $id, data: {isActive: false, className: "Grade 7"}) '
            '{ isActive className } }',
            {'id': str(student.pk)}
        )
        self.assertEqual(result.data['updateStudent'], {'isActive': False, 'className': 'Grade 7'})

        result = self.execute('query { students(isActive: true) { id } studentsCount }')
        self.assertEqual(result.data, {'students': [], 'studentsCount': 1})

    def test_deleting_profiles_keeps_bookings(self):
        teacher = Teacher.objects.create(name='Tara', email='tara@test.com', contact_no='1', address='x')
        student = Student.objects.create(name='Sam', email='sam@test.com', contact_no='2')
        booking = TimeSlot.objects.create(
            teacher=teacher, teacher_name='Tara', teacher_type=teacher.teacher_type,
            student=student, student_name='Sam',
            date=date(2024, 6, 10), start_time='09:00', end_time='10:00', subject='math'
        )

        self.execute('mutation($id: ID!) { deleteTeacher(teacherId: $id) }', {'id': str(teacher.pk)})
        self.execute('mutation($id: ID!) { deleteStudent(studentId: $id) }', {'id': str(student.pk)})

        booking.refresh_from_db()
        self.assertIsNone(booking.teacher)
        self.assertIsNone(booking.student)
        self.assertEqual((booking.teacher_name, booking.student_name), ('Tara', 'Sam'))

    def test_only_staff_can_change_profiles(self):
        result = self.execute(self.CREATE_TEACHER, {'data': self.teacher_data()}, user=self.viewer)
        self.assertEqual(result.errors[0].extensions['code'], 'FORBIDDEN')


class SeedCommandsTest(TestCase):
    """Test the demo data commands"""

    def test_seed_profiles_and_timetable(self):
        call_command('seed_profiles', students=4, stdout=StringIO())
        call_command('seed_profiles', students=4, stdout=StringIO())

        self.assertEqual(Teacher.objects.count(), 3)
        self.assertEqual(Student.objects.count(), 4)
        self.assertTrue(User.objects.get(username='admin').is_superuser)
        self.assertTrue(Teacher.objects.get(teacher_type=Teacher.PART_TIME).availability_windows.exists())

        call_command('seed_timetable', days=7, stdout=StringIO())
        self.assertTrue(TimeSlot.objects.exists())
        for teacher in Teacher.objects.filter(teacher_type=Teacher.PART_TIME):
            dates = list(teacher.time_slots.values_list('date', flat=True))
            self.assertEqual(len(dates), len(set(dates)))
