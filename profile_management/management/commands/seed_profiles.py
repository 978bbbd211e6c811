"""
python manage.py seed_profiles
Management command to seed dummy profiles for testing
Creates an admin user, sample teachers of every type and sample students
"""
from datetime import date, timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from profile_management.models import Student, Teacher
from profile_management.utils import calculate_course_totals, replace_availability_windows

User = get_user_model()


TEACHERS = [
    {
        'name': 'Anita Rao',
        'email': 'anita.rao@tutoring.local',
        'teacher_type': Teacher.FULL_TIME,
        'subjects': {'math': {'selected': True, 'fee': 500}, 'physics': {'selected': True, 'fee': 600}},
        'windows': [],
    },
    {
        'name': 'Ben Carter',
        'email': 'ben.carter@tutoring.local',
        'teacher_type': Teacher.PART_TIME,
        'subjects': {'english': {'selected': True, 'fee': 400}},
        # Monday and Wednesday mornings
        'windows': [
            {'is_recurring': True, 'day_of_week': 1, 'start_time': '09:00', 'end_time': '12:00'},
            {'is_recurring': True, 'day_of_week': 3, 'start_time': '09:00', 'end_time': '12:00'},
        ],
    },
    {
        'name': 'Chen Wei',
        'email': 'chen.wei@tutoring.local',
        'teacher_type': Teacher.VISITING,
        'subjects': {'chemistry': {'selected': True, 'fee': 700}},
        'windows': [
            {'is_recurring': True, 'day_of_week': 5, 'start_time': '14:00', 'end_time': '18:00'},
        ],
    },
]


class Command(BaseCommand):
    help = 'Seed dummy profiles (admin user, teachers, students)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--students',
            type=int,
            default=10,
            help='Number of students to create (default: 10)',
        )

    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING('=' * 60))
        self.stdout.write(self.style.WARNING('Seeding Profiles...'))
        self.stdout.write(self.style.WARNING('=' * 60))
        self.stdout.write('')

        with transaction.atomic():
            self.stdout.write(self.style.WARNING('Creating Admin User...'))
            admin_user = self.create_admin_user()

            self.stdout.write(self.style.WARNING('\nCreating Teachers...'))
            teachers = [self.create_teacher(profile) for profile in TEACHERS]

            self.stdout.write(self.style.WARNING('\nCreating Students...'))
            for i in range(1, options['students'] + 1):
                self.create_student(i)

        self.stdout.write('')
        self.stdout.write(self.style.SUCCESS('=' * 60))
        self.stdout.write(self.style.SUCCESS('✓ ALL PROFILES CREATED SUCCESSFULLY!'))
        self.stdout.write(self.style.SUCCESS('=' * 60))
        self.stdout.write(f'Admin login: {admin_user.username} / Test@123')
        self.stdout.write(f'Teachers: {len(teachers)}, students: {Student.objects.count()}')

    def create_admin_user(self):
        """Create admin user"""
        username = 'admin'

        if User.objects.filter(username=username).exists():
            self.stdout.write(self.style.WARNING(f'  ⚠ Admin user {username} already exists, skipping...'))
            return User.objects.get(username=username)

        user = User.objects.create_superuser(
            username=username,
            email='admin@tutoring.local',
            password='Test@123'
        )

        self.stdout.write(self.style.SUCCESS(f'  ✓ Created admin user: {username}'))
        return user

    def create_teacher(self, profile):
        """Create a teacher with its availability windows"""
        teacher = Teacher.objects.filter(email=profile['email']).first()
        if teacher:
            self.stdout.write(self.style.WARNING(f'  ⚠ Teacher {profile["email"]} already exists, skipping...'))
            return teacher

        teacher = Teacher.objects.create(
            name=profile['name'],
            email=profile['email'],
            contact_no='555-0100',
            address='1 Main Street',
            teacher_type=profile['teacher_type'],
            subjects=profile['subjects'],
            joining_date=date.today()
        )
        if profile['windows']:
            replace_availability_windows(teacher, profile['windows'])

        self.stdout.write(self.style.SUCCESS(
            f'  ✓ Created teacher: {teacher.name} ({teacher.teacher_type}, {len(profile["windows"])} window(s))'
        ))
        return teacher

    def create_student(self, index):
        """Create a student with computed course fees"""
        email = f'student{index}@tutoring.local'

        if Student.objects.filter(email=email).exists():
            self.stdout.write(self.style.WARNING(f'  ⚠ Student {email} already exists, skipping...'))
            return

        courses, total_amount = calculate_course_totals({
            'math': {'selected': True, 'fee': 500, 'classes': 4},
            'english': {'selected': index % 2 == 0, 'fee': 400, 'classes': 2},
        })
        start_date = date.today()

        Student.objects.create(
            name=f'Student {index}',
            email=email,
            contact_no=f'555-{str(index).zfill(4)}',
            class_name=f'Grade {6 + index % 6}',
            courses=courses,
            course_mode='OFFLINE' if index % 3 else 'ONLINE',
            start_date=start_date,
            end_date=start_date + timedelta(days=90),
            total_amount=total_amount
        )

        self.stdout.write(self.style.SUCCESS(f'  ✓ Created student: {email} (total {total_amount})'))
