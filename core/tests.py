"""
Tests for authentication and shared error handling
"""
import json
from datetime import timedelta
from io import StringIO
from types import SimpleNamespace

import jwt
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase, SimpleTestCase
from django.utils import timezone

from core.exceptions import ConflictError, DailyLimitError, AvailabilityError, FormatError
from core.graphql.schema import schema
from core.models import TokenBlacklist
from core.tokens import ACCESS, REFRESH, decode_token, issue_access_token, issue_refresh_token
from profile_management.models import Student, Teacher
from timetable.models import TimeSlot
from tutoring.urls import status_for_error

User = get_user_model()


class ExceptionTest(SimpleTestCase):
    """Test error codes exposed to API clients"""

    def test_extensions_carry_code_and_details(self):
        error = FormatError("Invalid time", details={'value': '25:00'})
        self.assertEqual(error.extensions, {'code': 'BAD_FORMAT', 'details': {'value': '25:00'}})
        self.assertEqual(str(error), 'Invalid time')

    def test_daily_limit_is_a_conflict(self):
        error = DailyLimitError("Part-time teachers can only have one booking per day")
        self.assertIsInstance(error, ConflictError)
        self.assertIsInstance(error, AvailabilityError)
        self.assertEqual(error.extensions['code'], 'CONFLICT')

    def test_http_status_mapping(self):
        self.assertEqual(status_for_error({'message': 'x', 'extensions': {'code': 'NOT_FOUND'}}), 404)
        self.assertEqual(status_for_error({'message': 'x', 'extensions': {'code': 'CONFLICT'}}), 409)
        self.assertEqual(status_for_error({'message': 'x', 'extensions': {'code': 'UNAVAILABLE'}}), 400)
        self.assertEqual(status_for_error({'message': 'x', 'extensions': {'code': 'UNAUTHENTICATED'}}), 401)
        self.assertEqual(status_for_error({'message': 'x', 'extensions': {'code': 'FORBIDDEN'}}), 403)
        self.assertEqual(status_for_error({'message': "Cannot query field 'foo'"}), 400)


class TokenTest(TestCase):
    """Test JWT issuing"""

    def setUp(self):
        self.user = User.objects.create_user(username='alice', email='alice@test.com', password='Test@12345')

    def test_access_and_refresh_tokens(self):
        access = decode_token(issue_access_token(self.user))
        refresh = decode_token(issue_refresh_token(self.user))

        self.assertEqual(access['type'], ACCESS)
        self.assertEqual(access['user_id'], self.user.id)
        self.assertEqual(refresh['type'], REFRESH)

    def test_tampered_token_is_rejected(self):
        token = jwt.encode({'user_id': self.user.id, 'type': ACCESS}, 'wrong-secret', algorithm='HS256')
        with self.assertRaises(jwt.InvalidTokenError):
            decode_token(token)

    def test_passwords_hashed_with_argon2(self):
        self.assertTrue(self.user.password.startswith('argon2'))


class AuthFlowTest(TestCase):
    """Test login, refresh, logout and the bearer token middleware"""

    LOGIN = """
        mutation($username: String!, $password: String!) {
            login(data: {username: $username, password: $password}) {
                accessToken
                refreshToken
                user { username isStaff }
            }
        }
    """

    def setUp(self):
        self.user = User.objects.create_user(
            username='admin', email='admin@test.com', password='Test@12345', is_staff=True
        )

    def post(self, query, variables=None, token=None):
        extra = {'HTTP_AUTHORIZATION': f'Bearer {token}'} if token else {}
        return self.client.post(
            '/graphql/',
            data=json.dumps({'query': query, 'variables': variables or {}}),
            content_type='application/json',
            **extra
        )

    def login(self, username='admin', password='Test@12345'):
        return self.post(self.LOGIN, {'username': username, 'password': password})

    def test_login_with_username_or_email(self):
        for username in ['admin', 'ADMIN@test.com']:
            response = self.login(username)
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json()['data']['login']['user']['username'], 'admin')

    def test_login_with_wrong_password(self):
        response = self.login(password='nope')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['errors'][0]['extensions']['code'], 'UNAUTHENTICATED')

    def test_me_requires_token(self):
        response = self.post('query { me { username } }')
        self.assertEqual(response.status_code, 401)

        token = self.login().json()['data']['login']['accessToken']
        response = self.post('query { me { username } }', token=token)
        self.assertEqual(response.json()['data']['me']['username'], 'admin')

    def test_refresh_token(self):
        tokens = self.login().json()['data']['login']

        response = self.post(
            'mutation($t: String!) { refreshToken(refreshToken: $t) { accessToken } }',
            {'t': tokens['refreshToken']}
        )
        self.assertEqual(response.status_code, 200)

        # An access token cannot be used to refresh
        response = self.post(
            'mutation($t: String!) { refreshToken(refreshToken: $t) { accessToken } }',
            {'t': tokens['accessToken']}
        )
        self.assertEqual(response.status_code, 401)

    def test_refresh_token_cannot_authenticate_requests(self):
        refresh = self.login().json()['data']['login']['refreshToken']
        response = self.post('query { me { username } }', token=refresh)

        self.assertEqual(response.status_code, 401)
        self.assertIn('Expected access token', response.json()['errors'][0]['message'])

    def test_logout_blacklists_token(self):
        token = self.login().json()['data']['login']['accessToken']

        response = self.post('mutation { logout { success } }', token=token)
        self.assertTrue(response.json()['data']['logout']['success'])
        self.assertTrue(TokenBlacklist.is_blacklisted(token))

        response = self.post('query { me { username } }', token=token)
        self.assertEqual(response.status_code, 401)
        self.assertIn('logged out', response.json()['errors'][0]['message'])


class DashboardStatsTest(TestCase):
    """Test dashboard statistics"""

    def setUp(self):
        self.admin = User.objects.create_user(username='admin', password='Test@12345', is_staff=True)
        teacher = Teacher.objects.create(
            name='Tara', email='tara@test.com', contact_no='1', address='x'
        )
        student = Student.objects.create(name='Sam', email='sam@test.com', contact_no='2')
        Student.objects.create(name='Sue', email='sue@test.com', contact_no='3')
        for slot_date, status in [
            (timezone.localdate(), TimeSlot.SCHEDULED),
            (timezone.localdate(), TimeSlot.CANCELLED),
            (timezone.localdate() + timedelta(days=1), TimeSlot.SCHEDULED),
        ]:
            TimeSlot.objects.create(
                teacher=teacher, teacher_name=teacher.name, teacher_type=teacher.teacher_type,
                student=student, student_name=student.name,
                date=slot_date, start_time='09:00', end_time='10:00',
                status=status, subject='math'
            )

    def test_dashboard_stats(self):
        context = SimpleNamespace(request=SimpleNamespace(user=self.admin))
        result = schema.execute_sync(
            'query { dashboardStats { studentCount teacherCount scheduledToday } }',
            context_value=context
        )

        self.assertIsNone(result.errors)
        self.assertEqual(
            result.data['dashboardStats'],
            {'studentCount': 2, 'teacherCount': 1, 'scheduledToday': 1}
        )


class CleanupBlacklistCommandTest(TestCase):
    """Test the blacklist cleanup command"""

    def setUp(self):
        now = timezone.now()
        TokenBlacklist.objects.create(token='expired-long-ago', expires_at=now - timedelta(days=10))
        TokenBlacklist.objects.create(token='expired-recently', expires_at=now - timedelta(hours=1))
        TokenBlacklist.objects.create(token='still-valid', expires_at=now + timedelta(hours=1))

    def test_removes_expired_tokens(self):
        out = StringIO()
        call_command('cleanup_blacklist', stdout=out)

        self.assertEqual(
            list(TokenBlacklist.objects.values_list('token', flat=True)),
            ['still-valid']
        )
        self.assertIn('removed 2 expired token(s)', out.getvalue())

    def test_keep_days(self):
        call_command('cleanup_blacklist', keep_days=5, stdout=StringIO())

        self.assertEqual(
            set(TokenBlacklist.objects.values_list('token', flat=True)),
            {'expired-recently', 'still-valid'}
        )
