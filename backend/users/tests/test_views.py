"""
Test views for the users app.
"""
from django.urls import reverse
from rest_framework.test import APITestCase
from rest_framework import status
from users.models import User, Student, Role
from users.factory import (
    UserFactory, AdmissionUserFactory, RegistrarUserFactory,
    ProfessorUserFactory, StudentFactory,
)
from curriculum.factory import ProgramFactory


class LoginViewTestCase(APITestCase):
    """Test cases for LoginView."""

    def setUp(self):
        """Set up test data."""
        self.user = User.objects.create_user(
            'registrar',
            'testpass123',
            role=Role.REGISTRAR,
            first_name='Rachel',
            last_name='Registrar'
        )
        self.url = reverse('accounts:login')

    def test_successful_login(self):
        data = {
            'username': 'registrar',
            'password': 'testpass123'
        }

        response = self.client.post(self.url, data)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('user', response.data)
        self.assertIn('access', response.data['tokens'])
        self.assertIn('refresh', response.data['tokens'])
        self.assertEqual(response.data['user']['role'], Role.REGISTRAR)

    def test_login_invalid_credentials(self):
        data = {
            'username': 'registrar',
            'password': 'wrongpassword'
        }

        response = self.client.post(self.url, data)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn('error', response.data)

    def test_login_missing_fields(self):
        response = self.client.post(self.url, {'username': 'registrar'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class MeViewTestCase(APITestCase):
    """Test cases for MeView."""

    def test_requires_authentication(self):
        response = self.client.get(reverse('accounts:me'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_student_sees_profile(self):
        student = StudentFactory(student_no='S20250001')
        self.client.force_authenticate(user=student.user)

        response = self.client.get(reverse('accounts:me'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['username'], student.user.username)
        self.assertEqual(response.data['student']['student_no'], 'S20250001')

    def test_staff_member_has_no_student_profile(self):
        self.client.force_authenticate(user=ProfessorUserFactory())
        response = self.client.get(reverse('accounts:me'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['student'])


class StudentListCreateViewTestCase(APITestCase):
    """Admission intake and student search."""

    def setUp(self):
        self.url = reverse('accounts:students')
        self.program = ProgramFactory(code='BSCS')
        self.admission = AdmissionUserFactory()
        self.registrar = RegistrarUserFactory()

    def _payload(self, **overrides):
        data = {
            'email': 'new.student@example.com',
            'first_name': 'New',
            'last_name': 'Student',
            'password': 'newpass123',
            'program': self.program.pk,
            'year_level': 1,
        }
        data.update(overrides)
        return data

    def test_admission_creates_student(self):
        self.client.force_authenticate(user=self.admission)

        response = self.client.post(self.url, self._payload(student_no='S20259999'), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        student = Student.objects.get(student_no='S20259999')
        self.assertEqual(student.user.role, Role.STUDENT)
        self.assertEqual(student.user.username, 'new.student')
        self.assertTrue(student.user.check_password('newpass123'))
        self.assertEqual(response.data['student']['program_code'], 'BSCS')

    def test_username_collision_gets_suffix(self):
        UserFactory(username='new.student', email='taken@example.com')
        self.client.force_authenticate(user=self.admission)

        response = self.client.post(self.url, self._payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['student']['user']['username'], 'new.student_2')

    def test_duplicate_email_rejected(self):
        UserFactory(username='someone', email='new.student@example.com')
        self.client.force_authenticate(user=self.admission)

        response = self.client.post(self.url, self._payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data)

    def test_registrar_cannot_create_student(self):
        self.client.force_authenticate(user=self.registrar)
        response = self.client.post(self.url, self._payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(User.objects.filter(email='new.student@example.com').exists())

    def test_registrar_searches_students(self):
        StudentFactory(student_no='S20250001', user__first_name='Samantha')
        StudentFactory(student_no='S20250002', user__first_name='Bob')
        self.client.force_authenticate(user=self.registrar)

        response = self.client.get(self.url, {'q': 'saman'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        numbers = [s['student_no'] for s in response.data['students']]
        self.assertEqual(numbers, ['S20250001'])

    def test_professor_cannot_search_students(self):
        self.client.force_authenticate(user=ProfessorUserFactory())
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class UserSearchViewTestCase(APITestCase):

    def setUp(self):
        self.url = reverse('accounts:user_search')
        self.client.force_authenticate(user=RegistrarUserFactory())

    def test_empty_query_returns_empty_list(self):
        response = self.client.get(self.url)
        self.assertEqual(response.data, [])

    def test_filter_by_role(self):
        ProfessorUserFactory(username='prof.ada', first_name='Ada')
        UserFactory(username='ada.student', first_name='Ada')

        response = self.client.get(self.url, {'q': 'ada', 'role': 'professor'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([u['username'] for u in response.data], ['prof.ada'])

    def test_students_and_professors_cannot_search(self):
        for user in (UserFactory(), ProfessorUserFactory()):
            self.client.force_authenticate(user=user)
            response = self.client.get(self.url, {'q': 'a'})
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
