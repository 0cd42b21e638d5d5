"""
Test views for the grades app.
"""
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from curriculum.factory import SectionFactory
from enrollment.factory import EnrollmentFactory, EnrollmentSubjectFactory
from grades.factory import GradeFactory
from grades.models import Grade
from terms.factory import ActiveTermFactory
from users.factory import (
    DeanUserFactory, ProfessorUserFactory, RegistrarUserFactory, StudentFactory, UserFactory,
)


class ProfessorGradeViewsTestCase(APITestCase):

    def setUp(self):
        self.term = ActiveTermFactory()
        self.professor = ProfessorUserFactory()
        self.section = SectionFactory(professor=self.professor)
        self.es = EnrollmentSubjectFactory(section=self.section, enrollment__term=self.term)
        self.url = reverse('grades:encode', kwargs={'section_id': self.section.pk})

    def test_list_own_sections(self):
        SectionFactory()
        self.client.force_authenticate(user=self.professor)
        response = self.client.get(reverse('grades:professor_sections'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([s['id'] for s in response.data['sections']], [self.section.pk])

    def test_roster(self):
        self.client.force_authenticate(user=self.professor)
        response = self.client.get(reverse('grades:roster', kwargs={'section_id': self.section.pk}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        entry = response.data['roster'][0]
        self.assertEqual(entry['enrollmentSubjectId'], self.es.pk)
        self.assertIsNone(entry['grade'])

    def test_roster_of_other_section_forbidden(self):
        self.client.force_authenticate(user=ProfessorUserFactory())
        response = self.client.get(reverse('grades:roster', kwargs={'section_id': self.section.pk}))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_encode(self):
        self.client.force_authenticate(user=self.professor)
        response = self.client.post(
            self.url,
            {'grades': [{'enrollmentSubjectId': self.es.pk, 'value': '1.75', 'remarks': 'well done'}]},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Grades submitted for approval.')
        grade = Grade.objects.get(enrollment_subject=self.es)
        self.assertEqual(grade.display, '1.75')
        self.assertFalse(grade.approved)

    def test_encode_invalid_token_is_400(self):
        self.client.force_authenticate(user=self.professor)
        response = self.client.post(
            self.url, {'grades': [{'enrollmentSubjectId': self.es.pk, 'value': 'A+'}]}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Grade.objects.exists())

    def test_encode_empty_payload_is_400(self):
        self.client.force_authenticate(user=self.professor)
        response = self.client.post(self.url, {'grades': []}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_encode_other_section_is_403(self):
        self.client.force_authenticate(user=ProfessorUserFactory())
        response = self.client.post(
            self.url, {'grades': [{'enrollmentSubjectId': self.es.pk, 'value': '1.0'}]}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_registrar_cannot_encode(self):
        self.client.force_authenticate(user=RegistrarUserFactory())
        response = self.client.post(
            self.url, {'grades': [{'enrollmentSubjectId': self.es.pk, 'value': '1.0'}]}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class RegistrarGradeViewsTestCase(APITestCase):

    def setUp(self):
        self.registrar = RegistrarUserFactory()
        self.grade = GradeFactory(token='2.25')

    def test_pending(self):
        self.client.force_authenticate(user=self.registrar)
        response = self.client.get(reverse('grades:pending'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        row = response.data['pending'][0]
        self.assertEqual(row['id'], self.grade.pk)
        self.assertEqual(row['value'], '2.25')
        self.assertEqual(row['enrollmentSubject']['id'], self.grade.enrollment_subject_id)

    def test_approve(self):
        self.client.force_authenticate(user=self.registrar)
        url = reverse('grades:approve', kwargs={'grade_id': self.grade.pk})

        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['grade']['approved'])

        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_approve_unknown_is_404(self):
        self.client.force_authenticate(user=self.registrar)
        response = self.client.post(reverse('grades:approve', kwargs={'grade_id': 98765}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_dean_cannot_approve(self):
        self.client.force_authenticate(user=DeanUserFactory())
        response = self.client.post(reverse('grades:approve', kwargs={'grade_id': self.grade.pk}))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class StudentGradeViewsTestCase(APITestCase):

    def setUp(self):
        self.student = StudentFactory()
        enrollment = EnrollmentFactory(student=self.student)
        GradeFactory(enrollment_subject__enrollment=enrollment, token='1.5', approved=True)
        GradeFactory(enrollment_subject__enrollment=enrollment, token='3.0', approved=False)

    def test_my_grades(self):
        self.client.force_authenticate(user=self.student.user)
        response = self.client.get(reverse('grades:my_grades'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['gpa'], 1.5)
        subjects = response.data['enrollments'][0]['subjects']
        self.assertEqual(len(subjects), 2)
        self.assertEqual(subjects[0]['grade']['value'], '1.5')
        self.assertEqual(response.data['enrollments'][0]['term']['schoolYear'], '2025-2026')

    def test_student_without_profile_is_404(self):
        self.client.force_authenticate(user=UserFactory())
        response = self.client.get(reverse('grades:my_grades'))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_dean_reads_student_report(self):
        self.client.force_authenticate(user=DeanUserFactory())
        response = self.client.get(reverse('grades:student_grades', kwargs={'student_id': self.student.pk}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['gpa'], 1.5)

    def test_professor_cannot_read_student_report(self):
        self.client.force_authenticate(user=ProfessorUserFactory())
        response = self.client.get(reverse('grades:student_grades', kwargs={'student_id': self.student.pk}))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
