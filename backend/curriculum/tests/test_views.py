"""
Test views for the curriculum app.
"""
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from curriculum.models import Program, ProgramSubject, Subject
from curriculum.factory import ProgramFactory, SubjectFactory, SectionFactory
from users.factory import RegistrarUserFactory, DeanUserFactory, ProfessorUserFactory, StudentFactory


class ProgramViewsTestCase(APITestCase):

    def setUp(self):
        self.registrar = RegistrarUserFactory()
        self.dean = DeanUserFactory()

    def test_registrar_creates_program(self):
        self.client.force_authenticate(user=self.registrar)
        response = self.client.post(
            reverse('curriculum:program_list'),
            {'code': ' bscs ', 'name': 'BS Computer Science', 'department': 'CS'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['code'], 'BSCS')

    def test_dean_reads_but_cannot_write(self):
        ProgramFactory(code='BSCS')
        self.client.force_authenticate(user=self.dean)

        response = self.client.get(reverse('curriculum:program_list'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.post(
            reverse('curriculum:program_list'), {'code': 'BSIT', 'name': 'BS IT'}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Program.objects.filter(code='BSIT').exists())

    def test_professor_forbidden(self):
        self.client.force_authenticate(user=ProfessorUserFactory())
        response = self.client.get(reverse('curriculum:program_list'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_delete_program_with_students_is_conflict(self):
        student = StudentFactory()
        self.client.force_authenticate(user=self.registrar)
        response = self.client.delete(reverse('curriculum:program_detail', kwargs={'pk': student.program.pk}))
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_program_detail_lists_curriculum(self):
        program = ProgramFactory(code='BSCS')
        subject = SubjectFactory(code='CS101')
        ProgramSubject.objects.create(program=program, subject=subject, recommended_year=1)
        self.client.force_authenticate(user=self.dean)

        response = self.client.get(reverse('curriculum:program_detail', kwargs={'pk': program.pk}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([m['subject_code'] for m in response.data['program_subjects']], ['CS101'])


class SubjectViewsTestCase(APITestCase):

    def setUp(self):
        self.client.force_authenticate(user=RegistrarUserFactory())

    def test_create_subject_with_prerequisite(self):
        cs101 = SubjectFactory(code='CS101')
        response = self.client.post(
            reverse('curriculum:subject_list'),
            {'code': 'cs102', 'name': 'Data Structures', 'units': 3,
             'subject_type': 'MAJOR', 'prerequisite': cs101.pk},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['prerequisite_detail']['code'], 'CS101')
        self.assertEqual(Subject.objects.get(code='CS102').prerequisite, cs101)

    def test_subject_cannot_be_own_prerequisite(self):
        subject = SubjectFactory(code='CS101')
        response = self.client.patch(
            reverse('curriculum:subject_detail', kwargs={'pk': subject.pk}),
            {'prerequisite': subject.pk},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_zero_units_rejected(self):
        response = self.client.post(
            reverse('curriculum:subject_list'),
            {'code': 'CS999', 'name': 'Nothing', 'units': 0},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class ProgramSubjectViewTestCase(APITestCase):

    def setUp(self):
        self.client.force_authenticate(user=RegistrarUserFactory())
        self.program = ProgramFactory(code='BSCS')
        self.subject = SubjectFactory(code='CS101')
        self.url = reverse(
            'curriculum:program_subject',
            kwargs={'program_id': self.program.pk, 'subject_id': self.subject.pk},
        )

    def test_map_and_unmap(self):
        response = self.client.post(
            self.url, {'recommended_year': 1, 'recommended_semester': 'FIRST'}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['mapping']['recommended_semester'], 'FIRST')
        self.assertTrue(self.program.subjects.filter(pk=self.subject.pk).exists())

        response = self.client.delete(self.url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(ProgramSubject.objects.exists())

    def test_duplicate_mapping_rejected(self):
        ProgramSubject.objects.create(program=self.program, subject=self.subject)
        response = self.client.post(self.url, {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(ProgramSubject.objects.count(), 1)


class SectionViewsTestCase(APITestCase):

    def setUp(self):
        self.client.force_authenticate(user=RegistrarUserFactory())

    def test_create_section(self):
        subject = SubjectFactory(code='CS101')
        professor = ProfessorUserFactory()
        response = self.client.post(
            reverse('curriculum:section_list'),
            {'name': 'CS101-A', 'subject': subject.pk, 'professor': professor.pk, 'max_slots': 40,
             'semester': 'FIRST', 'academic_year': '2025-2026'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'OPEN')

    def test_section_requires_professor_role(self):
        subject = SubjectFactory()
        response = self.client.post(
            reverse('curriculum:section_list'),
            {'name': 'X', 'subject': subject.pk, 'professor': RegistrarUserFactory().pk, 'max_slots': 10,
             'semester': 'FIRST', 'academic_year': '2025-2026'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_filter_by_term(self):
        SectionFactory(name='A', semester='FIRST', academic_year='2025-2026')
        SectionFactory(name='B', semester='SECOND', academic_year='2025-2026')
        response = self.client.get(reverse('curriculum:section_list'), {'semester': 'first'})
        self.assertEqual([s['name'] for s in response.data], ['A'])
