from rest_framework import serializers

from curriculum.models import Section, Subject
from terms.models import AcademicTerm
from .models import Enrollment, EnrollmentSubject


class TermSerializer(serializers.ModelSerializer):
    schoolYear = serializers.CharField(source="school_year")
    isActive = serializers.BooleanField(source="is_active")

    class Meta:
        model = AcademicTerm
        fields = ["id", "schoolYear", "semester", "isActive"]


class RecommendedSubjectSerializer(serializers.ModelSerializer):
    subjectType = serializers.CharField(source="subject_type")
    prerequisiteId = serializers.IntegerField(source="prerequisite_id", allow_null=True)

    class Meta:
        model = Subject
        fields = ["id", "code", "name", "units", "subjectType", "prerequisiteId"]


class SectionOptionSerializer(serializers.Serializer):
    """Section fields flattened next to its free seat count."""
    id = serializers.IntegerField(source="section.id")
    name = serializers.CharField(source="section.name")
    subjectId = serializers.IntegerField(source="section.subject_id")
    professorId = serializers.IntegerField(source="section.professor_id")
    professorName = serializers.CharField(source="section.professor.get_full_name")
    maxSlots = serializers.IntegerField(source="section.max_slots")
    semester = serializers.CharField(source="section.semester")
    academicYear = serializers.CharField(source="section.academic_year")
    schedule = serializers.CharField(source="section.schedule")
    status = serializers.CharField(source="section.status")
    availableSlots = serializers.IntegerField(source="available_slots")


class RecommendationSerializer(serializers.Serializer):
    subject = RecommendedSubjectSerializer()
    sections = SectionOptionSerializer(many=True)


class RecommendationResultSerializer(serializers.Serializer):
    term = TermSerializer(allow_null=True)
    recommendations = RecommendationSerializer(many=True)
    maxUnits = serializers.IntegerField(source="max_units")
    enrolledUnits = serializers.IntegerField(source="enrolled_units")
    remainingUnits = serializers.IntegerField(source="remaining_units")


class EnrollRequestSerializer(serializers.Serializer):
    studentId = serializers.IntegerField(min_value=1)
    sectionIds = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)


class EnrollmentSubjectSerializer(serializers.ModelSerializer):
    sectionId = serializers.IntegerField(source="section_id")
    sectionName = serializers.CharField(source="section.name")
    subjectId = serializers.IntegerField(source="subject_id")
    subjectCode = serializers.CharField(source="subject.code")

    class Meta:
        model = EnrollmentSubject
        fields = ["id", "sectionId", "sectionName", "subjectId", "subjectCode", "units"]


class EnrollmentSerializer(serializers.ModelSerializer):
    studentId = serializers.IntegerField(source="student_id")
    term = TermSerializer()
    dateEnrolled = serializers.DateTimeField(source="date_enrolled")
    totalUnits = serializers.IntegerField(source="total_units")
    subjects = EnrollmentSubjectSerializer(many=True)

    class Meta:
        model = Enrollment
        fields = ["id", "studentId", "term", "status", "dateEnrolled", "totalUnits", "subjects"]
