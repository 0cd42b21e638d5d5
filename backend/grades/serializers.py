from rest_framework import serializers

from curriculum.models import Section, Subject
from terms.models import AcademicTerm
from enrollment.models import EnrollmentSubject
from .grading import ALLOWED_GRADES
from .models import Grade


class GradeSerializer(serializers.ModelSerializer):
    """A grade with its display token in `value`."""
    value = serializers.CharField(source="display", read_only=True)
    enrollmentSubjectId = serializers.IntegerField(source="enrollment_subject_id", read_only=True)
    encodedBy = serializers.IntegerField(source="encoded_by_id", read_only=True, allow_null=True)
    dateEncoded = serializers.DateTimeField(source="date_encoded", read_only=True)
    repeatEligibleDate = serializers.DateTimeField(source="repeat_eligible_date", read_only=True, allow_null=True)

    class Meta:
        model = Grade
        fields = [
            "id", "enrollmentSubjectId", "value", "remarks", "approved",
            "encodedBy", "dateEncoded", "repeatEligibleDate",
        ]
        read_only_fields = ["id", "remarks", "approved"]


class SubjectBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Subject
        fields = ["id", "code", "name", "units"]


class SectionBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Section
        fields = ["id", "name"]


class TermBriefSerializer(serializers.ModelSerializer):
    schoolYear = serializers.CharField(source="school_year")

    class Meta:
        model = AcademicTerm
        fields = ["id", "schoolYear", "semester"]


class EnrollmentSubjectBriefSerializer(serializers.ModelSerializer):
    studentId = serializers.IntegerField(source="enrollment.student_id")
    studentNo = serializers.CharField(source="enrollment.student.student_no")
    studentName = serializers.CharField(source="enrollment.student.user.get_full_name")
    term = TermBriefSerializer(source="enrollment.term")
    subject = SubjectBriefSerializer()
    section = SectionBriefSerializer()

    class Meta:
        model = EnrollmentSubject
        fields = ["id", "studentId", "studentNo", "studentName", "term", "subject", "section", "units"]


class PendingGradeSerializer(GradeSerializer):
    """Pending grade plus the enrollment subject it belongs to."""
    enrollmentSubject = EnrollmentSubjectBriefSerializer(source="enrollment_subject", read_only=True)

    class Meta(GradeSerializer.Meta):
        fields = GradeSerializer.Meta.fields + ["enrollmentSubject"]


class RosterEntrySerializer(serializers.ModelSerializer):
    enrollmentSubjectId = serializers.IntegerField(source="id")
    student = serializers.SerializerMethodField()
    subject = SubjectBriefSerializer()
    grade = serializers.SerializerMethodField()

    class Meta:
        model = EnrollmentSubject
        fields = ["enrollmentSubjectId", "student", "subject", "grade"]

    def get_student(self, obj):
        student = obj.enrollment.student
        return {
            "id": student.pk,
            "studentNo": student.student_no,
            "firstName": student.user.first_name,
            "lastName": student.user.last_name,
            "email": student.user.email,
        }

    def get_grade(self, obj):
        grade = getattr(obj, "grade", None)
        return GradeSerializer(grade).data if grade is not None else None


class ProfessorSectionSerializer(serializers.ModelSerializer):
    subject = SubjectBriefSerializer(read_only=True)
    academicYear = serializers.CharField(source="academic_year")
    maxSlots = serializers.IntegerField(source="max_slots")

    class Meta:
        model = Section
        fields = ["id", "name", "subject", "semester", "academicYear", "schedule", "maxSlots", "status"]


class GradeRowSerializer(serializers.Serializer):
    enrollmentSubjectId = serializers.IntegerField(min_value=1)
    # token validity is checked for the whole batch before any write
    value = serializers.CharField(help_text=f"One of {', '.join(ALLOWED_GRADES)}")
    remarks = serializers.CharField(required=False, allow_blank=True, max_length=255, default="")


class EncodeGradesSerializer(serializers.Serializer):
    grades = GradeRowSerializer(many=True, allow_empty=False)

    def to_rows(self):
        return [
            {
                "enrollment_subject_id": row["enrollmentSubjectId"],
                "value": row["value"],
                "remarks": row.get("remarks", ""),
            }
            for row in self.validated_data["grades"]
        ]


def serialize_grade_report(report):
    """Shape grades.services.student_grade_report output for the API."""
    return {
        "enrollments": [
            {
                "id": entry["enrollment"].pk,
                "status": entry["enrollment"].status,
                "totalUnits": entry["enrollment"].total_units,
                "term": TermBriefSerializer(entry["term"]).data,
                "subjects": [
                    {
                        "enrollmentSubjectId": row["enrollment_subject"].pk,
                        "subject": SubjectBriefSerializer(row["subject"]).data,
                        "section": SectionBriefSerializer(row["section"]).data,
                        "grade": GradeSerializer(row["grade"]).data if row["grade"] is not None else None,
                    }
                    for row in entry["subjects"]
                ],
            }
            for entry in report["enrollments"]
        ],
        "gpa": report["gpa"],
    }
