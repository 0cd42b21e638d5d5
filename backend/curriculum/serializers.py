from rest_framework import serializers

from users.models import Role
from .models import Program, Subject, ProgramSubject, Section


class ProgramSerializer(serializers.ModelSerializer):
    """Serializer for Program model."""

    class Meta:
        model = Program
        fields = ['id', 'code', 'name', 'department', 'description', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_code(self, value):
        """Validate and normalize program code."""
        if value:
            value = value.upper().strip()
            if len(value) < 2:
                raise serializers.ValidationError("Program code must be at least 2 characters long.")
        return value


class PrerequisiteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Subject
        fields = ['id', 'code', 'name']


class SubjectSerializer(serializers.ModelSerializer):
    """Serializer for Subject model."""
    prerequisite_detail = PrerequisiteSerializer(source='prerequisite', read_only=True)

    class Meta:
        model = Subject
        fields = [
            'id', 'code', 'name', 'units', 'subject_type',
            'prerequisite', 'prerequisite_detail', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_code(self, value):
        """Validate and normalize subject code."""
        if value:
            value = value.upper().strip()
            if len(value) < 3:
                raise serializers.ValidationError("Subject code must be at least 3 characters long.")
        return value

    def validate(self, attrs):
        prereq = attrs.get('prerequisite')
        if prereq and self.instance and prereq.pk == self.instance.pk:
            raise serializers.ValidationError({"prerequisite": "A subject cannot be its own prerequisite."})
        return attrs


class ProgramSubjectSerializer(serializers.ModelSerializer):
    """Serializer for ProgramSubject curriculum entries."""
    subject_code = serializers.CharField(source='subject.code', read_only=True)
    subject_name = serializers.CharField(source='subject.name', read_only=True)
    program_code = serializers.CharField(source='program.code', read_only=True)

    class Meta:
        model = ProgramSubject
        fields = [
            'id', 'program', 'program_code', 'subject', 'subject_code', 'subject_name',
            'recommended_year', 'recommended_semester', 'created_at'
        ]
        read_only_fields = ['id', 'program', 'subject', 'created_at']


class ProgramDetailSerializer(ProgramSerializer):
    """Detailed serializer for Program with its curriculum."""
    program_subjects = ProgramSubjectSerializer(many=True, read_only=True)

    class Meta(ProgramSerializer.Meta):
        fields = ProgramSerializer.Meta.fields + ['program_subjects']


class SectionSerializer(serializers.ModelSerializer):
    """Serializer for Section model."""
    subject_code = serializers.CharField(source='subject.code', read_only=True)
    subject_name = serializers.CharField(source='subject.name', read_only=True)
    professor_name = serializers.CharField(source='professor.get_full_name', read_only=True)

    class Meta:
        model = Section
        fields = [
            'id', 'name', 'subject', 'subject_code', 'subject_name',
            'professor', 'professor_name', 'max_slots', 'semester', 'academic_year',
            'schedule', 'status', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_professor(self, value):
        if value.role != Role.PROFESSOR:
            raise serializers.ValidationError("Sections can only be assigned to professors.")
        return value

    def validate_academic_year(self, value):
        return value.strip()
