import re

from rest_framework import serializers
from .models import AcademicTerm, Semester

SCHOOL_YEAR_RX = re.compile(r"^(\d{4})-(\d{4})$")


class AcademicTermSerializer(serializers.ModelSerializer):
    class Meta:
        model = AcademicTerm
        fields = ["id", "school_year", "semester", "is_active", "created_at"]
        read_only_fields = ["id", "is_active", "created_at"]


class CreateTermSerializer(serializers.Serializer):
    school_year = serializers.CharField(max_length=9)
    semester = serializers.ChoiceField(choices=Semester.choices)
    make_active = serializers.BooleanField(default=False)

    def validate_school_year(self, value):
        value = value.strip()
        m = SCHOOL_YEAR_RX.match(value)
        if not m or int(m.group(2)) != int(m.group(1)) + 1:
            raise serializers.ValidationError("School year must look like 2025-2026.")
        return value

    def validate(self, attrs):
        if AcademicTerm.objects.filter(school_year=attrs["school_year"], semester=attrs["semester"]).exists():
            raise serializers.ValidationError("This academic term already exists.")
        return attrs
