#backend/users/serializers.py
from django.db import transaction
from rest_framework import serializers
from curriculum.models import Program
from .models import User, Student, Role


class UserSerializer(serializers.ModelSerializer):
    """Serializer for User model (read)."""
    full_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'username', 'email',
            'first_name', 'last_name', 'full_name', 'role',
            'is_active', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at', 'role', 'full_name']

    def get_full_name(self, obj):
        return obj.get_full_name()


class StudentSerializer(serializers.ModelSerializer):
    user = UserSerializer(read_only=True)
    program_code = serializers.CharField(source='program.code', read_only=True)

    class Meta:
        model = Student
        fields = ['id', 'student_no', 'user', 'program', 'program_code', 'year_level', 'created_at']
        read_only_fields = ['id', 'created_at']


class StudentCreateSerializer(serializers.Serializer):
    """
    Admission intake: creates the STUDENT user and its profile in one go.
    """
    username = serializers.CharField(max_length=150, required=False, allow_blank=True)
    email = serializers.EmailField()
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True, min_length=8, required=False)
    program = serializers.PrimaryKeyRelatedField(queryset=Program.objects.all())
    year_level = serializers.IntegerField(min_value=1, max_value=6)
    student_no = serializers.CharField(max_length=32, required=False, allow_blank=True)

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("User with this email already exists.")
        return value.lower()

    def validate_username(self, value):
        if value and User.objects.filter(username=value).exists():
            raise serializers.ValidationError("User with this username already exists.")
        return value

    def validate_student_no(self, value):
        if value and Student.objects.filter(student_no=value).exists():
            raise serializers.ValidationError("Student with this number already exists.")
        return value

    def _unique_username(self, base):
        base = (base or "").strip() or "student"
        u = base
        i = 1
        while User.objects.filter(username=u).exists():
            i += 1
            u = f"{base}_{i}"
        return u

    def create(self, validated_data):
        email = validated_data['email']
        username = validated_data.get('username') or self._unique_username(email.split("@", 1)[0])
        with transaction.atomic():
            return User.objects.create_student(
                username,
                validated_data.get('password'),
                program=validated_data['program'],
                year_level=validated_data['year_level'],
                student_no=validated_data.get('student_no') or None,
                email=email,
                first_name=validated_data['first_name'],
                last_name=validated_data['last_name'],
            )


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(help_text="User's username")
    password = serializers.CharField(write_only=True, help_text="User's password")


class RoleAssignSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=Role.choices)
