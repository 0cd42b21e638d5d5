# imports/serializers.py
from rest_framework import serializers
from .models import ImportType, UploadJob


class UploadJobSerializer(serializers.ModelSerializer):
    createdBy = serializers.CharField(source="created_by.username", read_only=True, default=None)

    class Meta:
        model = UploadJob
        fields = ["id", "import_type", "original_name", "started_at", "finished_at",
                  "ok", "rows_total", "rows_ok", "rows_error", "summary", "log", "createdBy"]
        read_only_fields = ["id", "import_type", "original_name", "started_at", "finished_at",
                            "ok", "rows_total", "rows_ok", "rows_error", "summary", "log"]


class UploadRequestSerializer(serializers.Serializer):
    import_type = serializers.ChoiceField(choices=ImportType.choices, default=ImportType.CURRICULUM)
    file = serializers.FileField()

    def validate_file(self, f):
        if not (f.name or "").lower().endswith((".csv", ".xlsx")):
            raise serializers.ValidationError("Upload a .csv or .xlsx file.")
        return f
