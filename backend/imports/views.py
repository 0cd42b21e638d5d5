# imports/views.py
from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.parsers import FormParser, MultiPartParser
from drf_spectacular.utils import extend_schema

from django.db import transaction
from django.db.utils import IntegrityError
from django.core.exceptions import ValidationError
import pandas as pd

from .serializers import UploadRequestSerializer, UploadJobSerializer
from .models import UploadJob
from .services import IMPORT_DISPATCH
from users.permissions import IsRegistrarRole

import logging
logger = logging.getLogger(__name__)


def _pretty_err(e: Exception) -> str:
    if isinstance(e, ValidationError):
        if getattr(e, "messages", None):
            return "; ".join(map(str, e.messages))
        if getattr(e, "message", None):
            return str(e.message)

    if getattr(e, "args", None):
        return " ".join(str(a) for a in e.args) or str(e)

    return str(e)


class UploadJobListView(APIView):
    permission_classes = [IsRegistrarRole]

    def get(self, request):
        jobs = UploadJob.objects.all()[:50]
        return Response({"jobs": UploadJobSerializer(jobs, many=True).data})


class UploadImportView(APIView):
    """
    Multipart upload of a curriculum sheet (.csv or .xlsx).
    The whole sheet loads in one transaction; per-row problems are
    counted on the job instead of failing the upload.
    """
    permission_classes = [IsRegistrarRole]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(request=UploadRequestSerializer, responses={201: UploadJobSerializer})
    def post(self, request):
        s = UploadRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        kind = str(s.validated_data["import_type"]).lower().strip()
        importer = IMPORT_DISPATCH.get(kind)
        if importer is None:
            return Response({"detail": f"Unsupported import type '{kind}'."}, status=400)

        upload = s.validated_data["file"]
        job = UploadJob.objects.create(
            file=upload, original_name=upload.name, import_type=kind, created_by=request.user,
        )
        logger.info("Import %s started by %s (job %s, file %s)", kind, request.user.username, job.pk, upload.name)

        try:
            with job.file.open("rb") as f, transaction.atomic():
                result = importer(f, job, filename=upload.name)
        except (ValidationError, IntegrityError, ValueError, pd.errors.ParserError) as e:
            logger.exception("Import job %s failed: %s", job.pk, e)
            job.finish(errors=[_pretty_err(e)])
            return Response({"detail": _pretty_err(e), "job": UploadJobSerializer(job).data}, status=400)

        job.refresh_from_db()
        return Response(
            {"ok": job.ok, "result": result, "job": UploadJobSerializer(job).data},
            status=status.HTTP_201_CREATED,
        )
