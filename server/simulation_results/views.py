import io
import logging

from django.conf import settings
from django.http import FileResponse, Http404
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from gtsim_core.domain.models import Notification
from gtsim_core.io.records import record_from_row
from gtsim_core.services import charting, exporter
from gtsim_core.services.repository import ResultRepository

from .serializers import DeleteRequestSerializer, NotificationSerializer, ResultDetailSerializer, ResultRecordSerializer
from .store import DjangoResultStore
from .tasks import export_result

logger = logging.getLogger(__name__)


def _repository() -> ResultRepository:
    return ResultRepository(DjangoResultStore(), toast_ms=settings.GTSIM_TOAST_MS)


def _notification(notification):
    return NotificationSerializer(notification.to_dict()).data if notification else None


def _load_row(pk: str):
    row = DjangoResultStore().select_result(pk)
    if row is None:
        raise Http404
    return row


def _load_record(pk: str):
    return record_from_row(_load_row(pk))


class ResultListView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        outcome = _repository().list()
        payload = {
            "results": ResultRecordSerializer(outcome.value or [], many=True).data,
            "notification": _notification(outcome.notification),
        }
        return Response(payload, status=status.HTTP_200_OK if outcome.ok else status.HTTP_502_BAD_GATEWAY)


class ResultDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, pk: str):
        record = _load_record(pk)
        payload = ResultDetailSerializer(record).data
        payload["chart"] = charting.build_chart(record).to_dict()
        return Response(payload)

    def delete(self, request, pk: str):
        serializer = DeleteRequestSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        if not serializer.validated_data["confirm"]:
            return Response({"detail": "confirm=true is required", "notification": None}, status=status.HTTP_400_BAD_REQUEST)

        outcome = _repository().delete(str(pk), confirm=lambda _prompt: True)
        payload = {"id": str(pk), "notification": _notification(outcome.notification)}
        return Response(payload, status=status.HTTP_200_OK if outcome.ok else status.HTTP_400_BAD_REQUEST)


class ResultDownloadView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, pk: str, fmt: str):
        row = _load_row(pk)
        try:
            bundle = exporter.build_export(record_from_row(row), tz=settings.GTSIM_TIMEZONE)
        except Exception:  # noqa: BLE001
            logger.exception("导出失败: %s", pk)
            failure = Notification(type="error", message=exporter.EXPORT_FAILED, duration=settings.GTSIM_TOAST_MS)
            return Response({"notification": _notification(failure)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        artifact = bundle.csv if fmt == "csv" else bundle.json
        return FileResponse(
            io.BytesIO(artifact.content),
            as_attachment=True,
            filename=artifact.filename,
            content_type=artifact.media_type,
        )


class ResultExportView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pk: str):
        record = _load_record(pk)
        export_result.delay(record.id)
        return Response({"id": record.id, "status": "queued"}, status=status.HTTP_202_ACCEPTED)
