# media/views.py
import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.views import APIView

from common.permissions import IsAdmin
from common.responses import envelope
from common.validation import validate

from .serializers import StoredObjectSerializer, UploadSerializer
from .storage import get_storage_backend

logger = logging.getLogger(__name__)


class UploadView(APIView):
    """
    POST /upload (multipart: file, folder). Admin only.
    The file is checked against the folder's policy before anything is stored.
    """

    permission_classes = [IsAdmin]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(request=UploadSerializer, responses={201: StoredObjectSerializer}, tags=["upload"])
    def post(self, request):
        data = validate(request.data, UploadSerializer)
        stored = get_storage_backend().upload(data["file"], data["folder"])
        logger.info("upload stored public_id=%s folder=%s by=%s", stored.public_id, data["folder"], request.user.pk)
        return envelope(StoredObjectSerializer(stored).data, status=status.HTTP_201_CREATED)
