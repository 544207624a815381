import base64
import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .gateway import get_gateway
from .serializers import ExerciseQuerySerializer, TTSRequestSerializer, TTSResponseSerializer

logger = logging.getLogger(__name__)


class TextToSpeechView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["Speech"],
        summary="Text-To-Speech",
        description="Takes text (and optional language) and returns the engine's reference audio as base64.",
        request=TTSRequestSerializer,
        responses={200: TTSResponseSerializer},
    )
    def post(self, request):
        s = TTSRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        audio, mimetype = get_gateway().synthesize(s.validated_data["text"], s.validated_data.get("language"))
        return Response(
            {"audio_base64": base64.b64encode(audio).decode("ascii"), "mime_type": mimetype},
            status=status.HTTP_200_OK,
        )


class ExerciseListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["Speech"],
        summary="Practice phrases",
        parameters=[OpenApiParameter("category", str, OpenApiParameter.QUERY)],
        responses={200: {"type": "object", "properties": {
            "count": {"type": "integer"},
            "exercises": {"type": "array", "items": {"type": "object"}},
        }}},
    )
    def get(self, request):
        q = ExerciseQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        category = q.validated_data.get("category") or None

        exercises = get_gateway().list_exercises(category)
        logger.info("Loaded %d exercises (category=%s)", len(exercises), category)
        return Response({"count": len(exercises), "exercises": exercises})
