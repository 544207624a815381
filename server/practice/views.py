from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiParameter

from . import store
from .serializers import PracticeSessionSerializer, SessionSubmitSerializer, StatsSerializer
from .services import submit_session
from .stats import compute_stats


SCORING_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "sessionId": {"type": "string", "format": "uuid"},
        "transcription": {
            "type": "object",
            "properties": {"text": {"type": "string"}, "confidence": {"type": "number"}},
        },
        "scoring": {
            "type": "object",
            "properties": {
                "accuracy": {"type": "number"},
                "fluency": {"type": "number"},
                "prosody": {"type": "number"},
                "finalScore": {"type": "number"},
                "wpm": {"type": "number"},
                "duration": {"type": "number"},
                "color": {"type": "string", "enum": ["green", "yellow", "red"]},
                "wordComparison": {"type": "array", "items": {"type": "object"}},
            },
        },
        "feedback": {
            "type": "object",
            "properties": {
                "message": {"type": "string"},
                "tips": {"type": "array", "items": {"type": "string"}},
            },
        },
        "encouragement": {"type": "string"},
        "createdAt": {"type": "string", "format": "date-time"},
    },
}


class PracticeSessionViewSet(mixins.ListModelMixin,
                             mixins.RetrieveModelMixin,
                             mixins.DestroyModelMixin,
                             viewsets.GenericViewSet):
    """
    /api/sessions/                    POST submit audio for scoring, GET list
    /api/sessions/{session_id}/       GET detail, DELETE
    /api/sessions/stats/              GET aggregate statistics
    """
    serializer_class = PracticeSessionSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_field = "session_id"

    def get_queryset(self):
        return store.find_by_user(self.request.user, language=self.request.query_params.get("language"))

    def get_object(self):
        return store.find_one(self.request.user, self.kwargs[self.lookup_field])

    @extend_schema(
        tags=["Sessions"],
        summary="List practice sessions",
        parameters=[
            OpenApiParameter("language", str, OpenApiParameter.QUERY, description="Exact language tag, e.g. en-US"),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        tags=["Sessions"],
        summary="Submit audio for scoring",
        request=SessionSubmitSerializer,
        responses={201: SCORING_RESPONSE_SCHEMA},
        examples=[
            OpenApiExample(
                "Example Request",
                value={
                    "audio": "data:audio/webm;base64,GkXfo59ChoEBQveBAULygQRC84EIQoKEd2VibUKHgQRChYECGFOAZwH...",
                    "targetPhrase": "Hello, how are you?",
                    "language": "en-US",
                    "streak": 2,
                },
                request_only=True,
            ),
        ],
    )
    def create(self, request, *args, **kwargs):
        s = SessionSubmitSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        v = s.validated_data

        resp = submit_session(
            request.user,
            audio=v["audio"],
            target_phrase=v["targetPhrase"],
            language=v.get("language"),
            streak_hint=v.get("streak", 0),
        )
        return Response(resp, status=status.HTTP_201_CREATED)

    def perform_destroy(self, instance):
        store.delete_record(self.request.user, instance.session_id)

    @extend_schema(tags=["Sessions"], summary="Practice statistics", responses=StatsSerializer)
    @action(detail=False, methods=["get"], url_path="stats", pagination_class=None)
    def stats(self, request):
        return Response(compute_stats(request.user).to_dict())
