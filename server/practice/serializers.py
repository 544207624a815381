from rest_framework import serializers

from .models import PracticeSession


class SessionSubmitSerializer(serializers.Serializer):
    # accepts `audio` or the older `audioData` key
    audio = serializers.CharField(required=False, help_text="base64 audio, raw or data:audio/...;base64,xxx")
    audioData = serializers.CharField(required=False, help_text="Alias of audio")
    targetPhrase = serializers.CharField(help_text="Phrase the user tried to say")
    language = serializers.CharField(required=False, allow_blank=True, max_length=16)
    streak = serializers.IntegerField(required=False, default=0, min_value=0,
                                      help_text="Consecutive correct attempts so far (display only)")

    def validate(self, attrs):
        audio = attrs.pop("audioData", None)
        if not attrs.get("audio"):
            attrs["audio"] = audio
        if not attrs.get("audio"):
            raise serializers.ValidationError({"audio": "Audio data is required"})
        return attrs


class PracticeSessionSerializer(serializers.ModelSerializer):
    sessionId = serializers.UUIDField(source="session_id", read_only=True)
    targetPhrase = serializers.CharField(source="target_phrase", read_only=True)
    finalScore = serializers.FloatField(source="final_score", read_only=True)
    wordComparison = serializers.JSONField(source="word_comparison", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = PracticeSession
        fields = [
            "sessionId", "language", "targetPhrase", "transcription", "confidence",
            "accuracy", "fluency", "prosody", "finalScore", "wpm", "duration",
            "color", "wordComparison", "feedback", "createdAt",
        ]
        read_only_fields = fields


class StatsSerializer(serializers.Serializer):
    totalSessions = serializers.IntegerField()
    bestScore = serializers.FloatField()
    averageScore = serializers.FloatField()
    averageWpm = serializers.FloatField()
    streak = serializers.IntegerField()
