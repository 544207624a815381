from rest_framework import serializers

# ----- TTS -----
class TTSRequestSerializer(serializers.Serializer):
    text = serializers.CharField()
    language = serializers.CharField(required=False, allow_blank=True, max_length=16)  # e.g. 'en-US'


class TTSResponseSerializer(serializers.Serializer):
    audio_base64 = serializers.CharField()
    mime_type = serializers.CharField(default="audio/mpeg")


# ----- Exercises -----
class ExerciseQuerySerializer(serializers.Serializer):
    category = serializers.CharField(required=False, allow_blank=True)
