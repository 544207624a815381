from rest_framework import serializers

from users.models import User


class UserMeSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="pk", read_only=True)
    preferredLanguage = serializers.CharField(source="preferred_language", read_only=True)
    createdAt = serializers.DateTimeField(source="date_joined", read_only=True)

    class Meta:
        model = User
        fields = ("userId", "username", "email", "preferredLanguage", "createdAt")
        read_only_fields = fields
