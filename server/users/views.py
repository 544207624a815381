from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from users.serializers import UserMeSerializer


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses=UserMeSerializer, description="Public profile of the authenticated user.")
    def get(self, request):
        return Response(UserMeSerializer(request.user).data)
