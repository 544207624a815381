import logging
import os
import time

from django.conf import settings
from django.db import DatabaseError, connections
from django.utils import timezone
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()


def database_health(alias: str = "default") -> bool:
    """Round-trip a trivial query; True when the database answers."""
    try:
        with connections[alias].cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as e:
        logger.warning("Database health check failed: %s", e)
        return False
    return True


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def health(request):
    return Response({
        "status": "healthy",
        "timestamp": timezone.now().isoformat(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "environment": getattr(settings, "APP_ENV", os.getenv("APP_ENV", "development")),
        "database": "connected" if database_health() else "disconnected",
    })
