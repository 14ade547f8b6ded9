"""
Health check API views
"""
import logging

from django.db import connection, DatabaseError
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    """
    Liveness endpoint for deployment monitoring; reports database reachability.
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        db_status = "ok"
    except DatabaseError as e:
        logger.error(f"Health check database error: {e}")
        db_status = f"error: {e}"

    health_data = {
        "status": "healthy" if db_status == "ok" else "unhealthy",
        "timestamp": timezone.now().isoformat(),
        "database": db_status,
    }

    response_status = status.HTTP_200_OK if db_status == "ok" else status.HTTP_503_SERVICE_UNAVAILABLE
    return Response(health_data, status=response_status)
