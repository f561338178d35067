from rest_framework import status as http_status
from rest_framework.response import Response


def envelope(data=None, status: int = http_status.HTTP_200_OK, **kwargs) -> Response:
    """Wrap a successful result as {"success": true, "data": ...}."""
    return Response({"success": True, "data": data}, status=status, **kwargs)
