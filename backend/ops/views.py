"""Django-level handlers that keep the JSON envelope outside DRF views."""
from django.http import JsonResponse

from ops.exceptions import GENERIC_ERROR_MESSAGE, error_body


def not_found(request, exception=None):
    return JsonResponse(error_body("API endpoint not found", "not_found"), status=404)


def server_error(request):
    return JsonResponse(error_body(GENERIC_ERROR_MESSAGE, "server_error"), status=500)
