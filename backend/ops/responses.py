"""
Response envelope and pagination helpers shared by all API views.

Successful responses look like::

    {"success": true, "message": "...", "data": {...}}

List endpoints accept ``page`` and ``limit`` query parameters and return
``data.pagination = {page, limit, total, pages}`` with
``pages = ceil(total / limit)``.
"""
import math
from typing import Any, Optional

from rest_framework import serializers, status
from rest_framework.response import Response

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100


def envelope(data: Any = None, message: Optional[str] = None, status_code: int = status.HTTP_200_OK) -> Response:
    body = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return Response(body, status=status_code)


def created(data: Any, message: str) -> Response:
    return envelope(data, message=message, status_code=status.HTTP_201_CREATED)


def failure(message: str, code: str = "invalid", status_code: int = status.HTTP_400_BAD_REQUEST) -> Response:
    return Response({"success": False, "message": message, "error": code}, status=status_code)


def command_failure(result) -> Response:
    """Turn a failed CommandResult into a 400 envelope."""
    return failure(result.error, code=result.code or "invalid")


class PageQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    limit = serializers.IntegerField(
        min_value=1, max_value=MAX_PAGE_LIMIT, required=False, default=DEFAULT_PAGE_LIMIT,
    )


def parse_query(request, serializer_class) -> dict:
    """
    Validate query parameters with a serializer.

    Non-numeric page/limit and other malformed filters become a 400
    ValidationError instead of silently falling back to defaults.
    """
    serializer = serializer_class(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


def paginate(queryset, params: dict) -> tuple[list, dict]:
    """
    Slice a queryset for the requested page.

    Returns (page_items, pagination_meta). The count is taken on the
    same filtered queryset so totals always match the rows returned.
    """
    page = params.get("page", 1)
    limit = params.get("limit", DEFAULT_PAGE_LIMIT)
    total = queryset.count()
    offset = (page - 1) * limit
    items = list(queryset[offset:offset + limit])
    return items, {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit),
    }


def paginated(key: str, queryset, params: dict, serializer_class) -> Response:
    items, pagination = paginate(queryset, params)
    return envelope({
        key: serializer_class(items, many=True).data,
        "pagination": pagination,
    })
