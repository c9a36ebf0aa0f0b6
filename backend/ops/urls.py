"""
Operations endpoints.

These endpoints are excluded from authentication and should be
protected at network level in production.
"""
from django.urls import path

from ops.health import HealthView, LivenessView, ReadinessView

urlpatterns = [
    path("", HealthView.as_view(), name="health"),
    path("live/", LivenessView.as_view(), name="health-live"),
    path("ready/", ReadinessView.as_view(), name="health-ready"),
]
