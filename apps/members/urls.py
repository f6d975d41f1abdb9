"""URL routing for members."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import MemberViewSet

router = DefaultRouter()
router.register(r"", MemberViewSet, basename="member")

urlpatterns = [
    path("", include(router.urls)),
]
