"""API views for member records."""

from __future__ import annotations

from rest_framework import viewsets  # type: ignore

from .models import Member
from .serializers import MemberSerializer


class MemberViewSet(viewsets.ModelViewSet):
    queryset = Member.objects.all()
    serializer_class = MemberSerializer
    filterset_fields = ["status"]
