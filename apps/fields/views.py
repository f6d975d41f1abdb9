"""API views for fields: CRUD plus availability, slots and pricing."""

from __future__ import annotations

from rest_framework import viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from . import services
from .models import Field
from .serializers import (
    AvailabilityQuerySerializer,
    FieldSerializer,
    FieldStatusSerializer,
    PriceQuoteSerializer,
    SlotsQuerySerializer,
    UsageQuerySerializer,
)


class FieldViewSet(viewsets.ModelViewSet):
    queryset = Field.objects.all()
    serializer_class = FieldSerializer
    filterset_fields = ["type", "status"]

    def _field(self, pk) -> Field:
        return services.get_field(pk)

    @action(detail=True, methods=["get"])
    def availability(self, request, pk=None):  # type: ignore
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        available = services.is_available(
            self._field(pk),
            params["date"],
            params["start_time"],
            params["end_time"],
        )
        return Response({"available": available})

    @action(detail=True, methods=["get"])
    def slots(self, request, pk=None):  # type: ignore
        query = SlotsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        slots = services.available_slots(self._field(pk), query.validated_data["date"])
        return Response([slot.to_dict() for slot in slots])

    @action(detail=True, methods=["post"])
    def price(self, request, pk=None):  # type: ignore
        quote = PriceQuoteSerializer(data=request.data)
        quote.is_valid(raise_exception=True)
        params = quote.validated_data
        price = services.quote_price(
            self._field(pk),
            params["start_time"],
            params["end_time"],
            is_weekend=params["is_weekend"],
            with_lighting=params["with_lighting"],
            is_member=params["is_member"],
        )
        return Response({"price": f"{price:.2f}"})

    @action(detail=True, methods=["post"])
    def change_status(self, request, pk=None):  # type: ignore
        serializer = FieldStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        field = services.change_status(pk, serializer.validated_data["status"])
        return Response(FieldSerializer(field).data)

    @action(detail=True, methods=["get"])
    def usage(self, request, pk=None):  # type: ignore
        query = UsageQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        stats = services.field_usage_stats(
            self._field(pk),
            query.validated_data["start_date"],
            query.validated_data["end_date"],
        )
        return Response(stats)
