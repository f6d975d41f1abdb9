"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore
from django.utils import timezone  # type: ignore

from shared.infrastructure.repository import Patch

from . import services
from .models import Booking
from .serializers import (
    BookingCancelSerializer,
    BookingCreateSerializer,
    BookingPaymentSerializer,
    BookingSerializer,
    StatisticsQuerySerializer,
    UpcomingQuerySerializer,
)


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """Viewset for booking fields and moving bookings through their lifecycle."""

    queryset = Booking.objects.select_related("field", "member").all()
    filterset_fields = ["field", "date", "status", "payment_status", "member", "is_external"]
    http_method_names = ["get", "post", "patch", "head", "options"]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        return BookingSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()
        read_serializer = BookingSerializer(booking, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def perform_update(self, serializer):  # type: ignore
        serializer.instance = services.update_booking(
            serializer.instance.pk,
            Patch(dict(serializer.validated_data)),
        )

    def _respond(self, booking: Booking) -> Response:
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    @action(detail=True, methods=["post"])
    def confirm(self, request, pk=None):  # type: ignore
        return self._respond(services.confirm_booking(pk))

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        serializer = BookingCancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._respond(services.cancel_booking(pk, serializer.validated_data["reason"]))

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):  # type: ignore
        return self._respond(services.complete_booking(pk))

    @action(detail=True, methods=["post"])
    def pay(self, request, pk=None):  # type: ignore
        serializer = BookingPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.mark_booking_paid(pk, serializer.validated_data["payment_reference"])
        return self._respond(booking)

    @action(detail=False, methods=["get"])
    def today(self, request):  # type: ignore
        bookings = services.bookings_for_date(timezone.localdate())
        return Response(BookingSerializer(bookings, many=True).data)

    @action(detail=False, methods=["get"])
    def upcoming(self, request):  # type: ignore
        query = UpcomingQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        bookings = services.upcoming_bookings(query.validated_data["limit"])
        return Response(BookingSerializer(bookings, many=True).data)

    @action(detail=False, methods=["get"])
    def statistics(self, request):  # type: ignore
        query = StatisticsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        return Response(services.booking_statistics(params.get("start_date"), params.get("end_date")))
