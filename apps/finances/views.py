"""API views for club payments.

Payments are created through the service layer so that every record
gets a unique receipt number. Updating amounts after creation is not
supported; status changes go through the ``pay`` action.
"""

from __future__ import annotations

from rest_framework import mixins, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .models import Payment
from .serializers import PaymentSerializer


class PaymentViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    queryset = Payment.objects.select_related("member").all()
    serializer_class = PaymentSerializer
    filterset_fields = ["member", "status", "type"]

    @action(detail=True, methods=["post"])
    def pay(self, request, pk=None):  # type: ignore
        payment: Payment = self.get_object()  # type: ignore
        if payment.status != Payment.Status.PAID:
            payment.mark_paid(request.data.get("payment_method", ""))
        return Response(self.get_serializer(payment).data)
