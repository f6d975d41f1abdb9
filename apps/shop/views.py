"""API views for the club shop."""

from __future__ import annotations

from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from . import services
from .models import Order, Product
from .serializers import (
    AvailabilityQuerySerializer,
    LowStockQuerySerializer,
    OrderCreateSerializer,
    OrderDiscountSerializer,
    OrderPaymentSerializer,
    OrderSerializer,
    ProductSerializer,
    StockQuantitySerializer,
)


class ProductViewSet(viewsets.ModelViewSet):
    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    filterset_fields = ["category", "is_active", "has_stock"]

    def _quantity(self, request) -> int:
        serializer = StockQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data["quantity"]

    @action(detail=True, methods=["get"])
    def availability(self, request, pk=None):  # type: ignore
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        available = services.check_availability(
            services.get_product(pk),
            query.validated_data["quantity"],
            query.validated_data.get("size") or None,
        )
        return Response({"available": available})

    @action(detail=True, methods=["post"])
    def stock(self, request, pk=None):  # type: ignore
        product = services.update_stock(pk, self._quantity(request))
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["post"])
    def increase_stock(self, request, pk=None):  # type: ignore
        product = services.increase_stock(pk, self._quantity(request))
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["post"])
    def decrease_stock(self, request, pk=None):  # type: ignore
        product = services.decrease_stock(pk, self._quantity(request))
        return Response(ProductSerializer(product).data)

    @action(detail=False, methods=["get"])
    def low_stock(self, request):  # type: ignore
        query = LowStockQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        products = services.low_stock_products(query.validated_data.get("threshold"))
        return Response(ProductSerializer(products, many=True).data)


class OrderViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Orders are only changed through their lifecycle actions."""

    queryset = Order.objects.prefetch_related("items").all()
    filterset_fields = ["status", "member", "delivery_method"]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return OrderCreateSerializer
        return OrderSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = serializer.save()
        data = self._serialize(order)
        return Response(data, status=status.HTTP_201_CREATED, headers=self.get_success_headers(data))

    def _serialize(self, order: Order) -> dict:
        order = Order.objects.prefetch_related("items").get(pk=order.pk)
        return OrderSerializer(order, context=self.get_serializer_context()).data

    def _respond(self, order: Order) -> Response:
        return Response(self._serialize(order))

    @action(detail=True, methods=["post"])
    def confirm(self, request, pk=None):  # type: ignore
        return self._respond(services.confirm_order(pk))

    @action(detail=True, methods=["post"])
    def preparing(self, request, pk=None):  # type: ignore
        return self._respond(services.mark_order_preparing(pk))

    @action(detail=True, methods=["post"])
    def ready(self, request, pk=None):  # type: ignore
        return self._respond(services.mark_order_ready(pk))

    @action(detail=True, methods=["post"])
    def deliver(self, request, pk=None):  # type: ignore
        return self._respond(services.mark_order_delivered(pk))

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        return self._respond(services.cancel_order(pk))

    @action(detail=True, methods=["post"])
    def discount(self, request, pk=None):  # type: ignore
        serializer = OrderDiscountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._respond(services.apply_discount(pk, serializer.validated_data["amount"]))

    @action(detail=True, methods=["post"])
    def pay(self, request, pk=None):  # type: ignore
        serializer = OrderPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._respond(services.mark_order_paid(pk, serializer.validated_data["payment_reference"]))

    @action(detail=False, methods=["get"])
    def statistics(self, request):  # type: ignore
        return Response(services.order_statistics())
