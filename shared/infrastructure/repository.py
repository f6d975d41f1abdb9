"""
Generic Repository

Persistence capabilities shared by fields, bookings, products and orders.
Services compose a repository per model instead of inheriting a CRUD base:

    bookings = DjangoRepository(Booking, not_found=BookingNotFoundError)
    booking = bookings.get(booking_id, lock=True)
    booking = bookings.update(booking, Patch.of(notes="Late arrival"))

Partial updates go through ``Patch``: only the listed fields are written,
everything else in the stored row stays untouched.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

from django.core.exceptions import FieldDoesNotExist, ValidationError  # type: ignore
from django.db import models, transaction  # type: ignore
from django.db.models import QuerySet  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from shared.domain.exceptions import NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=models.Model)


def lock_if_possible(queryset: QuerySet) -> QuerySet:
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


@dataclass(frozen=True)
class Patch:
    """A set of field changes to merge into a stored record."""

    changes: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, **changes: Any) -> "Patch":
        return cls(dict(changes))

    def apply(self, instance: models.Model) -> list[str]:
        """Set changed values on ``instance`` and return the names that changed."""

        changed = []
        for name, value in self.changes.items():
            try:
                instance._meta.get_field(name)
            except FieldDoesNotExist:
                raise ValueError(f"{instance.__class__.__name__} has no field '{name}'")
            if getattr(instance, name) != value:
                setattr(instance, name, value)
                changed.append(name)
        return changed

    def __bool__(self) -> bool:
        return bool(self.changes)


class DjangoRepository(Generic[ModelT]):
    """create/get/update/delete/paginate/find_by over one Django model."""

    def __init__(self, model: type[ModelT], not_found: type[NotFoundError] = NotFoundError):
        self.model = model
        self.not_found = not_found

    @property
    def objects(self) -> QuerySet:
        return self.model._default_manager.all()

    def create(self, **values: Any) -> ModelT:
        instance = self.model._default_manager.create(**values)
        logger.debug(f"Created {self.model.__name__} {instance.pk}")
        return instance

    def find(self, pk: Any, *, lock: bool = False) -> ModelT | None:
        try:
            queryset = self.objects.filter(pk=pk)
            if lock:
                queryset = lock_if_possible(queryset)
            return queryset.first()
        except (ValueError, TypeError, ValidationError):
            return None

    def get(self, pk: Any, *, lock: bool = False) -> ModelT:
        instance = self.find(pk, lock=lock)
        if instance is None:
            raise self.not_found(f"{self.model._meta.verbose_name.capitalize()} {pk} not found")
        return instance

    def update(self, target: ModelT | Any, patch: Patch) -> ModelT:
        """Apply ``patch`` and return the full, saved record."""

        instance = target if isinstance(target, self.model) else self.get(target)
        changed = patch.apply(instance)
        if changed:
            if _has_field(instance, "updated_at"):
                changed.append("updated_at")
            instance.save(update_fields=changed)
        return instance

    def delete(self, pk: Any) -> None:
        instance = self.get(pk)
        instance.delete()
        logger.info(f"Deleted {self.model.__name__} {pk}")

    def find_by(self, **lookups: Any) -> QuerySet:
        return self.objects.filter(**lookups)

    def paginate(self, page: int = 1, limit: int = 10, order_by: str = "-created_at") -> dict:
        total = self.objects.count()
        offset = (page - 1) * limit
        data = list(self.objects.order_by(order_by)[offset:offset + limit])
        return {
            "data": data,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": math.ceil(total / limit) if limit else 0,
            },
        }


def _has_field(instance: models.Model, name: str) -> bool:
    try:
        instance._meta.get_field(name)
    except FieldDoesNotExist:
        return False
    return True
