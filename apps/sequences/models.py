"""Sequence counter model."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Counter(models.Model):
    """Named counter holding the last value it issued."""

    name = models.CharField(max_length=64, primary_key=True)
    value = models.PositiveBigIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Counter")
        verbose_name_plural = _("Counters")
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name}={self.value}"
