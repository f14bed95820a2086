"""Facility listing models.

A facility is a rentable space (gym, studio, field, hall) listed by its
owner. Besides the listing fields it carries the four availability
settings columns used by the scheduling app.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.text import slugify  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class FacilityCategory(models.Model):
    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=100, unique=True)
    description = models.TextField(blank=True)

    class Meta:
        verbose_name = _("Facility category")
        verbose_name_plural = _("Facility categories")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Facility(models.Model):
    """A listed facility and its availability settings."""

    class Status(models.TextChoices):
        PENDING_APPROVAL = "pending_approval", _("Pending approval")
        ACTIVE = "active", _("Active")
        INACTIVE = "inactive", _("Inactive")
        SUSPENDED = "suspended", _("Suspended")

    class PriceUnit(models.TextChoices):
        HOUR = "hour", _("Per hour")
        DAY = "day", _("Per day")
        SESSION = "session", _("Per session")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="facilities",
    )
    category = models.ForeignKey(
        FacilityCategory,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="facilities",
    )
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    description = models.TextField(blank=True)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING_APPROVAL,
    )
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=2, help_text=_("Two-letter state code."))
    zip_code = models.CharField(max_length=10, blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    price_unit = models.CharField(max_length=10, choices=PriceUnit.choices, default=PriceUnit.HOUR)
    currency = models.CharField(max_length=3, default="USD")
    capacity = models.PositiveIntegerField(null=True, blank=True)

    # Availability settings
    availability_increment = models.PositiveSmallIntegerField(
        default=30,
        help_text=_("Granularity of bookable start times, in minutes."),
    )
    minimum_rental_duration = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        help_text=_("Shortest booking in minutes; empty means the same as the increment."),
    )
    availability_timezone = models.CharField(max_length=64, default="America/New_York")
    availability_notes = models.TextField(blank=True, null=True)

    approved_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Facility")
        verbose_name_plural = _("Facilities")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="facilities__status_8c1f0e_idx"),
            models.Index(fields=["owner", "status"], name="facilities__owner_i_5b2a7d_idx"),
            models.Index(fields=["city", "state"], name="facilities__city_3e9d41_idx"),
        ]

    def __str__(self) -> str:
        return self.name

    def approve(self) -> None:
        if self.status != self.Status.ACTIVE:
            self.status = self.Status.ACTIVE
            self.approved_at = timezone.now()
            self.save(update_fields=["status", "approved_at", "updated_at"])

    def deactivate(self) -> None:
        if self.status == self.Status.ACTIVE:
            self.status = self.Status.INACTIVE
            self.save(update_fields=["status", "updated_at"])

    def save(self, *args, **kwargs):  # type: ignore
        if not self.slug:
            base_slug = slugify(self.name)[:200] or "facility"
            candidate = base_slug
            counter = 1
            while self.__class__.objects.filter(slug=candidate).exclude(pk=self.pk).exists():
                counter += 1
                candidate = f"{base_slug}-{counter}"
            self.slug = candidate
        super().save(*args, **kwargs)
