"""Tests for facility listing and management."""

from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.facilities.models import Facility, FacilityCategory

User = get_user_model()


class FacilityAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(username="owner", password="OwnerPass123")
        self.other = User.objects.create_user(username="other", password="OtherPass123")
        self.admin = User.objects.create_user(username="admin", password="AdminPass123", is_staff=True)
        self.gyms = FacilityCategory.objects.create(name="Gyms", slug="gyms")
        self.active = Facility.objects.create(
            owner=self.owner,
            category=self.gyms,
            name="Eastside Gym",
            address="10 East Ave",
            city="Denver",
            state="CO",
            price=Decimal("60.00"),
            capacity=40,
            status=Facility.Status.ACTIVE,
        )
        self.pending = Facility.objects.create(
            owner=self.owner,
            name="Loft Studio",
            address="5 Loft Ln",
            city="Seattle",
            state="WA",
            price=Decimal("25.00"),
        )

    def test_create_defaults_timezone_from_state(self) -> None:
        self.client.force_authenticate(self.other)
        response = self.client.post(
            reverse("facility-list"),
            {
                "name": "Harbor Hall",
                "address": "7 Pier St",
                "city": "San Diego",
                "state": "ca",
                "price": "150.00",
                "price_unit": "day",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["state"], "CA")
        self.assertEqual(response.data["availability_timezone"], "America/Los_Angeles")
        self.assertEqual(response.data["status"], Facility.Status.PENDING_APPROVAL)
        self.assertEqual(response.data["owner"], self.other.id)
        self.assertEqual(response.data["slug"], "harbor-hall")

    def test_create_rejects_unknown_state(self) -> None:
        self.client.force_authenticate(self.other)
        response = self.client.post(
            reverse("facility-list"),
            {"name": "Nowhere", "address": "1 A St", "city": "X", "state": "ZZ", "price": "10"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("state", response.data)

    def test_anonymous_users_cannot_create(self) -> None:
        response = self.client.post(reverse("facility-list"), {"name": "Anon"}, format="json")
        self.assertIn(response.status_code, {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN})

    def test_anonymous_list_shows_only_active(self) -> None:
        response = self.client.get(reverse("facility-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["results"][0]["name"], "Eastside Gym")

    def test_owner_sees_own_pending_facility(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.get(reverse("facility-list"))
        self.assertEqual(response.data["count"], 2)

        self.client.force_authenticate(self.other)
        response = self.client.get(reverse("facility-detail", args=[self.pending.id]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_filters(self) -> None:
        response = self.client.get(reverse("facility-list"), {"category": "gyms", "capacity": 30})
        self.assertEqual(response.data["count"], 1)

        response = self.client.get(reverse("facility-list"), {"price_max": "50"})
        self.assertEqual(response.data["count"], 0)

    def test_categories_are_public(self) -> None:
        response = self.client.get(reverse("facility-category-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["slug"] for item in response.data], ["gyms"])

    def test_admin_approves_pending_facility(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.post(reverse("facility-approve", args=[self.pending.id]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse("facility-approve", args=[self.pending.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.pending.refresh_from_db()
        self.assertEqual(self.pending.status, Facility.Status.ACTIVE)
        self.assertIsNotNone(self.pending.approved_at)

    def test_owner_deactivates_facility(self) -> None:
        self.client.force_authenticate(self.other)
        response = self.client.post(reverse("facility-deactivate", args=[self.active.id]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.owner)
        response = self.client.post(reverse("facility-deactivate", args=[self.active.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.active.refresh_from_db()
        self.assertEqual(self.active.status, Facility.Status.INACTIVE)

        response = self.client.post(reverse("facility-deactivate", args=[self.active.id]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_availability_settings_are_read_only_here(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.patch(
            reverse("facility-detail", args=[self.active.id]),
            {"availability_increment": 240, "city": "Boulder"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.active.refresh_from_db()
        self.assertEqual(self.active.city, "Boulder")
        self.assertEqual(self.active.availability_increment, 30)
