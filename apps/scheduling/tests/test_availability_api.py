"""Integration tests for facility availability API endpoints."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.facilities.models import Facility
from apps.scheduling.models import AvailabilityException, HolidayTemplate, WeeklyScheduleEntry

User = get_user_model()

MONDAY = date(2024, 6, 3)


def business_week() -> list[dict]:
    return [
        {
            "day": day,
            "is_available": 1 <= day <= 5,
            "time_slots": [{"start": "09:00", "end": "17:00"}] if 1 <= day <= 5 else [],
        }
        for day in range(7)
    ]


class AvailabilityAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(username="owner", password="OwnerPass123")
        self.renter = User.objects.create_user(username="renter", password="RenterPass123")
        self.facility = Facility.objects.create(
            owner=self.owner,
            name="Downtown Studio",
            address="200 Main St",
            city="Portland",
            state="OR",
            price=Decimal("40.00"),
            price_unit=Facility.PriceUnit.HOUR,
            availability_timezone="America/Los_Angeles",
            status=Facility.Status.ACTIVE,
        )
        self.client.force_authenticate(self.owner)

    def _url(self, name: str, **kwargs) -> str:
        return reverse(name, kwargs={"facility_id": self.facility.id, **kwargs})

    def _save_business_week(self):
        response = self.client.put(
            self._url("facility-weekly-schedule"), {"days": business_week()}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        return response

    def test_owner_replaces_weekly_schedule(self) -> None:
        response = self._save_business_week()

        self.assertEqual(WeeklyScheduleEntry.objects.filter(facility=self.facility).count(), 5)
        self.assertEqual(response.data["days"][0]["day_name"], "Monday")
        self.assertEqual(response.data["days"][0]["time_slots"], [{"start": "09:00", "end": "17:00"}])
        self.assertFalse(response.data["days"][6]["is_available"])

    def test_weekly_schedule_read_back(self) -> None:
        self._save_business_week()
        response = self.client.get(self._url("facility-weekly-schedule"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([day["day"] for day in response.data["days"]], [1, 2, 3, 4, 5, 6, 0])

    def test_partial_week_is_rejected(self) -> None:
        response = self.client.put(
            self._url("facility-weekly-schedule"), {"days": business_week()[:3]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("days", response.data)

    def test_overlapping_intervals_are_rejected(self) -> None:
        days = business_week()
        days[1]["time_slots"] = [{"start": "09:00", "end": "13:00"}, {"start": "12:00", "end": "17:00"}]
        response = self.client.put(self._url("facility-weekly-schedule"), {"days": days}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(WeeklyScheduleEntry.objects.exists())

    def test_failed_insert_returns_distinct_error_and_keeps_schedule(self) -> None:
        self._save_business_week()
        with mock.patch.object(WeeklyScheduleEntry.objects, "bulk_create", side_effect=DatabaseError("boom")):
            response = self.client.put(
                self._url("facility-weekly-schedule"), {"days": business_week()}, format="json"
            )

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["code"], "schedule_replace_failed")
        self.assertEqual(WeeklyScheduleEntry.objects.filter(facility=self.facility).count(), 5)

    def test_other_users_cannot_edit(self) -> None:
        self.client.force_authenticate(self.renter)
        response = self.client.put(
            self._url("facility-weekly-schedule"), {"days": business_week()}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_anonymous_can_read_active_facility(self) -> None:
        self._save_business_week()
        self.client.force_authenticate(None)
        response = self.client.get(self._url("facility-availability-slots"), {"date": MONDAY.isoformat()})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_inactive_facility_is_hidden_from_others(self) -> None:
        self.facility.status = Facility.Status.PENDING_APPROVAL
        self.facility.save()
        self.client.force_authenticate(self.renter)
        response = self.client.get(self._url("facility-weekly-schedule"))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_apply_template(self) -> None:
        response = self.client.post(
            self._url("facility-weekly-schedule-template"), {"template": "weekends-only"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(
            set(WeeklyScheduleEntry.objects.filter(facility=self.facility).values_list("day_of_week", flat=True)),
            {0, 6},
        )

    def test_unknown_template(self) -> None:
        response = self.client.post(
            self._url("facility-weekly-schedule-template"), {"template": "midnight"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("template", response.data)

    def test_lunch_block_splits_slots(self) -> None:
        self._save_business_week()
        response = self.client.post(
            self._url("facility-availability-exception-list"),
            {"exception_date": MONDAY.isoformat(), "start_time": "12:00", "end_time": "13:00", "notes": "Lunch"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertFalse(response.data["is_whole_day"])

        slots = self.client.get(self._url("facility-availability-slots"), {"date": MONDAY.isoformat()})

        self.assertEqual(slots.status_code, status.HTTP_200_OK, slots.data)
        self.assertEqual(len(slots.data["slots"]), 14)
        self.assertEqual(
            slots.data["intervals"],
            [{"start": "09:00", "end": "12:00"}, {"start": "13:00", "end": "17:00"}],
        )
        self.assertEqual(slots.data["price"], {"amount": "20.00", "currency": "USD"})

    def test_slots_with_duration(self) -> None:
        self._save_business_week()
        response = self.client.get(
            self._url("facility-availability-slots"), {"date": MONDAY.isoformat(), "duration": 120}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["bookable_starts"][-1], {"start": "15:00", "end": "15:30"})
        self.assertEqual(response.data["price"]["amount"], "80.00")

    def test_slots_reject_bad_duration(self) -> None:
        response = self.client.get(
            self._url("facility-availability-slots"), {"date": MONDAY.isoformat(), "duration": 45}
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("duration", response.data)

    def test_whole_day_opening_on_closed_weekend(self) -> None:
        saturday = date(2024, 6, 8)
        self.client.post(
            self._url("facility-availability-exception-list"),
            {"exception_date": saturday.isoformat(), "is_available": True, "exception_type": "holiday"},
            format="json",
        )
        response = self.client.get(
            self._url("facility-availability"), {"start": "2024-06-08", "end": "2024-06-09"}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        saturday_data, sunday_data = response.data["days"]
        self.assertEqual(saturday_data["intervals"], [{"start": "00:00", "end": "23:59"}])
        self.assertFalse(sunday_data["is_available"])
        self.assertEqual(response.data["timezone"], "America/Los_Angeles")

    def test_resolved_window_defaults_and_limits(self) -> None:
        response = self.client.get(self._url("facility-availability"), {"start": "2024-06-01"})
        self.assertEqual(len(response.data["days"]), 30)

        response = self.client.get(self._url("facility-availability"), {"start": "2024-01-01", "days": 400})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_exception_requires_both_times(self) -> None:
        response = self.client.post(
            self._url("facility-availability-exception-list"),
            {"exception_date": MONDAY.isoformat(), "start_time": "12:00"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(AvailabilityException.objects.exists())

    def test_list_and_delete_exceptions(self) -> None:
        created = AvailabilityException.objects.create(facility=self.facility, exception_date=MONDAY)
        AvailabilityException.objects.create(facility=self.facility, exception_date=date(2024, 7, 1))

        listed = self.client.get(
            self._url("facility-availability-exception-list"), {"start": "2024-06-01", "end": "2024-06-30"}
        )
        self.assertEqual([item["id"] for item in listed.data], [created.id])

        response = self.client.delete(self._url("facility-availability-exception-detail", pk=created.id))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(AvailabilityException.objects.filter(pk=created.id).exists())

        response = self.client.delete(self._url("facility-availability-exception-detail", pk=created.id))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_config_update_resets_invalid_minimum(self) -> None:
        url = self._url("facility-availability-config")
        response = self.client.put(url, {"minimum_rental_duration": 60}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

        response = self.client.put(url, {"availability_increment": 60}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIsNone(response.data["minimum_rental_duration"])
        self.assertEqual(response.data["effective_minimum_duration"], 60)
        self.assertEqual(response.data["minimum_duration_options"], [120, 240, 480, 960])
        self.facility.refresh_from_db()
        self.assertIsNone(self.facility.minimum_rental_duration)

    def test_config_rejects_unknown_timezone(self) -> None:
        response = self.client.put(
            self._url("facility-availability-config"), {"timezone": "Nowhere/Atlantis"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("timezone", response.data)

    def test_store_outage_is_reported_as_unavailable(self) -> None:
        with mock.patch.object(WeeklyScheduleEntry.objects, "filter", side_effect=DatabaseError("down")):
            response = self.client.get(self._url("facility-weekly-schedule"))
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data["code"], "store_unavailable")

    def test_long_minimum_duration_still_lists_slots(self) -> None:
        self._save_business_week()
        response = self.client.put(
            self._url("facility-availability-config"),
            {"availability_increment": 60, "minimum_rental_duration": 960},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

        response = self.client.get(self._url("facility-availability-slots"), {"date": MONDAY.isoformat()})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(response.data["slots"]), 8)
        self.assertEqual(response.data["duration"], 960)
        self.assertEqual(response.data["duration_options"], [])
        self.assertEqual(response.data["bookable_starts"], [])

    def test_clearing_holidays_keeps_owner_exceptions(self) -> None:
        template = HolidayTemplate.objects.create(name="Rose Festival", holiday_date=date(2030, 6, 7))
        url = self._url("facility-holiday-selection")
        self.client.put(url, {"holiday_template_ids": [template.id]}, format="json")
        response = self.client.post(
            self._url("facility-availability-exception-list"),
            {
                "exception_date": "2030-06-07",
                "start_time": "18:00",
                "end_time": "20:00",
                "is_available": True,
                "exception_type": "holiday",
                "notes": "Parade viewing",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

        response = self.client.put(url, {"holiday_template_ids": []}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        remaining = AvailabilityException.objects.filter(facility=self.facility)
        self.assertEqual([row.notes for row in remaining], ["Parade viewing"])

    def test_holiday_selection_creates_closures(self) -> None:
        template = HolidayTemplate.objects.create(name="Rose Festival", holiday_date=date(2030, 6, 7))
        response = self.client.put(
            self._url("facility-holiday-selection"), {"holiday_template_ids": [template.id]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        closure = AvailabilityException.objects.get(facility=self.facility, exception_date=date(2030, 6, 7))
        self.assertEqual(closure.exception_type, AvailabilityException.ExceptionType.HOLIDAY)
        self.assertIsNone(closure.start_time)

        selected = self.client.get(self._url("facility-holiday-selection"))
        self.assertEqual([item["name"] for item in selected.data], ["Rose Festival"])

    def test_template_catalogues(self) -> None:
        self.client.force_authenticate(None)
        templates = self.client.get(reverse("weekly-template-list"))
        holidays = self.client.get(reverse("holiday-template-list"))
        self.assertEqual(templates.status_code, status.HTTP_200_OK)
        self.assertIn("full-week", [item["key"] for item in templates.data])
        self.assertTrue(holidays.data)


class StoredTimesTests(APITestCase):
    def test_seconds_in_stored_times_are_ignored(self) -> None:
        owner = User.objects.create_user(username="secs", password="SecsPass123")
        facility = Facility.objects.create(
            owner=owner, name="Court", address="1 Court St", city="Miami", state="FL",
            price=Decimal("10"), status=Facility.Status.ACTIVE,
        )
        WeeklyScheduleEntry.objects.create(
            facility=facility, day_of_week=1, start_time=time(9, 0, 30), end_time=time(10, 0, 45)
        )
        response = self.client.get(
            reverse("facility-availability-slots", kwargs={"facility_id": facility.id}),
            {"date": MONDAY.isoformat(), "duration": 60},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["slots"], [
            {"start": "09:00", "end": "09:30"},
            {"start": "09:30", "end": "10:00"},
        ])
