from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError  # type: ignore
from django.db import transaction  # type: ignore

from apps.scheduling.domain.holidays import common_holidays
from apps.scheduling.models import HolidayTemplate


class Command(BaseCommand):
    help = "Creates the system holiday templates for the given years"

    def add_arguments(self, parser):  # type: ignore
        parser.add_argument("years", nargs="+", type=int)

    @transaction.atomic
    def handle(self, *args, **options):  # type: ignore
        created = 0
        for year in options["years"]:
            if not 1970 <= year <= 2100:
                raise CommandError(f"Year {year} is out of range")
            for name, description, holiday_date in common_holidays(year):
                _, was_created = HolidayTemplate.objects.get_or_create(
                    name=name,
                    holiday_date=holiday_date,
                    defaults={"description": description, "is_system_holiday": True},
                )
                created += was_created
        self.stdout.write(self.style.SUCCESS(f"Created {created} holiday templates"))
