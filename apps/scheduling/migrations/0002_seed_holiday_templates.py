from django.db import migrations

from apps.scheduling.domain.holidays import common_holidays

SEEDED_YEARS = (2025, 2026, 2027)


def seed_holidays(apps, schema_editor):
    HolidayTemplate = apps.get_model('scheduling', 'HolidayTemplate')
    for year in SEEDED_YEARS:
        for name, description, holiday_date in common_holidays(year):
            HolidayTemplate.objects.get_or_create(
                name=name,
                holiday_date=holiday_date,
                defaults={'description': description, 'is_system_holiday': True},
            )


def remove_holidays(apps, schema_editor):
    HolidayTemplate = apps.get_model('scheduling', 'HolidayTemplate')
    HolidayTemplate.objects.filter(holiday_date__year__in=SEEDED_YEARS, is_system_holiday=True).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('scheduling', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_holidays, remove_holidays),
    ]
