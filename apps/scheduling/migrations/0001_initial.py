import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('facilities', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='HolidayTemplate',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('description', models.CharField(blank=True, max_length=255)),
                ('holiday_date', models.DateField()),
                ('is_system_holiday', models.BooleanField(default=True)),
            ],
            options={
                'verbose_name': 'Holiday template',
                'verbose_name_plural': 'Holiday templates',
                'ordering': ['holiday_date', 'name'],
                'constraints': [
                    models.UniqueConstraint(fields=('name', 'holiday_date'), name='holiday_template_unique_date'),
                ],
            },
        ),
        migrations.CreateModel(
            name='WeeklyScheduleEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('day_of_week', models.PositiveSmallIntegerField()),
                ('start_time', models.TimeField()),
                ('end_time', models.TimeField()),
                ('is_available', models.BooleanField(default=True)),
                ('facility', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='weekly_schedule', to='facilities.facility')),
            ],
            options={
                'verbose_name': 'Weekly schedule entry',
                'verbose_name_plural': 'Weekly schedule entries',
                'ordering': ['day_of_week', 'start_time'],
                'indexes': [
                    models.Index(fields=['facility', 'day_of_week'], name='scheduling__facilit_4d7a2c_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('day_of_week__gte', 0), ('day_of_week__lte', 6)), name='weekly_schedule_valid_day'),
                    models.CheckConstraint(condition=models.Q(('end_time__gt', models.F('start_time'))), name='weekly_schedule_valid_interval'),
                ],
            },
        ),
        migrations.CreateModel(
            name='AvailabilityException',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('exception_date', models.DateField()),
                ('start_time', models.TimeField(blank=True, null=True)),
                ('end_time', models.TimeField(blank=True, null=True)),
                ('is_available', models.BooleanField(default=False)),
                ('exception_type', models.CharField(choices=[('manual', 'Manual'), ('holiday', 'Holiday'), ('maintenance', 'Maintenance'), ('recurring', 'Recurring')], default='manual', max_length=20)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('facility', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='availability_exceptions', to='facilities.facility')),
            ],
            options={
                'verbose_name': 'Availability exception',
                'verbose_name_plural': 'Availability exceptions',
                'ordering': ['exception_date', 'id'],
                'indexes': [
                    models.Index(fields=['facility', 'exception_date'], name='scheduling__facilit_9b3e51_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(('end_time__isnull', True), ('start_time__isnull', True)),
                            models.Q(('end_time__gt', models.F('start_time')), ('end_time__isnull', False), ('start_time__isnull', False)),
                            _connector='OR',
                        ),
                        name='availability_exception_valid_times',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='FacilitySelectedHoliday',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('facility', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='selected_holidays', to='facilities.facility')),
                ('holiday_template', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='selections', to='scheduling.holidaytemplate')),
            ],
            options={
                'verbose_name': 'Selected holiday',
                'verbose_name_plural': 'Selected holidays',
                'constraints': [
                    models.UniqueConstraint(fields=('facility', 'holiday_template'), name='selected_holiday_unique'),
                ],
            },
        ),
    ]
