from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='FacilityCategory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('slug', models.SlugField(max_length=100, unique=True)),
                ('description', models.TextField(blank=True)),
            ],
            options={
                'verbose_name': 'Facility category',
                'verbose_name_plural': 'Facility categories',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Facility',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('slug', models.SlugField(blank=True, max_length=255, unique=True)),
                ('description', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('pending_approval', 'Pending approval'), ('active', 'Active'), ('inactive', 'Inactive'), ('suspended', 'Suspended')], default='pending_approval', max_length=20)),
                ('address', models.CharField(max_length=255)),
                ('city', models.CharField(max_length=100)),
                ('state', models.CharField(help_text='Two-letter state code.', max_length=2)),
                ('zip_code', models.CharField(blank=True, max_length=10)),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('price_unit', models.CharField(choices=[('hour', 'Per hour'), ('day', 'Per day'), ('session', 'Per session')], default='hour', max_length=10)),
                ('currency', models.CharField(default='USD', max_length=3)),
                ('capacity', models.PositiveIntegerField(blank=True, null=True)),
                ('availability_increment', models.PositiveSmallIntegerField(default=30, help_text='Granularity of bookable start times, in minutes.')),
                ('minimum_rental_duration', models.PositiveSmallIntegerField(blank=True, help_text='Shortest booking in minutes; empty means the same as the increment.', null=True)),
                ('availability_timezone', models.CharField(default='America/New_York', max_length=64)),
                ('availability_notes', models.TextField(blank=True, null=True)),
                ('approved_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='facilities', to='facilities.facilitycategory')),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='facilities', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Facility',
                'verbose_name_plural': 'Facilities',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status'], name='facilities__status_8c1f0e_idx'),
                    models.Index(fields=['owner', 'status'], name='facilities__owner_i_5b2a7d_idx'),
                    models.Index(fields=['city', 'state'], name='facilities__city_3e9d41_idx'),
                ],
            },
        ),
    ]
