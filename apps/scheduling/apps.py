from django.apps import AppConfig


class SchedulingConfig(AppConfig):
    name = 'apps.scheduling'
    label = 'scheduling'
    verbose_name = 'Availability scheduling'
    default_auto_field = 'django.db.models.BigAutoField'

    def ready(self):
        from shared.application.message_bus import message_bus

        from .application.event_handlers import register_event_handlers

        register_event_handlers(message_bus)
