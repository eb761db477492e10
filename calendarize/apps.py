from django.apps import AppConfig


class CalendarizeConfig(AppConfig):
    name = "calendarize"
    verbose_name = "Calendarize"

    def ready(self):
        # bad CALENDARIZE_* settings are reported at startup
        from .conf import default_options

        default_options().validate()
