from django.apps import AppConfig


class LazyloadConfig(AppConfig):
    name = "django_lazyload"

    # This is the code that gets run when user adds django_lazyload
    # to Django's INSTALLED_APPS
    def ready(self) -> None:
        from django_lazyload.app_settings import app_settings
        from django_lazyload.hooks import get_hooks

        # Fail early on misconfiguration, instead of on the first rendered page
        app_settings.PLACEHOLDER_TYPE
        get_hooks()
