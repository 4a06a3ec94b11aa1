"""Process entry points: build settings once, wire services, start a surface."""

from .config import load_settings
from .core.logging_config import configure_logging
from .services import build_services


def console_main() -> int:
    from .ui.console import ConsoleApp

    settings = load_settings()
    configure_logging(settings.log_level)

    provider, student_service, auth_service = build_services(settings)
    if not provider.init_db():
        print("❌ Could not reach the database, check DATABASE_URL in .env")
        provider.dispose()
        return 1

    try:
        app = ConsoleApp(student_service, auth_service, app_name=settings.app_name)
        return app.run()
    finally:
        provider.dispose()


def desktop_main() -> int:
    # tkinter is imported only when the window is actually wanted
    from .ui.desktop import run_desktop

    settings = load_settings()
    configure_logging(settings.log_level)

    provider, student_service, auth_service = build_services(settings)
    if not provider.init_db():
        print("❌ Could not reach the database, check DATABASE_URL in .env")
        provider.dispose()
        return 1

    try:
        return run_desktop(student_service, auth_service, settings.app_name)
    finally:
        provider.dispose()
