#!/usr/bin/env python
"""Command-line entry point for the portfolio CMS (runserver, migrate, seed_portfolio, test)."""
import os
import sys


def main():
    # Project root must be importable so `apps`, `common` and `config` resolve
    current_path = os.path.dirname(os.path.abspath(__file__))
    if current_path not in sys.path:
        sys.path.insert(0, current_path)

    # config.settings picks local/production from DJANGO_ENV
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Make sure it's installed and "
            "available on your PYTHONPATH. Activate your virtualenv if needed."
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
