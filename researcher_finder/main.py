"""
Application entry point.

This module serves as the main entry point for running the
Researcher Finder API server using uvicorn. Settings are read from the
environment once, here, and handed to the application.
"""

from uvicorn import run

from researcher_finder.api.app import create_app
from researcher_finder.core.config import Settings


def main():
    settings = Settings.from_env()
    app = create_app(settings)
    run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
