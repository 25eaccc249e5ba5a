"""
Notes API - Server Entry Point
===============================

Runs the app under uvicorn on settings.host / settings.port.

Usage:
    python -m notes_api
    notes-api                 (console script installed with the package)
"""

import uvicorn

from notes_api.config import settings


def main() -> None:
    uvicorn.run(
        "notes_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
