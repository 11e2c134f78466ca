"""
ASGI Entry Point for the Chronolens API.

Exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn). `.env`
is loaded before the application factory runs so that settings read at
import time see it.

Usage
-----
    $ python -m chronolens.api.server
    $ uvicorn chronolens.api.server:app --reload
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(".env"))

from chronolens.api.app import create_app  # noqa: E402
from chronolens.core.settings import load_settings  # noqa: E402

app = create_app()


def main() -> None:
    """Run the API server locally for development."""
    cfg = load_settings()
    uvicorn.run(
        "chronolens.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=cfg.is_dev,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()
