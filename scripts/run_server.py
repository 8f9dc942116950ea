from __future__ import annotations

import argparse

import uvicorn

from app.infrastructure.config import get_settings
from app.infrastructure.logging import configure_logging_from_settings


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the E.Q.U.I.P. 360 API server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = get_settings()
    configure_logging_from_settings(settings.logging)

    uvicorn.run(
        "app.web.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload or settings.app.debug,
        log_config=None,
    )


if __name__ == "__main__":
    main()
