from __future__ import annotations

import argparse
import logging

import uvicorn

from .config import get_settings


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Run the subscriber relay + notebook overlay.")
    ap.add_argument("--host", default=settings.host, help="Bind address")
    ap.add_argument("--port", type=int, default=settings.port, help="Listen port")
    ap.add_argument("--log-level", default=settings.log_level, help="Python log level (INFO, DEBUG, ...)")
    args = ap.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("Server running on port %d", args.port)
    uvicorn.run(
        "subscriber_notebook.server.app:app",
        host=args.host,
        port=args.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
