"""Development entrypoint for the Frostwind Keep HTTP API."""

from __future__ import annotations

import argparse
import logging
import os

import uvicorn

APP_PATH = "frostwind.api.app:app"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve a Frostwind Keep game over HTTP")
    parser.add_argument("--host", default="127.0.0.1", help="Host interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="TCP port to listen on")
    parser.add_argument("--seed", type=int, help="Seed the new game for a reproducible run")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Expose the debug override endpoints",
    )
    parser.add_argument("--log-level", default="INFO", help="Level for the frostwind loggers")
    parser.add_argument("--reload", action="store_true", help="Enable autoreload (dev mode)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    # Settings are read from the environment when the app module is imported,
    # including by the reloader's worker process.
    if args.seed is not None:
        os.environ["FROSTWIND_SEED"] = str(args.seed)
    if args.debug:
        os.environ["FROSTWIND_DEBUG_MODE"] = "true"
    os.environ["FROSTWIND_LOG_LEVEL"] = args.log_level.upper()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(APP_PATH, host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
