"""``waypoint run`` — serve an app with uvicorn."""

import argparse
import sys

from waypoint.cli._resolve import resolve_app


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it; CLI flags override app config."""
    from waypoint.cli import configure_logging

    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    configure_logging(args.log_level or app.config.effective_log_level)
    app.run(host=args.host, port=args.port)
