"""fhir-setup: run the local config-collection server until a config is saved."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import uvicorn

from ..log_config import configure_logging
from ..settings import get_settings
from .app import create_app

logger = logging.getLogger(__name__)

PROJECT_MARKER = ".claude"


def default_project_root(start: Path | None = None) -> Path:
    """Nearest ancestor holding a ``.claude`` directory, else the working directory."""
    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / PROJECT_MARKER).is_dir():
            return candidate
    return Path.cwd()


def serve(config_dir: Path, host: str, port: int) -> None:
    server: uvicorn.Server | None = None

    def request_shutdown() -> None:
        if server is not None:
            server.should_exit = True

    app = create_app(config_dir, request_shutdown)
    server = uvicorn.Server(uvicorn.Config(app, host=host, port=port, log_config=None))

    logger.info("FHIR setup server running at: http://%s:%d", host, port)
    logger.info("  Open the link above to save or select a FHIR server config.")
    logger.info("  The server shuts down after a config is saved or selected.")
    server.run()


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    settings = get_settings()

    parser = argparse.ArgumentParser(prog="fhir-setup", description=__doc__)
    parser.add_argument("--project-root", type=Path, help="Project root (default: nearest .claude ancestor or cwd)")
    parser.add_argument("--host", default=settings.setup_host)
    parser.add_argument("--port", type=int, default=settings.setup_port)
    args = parser.parse_args(argv)

    project_root = args.project_root or default_project_root()
    config_dir = project_root / settings.config_dir_name
    config_dir.mkdir(parents=True, exist_ok=True)

    try:
        serve(config_dir, args.host, args.port)
    except KeyboardInterrupt:
        logger.info("\nServer stopped by user")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
