"""
Local config-collection server.

- GET  /               : static setup form
- GET  /list-configs   : stored configs
- POST /save-config    : write a config, then shut down
- POST /select-config  : choose an existing config, then shut down
- POST /delete-config  : remove a config
- POST /shutdown       : stop the server

Configs carry either a manually pasted access token or open mode (no
Authorization header). An OAuth authorization-code flow is not offered; obtain
the token elsewhere and paste it.

Unauthenticated and CORS-open; bind it to localhost only.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from fastapi import BackgroundTasks, Body, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from ..errors import ConfigNotFoundError, TemplateDataError
from ..execution import config_store

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _log_selected(name: str, config: dict[str, Any]) -> None:
    logger.info("\nConfiguration details:")
    logger.info("  Name: %s", name)
    logger.info("  FHIR Base URL: %s", config.get("fhirBaseUrl"))
    logger.info("  Mode: %s", config.get("mode") or "unknown")
    logger.info("  Patient ID: %s", config.get("patientId") or "not set")
    logger.info("  Has Access Token: %s", "Yes" if config.get("accessToken") else "No")
    # read by scripts driving the setup flow
    logger.info("\nSELECTED_CONFIG: %s", name)


def create_app(config_dir: Path, request_shutdown: Callable[[], None]) -> FastAPI:
    app = FastAPI(
        title="FHIR Setup Server",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.state.config_dir = config_dir
    app.state.request_shutdown = request_shutdown

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        return HTMLResponse((STATIC_DIR / "auth.html").read_text(encoding="utf-8"))

    @app.get("/list-configs")
    async def list_configs() -> Any:
        try:
            return config_store.list_configs(config_dir)
        except (TemplateDataError, OSError) as exc:
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    @app.post("/save-config")
    async def save_config(
        background: BackgroundTasks,
        payload: dict[str, Any] = Body(...),
    ) -> Any:
        if not payload.get("fhirBaseUrl"):
            return _error(status.HTTP_400_BAD_REQUEST, "fhirBaseUrl is required")
        if not payload.get("name"):
            return _error(status.HTTP_400_BAD_REQUEST, "config name is required")
        try:
            path = config_store.save_config(config_dir, payload)
        except ValueError as exc:
            return _error(status.HTTP_400_BAD_REQUEST, str(exc))
        except OSError as exc:
            logger.error("Error saving config: %s", exc)
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

        _log_selected(payload["name"], payload)
        logger.info("\nSetup complete! Shutting down server...")
        background.add_task(request_shutdown)
        return {"success": True, "file": str(path), "configName": payload["name"]}

    @app.post("/select-config")
    async def select_config(
        background: BackgroundTasks,
        payload: dict[str, Any] = Body(...),
    ) -> Any:
        name = str(payload.get("name", ""))
        try:
            config = config_store.load_config(config_dir, name)
        except TemplateDataError as exc:
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
        except (ConfigNotFoundError, ValueError):
            return _error(status.HTTP_404_NOT_FOUND, "Config not found")

        _log_selected(name, config.model_dump(by_alias=True))
        logger.info("\nConfiguration selected! Shutting down server...")
        background.add_task(request_shutdown)
        return {"success": True, "configName": name}

    @app.post("/delete-config")
    async def delete_config(payload: dict[str, Any] = Body(...)) -> Any:
        try:
            config_store.delete_config(config_dir, str(payload.get("name", "")))
        except (ConfigNotFoundError, ValueError):
            return _error(status.HTTP_404_NOT_FOUND, "Config not found")
        return {"success": True}

    @app.post("/shutdown", response_class=PlainTextResponse)
    async def shutdown(background: BackgroundTasks) -> str:
        background.add_task(request_shutdown)
        return "OK"

    return app
