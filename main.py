# ============================================================================
# ORACLE DR DASHBOARD - MAIN APPLICATION
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Core - FastAPI application entry point
# PURPOSE: Main application, config hot reload and CLI
# CREATED: 18 OCT 2026
# ============================================================================
"""
Oracle DR Dashboard Main Application

FastAPI application that:
1. Serves fleet snapshots of Data Guard pairs over HTTP
2. Watches config.yaml and reloads it on change
3. Exposes service self-checks

Usage:
    python main.py -f config.yaml
    uvicorn main:app --host 0.0.0.0 --port 8080   # uses CONFIG_FILE
"""

import argparse
import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from __version__ import __version__, BUILD_DATE, EPOCH, CODENAME
from api.routes import router, set_services
from core.config import ConfigWatcher, get_config_store, get_defaults
from core.errors import ConfigurationError
from core.logging import configure_logging, get_logger
from health import health_router, get_registry
from services.evaluator import FleetEvaluator

configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
)
logger = get_logger(__name__)


def _apply_logging_config(config) -> None:
    """Switch to the level and log file named in config.yaml."""
    configure_logging(
        level=os.environ.get("LOG_LEVEL", config.logging.level),
        json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
        filename=config.logging.filename or None,
        max_size_mb=config.logging.max_size_mb,
        max_backups=config.logging.max_backups,
        max_age_days=config.logging.max_age_days,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Loads configuration (unless the CLI already did), starts the config
    watcher and wires the evaluators into the routes.
    """
    defaults = get_defaults()
    store = get_config_store()

    logger.info(f"Starting {CODENAME} v{__version__} (Epoch {EPOCH}, Build {BUILD_DATE})")

    if not store.is_loaded:
        config = store.load(defaults.service.config_file)
        _apply_logging_config(config)

    watcher = ConfigWatcher(store, poll_interval=defaults.service.config_poll_interval)
    await watcher.start()

    set_services(
        fleet_evaluator=FleetEvaluator(store=store),
        config_store=store,
        mock_enabled=defaults.service.enable_mock_data,
    )
    if defaults.service.enable_mock_data:
        logger.info("Mock data endpoint enabled")

    import health.checks  # noqa: F401  Register all health check plugins
    logger.info(f"Health checks initialized ({len(get_registry())} checks registered)")

    yield

    logger.info(f"Shutting down {CODENAME}...")
    await watcher.stop()
    logger.info(f"{CODENAME} stopped")


app = FastAPI(
    title=CODENAME,
    description="Oracle Data Guard primary/standby health dashboard",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Health check routes (no prefix - /livez, /readyz, /health)
app.include_router(health_router)

app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": CODENAME,
        "version": __version__,
        "epoch": EPOCH,
        "build_date": BUILD_DATE,
        "status": "running",
        "docs": "/docs",
    }


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=f"{CODENAME} server")
    parser.add_argument(
        "-f", "--config",
        default=get_defaults().service.config_file,
        help="path to config.yaml (default: $CONFIG_FILE or config.yaml)",
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"{CODENAME} {__version__} (build {BUILD_DATE})",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    import uvicorn

    args = parse_args(argv)

    try:
        config = get_config_store().load(args.config)
    except ConfigurationError as e:
        logger.error(f"Failed to load configuration: {e}")
        return 1

    _apply_logging_config(config)

    uvicorn.run(
        app,
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(config.server.port),
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
