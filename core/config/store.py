# ============================================================================
# CONFIGURATION STORE
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Core - config.yaml loading and hot reload
# PURPOSE: Atomically swappable configuration snapshots
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Store

Loads config.yaml into an immutable AppConfig and publishes it as the
current snapshot. A reload builds a new AppConfig and swaps the
reference under a lock; a snapshot already handed to a running sweep
is never mutated.

ConfigWatcher polls the file's modification time from an asyncio
background task and reloads on change. A reload that fails to parse or
validate keeps the previous snapshot.

Usage:
    store = get_config_store()
    store.load("config.yaml")

    config = store.snapshot()   # once per sweep
    for target in config.databases:
        ...
"""

import asyncio
import logging
import os
import threading
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from core.errors import ConfigurationError
from core.models.config import AppConfig

logger = logging.getLogger(__name__)


class ConfigStore:
    """Holds the current configuration snapshot."""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config
        self._path: Optional[Path] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Optional[Path]:
        """Path of the last file loaded."""
        return self._path

    @property
    def is_loaded(self) -> bool:
        return self._config is not None

    def snapshot(self) -> Optional[AppConfig]:
        """Current configuration reference (read-only)."""
        with self._lock:
            return self._config

    def set(self, config: AppConfig) -> None:
        """Publish an already-built snapshot (for testing or embedding)."""
        with self._lock:
            self._config = config

    def load(self, path: Union[str, Path]) -> AppConfig:
        """
        Parse a YAML file and publish it as the current snapshot.

        Args:
            path: Path to config.yaml

        Returns:
            The new AppConfig

        Raises:
            ConfigurationError: If the file cannot be read or is invalid
        """
        path = Path(path)
        config = parse_config_file(path)

        with self._lock:
            self._config = config
            self._path = path

        logger.info(
            f"Loaded configuration from {path} "
            f"({len(config.databases)} databases)"
        )
        return config

    def reload(self) -> bool:
        """
        Reload the last loaded file.

        Returns:
            True if a new snapshot was published
        """
        if self._path is None:
            return False
        try:
            self.load(self._path)
            return True
        except ConfigurationError as e:
            logger.error(f"Config reload failed, keeping previous snapshot: {e}")
            return False


def parse_config_file(path: Path) -> AppConfig:
    """Read and validate a configuration file."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse config file {path}: {e}") from e

    try:
        return AppConfig(**(data or {}))
    except (TypeError, ValidationError) as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e


# ============================================================================
# FILE WATCHER
# ============================================================================

class ConfigWatcher:
    """
    Reloads the store when the config file changes on disk.

    Polls the modification time; editors that replace the file
    (write-then-rename) are picked up the same way as in-place writes.
    """

    def __init__(self, store: ConfigStore, poll_interval: float = 2.0):
        self.store = store
        self.poll_interval = poll_interval
        self._task: Optional[asyncio.Task] = None
        self._stop_event = asyncio.Event()
        self._last_mtime: Optional[float] = None
        self.reloads = 0

    def _current_mtime(self) -> Optional[float]:
        if self.store.path is None:
            return None
        try:
            return os.stat(self.store.path).st_mtime
        except OSError:
            return None

    async def start(self) -> None:
        if self._task is not None:
            logger.warning("Config watcher already running")
            return
        self._stop_event.clear()
        self._last_mtime = self._current_mtime()
        self._task = asyncio.create_task(self._watch_loop(), name="config-watcher")
        logger.info(f"Watching {self.store.path} for changes")

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    def check_once(self) -> bool:
        """
        Reload if the file changed since the last check.

        Returns:
            True if a reload published a new snapshot
        """
        mtime = self._current_mtime()
        if mtime is None or mtime == self._last_mtime:
            return False

        self._last_mtime = mtime
        logger.info("Config file change detected, reloading...")
        if self.store.reload():
            self.reloads += 1
            logger.info("Config hot reload succeeded")
            return True
        return False

    async def _watch_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.check_once()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.exception(f"Config watcher error: {e}")

            try:
                await asyncio.wait_for(
                    self._stop_event.wait(),
                    timeout=self.poll_interval,
                )
                break  # Stop event was set
            except asyncio.TimeoutError:
                pass  # Continue loop


# ============================================================================
# GLOBAL STORE
# ============================================================================

_store: Optional[ConfigStore] = None


def get_config_store() -> ConfigStore:
    """Get the global configuration store."""
    global _store
    if _store is None:
        _store = ConfigStore()
    return _store


def reset_config_store() -> None:
    """Reset the global store (for testing)."""
    global _store
    _store = None


__all__ = [
    "ConfigStore",
    "ConfigWatcher",
    "parse_config_file",
    "get_config_store",
    "reset_config_store",
]
