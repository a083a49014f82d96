# ============================================================================
# CONFIGURATION TESTS
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Tests - YAML config, snapshot store and hot reload
# PURPOSE: Verify defaults, validation and keep-previous-on-error reloads
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Tests

Covers:
- AppConfig defaults (refresh interval, frontend interval, port)
- parse_config_file error mapping
- ConfigStore load / reload / snapshot isolation
- ConfigWatcher change detection
- ProbeDefaults from environment

Run with:
    pytest tests/test_config.py -v
"""

import asyncio
import os
from pathlib import Path

import pytest

from core.config import (
    ConfigStore,
    ConfigWatcher,
    ProbeDefaults,
    ServiceDefaults,
    parse_config_file,
)
from core.errors import ConfigurationError
from core.models.config import AppConfig, DatabaseTarget


# ============================================================================
# FIXTURES
# ============================================================================

VALID_YAML = """
server:
  port: 8080
  refresh_interval: 0
databases:
  - name: ERP_DB
    lb_ip: 172.16.10.100
    prod_ip: 10.10.1.10
    dr_ip: 10.20.1.10
    service_name: ERPPDB
    username: dgmon
    password: secret
  - name: MES_DB
    prod_ip: 10.10.1.11
    dr_ip: 10.20.1.11
    port: 1522
titles:
  main_title: Tier-1 DR
frontend:
  default_interval_ms: -5
"""


@pytest.fixture
def config_file(tmp_path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(VALID_YAML, encoding="utf-8")
    return path


def _bump_mtime(path: Path, seconds: float = 10.0) -> None:
    stat = path.stat()
    os.utime(path, (stat.st_atime + seconds, stat.st_mtime + seconds))


# ============================================================================
# MODELS
# ============================================================================

class TestAppConfig:

    def test_parse_and_defaults(self, config_file):
        config = parse_config_file(config_file)

        assert config.server.port == "8080"
        assert config.server.refresh_interval == 30
        assert config.frontend.default_interval_ms == 600000
        assert config.layout.columns == 2
        assert [db.name for db in config.databases] == ["ERP_DB", "MES_DB"]
        assert config.databases[0].port == 1521
        assert config.databases[1].port == 1522

    def test_empty_file_is_default_config(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        config = parse_config_file(path)
        assert config.databases == []

    def test_null_databases(self):
        assert AppConfig(databases=None).databases == []

    def test_password_not_in_repr(self):
        target = DatabaseTarget(name="ERP_DB", password="hunter2")
        assert "hunter2" not in repr(target)

    def test_snapshot_is_immutable(self, config_file):
        config = parse_config_file(config_file)
        with pytest.raises(Exception):
            config.databases[0].port = 1999


class TestParseErrors:

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            parse_config_file(tmp_path / "missing.yaml")

    def test_bad_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("databases: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            parse_config_file(path)

    def test_invalid_target(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("databases:\n  - name: ''\n    port: 70000\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            parse_config_file(path)


# ============================================================================
# STORE
# ============================================================================

class TestConfigStore:

    def test_load(self, config_file):
        store = ConfigStore()
        assert not store.is_loaded

        store.load(config_file)
        assert store.is_loaded
        assert store.path == config_file
        assert len(store.snapshot().databases) == 2

    def test_load_failure_raises(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigStore().load(tmp_path / "missing.yaml")

    def test_reload_picks_up_changes(self, config_file):
        store = ConfigStore()
        store.load(config_file)
        before = store.snapshot()

        config_file.write_text("databases:\n  - name: ONLY_DB\n", encoding="utf-8")
        assert store.reload() is True

        assert [db.name for db in store.snapshot().databases] == ["ONLY_DB"]
        # A sweep holding the old reference is unaffected
        assert [db.name for db in before.databases] == ["ERP_DB", "MES_DB"]

    def test_invalid_reload_keeps_previous(self, config_file):
        store = ConfigStore()
        store.load(config_file)
        previous = store.snapshot()

        config_file.write_text("databases: [unclosed", encoding="utf-8")
        assert store.reload() is False
        assert store.snapshot() is previous

    def test_reload_without_path(self):
        assert ConfigStore().reload() is False


# ============================================================================
# WATCHER
# ============================================================================

class TestConfigWatcher:

    def test_check_once_detects_change(self, config_file):
        store = ConfigStore()
        store.load(config_file)
        watcher = ConfigWatcher(store)
        watcher._last_mtime = watcher._current_mtime()

        assert watcher.check_once() is False

        config_file.write_text("databases:\n  - name: NEW_DB\n", encoding="utf-8")
        _bump_mtime(config_file)

        assert watcher.check_once() is True
        assert watcher.reloads == 1
        assert store.snapshot().databases[0].name == "NEW_DB"

    def test_invalid_change_not_counted(self, config_file):
        store = ConfigStore()
        store.load(config_file)
        watcher = ConfigWatcher(store)
        watcher._last_mtime = watcher._current_mtime()

        config_file.write_text("databases: [unclosed", encoding="utf-8")
        _bump_mtime(config_file)

        assert watcher.check_once() is False
        assert watcher.reloads == 0
        assert len(store.snapshot().databases) == 2

    def test_start_and_stop(self, config_file):
        store = ConfigStore()
        store.load(config_file)

        async def scenario():
            watcher = ConfigWatcher(store, poll_interval=0.02)
            await watcher.start()
            config_file.write_text("databases:\n  - name: LIVE_DB\n", encoding="utf-8")
            _bump_mtime(config_file)
            for _ in range(50):
                if watcher.reloads:
                    break
                await asyncio.sleep(0.02)
            await watcher.stop()
            return watcher.reloads

        assert asyncio.run(scenario()) == 1
        assert store.snapshot().databases[0].name == "LIVE_DB"


# ============================================================================
# ENVIRONMENT DEFAULTS
# ============================================================================

class TestDefaults:

    def test_probe_defaults(self):
        defaults = ProbeDefaults()
        assert defaults.ping_timeout == 3.0
        assert defaults.db_call_timeout_ms == 10000

    def test_probe_defaults_from_env(self, monkeypatch):
        monkeypatch.setenv("PING_TIMEOUT_SEC", "1.5")
        monkeypatch.setenv("DB_CALL_TIMEOUT_MS", "2000")
        defaults = ProbeDefaults.from_env()
        assert defaults.ping_timeout == 1.5
        assert defaults.db_call_timeout_ms == 2000

    def test_service_defaults_from_env(self, monkeypatch):
        monkeypatch.setenv("CONFIG_FILE", "/etc/dgdash/config.yaml")
        monkeypatch.setenv("ENABLE_MOCK_DATA", "true")
        defaults = ServiceDefaults.from_env()
        assert defaults.config_file == "/etc/dgdash/config.yaml"
        assert defaults.enable_mock_data is True
