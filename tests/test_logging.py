# ============================================================================
# LOGGING TESTS
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Tests - Log file retention and log context
# PURPOSE: Verify age-based backup pruning and per-task log context
# CREATED: 18 OCT 2026
# ============================================================================
"""
Logging Tests

Covers:
- AgeLimitedRotatingFileHandler deletes expired numbered backups only
- max_age_days=0 keeps every backup
- log_context fields are restored on exit

Run with:
    pytest tests/test_logging.py -v
"""

import os
import time

import pytest

from core.logging import AgeLimitedRotatingFileHandler, get_current_context, log_context


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def log_dir(tmp_path):
    """app.log with one expired backup, one fresh backup and an unrelated file."""
    old = time.time() - 40 * 86400
    for name in ("app.log.1", "app.log.bak"):
        path = tmp_path / name
        path.write_text("old", encoding="utf-8")
        os.utime(path, (old, old))
    (tmp_path / "app.log.2").write_text("fresh", encoding="utf-8")
    return tmp_path


# ============================================================================
# RETENTION
# ============================================================================

class TestAgeLimitedRotatingFileHandler:

    def test_prunes_expired_backups_on_start(self, log_dir):
        handler = AgeLimitedRotatingFileHandler(
            str(log_dir / "app.log"), max_age_days=30, maxBytes=1024, backupCount=5,
        )
        handler.close()

        assert not (log_dir / "app.log.1").exists()
        assert (log_dir / "app.log.2").exists()
        # Only numbered rotation backups are considered
        assert (log_dir / "app.log.bak").exists()

    def test_zero_keeps_everything(self, log_dir):
        handler = AgeLimitedRotatingFileHandler(str(log_dir / "app.log"), max_age_days=0)
        assert handler.prune() == 0
        handler.close()

        assert (log_dir / "app.log.1").exists()

    def test_prunes_after_rollover(self, tmp_path):
        handler = AgeLimitedRotatingFileHandler(
            str(tmp_path / "app.log"), max_age_days=30, maxBytes=1024, backupCount=5,
        )
        expired = tmp_path / "app.log.4"
        expired.write_text("old", encoding="utf-8")
        old = time.time() - 40 * 86400
        os.utime(expired, (old, old))

        handler.doRollover()
        handler.close()

        assert (tmp_path / "app.log.1").exists()
        assert not (tmp_path / "app.log.5").exists()
        assert not expired.exists()


# ============================================================================
# CONTEXT
# ============================================================================

class TestLogContext:

    def test_fields_restored(self):
        with log_context(database="ERP_DB", address="10.10.1.10"):
            assert get_current_context().database == "ERP_DB"
            with log_context(instance="Production"):
                ctx = get_current_context()
                assert ctx.database == "ERP_DB"
                assert ctx.instance == "Production"
        assert get_current_context().database is None
