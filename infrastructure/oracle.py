# ============================================================================
# ORACLE PROBE CLIENT
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Infrastructure - Short-lived Oracle sessions for status probes
# PURPOSE: Role/open-mode, Data Guard lag and active session queries
# CREATED: 18 OCT 2026
# ============================================================================
"""
Oracle Probe Client

Opens one short-lived session per probe (no pooling) with python-oracledb
in thin mode and runs read-only dictionary queries against it.

Connection lifecycle:
    async with open_client(config) as client:    # connect + ping
        role, open_mode = await client.get_role_and_mode()
        lag = await client.get_replication_lag()
    # connection closed exactly once, on every exit path

Failure surface:
- open_client:                  ProbeConnectionError
- get_role_and_mode:            InfoFetchError
- get_replication_lag:          LagFetchError
- get_active_connection_count:  ConnectionCountError

Connect time is bounded by tcp_connect_timeout; each query round trip is
bounded by the connection's call_timeout.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Optional, Tuple

import oracledb

from core.contracts import UNKNOWN
from core.config.defaults import ProbeDefaults
from core.errors import (
    ConnectionCountError,
    InfoFetchError,
    LagFetchError,
    LagFormatError,
    ProbeConnectionError,
)
from core.models.config import DatabaseTarget
from infrastructure.dataguard import parse_lag

logger = logging.getLogger(__name__)


# ============================================================================
# QUERIES
# ============================================================================

ROLE_AND_MODE_SQL = "SELECT DATABASE_ROLE, OPEN_MODE FROM V$DATABASE"

DATAGUARD_LAG_SQL = """
    SELECT NAME, VALUE
    FROM V$DATAGUARD_STATS
    WHERE NAME IN ('apply lag', 'transport lag')
"""

ACTIVE_SESSIONS_SQL = (
    "SELECT COUNT(*) FROM V$SESSION "
    "WHERE TYPE != 'BACKGROUND' AND STATUS = 'ACTIVE'"
)

TRANSPORT_LAG = "transport lag"
APPLY_LAG = "apply lag"


# ============================================================================
# CONNECTION SETTINGS
# ============================================================================

@dataclass(frozen=True)
class OracleProbeConfig:
    """Connection parameters for one probe session (service name connect)."""
    host: str
    port: int
    service_name: str
    username: str
    password: str = field(default="", repr=False)
    connect_timeout: float = 5.0
    call_timeout_ms: int = 10000

    @classmethod
    def from_target(
        cls,
        host: str,
        target: DatabaseTarget,
        defaults: Optional[ProbeDefaults] = None,
    ) -> "OracleProbeConfig":
        """Build the session settings for one address of a target."""
        defaults = defaults or ProbeDefaults()
        return cls(
            host=host,
            port=target.port,
            service_name=target.service_name,
            username=target.username,
            password=target.password,
            connect_timeout=defaults.db_connect_timeout,
            call_timeout_ms=defaults.db_call_timeout_ms,
        )

    @property
    def dsn(self) -> str:
        return build_dsn(self.host, self.port, self.service_name)

    @property
    def safe_dsn(self) -> str:
        """DSN with the user but without the password, for logs."""
        return f"{self.username}@{self.host}:{self.port}/{self.service_name}"


def build_dsn(host: str, port: int, service_name: str) -> str:
    """Build a connect descriptor addressing a service name."""
    return oracledb.makedsn(host, port, service_name=service_name)


# ============================================================================
# PROBE CLIENT
# ============================================================================

class OracleProbeClient:
    """
    Read-only probe queries over one open connection.

    Obtain instances through open_client(); the client does not own
    the connection's lifetime.
    """

    def __init__(self, connection: Any, config: OracleProbeConfig):
        self._conn = connection
        self.config = config

    async def _fetch_one(self, sql: str):
        with self._conn.cursor() as cursor:
            await cursor.execute(sql)
            return await cursor.fetchone()

    async def _fetch_all(self, sql: str):
        with self._conn.cursor() as cursor:
            await cursor.execute(sql)
            return await cursor.fetchall()

    async def get_role_and_mode(self) -> Tuple[str, str]:
        """
        Read DATABASE_ROLE and OPEN_MODE from V$DATABASE.

        Returns:
            (role, open_mode) as reported by the database

        Raises:
            InfoFetchError: Query failed, no row, or unexpected row shape
        """
        try:
            row = await self._fetch_one(ROLE_AND_MODE_SQL)
        except oracledb.Error as e:
            raise InfoFetchError(f"failed to query V$DATABASE: {e}") from e

        if row is None:
            raise InfoFetchError("failed to query V$DATABASE: no rows returned")
        if len(row) != 2:
            raise InfoFetchError(
                f"failed to query V$DATABASE: expected 2 columns, got {len(row)}"
            )

        role = _as_text(row[0])
        open_mode = _as_text(row[1])
        if role is None or open_mode is None:
            raise InfoFetchError(
                f"failed to scan V$DATABASE row: unexpected values {row!r}"
            )
        return role, open_mode

    async def get_replication_lag(self) -> int:
        """
        Sum transport lag and apply lag from V$DATAGUARD_STATS.

        The two metrics are added even though they can overlap; the
        dashboard has always shown the sum.

        Returns:
            Lag in seconds, or UNKNOWN when the view has no rows or
            neither metric is present (not a standby, or stats not ready)

        Raises:
            LagFetchError: Query failed, unexpected row shape, or a value
                that is not a '+DD HH:MI:SS' literal
        """
        try:
            rows = await self._fetch_all(DATAGUARD_LAG_SQL)
        except oracledb.Error as e:
            raise LagFetchError(f"failed to query v$dataguard_stats: {e}") from e

        if not rows:
            return UNKNOWN

        values = {}
        for row in rows:
            if len(row) < 2:
                raise LagFetchError(
                    "unexpected number of columns in v$dataguard_stats result, "
                    f"expected at least 2, got {len(row)}"
                )
            if row[0] is None:
                raise LagFetchError("NAME column is NULL in v$dataguard_stats")
            name = _as_text(row[0])
            if name is None:
                raise LagFetchError(
                    f"NAME column has unexpected type: {type(row[0]).__name__}"
                )

            if row[1] is None:
                logger.debug(f"VALUE is NULL for NAME='{name}', treating as zero lag")
                value = ""
            else:
                value = _as_text(row[1])
                if value is None:
                    raise LagFetchError(
                        f"VALUE column for NAME='{name}' has unexpected type: "
                        f"{type(row[1]).__name__}"
                    )

            if name in (TRANSPORT_LAG, APPLY_LAG):
                values[name] = value

        if not values:
            logger.warning(
                "Neither transport lag nor apply lag found in V$DATAGUARD_STATS "
                "although rows were present"
            )
            return UNKNOWN

        total = 0
        for name in (TRANSPORT_LAG, APPLY_LAG):
            text = values.get(name, "")
            try:
                total += parse_lag(text)
            except LagFormatError as e:
                raise LagFetchError(f"failed to parse {name} ('{text}'): {e}") from e
        return total

    async def get_active_connection_count(self) -> int:
        """
        Count active non-background sessions.

        Raises:
            ConnectionCountError: Query failed or returned no count
        """
        try:
            row = await self._fetch_one(ACTIVE_SESSIONS_SQL)
        except oracledb.Error as e:
            raise ConnectionCountError(
                f"failed to query business connection count: {e}"
            ) from e

        if not row or row[0] is None:
            raise ConnectionCountError(
                "failed to query business connection count: no count returned"
            )
        return int(row[0])


def _as_text(value: Any) -> Optional[str]:
    """Column value as str; bytes are decoded, other types give None."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return None


# ============================================================================
# CONNECTION LIFECYCLE
# ============================================================================

async def connect(config: OracleProbeConfig):
    """
    Open and verify a session.

    Raises:
        ProbeConnectionError: Connect, authentication or ping failed
    """
    try:
        conn = await oracledb.connect_async(
            user=config.username,
            password=config.password,
            dsn=config.dsn,
            tcp_connect_timeout=config.connect_timeout,
        )
    except oracledb.Error as e:
        raise ProbeConnectionError(
            f"failed to open database connection to {config.safe_dsn}: {e}",
            address=config.host,
        ) from e

    try:
        conn.call_timeout = config.call_timeout_ms
        await conn.ping()
    except oracledb.Error as e:
        await _close_quietly(conn)
        raise ProbeConnectionError(
            f"failed to ping database {config.safe_dsn}: {e}",
            address=config.host,
        ) from e

    return conn


async def _close_quietly(conn) -> None:
    try:
        await conn.close()
    except oracledb.Error as e:
        logger.debug(f"Error closing probe connection: {e}")


@asynccontextmanager
async def open_client(config: OracleProbeConfig) -> AsyncIterator[OracleProbeClient]:
    """
    Scoped probe session: connect + ping on entry, close on exit.

    Raises:
        ProbeConnectionError: On entry, if the session cannot be opened
    """
    conn = await connect(config)
    try:
        yield OracleProbeClient(conn, config)
    finally:
        await _close_quietly(conn)


async def check_connection(config: OracleProbeConfig) -> Tuple[bool, Optional[ProbeConnectionError]]:
    """
    Check that a session can be opened and pinged.

    Used for the load balancer address. Never raises.
    """
    try:
        async with open_client(config):
            return True, None
    except ProbeConnectionError as e:
        return False, e


__all__ = [
    "ROLE_AND_MODE_SQL",
    "DATAGUARD_LAG_SQL",
    "ACTIVE_SESSIONS_SQL",
    "OracleProbeConfig",
    "OracleProbeClient",
    "build_dsn",
    "connect",
    "open_client",
    "check_connection",
]
