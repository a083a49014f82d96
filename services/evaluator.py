# ============================================================================
# STATUS EVALUATORS
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Core - Layered probe state machine and fan-out/fan-in
# PURPOSE: Compute a point-in-time status snapshot of every Data Guard pair
# CREATED: 18 OCT 2026
# ============================================================================
"""
Status Evaluators

Three levels, each fanning out concurrently and joining before it
returns:

    FleetEvaluator      one task per configured database
      SystemEvaluator   three tasks: load balancer, production, DR
        InstanceEvaluator   ping -> port -> connect -> V$DATABASE -> lag/sessions

Instance probe state machine (terminal on first failure):

    ping fails              -> OFFLINE
    port closed             -> PORT_ERROR
    connect/ping fails      -> DB_CONNECTION_ERROR
    V$DATABASE read fails   -> INFO_FETCH_FAILED
    unexpected error        -> PROBE_FAILED (unless a state was already read)
    otherwise               -> state = raw OPEN_MODE, role = raw DATABASE_ROLE
        READ WRITE          -> active session count (production only)
        other non-empty     -> Data Guard lag
        empty               -> nothing more

Every probe failure is logged and folded into the returned status; no
exception crosses an evaluator boundary. No locks are needed: each task
writes only its own result slot, and the configuration snapshot is
read-only for the whole sweep.
"""

import asyncio
import time
import uuid
from typing import Callable, List, Optional

from core.config.defaults import ProbeDefaults, get_defaults
from core.config.store import ConfigStore, get_config_store
from core.contracts import UNKNOWN, OPEN_MODE_READ_WRITE, InstanceKind, ProbeState
from core.errors import (
    ConnectionCountError,
    InfoFetchError,
    LagFetchError,
    ProbeConnectionError,
)
from core.logging import get_logger, log_context
from core.models.config import AppConfig, DatabaseTarget
from core.models.status import InstanceStatus, LoadBalancerStatus, SystemStatus
from infrastructure.network import probe_port, probe_reachability
from infrastructure.oracle import OracleProbeConfig, check_connection, open_client

logger = get_logger(__name__)


# ============================================================================
# INSTANCE EVALUATOR
# ============================================================================

class InstanceEvaluator:
    """
    Runs the layered probe against one production or DR instance.

    Collaborators are injectable so the state machine can be exercised
    without a network or a database.
    """

    def __init__(
        self,
        defaults: Optional[ProbeDefaults] = None,
        ping: Callable = probe_reachability,
        port_check: Callable = probe_port,
        session_factory: Callable = open_client,
    ):
        self.defaults = defaults or get_defaults().probes
        self._ping = ping
        self._port_check = port_check
        self._open_session = session_factory

    async def evaluate(
        self,
        address: str,
        target: DatabaseTarget,
        kind: InstanceKind,
    ) -> InstanceStatus:
        """
        Probe one instance.

        Args:
            address: Instance host (prod_ip or dr_ip)
            target: Database the instance belongs to
            kind: PRODUCTION or DISASTER_RECOVERY

        Returns:
            InstanceStatus; never raises
        """
        status = InstanceStatus()

        with log_context(database=target.name, instance=kind.value, address=address):
            try:
                await self._probe(status, address, target, kind)
            except Exception as e:
                logger.exception(
                    f"Unexpected error probing {kind.value} {target.name} "
                    f"({address}:{target.port}): {e}"
                )
                if status.current_state == ProbeState.CHECKING.value:
                    status.terminate(ProbeState.PROBE_FAILED)
        return status

    async def _probe(
        self,
        status: InstanceStatus,
        address: str,
        target: DatabaseTarget,
        kind: InstanceKind,
    ) -> None:
        where = f"{kind.value} {target.name} ({address}:{target.port})"

        status.is_alive, ping_err = await self._ping(address, self.defaults.ping_timeout)
        if ping_err is not None:
            logger.warning(f"Error pinging {kind.value} {target.name} ({address}): {ping_err}")
        if not status.is_alive:
            status.terminate(ProbeState.OFFLINE)
            return

        status.port_open, port_err = await self._port_check(
            address, target.port, self.defaults.port_timeout
        )
        if port_err is not None:
            logger.warning(f"Error checking port for {where}: {port_err}")
        if not status.port_open:
            status.terminate(ProbeState.PORT_ERROR)
            return

        config = OracleProbeConfig.from_target(address, target, self.defaults)
        try:
            async with self._open_session(config) as client:
                status.db_connected = True
                await self._inspect(status, client, kind, where)
        except ProbeConnectionError as e:
            logger.warning(f"Could not connect to {kind.value} database {where}: {e}")
            status.terminate(ProbeState.DB_CONNECTION_ERROR)

    async def _inspect(self, status: InstanceStatus, client, kind: InstanceKind, where: str) -> None:
        try:
            role, open_mode = await client.get_role_and_mode()
        except InfoFetchError as e:
            logger.warning(f"Failed to get {kind.value} database info for {where}: {e}")
            status.terminate(ProbeState.INFO_FETCH_FAILED)
            return

        # Raw driver vocabulary; translation is a presentation concern
        if role:
            status.role = role
        status.current_state = open_mode

        if open_mode == OPEN_MODE_READ_WRITE:
            if kind is InstanceKind.PRODUCTION:
                try:
                    status.connections = await client.get_active_connection_count()
                except ConnectionCountError as e:
                    logger.warning(f"Failed to get business connection count for {where}: {e}")
        elif open_mode:
            try:
                status.dg_delay = await client.get_replication_lag()
            except LagFetchError as e:
                logger.warning(f"Failed to get ADG lag for {where}: {e}")


# ============================================================================
# SYSTEM EVALUATOR
# ============================================================================

class SystemEvaluator:
    """Probes the LB, production and DR addresses of one database concurrently."""

    def __init__(
        self,
        instance_evaluator: Optional[InstanceEvaluator] = None,
        defaults: Optional[ProbeDefaults] = None,
        ping: Callable = probe_reachability,
        port_check: Callable = probe_port,
        connection_check: Callable = check_connection,
    ):
        self.defaults = defaults or get_defaults().probes
        self.instances = instance_evaluator or InstanceEvaluator(self.defaults)
        self._ping = ping
        self._port_check = port_check
        self._check_connection = connection_check

    async def evaluate(self, target: DatabaseTarget) -> SystemStatus:
        """
        Evaluate one configured database.

        Waits for all three sub-probes before merging; callers never see
        a partially filled record.
        """
        lb, prod, dr = await asyncio.gather(
            self.check_load_balancer(target),
            self.instances.evaluate(target.prod_ip, target, InstanceKind.PRODUCTION),
            self.instances.evaluate(target.dr_ip, target, InstanceKind.DISASTER_RECOVERY),
            return_exceptions=True,
        )

        if isinstance(lb, BaseException):
            logger.error(f"Load balancer check for {target.name} failed: {lb}")
            lb = LoadBalancerStatus()
        if isinstance(prod, BaseException):
            logger.error(f"Production evaluation for {target.name} failed: {prod}")
            prod = failed_instance()
        if isinstance(dr, BaseException):
            logger.error(f"Disaster Recovery evaluation for {target.name} failed: {dr}")
            dr = failed_instance()

        return merge_system_status(target, lb, prod, dr)

    async def check_load_balancer(self, target: DatabaseTarget) -> LoadBalancerStatus:
        """Ping, then port, then DB connect through the load balancer address."""
        lb = LoadBalancerStatus()
        address = target.lb_ip

        with log_context(database=target.name, instance="Load Balancer", address=address):
            lb.alive, ping_err = await self._ping(address, self.defaults.ping_timeout)
            if ping_err is not None:
                logger.warning(f"Error pinging Load Balancer {target.name} ({address}): {ping_err}")
            if not lb.alive:
                return lb

            lb.port_open, port_err = await self._port_check(
                address, target.port, self.defaults.port_timeout
            )
            if port_err is not None:
                logger.warning(
                    f"Error checking port for Load Balancer {target.name} "
                    f"({address}:{target.port}): {port_err}"
                )
            if not lb.port_open:
                return lb

            config = OracleProbeConfig.from_target(address, target, self.defaults)
            lb.db_connect, conn_err = await self._check_connection(config)
            if conn_err is not None:
                logger.warning(f"Load Balancer DB connect failed for {target.name}: {conn_err}")

        return lb


def failed_instance() -> InstanceStatus:
    """Placeholder for an instance whose evaluation crashed."""
    return InstanceStatus().terminate(ProbeState.PROBE_FAILED)


def merge_system_status(
    target: DatabaseTarget,
    lb: LoadBalancerStatus,
    prod: InstanceStatus,
    dr: InstanceStatus,
) -> SystemStatus:
    """
    Merge three independent sub-results into one record.

    `connections` comes from production only, and only when measured.
    """
    status = SystemStatus(
        name=target.name,
        load_balancer_ip=target.lb_ip,
        load_balancer_alive=lb.alive,
        load_balancer_port_1521=lb.port_open,
        load_balancer_db_connect=lb.db_connect,
        production_ip=target.prod_ip,
        production_alive=prod.is_alive,
        production_port_1521=prod.port_open,
        production_db_connect=prod.db_connected,
        production_status=prod.current_state,
        production_role=prod.role,
        production_dgdelay=prod.dg_delay,
        disaster_ip=target.dr_ip,
        disaster_alive=dr.is_alive,
        disaster_port_1521=dr.port_open,
        disaster_db_connect=dr.db_connected,
        disaster_status=dr.current_state,
        disaster_role=dr.role,
        disaster_dgdelay=dr.dg_delay,
    )
    if prod.connections != UNKNOWN:
        status.connections = prod.connections
    return status


# ============================================================================
# FLEET EVALUATOR
# ============================================================================

class FleetEvaluator:
    """Evaluates every configured database concurrently."""

    def __init__(
        self,
        system_evaluator: Optional[SystemEvaluator] = None,
        store: Optional[ConfigStore] = None,
    ):
        self.systems = system_evaluator or SystemEvaluator()
        self.store = store or get_config_store()

    async def evaluate(self, config: Optional[AppConfig] = None) -> List[SystemStatus]:
        """
        Produce a fresh fleet snapshot.

        Args:
            config: Snapshot to evaluate; defaults to the store's current one,
                taken once for the whole sweep

        Returns:
            One SystemStatus per configured database, in configuration order
        """
        if config is None:
            config = self.store.snapshot()
        if config is None:
            logger.warning("No configuration loaded, returning empty snapshot")
            return []

        targets = list(config.databases)
        slots: List[Optional[SystemStatus]] = [None] * len(targets)
        sweep_id = uuid.uuid4().hex[:8]
        start_time = time.monotonic()

        async def run(index: int, target: DatabaseTarget) -> None:
            with log_context(sweep_id=sweep_id):
                slots[index] = await self.systems.evaluate(target)

        results = await asyncio.gather(
            *(run(i, target) for i, target in enumerate(targets)),
            return_exceptions=True,
        )

        for index, result in enumerate(results):
            if isinstance(result, BaseException):
                logger.error(f"Evaluation of {targets[index].name} failed: {result}")
            if slots[index] is None:
                slots[index] = merge_system_status(
                    targets[index], LoadBalancerStatus(), failed_instance(), failed_instance()
                )

        logger.debug(
            f"Sweep {sweep_id}: {len(targets)} databases in "
            f"{(time.monotonic() - start_time) * 1000:.1f}ms"
        )
        return slots


__all__ = [
    "InstanceEvaluator",
    "SystemEvaluator",
    "FleetEvaluator",
    "merge_system_status",
    "failed_instance",
]
