# ============================================================================
# REACHABILITY PROBER
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Infrastructure - ICMP and TCP liveness checks
# PURPOSE: First two stages of the layered instance probe
# CREATED: 18 OCT 2026
# ============================================================================
"""
Reachability Prober

- probe_reachability: runs the system `ping` binary
- probe_port: opens (and immediately closes) a TCP connection

Both return (ok, error) and never raise. The error is diagnostic only:
it tells a tooling failure (no ping binary, timeout) apart from a genuine
negative result, but callers treat both as "not reachable".

Timeouts are hard: the whole call is wrapped in asyncio.wait_for and a
ping process still running at the deadline is killed.
"""

import asyncio
import logging
import sys
from typing import List, Optional, Tuple

from core.errors import PortError, ReachabilityError

logger = logging.getLogger(__name__)

DEFAULT_PING_TIMEOUT = 3.0
DEFAULT_PORT_TIMEOUT = 2.0

# Case-insensitive markers of at least one echo reply
PING_SUCCESS_MARKERS = (
    # Linux / macOS
    "1 received",
    "2 received",
    "1 packets received",
    "2 packets received",
    "bytes from",
    # Windows (English / Chinese)
    "received = 1",
    "received = 2",
    "已接收 = 1",
    "已接收 = 2",
    "来自",
)


def ping_command(address: str) -> List[str]:
    """
    Build the ping command line for this platform.

    Two echo requests with a one second per-reply wait; the overall
    deadline is enforced by the caller.
    """
    if sys.platform.startswith("win"):
        return ["ping", "-n", "2", "-w", "1000", address]
    return ["ping", "-c", "2", "-W", "1", address]


def decode_output(raw: bytes) -> Tuple[str, Optional[str]]:
    """
    Normalize ping output to text.

    Localized Windows hosts print in the OEM code page (GBK on Chinese
    systems). Decoding trouble only degrades the text, never the outcome.

    Returns:
        (text, decode_error) - decode_error is None on a clean decode
    """
    for encoding in ("utf-8", "gbk"):
        try:
            return raw.decode(encoding), None
        except UnicodeDecodeError:
            continue
    return raw.decode("utf-8", errors="replace"), "output is neither UTF-8 nor GBK"


def output_indicates_reply(text: str) -> bool:
    """Check ping output for any success marker."""
    lowered = text.lower()
    return any(marker in lowered for marker in PING_SUCCESS_MARKERS)


async def probe_reachability(
    address: str,
    timeout: Optional[float] = None,
) -> Tuple[bool, Optional[ReachabilityError]]:
    """
    Check whether a host answers ICMP echo.

    Args:
        address: Host name or IP
        timeout: Overall deadline in seconds (default 3s)

    Returns:
        (alive, error) - error is None only when alive
    """
    if not address:
        return False, ReachabilityError("IP address cannot be empty")
    if timeout is None or timeout <= 0:
        timeout = DEFAULT_PING_TIMEOUT

    try:
        proc = await asyncio.create_subprocess_exec(
            *ping_command(address),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
    except (OSError, ValueError) as e:
        # ValueError: address the OS rejects outright (e.g. embedded NUL)
        return False, ReachabilityError(
            f"ping {address!r} could not be started: {e}", address=address
        )

    try:
        raw, _ = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        _kill(proc)
        await proc.wait()
        return False, ReachabilityError(
            f"ping {address} timed out after {timeout}s", address=address
        )

    text, decode_error = decode_output(raw or b"")
    if decode_error:
        logger.debug(f"ping {address}: {decode_error}")

    if output_indicates_reply(text):
        return True, None

    if proc.returncode != 0:
        return False, ReachabilityError(
            f"ping {address} command failed (exit {proc.returncode}); "
            f"output: {text.strip()}",
            address=address,
        )

    return False, ReachabilityError(
        f"ping {address} command succeeded but output indicates failure: "
        f"{text.strip()}",
        address=address,
    )


def _kill(proc: asyncio.subprocess.Process) -> None:
    try:
        proc.kill()
    except ProcessLookupError:
        pass


async def probe_port(
    address: str,
    port: int,
    timeout: Optional[float] = None,
) -> Tuple[bool, Optional[PortError]]:
    """
    Check whether a TCP connection to address:port can be established.

    Args:
        address: Host name or IP
        port: TCP port (1-65535)
        timeout: Connect deadline in seconds (default 2s)

    Returns:
        (open, error) - error is None only when open
    """
    if not address:
        return False, PortError("IP address cannot be empty")
    if not isinstance(port, int) or port <= 0 or port > 65535:
        return False, PortError(f"invalid port number: {port}", address=address)
    if timeout is None or timeout <= 0:
        timeout = DEFAULT_PORT_TIMEOUT

    target = f"[{address}]:{port}" if ":" in address else f"{address}:{port}"

    try:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(address, port),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        return False, PortError(
            f"failed to connect to {target}: timed out after {timeout}s",
            address=address,
        )
    except (OSError, ValueError) as e:
        return False, PortError(f"failed to connect to {target!r}: {e}", address=address)

    writer.close()
    try:
        await writer.wait_closed()
    except OSError:
        pass
    return True, None


__all__ = [
    "DEFAULT_PING_TIMEOUT",
    "DEFAULT_PORT_TIMEOUT",
    "PING_SUCCESS_MARKERS",
    "ping_command",
    "decode_output",
    "output_indicates_reply",
    "probe_reachability",
    "probe_port",
]
