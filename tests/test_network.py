# ============================================================================
# REACHABILITY PROBER TESTS
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Tests - ICMP and TCP probes
# PURPOSE: Verify ping output handling, timeouts and port checks
# CREATED: 18 OCT 2026
# ============================================================================
"""
Reachability Prober Tests

Covers:
- Ping output decoding (UTF-8, GBK, undecodable)
- Success markers across platforms and locales
- probe_reachability with a patched subprocess (success, failure,
  missing binary, hard timeout)
- probe_port against a local listener and a closed port

No real ping is executed.

Run with:
    pytest tests/test_network.py -v
"""

import asyncio
import socket
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from core.errors import PortError, ReachabilityError
from infrastructure.network import (
    decode_output,
    output_indicates_reply,
    ping_command,
    probe_port,
    probe_reachability,
)


# ============================================================================
# HELPERS
# ============================================================================

class _FakeProcess:
    """Stand-in for asyncio.subprocess.Process."""

    def __init__(self, output: bytes = b"", returncode: int = 0, hang: bool = False):
        self._output = output
        self._hang = hang
        self.returncode = returncode
        self.kill = MagicMock()
        self.wait = AsyncMock(return_value=returncode)

    async def communicate(self):
        if self._hang:
            await asyncio.sleep(30)
        return self._output, None


def _patch_exec(process=None, side_effect=None):
    return patch(
        "infrastructure.network.asyncio.create_subprocess_exec",
        new=AsyncMock(return_value=process, side_effect=side_effect),
    )


def _free_port() -> int:
    """A port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


# ============================================================================
# OUTPUT HANDLING
# ============================================================================

class TestDecodeOutput:

    def test_utf8(self):
        text, err = decode_output(b"64 bytes from 10.0.0.1")
        assert text == "64 bytes from 10.0.0.1"
        assert err is None

    def test_gbk_fallback(self):
        """Chinese Windows prints ping output in GBK."""
        raw = "来自 10.0.0.1 的回复".encode("gbk")
        text, err = decode_output(raw)
        assert "来自" in text
        assert err is None

    def test_undecodable_reports_error(self):
        text, err = decode_output(b"\xff\xfe\xff")
        assert err is not None
        assert "�" in text


class TestOutputIndicatesReply:

    @pytest.mark.parametrize("output", [
        "64 bytes from 10.0.0.1: icmp_seq=1 ttl=64 time=0.3 ms",
        "2 packets transmitted, 2 received, 0% packet loss",
        "Packets: Sent = 2, Received = 2, Lost = 0 (0% loss)",
        "数据包: 已发送 = 2，已接收 = 2，丢失 = 0",
    ])
    def test_success_markers(self, output):
        assert output_indicates_reply(output)

    @pytest.mark.parametrize("output", [
        "2 packets transmitted, 0 received, 100% packet loss",
        "Request timed out.",
        "",
    ])
    def test_failure_output(self, output):
        assert not output_indicates_reply(output)

    def test_case_insensitive(self):
        assert output_indicates_reply("64 BYTES FROM 10.0.0.1")


class TestPingCommand:

    def test_posix(self):
        with patch("infrastructure.network.sys.platform", "linux"):
            assert ping_command("10.0.0.1") == ["ping", "-c", "2", "-W", "1", "10.0.0.1"]

    def test_windows(self):
        with patch("infrastructure.network.sys.platform", "win32"):
            assert ping_command("10.0.0.1") == ["ping", "-n", "2", "-w", "1000", "10.0.0.1"]


# ============================================================================
# PROBE REACHABILITY
# ============================================================================

class TestProbeReachability:

    def test_empty_address(self):
        alive, err = asyncio.run(probe_reachability(""))
        assert alive is False
        assert isinstance(err, ReachabilityError)

    def test_reply(self):
        proc = _FakeProcess(b"2 packets transmitted, 2 received, 0% packet loss")
        with _patch_exec(proc):
            alive, err = asyncio.run(probe_reachability("10.0.0.1", timeout=1.0))
        assert alive is True
        assert err is None

    def test_nonzero_exit(self):
        proc = _FakeProcess(b"2 packets transmitted, 0 received", returncode=1)
        with _patch_exec(proc):
            alive, err = asyncio.run(probe_reachability("10.0.0.1", timeout=1.0))
        assert alive is False
        assert "command failed" in err.message
        assert err.address == "10.0.0.1"

    def test_zero_exit_without_reply(self):
        """Some Windows builds exit 0 on 'Destination host unreachable'."""
        proc = _FakeProcess(b"Destination host unreachable.", returncode=0)
        with _patch_exec(proc):
            alive, err = asyncio.run(probe_reachability("10.0.0.1", timeout=1.0))
        assert alive is False
        assert "indicates failure" in err.message

    def test_missing_binary(self):
        with _patch_exec(side_effect=FileNotFoundError("ping")):
            alive, err = asyncio.run(probe_reachability("10.0.0.1", timeout=1.0))
        assert alive is False
        assert isinstance(err, ReachabilityError)

    def test_rejected_address_does_not_raise(self):
        alive, err = asyncio.run(probe_reachability("10.0.0.1\x00", timeout=1.0))
        assert alive is False
        assert isinstance(err, ReachabilityError)

    def test_spawn_value_error_does_not_raise(self):
        with _patch_exec(side_effect=ValueError("embedded null byte")):
            alive, err = asyncio.run(probe_reachability("10.0.0.1", timeout=1.0))
        assert alive is False
        assert "could not be started" in err.message

    def test_timeout_kills_process(self):
        proc = _FakeProcess(hang=True)
        with _patch_exec(proc):
            alive, err = asyncio.run(probe_reachability("10.0.0.1", timeout=0.05))
        assert alive is False
        assert "timed out" in err.message
        proc.kill.assert_called_once()
        proc.wait.assert_awaited()


# ============================================================================
# PROBE PORT
# ============================================================================

class TestProbePort:

    def test_empty_address(self):
        ok, err = asyncio.run(probe_port("", 1521))
        assert ok is False
        assert isinstance(err, PortError)

    @pytest.mark.parametrize("port", [0, -1, 65536])
    def test_invalid_port(self, port):
        ok, err = asyncio.run(probe_port("127.0.0.1", port))
        assert ok is False
        assert "invalid port" in err.message

    def test_rejected_address_does_not_raise(self):
        ok, err = asyncio.run(probe_port("10.0.0.1\x00", 1521, timeout=1.0))
        assert ok is False
        assert isinstance(err, PortError)

    def test_open_port(self):
        async def scenario():
            server = await asyncio.start_server(
                lambda r, w: w.close(), "127.0.0.1", 0
            )
            port = server.sockets[0].getsockname()[1]
            async with server:
                return await probe_port("127.0.0.1", port, timeout=1.0)

        ok, err = asyncio.run(scenario())
        assert ok is True
        assert err is None

    def test_closed_port(self):
        ok, err = asyncio.run(probe_port("127.0.0.1", _free_port(), timeout=1.0))
        assert ok is False
        assert isinstance(err, PortError)
        assert "failed to connect" in err.message
