from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from wakectl import cli
from wakectl.core.errors import InterfaceNotFoundError
from wakectl.core.model import WakeProtocol, WakeResult

runner = CliRunner()


class FakeService:
    calls: list[dict] = []

    def __init__(self, config=None) -> None:
        self.config = config

    def wake(self, mac, protocol=None, interface=None, timeout_s=None):
        FakeService.calls.append(
            {"mac": mac, "protocol": protocol, "interface": interface, "timeout_s": timeout_s}
        )
        selected = WakeProtocol(protocol) if protocol else WakeProtocol.DISCARD
        return WakeResult(
            mac="AA:BB:CC:DD:EE:FF",
            protocol=selected,
            destination="192.168.1.255" if interface else "255.255.255.255",
            payload_hex="ff" * 6 + "aabbccddeeff" * 16,
            source="192.168.1.42" if interface else None,
            interface=interface,
            response=b"\xab\xcd" if selected is WakeProtocol.ECHO else None,
        )


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    FakeService.calls = []
    monkeypatch.delenv("WAKECTL_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    return tmp_path


def _hosts_file(tmp_path: Path) -> Path:
    path = tmp_path / "hosts.yaml"
    path.write_text(
        'hosts:\n  nas:\n    mac: "AABBCCDDEEFF"\n    interface: eth0\n    protocol: echo\n'
        '  desktop:\n    mac: "11-22-33-44-55-66"\n',
        encoding="utf-8",
    )
    return path


def test_wake_mac(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "WakeService", FakeService)
    result = runner.invoke(cli.app, ["wake", "AA:BB:CC:DD:EE:FF"])
    assert result.exit_code == 0
    assert "Sent magic packet for AA:BB:CC:DD:EE:FF to 255.255.255.255 via discard" in result.stdout
    assert FakeService.calls[0]["mac"] == "AA:BB:CC:DD:EE:FF"


def test_wake_echo_prints_response(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "WakeService", FakeService)
    result = runner.invoke(cli.app, ["wake", "AABBCCDDEEFF", "-p", "echo", "-i", "eth0", "--timeout", "0.5"])
    assert result.exit_code == 0
    assert "from 192.168.1.42 (eth0)" in result.stdout
    assert "response=abcd" in result.stdout
    assert FakeService.calls[0]["timeout_s"] == 0.5


def test_wake_host_alias(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(cli, "WakeService", FakeService)
    result = runner.invoke(cli.app, ["wake", "nas", "--config", str(_hosts_file(tmp_path))])
    assert result.exit_code == 0
    assert FakeService.calls[0] == {
        "mac": "AA:BB:CC:DD:EE:FF",
        "protocol": "echo",
        "interface": "eth0",
        "timeout_s": None,
    }


def test_cli_options_override_host_entry(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(cli, "WakeService", FakeService)
    result = runner.invoke(
        cli.app,
        ["wake", "nas", "-p", "discard", "-i", "wlan0", "-c", str(_hosts_file(tmp_path))],
    )
    assert result.exit_code == 0
    assert FakeService.calls[0]["protocol"] == "discard"
    assert FakeService.calls[0]["interface"] == "wlan0"


def test_unknown_target_is_clean_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "WakeService", FakeService)
    result = runner.invoke(cli.app, ["wake", "printer"])
    assert result.exit_code == 1
    assert "Error: 'printer' is neither a MAC address nor a configured host" in result.stderr
    assert FakeService.calls == []


def test_service_error_is_clean(monkeypatch: pytest.MonkeyPatch) -> None:
    class FailingService(FakeService):
        def wake(self, mac, protocol=None, interface=None, timeout_s=None):
            raise InterfaceNotFoundError("No network interface named 'eth9'")

    monkeypatch.setattr(cli, "WakeService", FailingService)
    result = runner.invoke(cli.app, ["wake", "AABBCCDDEEFF", "-i", "eth9"])
    assert result.exit_code == 1
    assert "Error: No network interface named 'eth9'" in result.stderr
    assert "Traceback" not in result.stdout
    assert "Traceback" not in result.stderr


def test_hosts_command(tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["hosts", "--config", str(_hosts_file(tmp_path))])
    assert result.exit_code == 0
    assert "desktop: 11:22:33:44:55:66" in result.stdout
    assert "nas: AA:BB:CC:DD:EE:FF (interface=eth0, protocol=echo)" in result.stdout


def test_hosts_command_empty() -> None:
    result = runner.invoke(cli.app, ["hosts"])
    assert result.exit_code == 0
    assert "No hosts configured" in result.stdout


def test_interfaces_command(fake_interfaces) -> None:
    result = runner.invoke(cli.app, ["interfaces"])
    assert result.exit_code == 0
    assert "eth0: 192.168.1.42/255.255.255.0 broadcast 192.168.1.255" in result.stdout
    assert "wlan0: 10.20.30.40/255.255.0.0 broadcast 10.20.255.255" in result.stdout
    assert "lo:" not in result.stdout


def test_packet_command() -> None:
    result = runner.invoke(cli.app, ["packet", "aa-bb-cc-dd-ee-ff"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "ffffffffffff" + "aabbccddeeff" * 16


def test_packet_command_rejects_bad_mac() -> None:
    result = runner.invoke(cli.app, ["packet", "zz"])
    assert result.exit_code == 1
    assert "Error: Invalid MAC address 'zz'" in result.stderr


def test_negative_timeout_is_usage_error() -> None:
    result = runner.invoke(cli.app, ["wake", "AABBCCDDEEFF", "-p", "echo", "--timeout", "-1"])
    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)


def test_zero_timeout_is_clean_error(monkeypatch: pytest.MonkeyPatch) -> None:
    sent: list[bytes] = []

    class RecordingTransport:
        def send(self, packet, destination, *, source=None, timeout_s=2.0):
            sent.append(packet)
            return packet

    monkeypatch.setattr(
        "wakectl.core.service.default_transports",
        lambda config: {WakeProtocol.DISCARD: RecordingTransport(), WakeProtocol.ECHO: RecordingTransport()},
    )
    result = runner.invoke(cli.app, ["wake", "AABBCCDDEEFF", "-p", "echo", "--timeout", "0"])
    assert result.exit_code == 1
    assert "Error: Timeout must be a positive number of seconds" in result.stderr
    assert "Traceback" not in result.stderr
    assert sent == []


def test_malformed_mac_reports_codec_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "WakeService", FakeService)
    result = runner.invoke(cli.app, ["wake", "AA:BB:CC"])
    assert result.exit_code == 1
    assert "Error: Invalid MAC address 'AA:BB:CC'" in result.stderr
    assert FakeService.calls == []


def test_dashed_host_name_still_looked_up(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(cli, "WakeService", FakeService)
    path = tmp_path / "hosts.yaml"
    path.write_text('hosts:\n  be-ef:\n    mac: "AABBCCDDEEFF"\n', encoding="utf-8")

    result = runner.invoke(cli.app, ["wake", "be-ef", "-c", str(path)])
    assert result.exit_code == 0
    assert FakeService.calls[0]["mac"] == "AA:BB:CC:DD:EE:FF"

    result = runner.invoke(cli.app, ["wake", "my-nas", "-c", str(path)])
    assert result.exit_code == 1
    assert "neither a MAC address nor a configured host" in result.stderr
