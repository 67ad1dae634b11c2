from __future__ import annotations

from hotcold.core.models import DiscoveryRecord
from hotcold.core.scan_coordinator import ScanCoordinator, ScanState
from hotcold.dataio.status_log import LogStore


class FakeAdapter:
    def __init__(self, enabled: bool = True, starts: bool = True) -> None:
        self.enabled = enabled
        self.starts = starts
        self.start_calls = 0
        self.cancel_calls = 0

    def is_enabled(self) -> bool:
        return self.enabled

    def start_discovery(self) -> bool:
        self.start_calls += 1
        return self.starts

    def cancel_discovery(self) -> None:
        self.cancel_calls += 1
        raise RuntimeError("cancel failed")


class FakeProvider:
    def __init__(self, adapter: FakeAdapter | None) -> None:
        self.adapter = adapter

    def get_default_adapter(self) -> FakeAdapter | None:
        return self.adapter


class FakeChannel:
    def __init__(self) -> None:
        self.listeners: list[object] = []

    def register_listener(self, listener) -> None:
        self.listeners.append(listener)

    def unregister_listener(self, listener) -> None:
        self.listeners.remove(listener)


def _make(tmp_path, adapter: FakeAdapter | None):
    store = LogStore(tmp_path)
    store.open()
    channel = FakeChannel()
    enable_requests: list[bool] = []
    statuses: list[str] = []
    coordinator = ScanCoordinator(
        FakeProvider(adapter),
        store,
        request_enable=lambda: enable_requests.append(True),
        channel=channel,
        status=statuses.append,
    )
    return coordinator, store, channel, enable_requests, statuses


def test_missing_adapter_reports_unsupported(tmp_path) -> None:
    coordinator, _, _, enable_requests, statuses = _make(tmp_path, None)

    coordinator.request_scan()

    assert coordinator.state is ScanState.IDLE
    assert enable_requests == []
    assert any("not supported" in message for message in statuses)


def test_enabled_adapter_starts_discovery(tmp_path) -> None:
    adapter = FakeAdapter(enabled=True)
    coordinator, _, _, enable_requests, _ = _make(tmp_path, adapter)

    coordinator.request_scan()

    assert coordinator.state is ScanState.SCANNING
    assert coordinator.discovery_started
    assert adapter.start_calls == 1
    assert enable_requests == []


def test_disabled_adapter_waits_for_enable_and_denial_returns_to_idle(tmp_path) -> None:
    adapter = FakeAdapter(enabled=False)
    coordinator, _, _, enable_requests, statuses = _make(tmp_path, adapter)

    coordinator.request_scan()
    assert coordinator.state is ScanState.AWAITING_ADAPTER_ENABLE
    assert enable_requests == [True]

    coordinator.on_adapter_enable_result(False)

    assert coordinator.state is ScanState.IDLE
    assert adapter.start_calls == 0
    assert any("not enabled" in message for message in statuses)


def test_granted_enable_starts_discovery(tmp_path) -> None:
    adapter = FakeAdapter(enabled=False)
    coordinator, _, _, _, _ = _make(tmp_path, adapter)

    coordinator.request_scan()
    coordinator.on_adapter_enable_result(True)

    assert coordinator.state is ScanState.SCANNING
    assert adapter.start_calls == 1


def test_enable_result_ignored_when_not_waiting(tmp_path) -> None:
    adapter = FakeAdapter(enabled=True)
    coordinator, _, _, _, _ = _make(tmp_path, adapter)

    coordinator.on_adapter_enable_result(True)

    assert coordinator.state is ScanState.IDLE
    assert adapter.start_calls == 0


def test_failed_start_is_remembered(tmp_path) -> None:
    adapter = FakeAdapter(enabled=True, starts=False)
    coordinator, _, _, _, statuses = _make(tmp_path, adapter)

    coordinator.request_scan()

    assert coordinator.state is ScanState.SCANNING
    assert not coordinator.discovery_started
    assert any("could not be started" in message for message in statuses)


def test_discovered_device_is_logged_and_persisted(tmp_path) -> None:
    adapter = FakeAdapter(enabled=True)
    coordinator, store, channel, _, _ = _make(tmp_path, adapter)
    coordinator.request_scan()

    assert channel.listeners == [coordinator]
    coordinator.on_device_discovered(
        DiscoveryRecord(name="X", address="00:11:22", rssi=-60)
    )

    assert store.text == "X\n00:11:22\n-60\n"
    assert store.path.read_text(encoding="utf-8") == "X\n00:11:22\n-60\n"


def test_record_without_name_or_rssi_renders_none() -> None:
    record = DiscoveryRecord(name=None, address="AA:BB")

    assert record.to_log_entry() == "None\nAA:BB\nNone\n"


def test_teardown_cancels_running_scan_and_ignores_failure(tmp_path) -> None:
    adapter = FakeAdapter(enabled=True)
    coordinator, _, channel, _, _ = _make(tmp_path, adapter)
    coordinator.request_scan()

    coordinator.teardown()

    assert adapter.cancel_calls == 1
    assert channel.listeners == []
    assert not coordinator.discovery_started


def test_teardown_skips_cancel_after_discovery_finished(tmp_path) -> None:
    adapter = FakeAdapter(enabled=True)
    coordinator, _, _, _, _ = _make(tmp_path, adapter)
    coordinator.request_scan()
    coordinator.on_discovery_finished()

    coordinator.teardown()

    assert adapter.cancel_calls == 0
    # Completion is not plumbed into the state machine.
    assert coordinator.state is ScanState.SCANNING


def test_teardown_without_scan_only_unregisters(tmp_path) -> None:
    coordinator, _, channel, _, _ = _make(tmp_path, None)

    coordinator.teardown()
    coordinator.teardown()

    assert channel.listeners == []
