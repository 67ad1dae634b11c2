"""Main window for the HotCold GUI."""

from __future__ import annotations

import logging

from PySide6.QtCore import Qt, QTimer, Slot
from PySide6.QtGui import QCloseEvent, QGuiApplication, QShowEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..bluetooth.bleak_adapter import BleakAdapterProvider
from ..config.app_config import AppPaths
from ..config.runtime import HotColdConfig
from ..core.scan_coordinator import ScanCoordinator
from ..core.view_sync import ViewSync
from ..dataio.status_log import LogStore
from .log_view import LogTextView


class MainWindow(QMainWindow):
    """Single-screen window: scan and clear buttons over the status log."""

    def __init__(
        self,
        config: HotColdConfig | None = None,
        *,
        app_paths: AppPaths | None = None,
        adapter_provider: BleakAdapterProvider | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("HotCold")

        self._config = (config or HotColdConfig()).sanitized()
        self._paths = app_paths or AppPaths()
        self._logger = logging.getLogger(__name__)
        self._resumed = False

        self.log_view = LogTextView(self)
        self.scan_button = QPushButton(self.tr("Bluetooth Scan"), self)
        self.clear_button = QPushButton(self.tr("Clear Log File"), self)

        files_dir = self._config.files_dir or self._paths.files_dir
        self.log_store = LogStore(
            files_dir,
            self._config.log_filename,
            view=ViewSync(self.log_view),
        )

        self._provider = adapter_provider or BleakAdapterProvider(
            self._config.scan_timeout_s, parent=self
        )
        self._adapter = self._provider.adapter
        self.scan_coordinator = ScanCoordinator(
            self._provider,
            self.log_store,
            request_enable=self._request_adapter_enable,
            channel=self._adapter,
            status=self._show_status,
        )

        self._adapter.error_reported.connect(self._on_adapter_error)
        self._adapter.discovery_running_changed.connect(self._on_discovery_running_changed)
        self.scan_button.clicked.connect(self._on_scan_clicked)
        self.clear_button.clicked.connect(self._on_clear_clicked)

        app = QGuiApplication.instance()
        if app is not None:
            app.applicationStateChanged.connect(self._on_application_state_changed)

        self._build_layout()

    def _build_layout(self) -> None:
        button_row = QHBoxLayout()
        button_row.addWidget(self.scan_button)
        button_row.addWidget(self.clear_button)
        button_row.addStretch(1)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.addLayout(button_row)
        layout.addWidget(self.log_view, stretch=1)
        self.setCentralWidget(container)

    # ------------------------------------------------------------ lifecycle
    def resume(self) -> None:
        """Replay the status log into the view and open it for appending."""
        if self._resumed:
            return
        self._resumed = True
        self.log_store.open()
        self._logger.info("Status log opened at %s", self.log_store.path)

    def suspend(self) -> None:
        """Close the status log and clear the view."""
        if not self._resumed:
            return
        self._resumed = False
        self.log_store.close()

    def showEvent(self, event: QShowEvent) -> None:
        super().showEvent(event)
        self.resume()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.suspend()
        try:
            self.scan_coordinator.teardown()
            if self._adapter.is_discovering():
                self._adapter.wait()
        except Exception:  # pragma: no cover - best-effort shutdown
            self._logger.exception("Failed to stop Bluetooth discovery on close")
        super().closeEvent(event)

    @Slot(Qt.ApplicationState)
    def _on_application_state_changed(self, state: Qt.ApplicationState) -> None:
        if state == Qt.ApplicationActive and self.isVisible():
            self.resume()
        elif state in (Qt.ApplicationSuspended, Qt.ApplicationHidden):
            self.suspend()

    # ---------------------------------------------------------------- slots
    @Slot()
    def _on_scan_clicked(self) -> None:
        self.scan_coordinator.request_scan()

    @Slot()
    def _on_clear_clicked(self) -> None:
        self.log_store.clear(delete_file=True)
        self._show_status("Status log cleared.")

    @Slot(str)
    def _on_adapter_error(self, message: str) -> None:
        self._show_status(f"Bluetooth error: {message}")

    @Slot(bool)
    def _on_discovery_running_changed(self, running: bool) -> None:
        self.scan_button.setEnabled(not self._adapter.is_discovering())
        if not running:
            self._show_status("Bluetooth scan finished.")

    def _request_adapter_enable(self) -> None:
        # Answer after request_scan() returns so the coordinator is waiting.
        QTimer.singleShot(0, self._prompt_adapter_enable)

    @Slot()
    def _prompt_adapter_enable(self) -> None:
        answer = QMessageBox.question(
            self,
            self.tr("Bluetooth is off"),
            self.tr("Turn Bluetooth on, then press Yes to start scanning."),
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.Yes,
        )
        granted = answer == QMessageBox.Yes
        if granted:
            self._adapter.mark_enabled()
        self.scan_coordinator.on_adapter_enable_result(granted)

    def _show_status(self, message: str) -> None:
        self.statusBar().showMessage(message, 5000)
