from __future__ import annotations

from hotcold.dataio.status_log import LogStore


class RecordingView:
    def __init__(self) -> None:
        self.text = ""
        self.calls: list[tuple[str, str]] = []

    def render(self, text: str) -> None:
        self.calls.append(("render", text))
        self.text = text

    def append(self, text: str) -> None:
        self.calls.append(("append", text))
        self.text += text

    def clear(self) -> None:
        self.calls.append(("clear", ""))
        self.text = ""


class FailingHandle:
    def __init__(self) -> None:
        self.writes = 0

    def write(self, data: bytes) -> int:
        self.writes += 1
        raise OSError("disk full")

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


def test_open_on_absent_file_returns_empty_and_creates_nothing(tmp_path) -> None:
    store = LogStore(tmp_path / "files")

    assert store.open() == ""
    assert store.text == ""
    assert store.is_writable
    assert not store.path.exists()


def test_append_then_reopen_replays_log(tmp_path) -> None:
    store = LogStore(tmp_path)
    store.open()
    store.append("A\n", persist=True)
    store.close()

    assert store.text == ""
    assert store.open() == "A\n"
    assert store.text == "A\n"


def test_view_is_concatenation_of_appends(tmp_path) -> None:
    messages = ["first\n", "second\n", "", "third\n"]
    store = LogStore(tmp_path)
    store.open()
    for message in messages:
        store.append(message, persist=True)

    assert store.text == "".join(messages)
    store.close()
    assert store.open() == "".join(messages)


def test_unpersisted_append_only_reaches_view(tmp_path) -> None:
    store = LogStore(tmp_path)
    store.open()
    store.append("kept\n", persist=True)
    store.append("view only\n", persist=False)

    assert store.text == "kept\nview only\n"
    store.close()
    assert store.open() == "kept\n"


def test_clear_with_delete_removes_file(tmp_path) -> None:
    store = LogStore(tmp_path)
    store.open()
    store.append("old\n")
    store.clear(delete_file=True)

    assert store.text == ""
    assert not store.path.exists()

    store.close()
    assert store.open() == ""
    assert store.is_writable
    store.append("new\n")
    assert store.path.read_bytes() == b"new\n"


def test_clear_with_delete_then_append_recreates_file_while_open(tmp_path) -> None:
    store = LogStore(tmp_path)
    store.open()
    store.append("old\n")
    store.clear(delete_file=True)
    store.append("fresh\n")

    assert store.path.read_bytes() == b"fresh\n"


def test_clear_without_delete_keeps_persisted_content(tmp_path) -> None:
    store = LogStore(tmp_path)
    store.open()
    store.append("keep me\n")
    store.clear(delete_file=False)

    assert store.text == ""
    store.close()
    assert store.open() == "keep me\n"


def test_write_failure_degrades_to_view_only(tmp_path, monkeypatch) -> None:
    store = LogStore(tmp_path)
    store.open()
    handle = FailingHandle()
    monkeypatch.setattr(store, "_acquire_handle", lambda: handle)

    store.append("m\n", persist=True)

    assert store.text.startswith("m\n")
    assert "Failed to write status log" in store.text
    assert "disk full" in store.text
    assert not store.is_writable

    store.append("m2\n", persist=True)

    assert handle.writes == 1
    assert store.text.endswith("m2\n")


def test_reopen_after_write_failure_restores_persistence(tmp_path, monkeypatch) -> None:
    store = LogStore(tmp_path)
    store.open()
    monkeypatch.setattr(store, "_acquire_handle", lambda: FailingHandle())
    store.append("lost\n")
    monkeypatch.undo()

    store.close()
    store.open()
    store.append("saved\n")

    store.close()
    assert store.open() == "saved\n"


def test_open_degrades_when_directory_cannot_be_created(tmp_path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    store = LogStore(blocker / "files")

    assert store.open() == ""
    assert not store.is_writable
    assert "Failed to open status log" in store.text

    store.append("still visible\n", persist=True)
    assert store.text.endswith("still visible\n")


def test_unreadable_log_reads_as_empty(tmp_path) -> None:
    # A directory where the file should be cannot be read as bytes.
    (tmp_path / "log").mkdir()
    store = LogStore(tmp_path)

    assert store.read_log() == ""


def test_append_before_open_is_not_persisted(tmp_path) -> None:
    store = LogStore(tmp_path)
    store.append("early\n", persist=True)

    assert store.text == "early\n"
    assert not store.path.exists()


def test_view_sink_mirrors_store(tmp_path) -> None:
    (tmp_path / "log").write_bytes(b"previous\n")
    view = RecordingView()
    store = LogStore(tmp_path, view=view)

    store.open()
    store.append("next\n")
    assert view.text == store.text == "previous\nnext\n"

    store.close()
    assert view.text == ""
    assert view.calls[0] == ("render", "previous\n")
