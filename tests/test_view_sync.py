from hotcold.core.view_sync import ViewSync


class FakeSurface:
    def __init__(self) -> None:
        self.text = ""
        self.appends = 0

    def append(self, text: str) -> None:
        self.appends += 1
        self.text += text

    def set_text(self, text: str) -> None:
        self.text = text


def test_render_append_clear() -> None:
    surface = FakeSurface()
    sync = ViewSync(surface)

    sync.render("a\n")
    sync.append("b\n")
    assert surface.text == "a\nb\n"

    sync.clear()
    assert surface.text == ""


def test_empty_append_is_not_forwarded() -> None:
    surface = FakeSurface()
    ViewSync(surface).append("")

    assert surface.appends == 0
