from __future__ import annotations

import io

from basic_ai_tools.banner import TAGLINE, print_banner


class _Terminal(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_banner_printed_on_interactive_terminal() -> None:
    stream = _Terminal()

    assert print_banner(stream) is True
    output = stream.getvalue()
    assert "/$$$$$$$" in output
    assert output.rstrip().endswith(TAGLINE)


def test_banner_silent_when_not_interactive() -> None:
    stream = io.StringIO()

    assert print_banner(stream) is False
    assert stream.getvalue() == ""
