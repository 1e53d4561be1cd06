"""Post-install banner (`basic-ai-tools-banner`)."""

from __future__ import annotations

import sys
from typing import TextIO

ASCII_ART = r"""
 /$$$$$$$                      /$$                  /$$$$$$  /$$$$$$
| $$__  $$                    |__/                 /$$__  $$|_  $$_/
| $$  \ $$  /$$$$$$   /$$$$$$$ /$$  /$$$$$$$      | $$  \ $$  | $$
| $$$$$$$  |____  $$ /$$_____/| $$ /$$_____/      | $$$$$$$$  | $$
| $$__  $$  /$$$$$$$|  $$$$$$ | $$| $$            | $$__  $$  | $$
| $$  \ $$ /$$__  $$ \____  $$| $$| $$            | $$  | $$  | $$
| $$$$$$$/|  $$$$$$$ /$$$$$$$/| $$|  $$$$$$$      | $$  | $$ /$$$$$$
|_______/  \_______/|_______/ |__/ \_______/      |__/  |__/|______/
"""

TAGLINE = "Basic tools for web applications using the OpenAI API"


def print_banner(stream: TextIO | None = None) -> bool:
    """Write the banner to `stream`; stay quiet in non-interactive runs (CI, pipes)."""

    stream = stream or sys.stdout
    if not stream.isatty():
        return False
    stream.write(ASCII_ART.lstrip("\n"))
    stream.write(f"\n{TAGLINE}\n")
    return True


def main() -> None:
    print_banner()


if __name__ == "__main__":
    main()
