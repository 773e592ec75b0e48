"""Best-effort rustfmt post-processing of generated code."""

import subprocess
from collections.abc import Sequence

RUSTFMT = ("rustfmt",)


class FormatterUnavailable(RuntimeError):
    """Raised when the formatter can't be run or returns nothing usable."""


def format_code(code: str, command: Sequence[str] = RUSTFMT) -> str:
    """Pipe `code` through `command` and return its output."""
    try:
        # rustfmt warns about unstable features on stderr, which is noise here
        result = subprocess.run(
            list(command),
            input="\n" + code,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=False,
        )
    except OSError as e:
        raise FormatterUnavailable(f"could not run {command[0]}: {e}") from e

    if result.returncode != 0:
        raise FormatterUnavailable(f"{command[0]} exited with status {result.returncode}")
    if not result.stdout.strip():
        raise FormatterUnavailable(f"{command[0]} produced no output")
    return result.stdout
