"""Synchronous execution of external commands."""

from __future__ import annotations

import os
import re
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

# Zero outside Windows, where subprocess does not define the flag.
_CREATION_FLAGS = getattr(subprocess, "CREATE_NO_WINDOW", 0)

# CR, LF and CRLF only. U+0085 and U+2028 can appear inside git ref names.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class ProcessStartError(RuntimeError):
    """Raised when an external command cannot be launched at all."""

    def __init__(self, program: str, reason: str) -> None:
        super().__init__(f"Could not start the process '{program}': {reason}")
        self.program = program


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a single command invocation."""

    stdout: str
    stderr: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and not self.stderr


def split_command(command: str | Sequence[str]) -> list[str]:
    """Return the program followed by its arguments."""
    if isinstance(command, str):
        args = shlex.split(command)
    else:
        args = [str(arg) for arg in command]
    if not args:
        raise ValueError("Command line is empty")
    return args


def run_command(
    command: str | Sequence[str],
    *,
    cwd: Path | str | None = None,
) -> CommandResult:
    """Run ``command`` without a shell and block until it exits.

    Both output streams are drained completely. Every captured line is
    re-terminated with ``os.linesep`` so callers see the same text layout the
    tool printed on the current platform. There is no timeout: a command that
    never exits blocks the caller.
    """
    args = split_command(command)
    try:
        process = subprocess.Popen(
            args,
            cwd=str(cwd) if cwd is not None else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            creationflags=_CREATION_FLAGS,
        )
    except OSError as exc:
        raise ProcessStartError(args[0], exc.strerror or str(exc)) from exc

    with process:
        stdout, stderr = process.communicate()

    return CommandResult(
        stdout=_join_lines(stdout),
        stderr=_join_lines(stderr),
        exit_code=process.returncode,
    )


def split_lines(text: str) -> list[str]:
    """Split ``text`` on CR, LF and CRLF only, without a trailing empty line."""
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def _join_lines(text: str | None) -> str:
    if not text:
        return ""
    return "".join(f"{line}{os.linesep}" for line in split_lines(text))


__all__ = ["CommandResult", "ProcessStartError", "run_command", "split_command", "split_lines"]
