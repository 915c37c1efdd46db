# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

# Bandit: subprocess usage is intentional; arguments are passed as a list and
# ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

from .errors import SubcommandExecutionError
from .interfaces import DispatchLogger

TIMEOUT_EXIT_CODE: Final[int] = 124


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options.

    ``capture_output=False`` leaves the child connected to the parent's
    standard streams.
    """

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = True
    capture_output: bool = False
    timeout: float | None = None


def _ensure_text(value: str | bytes | None) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def run_command(
    args: Sequence[str | Path],
    *,
    options: CommandOptions | None = None,
) -> CompletedProcess[str]:
    """Execute ``args`` and return the completed process.

    Args:
        args: Executable followed by its arguments.
        options: Execution options; defaults to :class:`CommandOptions`.

    Returns:
        CompletedProcess: Subprocess metadata. A timed-out child is reported
        with return code ``124``.

    Raises:
        ValueError: If ``args`` is empty.
        SubcommandExecutionError: When the executable cannot be launched, or
            when ``check`` is true and the process exits with a non-zero status.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")
    resolved = options or CommandOptions()
    normalized = [str(arg) for arg in args]
    executable = Path(normalized[0])

    try:
        # Bandit: argument lists are executed directly without shell expansion.
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603
            normalized,
            cwd=str(resolved.cwd) if resolved.cwd is not None else None,
            env=dict(resolved.env) if resolved.env is not None else None,
            check=False,
            capture_output=resolved.capture_output,
            text=True,
            timeout=resolved.timeout,
        )
    except subprocess.TimeoutExpired as exc:
        timeout_msg = f"Command timed out after {resolved.timeout:.1f}s"
        if resolved.check:
            raise SubcommandExecutionError(executable, returncode=TIMEOUT_EXIT_CODE, reason=timeout_msg) from exc
        stderr = _ensure_text(exc.stderr)
        completed = subprocess.CompletedProcess(
            args=normalized,
            returncode=TIMEOUT_EXIT_CODE,
            stdout=_ensure_text(exc.stdout) or "",
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )
    except OSError as exc:
        raise SubcommandExecutionError(executable, reason=exc.strerror or str(exc)) from exc

    if resolved.check and completed.returncode != 0:
        raise SubcommandExecutionError(executable, returncode=completed.returncode)
    return completed


def run_binary(
    path: Path,
    args: Sequence[str],
    *,
    logger: DispatchLogger,
    timeout: float | None = None,
) -> None:
    """Run a resolved subcommand binary with inherited standard streams.

    Blocks until the child exits.

    Args:
        path: Absolute path of the executable.
        args: Arguments forwarded verbatim to the child.
        logger: Logger receiving the execution record.
        timeout: Optional limit in seconds; ``None`` waits indefinitely.

    Raises:
        SubcommandExecutionError: If the child cannot be launched, exits
            non-zero, or exceeds ``timeout``.
    """

    logger.debug(f"executing binary path={path} args={list(args)!r}")
    run_command([path, *args], options=CommandOptions(check=True, timeout=timeout))


__all__ = [
    "CommandOptions",
    "TIMEOUT_EXIT_CODE",
    "run_binary",
    "run_command",
]
