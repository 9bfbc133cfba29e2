"""
Fetch-tool backends that print recolored ascii art.

The recoloring engine only produces a string. Printing it next to system
information is delegated to an external fetch tool:

- neofetch (or its maintained fork, neowofetch): ``--ascii --source FILE``
- fastfetch: ``--file-raw FILE``
- fastfetch-old: ``--raw FILE`` for fastfetch releases before 1.8

The art is handed over through a temporary file. The same tools are also
used to look up ascii art for a distro that has no built-in art.

Security features:
- Safe subprocess handling with shell=False
- Subprocess timeouts prevent hanging
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import Final

from .alignment import ForeBackPair
from .canvas import normalize_ascii
from .distros import fore_back
from .errors import BackendError

__all__ = [
    "Backend",
    "get_distro_ascii",
    "get_distro_name",
    "run",
    "run_fastfetch_command_piped",
    "run_neofetch_command_piped",
]

logger = logging.getLogger(__name__)

# Seconds before an external fetch tool is considered hung
BACKEND_TIMEOUT: Final[int] = 30

# Tried in order, the first one found wins
NEOFETCH_COMMANDS: Final[tuple[str, ...]] = ("neowofetch", "neofetch")

# fastfetch before 1.8 exits with this code when given --file-raw
FASTFETCH_OLD_EXIT_CODE: Final[int] = 144


class Backend(Enum):
    """External tool used to print the final art."""

    NEOFETCH = "neofetch"
    FASTFETCH = "fastfetch"
    FASTFETCH_OLD = "fastfetch-old"


# =============================================================================
# SUBPROCESS HELPERS
# =============================================================================


def _run_command(cmd: list[str], capture: bool) -> subprocess.CompletedProcess[str]:
    logger.debug("Running command: %s", " ".join(cmd))
    try:
        return subprocess.run(
            cmd,
            capture_output=capture,
            text=True,
            check=True,
            timeout=BACKEND_TIMEOUT,
        )
    except subprocess.TimeoutExpired as e:
        msg = f"Command timed out: {' '.join(cmd)}"
        raise BackendError(msg) from e
    except subprocess.CalledProcessError as e:
        if cmd[0] == "fastfetch" and e.returncode == FASTFETCH_OLD_EXIT_CODE:
            logger.warning(
                "Exit code %d detected; please upgrade fastfetch to >=1.8.0 "
                "or use the 'fastfetch-old' backend",
                FASTFETCH_OLD_EXIT_CODE,
            )
        msg = f"{cmd[0]} exited with status {e.returncode}"
        if e.stderr:
            msg = f"{msg}: {e.stderr.strip()}"
        raise BackendError(msg) from e


def _run_neofetch(args: Sequence[str], capture: bool) -> subprocess.CompletedProcess[str]:
    last_error: Exception | None = None
    for name in NEOFETCH_COMMANDS:
        try:
            return _run_command([name, *args], capture)
        except FileNotFoundError:
            # Not installed, try the next one
            last_error = FileNotFoundError(f"{name} not found")
            continue

    msg = "Neither neowofetch nor neofetch is available"
    raise BackendError(msg) from last_error


def _run_fastfetch(args: Sequence[str], capture: bool) -> subprocess.CompletedProcess[str]:
    try:
        return _run_command(["fastfetch", *args], capture)
    except FileNotFoundError:
        msg = "fastfetch not found"
        raise BackendError(msg) from None


def run_neofetch_command_piped(args: Sequence[str]) -> str:
    """
    Run neofetch and return its stripped stdout.

    Raises:
        BackendError: If neofetch is missing, fails or times out
    """
    result = _run_neofetch(args, capture=True)
    return result.stdout.strip()


def run_fastfetch_command_piped(args: Sequence[str]) -> str:
    """
    Run fastfetch and return its stripped stdout.

    Raises:
        BackendError: If fastfetch is missing, fails or times out
    """
    result = _run_fastfetch(args, capture=True)
    return result.stdout.strip()


# =============================================================================
# ASCII LOOKUP
# =============================================================================


def get_distro_name(backend: Backend = Backend.NEOFETCH) -> str:
    """Ask the backend which distro the running system is."""
    if backend is Backend.NEOFETCH:
        return run_neofetch_command_piped(["ascii_distro_name"])
    return run_fastfetch_command_piped(
        ["--logo", "none", "-s", "OS", "--disable-linewrap", "--os-key", " "]
    )


def get_distro_ascii(
    distro: str | None = None, backend: Backend = Backend.NEOFETCH
) -> tuple[str, ForeBackPair | None]:
    """
    Get ascii art for a distro from neofetch.

    Args:
        distro: Distro name, or None to ask the backend for the current one
        backend: Backend used to detect the distro name. The art itself
                 always comes from neofetch.

    Returns:
        Tuple of (normalized ascii art, recommended fore/back pair or None)

    Raises:
        BackendError: If the backend cannot be run
    """
    if distro is None:
        distro = get_distro_name(backend)
    logger.debug("Distro name: %s", distro)

    asc = run_neofetch_command_piped(["print_ascii", "--ascii_distro", distro])

    # neofetch escapes backslashes for printf
    asc = asc.replace("\\\\", "\\")

    return normalize_ascii(asc), fore_back(distro)


# =============================================================================
# RUNNING BACKENDS
# =============================================================================


def _backend_args(backend: Backend, path: Path) -> list[str]:
    if backend is Backend.NEOFETCH:
        return ["--ascii", "--source", str(path), "--ascii-colors"]
    if backend is Backend.FASTFETCH:
        return ["--file-raw", str(path)]
    return ["--raw", str(path)]


def run(asc: str, backend: Backend, args: Sequence[str] | None = None) -> None:
    """
    Print recolored ascii art with a fetch backend.

    Args:
        asc: Finished, already colored ascii art
        backend: Tool to run
        args: Extra arguments passed through to the tool

    Raises:
        BackendError: If the tool is missing, fails or times out
    """
    if backend is Backend.NEOFETCH:
        # neofetch unescapes --source art through printf
        asc = asc.replace("\\", "\\\\")

    with tempfile.TemporaryDirectory() as tmp_dir:
        path = Path(tmp_dir) / "ascii.txt"
        path.write_text(asc, encoding="utf-8")

        cmd_args = [*_backend_args(backend, path), *(args or [])]

        if backend is Backend.NEOFETCH:
            _run_neofetch(cmd_args, capture=False)
        else:
            _run_fastfetch(cmd_args, capture=False)
