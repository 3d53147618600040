"""Platform detection and environment probes.

Answers environment questions (OS family, WSL, Termux, command lookup,
whether a global npm install needs sudo). Every function is a pure query
and safe to call repeatedly.
"""

import logging
import os
import shutil
import sys
from pathlib import Path

from agentctl.models.tool import Platform

logger = logging.getLogger(__name__)

TERMUX_DEFAULT_PREFIX = "/data/data/com.termux/files/usr"

_PROC_VERSION = Path("/proc/version")
_OS_RELEASE = Path("/etc/os-release")
_WINDOWS_MOUNT = Path("/mnt/c")


def detect_platform() -> Platform:
    """Detect the operating system family.

    Returns:
        Platform.WINDOWS, Platform.MACOS or Platform.LINUX. Anything that
        is neither Windows nor macOS is treated as Linux.
    """
    if sys.platform == "win32":
        return Platform.WINDOWS
    if sys.platform == "darwin":
        return Platform.MACOS
    return Platform.LINUX


def is_restricted_shell_env() -> bool:
    """Check if running inside Termux on Android.

    Termux has no sudo, installs into its own prefix, and needs extra
    lookup paths for binaries.
    """
    prefix = os.environ.get("PREFIX", "")
    if "com.termux" in prefix:
        return True
    if os.environ.get("TERMUX_VERSION"):
        return True
    return Path(TERMUX_DEFAULT_PREFIX).exists()


def get_restricted_prefix() -> str:
    """Return the Termux install prefix."""
    return os.environ.get("PREFIX") or TERMUX_DEFAULT_PREFIX


def is_wsl() -> bool:
    """Check if running under Windows Subsystem for Linux.

    Checks, in order: the WSL_DISTRO_NAME variable, a Microsoft/WSL
    signature in /proc/version, and the /mnt/c Windows mount.
    """
    if os.environ.get("WSL_DISTRO_NAME"):
        return True

    try:
        version = _PROC_VERSION.read_text(encoding="utf-8")
    except OSError:
        version = ""
    if "Microsoft" in version or "WSL" in version:
        return True

    return _WINDOWS_MOUNT.exists()


def get_wsl_distro() -> str | None:
    """Return the WSL distribution name, if it can be determined."""
    distro = os.environ.get("WSL_DISTRO_NAME")
    if distro:
        return distro

    try:
        os_release = _OS_RELEASE.read_text(encoding="utf-8")
    except OSError:
        return None

    for line in os_release.splitlines():
        if line.startswith("PRETTY_NAME="):
            return line.partition("=")[2].strip().strip('"') or None
    return None


def _fallback_command_paths(name: str) -> list[Path]:
    """Well-known locations checked when PATH lookup fails."""
    paths: list[Path] = []

    if is_restricted_shell_env():
        prefix = get_restricted_prefix()
        paths.extend(
            [
                Path(prefix) / "bin" / name,
                Path(prefix) / "usr" / "bin" / name,
                Path(TERMUX_DEFAULT_PREFIX) / "bin" / name,
            ]
        )

    if detect_platform() != Platform.WINDOWS:
        paths.extend(
            [
                Path("/usr/local/bin") / name,
                Path("/usr/bin") / name,
                Path("/bin") / name,
                Path.home() / ".local" / "bin" / name,
            ]
        )

    return paths


def command_exists(name: str) -> bool:
    """Check if a command is installed.

    Tries a PATH lookup first, then falls back to a fixed list of install
    directories (plus Termux paths when running in Termux).

    Args:
        name: Command name to check.

    Returns:
        True if the command was found, False otherwise.
    """
    if shutil.which(name) is not None:
        return True

    for candidate in _fallback_command_paths(name):
        if candidate.exists():
            logger.debug("Found %s outside PATH at %s", name, candidate)
            return True

    return False


def _normalize_path(path: str) -> str:
    """Use forward slashes, collapse duplicates and drop trailing slashes."""
    normalized = path.replace("\\", "/")
    while "//" in normalized:
        normalized = normalized.replace("//", "/")
    return normalized.rstrip("/")


def _is_path_inside_home(path: str) -> bool:
    home = os.environ.get("HOME")
    if not home:
        return False
    normalized_home = _normalize_path(home)
    normalized_path = _normalize_path(path)
    return normalized_path == normalized_home or normalized_path.startswith(
        f"{normalized_home}/"
    )


def _can_write_to_path(path: str) -> bool:
    return os.access(path, os.W_OK)


def get_global_npm_prefix() -> str | None:
    """Return the prefix npm installs global packages into.

    Uses the npm prefix environment variables when set, otherwise derives
    the prefix from the location of the node binary (<prefix>/bin/node).
    """
    for var in ("npm_config_prefix", "NPM_CONFIG_PREFIX", "PREFIX"):
        value = os.environ.get(var)
        if value:
            return value

    node = shutil.which("node")
    if node:
        return str(Path(node).resolve().parent.parent)

    return None


def _is_superuser() -> bool:
    geteuid = getattr(os, "geteuid", None)
    if geteuid is None:
        return True
    return geteuid() == 0


def requires_elevated_install() -> bool:
    """Check if a global npm install must be wrapped with sudo.

    Returns:
        False in Termux and on non-Linux platforms. On Linux, False when
        the npm prefix is writable or inside the home directory, otherwise
        True unless already running as root.
    """
    if is_restricted_shell_env():
        return False

    if detect_platform() != Platform.LINUX:
        return False

    prefix = get_global_npm_prefix()
    if prefix and (_is_path_inside_home(prefix) or _can_write_to_path(prefix)):
        return False

    return not _is_superuser()


def wrap_with_elevation(args: list[str]) -> tuple[list[str], bool]:
    """Prefix a command with sudo when a global install requires it.

    Args:
        args: Command and arguments.

    Returns:
        Tuple of (possibly wrapped argv, whether sudo was added).
    """
    if requires_elevated_install():
        return ["sudo", *args], True
    return list(args), False
