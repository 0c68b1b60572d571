"""Exception hierarchy shared by the injector, the modules and the CLI."""

from __future__ import annotations

from pathlib import Path


class CatalystError(Exception):
    """Base class for every error Catalyst raises on purpose."""


class InjectionError(CatalystError):
    """Raised when a generated file cannot be patched."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class AnchorNotFoundError(InjectionError):
    """Raised when the marker text a patch depends on is missing."""

    def __init__(self, marker: str, path: Path) -> None:
        self.marker = marker
        super().__init__(f"Anchor {marker!r} not found in {path}", path)


class CommandError(CatalystError):
    """Raised when a checked subprocess exits with a non-zero code."""

    def __init__(self, command: str, returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr.splitlines()[-1]}" if stderr.strip() else ""
        super().__init__(f"`{command}` exited with code {returncode}{detail}")


class GenerationError(CatalystError):
    """Raised when the base project generator fails. Fatal for the run."""


class UnknownModuleError(CatalystError):
    """Raised when a selection names a module key that is not registered."""

    def __init__(self, keys: list[str]) -> None:
        self.keys = keys
        super().__init__(f"Unknown module(s): {', '.join(keys)}")


class ConfigError(CatalystError):
    """Raised when a ``CATALYST_*`` setting holds an unusable value."""
