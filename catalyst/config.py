"""Catalyst configuration.

Typed settings for a Catalyst run. All settings use Pydantic v2 models so
they can be validated at construction time and serialised to/from JSON or
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from catalyst.errors import ConfigError


class Database(str, Enum):
    """Database adapters accepted by ``mix phx.new --database``."""

    POSTGRES = "postgres"
    MYSQL = "mysql"
    SQLITE = "sqlite3"

    @classmethod
    def from_choice(cls, choice: str) -> "Database":
        """Map the interactive ``[1]/[2]/[3]`` answer to an adapter.

        Anything that is not ``"2"`` or ``"3"`` selects Postgres.
        """
        return {"2": cls.MYSQL, "3": cls.SQLITE}.get(choice.strip(), cls.POSTGRES)


class Config(BaseModel):
    """Global Catalyst configuration.

    Instances are created once by the CLI entry point and passed to the
    generator and the feature modules.
    """

    model_config = ConfigDict(frozen=True)

    output_dir: Path = Field(default=Path("."))
    database: Database = Field(default=Database.POSTGRES)
    mix_binary: str = Field(default="mix", description="Executable used for every mix task")
    generator_flags: list[str] = Field(
        default=["--tailwind"],
        description="Extra flags appended to `mix phx.new`",
    )
    docs_dir: str = Field(default="docs/catalyst")
    manifest_anchor: str = Field(default="defp deps do")
    fetch_dependencies: bool = Field(
        default=True, description="Run `mix deps.get` after a module adds dependencies"
    )
    run_migrations: bool = Field(
        default=True, description="Run generators and `mix ecto.migrate` inside modules"
    )
    command_timeout: float | None = Field(
        default=None, gt=0, description="Per-subprocess timeout in seconds; None waits forever"
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.

        Returns:
            The path where the file was written.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CATALYST_OUTPUT_DIR, CATALYST_DATABASE, CATALYST_MIX,
            CATALYST_SKIP_DEPS, CATALYST_SKIP_MIGRATIONS,
            CATALYST_COMMAND_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CATALYST_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["CATALYST_OUTPUT_DIR"])
        if os.environ.get("CATALYST_DATABASE"):
            kwargs["database"] = os.environ["CATALYST_DATABASE"]
        if os.environ.get("CATALYST_MIX"):
            kwargs["mix_binary"] = os.environ["CATALYST_MIX"]
        if _env_flag("CATALYST_SKIP_DEPS"):
            kwargs["fetch_dependencies"] = False
        if _env_flag("CATALYST_SKIP_MIGRATIONS"):
            kwargs["run_migrations"] = False
        if os.environ.get("CATALYST_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = os.environ["CATALYST_COMMAND_TIMEOUT"]

        try:
            return cls(**kwargs)
        except ValidationError as exc:
            fields = ", ".join(str(error["loc"][0]) for error in exc.errors())
            raise ConfigError(f"Invalid CATALYST_* setting for: {fields}") from exc


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")
