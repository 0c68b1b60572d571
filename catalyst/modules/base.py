"""Module contract shared by every Catalyst feature module.

A feature module turns a freshly generated Phoenix project into one that
uses some library: it adds dependencies to ``mix.exs``, writes new files,
splices routes or configuration into existing files, and documents what it
did under ``docs/catalyst/``.  Every module exposes a single operation,
:meth:`FeatureModule.setup`, which never raises for expected faults and
instead returns a :class:`Failure`.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Union

from jinja2 import TemplateError
from pydantic import BaseModel, ConfigDict, Field
from rich.markup import escape

from ..config import Config
from ..errors import CatalystError, CommandError
from ..injector import (
    DependencyRecord,
    InjectionResult,
    TemplateRenderer,
    emit_documentation,
    inject_dependencies,
    materialize,
    materialize_tree,
)
from ..utils import camelize, format_command, print_warning, run_command


# ---------------------------------------------------------------------------
# Project context
# ---------------------------------------------------------------------------


class ProjectContext(BaseModel):
    """Immutable description of the generated project.

    Created once after base generation and handed to every module.  All file
    locations a module touches are derived from it; modules never rely on
    the process working directory.
    """

    model_config = ConfigDict(frozen=True)

    root: Path = Field(..., description="Absolute path of the generated project")
    name: str = Field(..., description="OTP application name, e.g. 'my_app'")
    identifier: str = Field(..., description="Elixir module prefix, e.g. 'MyApp'")
    config: Config = Field(default_factory=Config)

    @classmethod
    def from_path(cls, path: str | Path, config: Config | None = None) -> "ProjectContext":
        """Derive the context from a project directory."""
        root = Path(path).expanduser().resolve()
        return cls(
            root=root,
            name=root.name,
            identifier=camelize(root.name),
            config=config or Config(),
        )

    @property
    def web_identifier(self) -> str:
        return f"{self.identifier}Web"

    @property
    def lib_dir(self) -> Path:
        return self.root / "lib" / self.name

    @property
    def web_dir(self) -> Path:
        return self.root / "lib" / f"{self.name}_web"

    @property
    def router_path(self) -> Path:
        return self.web_dir / "router.ex"

    @property
    def manifest_path(self) -> Path:
        return self.root / "mix.exs"

    @property
    def config_dir(self) -> Path:
        return self.root / "config"

    @property
    def migrations_dir(self) -> Path:
        return self.root / "priv" / "repo" / "migrations"

    @property
    def assets_dir(self) -> Path:
        return self.root / "assets"

    @property
    def docs_dir(self) -> Path:
        return self.root / self.config.docs_dir

    def template_variables(self) -> dict[str, Any]:
        """Variables every module template can reference."""
        return {
            "app_name": self.name,
            "app_module": self.identifier,
            "web_module": self.web_identifier,
            "docs_dir": self.config.docs_dir,
        }


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Success:
    """The module finished its setup."""

    ok: ClassVar[bool] = True

    def __str__(self) -> str:
        return "success"


@dataclass(frozen=True)
class Failure:
    """The module stopped; *reason* says why."""

    reason: str
    ok: ClassVar[bool] = False

    def __str__(self) -> str:
        return f"failure: {self.reason}"


SetupOutcome = Union[Success, Failure]


# ---------------------------------------------------------------------------
# Feature module base class
# ---------------------------------------------------------------------------


class FeatureModule(ABC):
    """Base class for feature modules.

    Subclasses set ``key`` and ``prompt``, list their ``dependencies`` and
    implement :meth:`install`.  ``install`` may raise; :meth:`setup` is the
    boundary that converts expected faults into a :class:`Failure`.

    Every step a subclass takes must be safe to repeat on a project that a
    previous run already touched.  The helpers here are: files through
    :meth:`write_file` never overwrite, dependencies already declared are
    skipped, and the documentation file is created once.  Patches must pass
    an explicit ``guard``.
    """

    key: ClassVar[str]
    prompt: ClassVar[str]
    dependencies: ClassVar[tuple[DependencyRecord, ...]] = ()

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    @property
    def title(self) -> str:
        """Display name used in the run report, e.g. ``ExMachina``."""
        return camelize(self.key)

    # -- Contract ----------------------------------------------------------

    async def setup(self, context: ProjectContext) -> SetupOutcome:
        """Run the module against *context* and report the outcome."""
        try:
            await self.install(context)
        except (CatalystError, OSError, UnicodeDecodeError, TemplateError) as exc:
            return Failure(str(exc) or type(exc).__name__)
        return Success()

    @abstractmethod
    async def install(self, context: ProjectContext) -> None:
        """Apply the module to the project. Raise on failure."""

    # -- Helpers -----------------------------------------------------------

    def render(self, template: str, context: ProjectContext, **extra: Any) -> str:
        """Render ``<key>/<template>`` with the project variables."""
        return self.renderer.render(
            f"{self.key}/{template}", {**context.template_variables(), **extra}
        )

    def render_block(self, source: str, context: ProjectContext) -> str:
        """Render an inline template string, typically a patch block."""
        return self.renderer.render_string(source, context.template_variables())

    def write_file(
        self,
        directory: Path,
        filename: str,
        context: ProjectContext,
        template: str | None = None,
        **extra: Any,
    ) -> bool:
        """Render ``<key>/<template or filename>.j2`` into *directory* once."""
        content = self.render(f"{template or filename}.j2", context, **extra)
        return materialize(directory, filename, content)

    def write_tree(self, prefix: str, output_dir: Path, context: ProjectContext) -> dict[Path, bool]:
        """Materialize every template under ``<key>/<prefix>`` into *output_dir*."""
        return materialize_tree(
            self.renderer,
            f"{self.key}/{prefix}".rstrip("/"),
            output_dir,
            context.template_variables(),
        )

    def add_dependencies(self, context: ProjectContext) -> InjectionResult:
        """Declare this module's dependencies in ``mix.exs``."""
        result = inject_dependencies(
            context.manifest_path,
            list(self.dependencies),
            anchor=context.config.manifest_anchor,
        )
        for record in result.conflicts:
            print_warning(
                f"  {self.title}: mix.exs already declares :{record.name} with a "
                f"different constraint; leaving it as is (wanted {escape(record.render())})"
            )
        return result

    def write_documentation(self, context: ProjectContext) -> bool:
        """Emit ``docs/catalyst/<key>.md`` from the ``docs/<key>.md.j2`` template."""
        markdown = self.renderer.render(
            f"docs/{self.key}.md.j2", context.template_variables()
        )
        return emit_documentation(context, self.key, markdown)

    async def mix(self, context: ProjectContext, *args: str, check: bool = True) -> int:
        """Run ``mix <args>`` in the project root.

        Raises:
            CommandError: *check* is set and the task exits non-zero.
        """
        cmd = [context.config.mix_binary, *args]
        returncode, _stdout, stderr = await run_command(
            cmd, cwd=context.root, timeout=context.config.command_timeout
        )
        if check and returncode != 0:
            raise CommandError(format_command(cmd), returncode, stderr)
        return returncode

    async def fetch_dependencies(self, context: ProjectContext) -> None:
        """Run ``mix deps.get`` when enabled. A failure is only a warning."""
        if not context.config.fetch_dependencies:
            return
        returncode = await self.mix(context, "deps.get", check=False)
        if returncode != 0:
            print_warning(
                f"  {self.title}: `mix deps.get` exited with code {returncode}; "
                "run it manually once the project compiles"
            )


@dataclass(frozen=True)
class ModuleDescriptor:
    """Static registry entry: symbolic key, prompt text and setup capability."""

    key: str
    prompt: str
    module: FeatureModule

    @classmethod
    def for_module(cls, module: FeatureModule) -> "ModuleDescriptor":
        return cls(key=module.key, prompt=module.prompt, module=module)

    @property
    def title(self) -> str:
        return self.module.title


def browser_scope_marker(web_module: str) -> re.Pattern:
    """Match the router's ``scope "/"`` header and its ``pipe_through :browser`` line.

    Blocks inserted after this match land at the top of the browser scope.
    """
    return re.compile(
        r'scope "/", ' + re.escape(web_module)
        + r" do[ \t]*\r?\n[ \t]*pipe_through :browser[ \t]*\r?\n"
    )
