"""Base project generation through ``mix phx.new``."""

from __future__ import annotations

from pathlib import Path

from catalyst.config import Config
from catalyst.errors import GenerationError
from catalyst.modules import ProjectContext
from catalyst.utils import console, format_command, is_valid_project_name, run_command


def build_generator_command(name: str, config: Config) -> list[str]:
    """Return the ``mix phx.new`` argument list for *name*."""
    return [
        config.mix_binary,
        "phx.new",
        name,
        "--database",
        config.database.value,
        *config.generator_flags,
    ]


async def generate_project(name: str, config: Config) -> ProjectContext:
    """Generate a Phoenix project named *name* inside ``config.output_dir``.

    The generator's output is streamed to the terminal rather than captured,
    so its own ``Fetch and install dependencies?`` question stays answerable.

    Returns:
        The :class:`ProjectContext` for the new project.

    Raises:
        GenerationError: The name is unusable, the target directory already
            exists, or the generator exited non-zero.
    """
    if not is_valid_project_name(name):
        raise GenerationError(
            f"Invalid project name {name!r}: use lowercase letters, numbers and underscores"
        )

    output_dir = Path(config.output_dir).expanduser().resolve()
    target = output_dir / name
    if target.exists():
        raise GenerationError(f"Directory '{target}' already exists")
    output_dir.mkdir(parents=True, exist_ok=True)

    cmd = build_generator_command(name, config)
    console.print(f"Running command: [bold]{format_command(cmd)}[/bold]")
    returncode, _stdout, stderr = await run_command(
        cmd, cwd=output_dir, timeout=config.command_timeout, capture=False
    )
    if returncode != 0:
        detail = f": {stderr}" if stderr else ""
        raise GenerationError(
            f"Failed to create Phoenix project (`{format_command(cmd)}` exited with "
            f"code {returncode}){detail}"
        )
    if not target.is_dir():
        raise GenerationError(f"Generator finished but {target} was not created")

    return ProjectContext.from_path(target, config)
