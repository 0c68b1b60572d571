"""Oban background jobs: dependency, migration, workers and queue config."""

from __future__ import annotations

import re

from ..injector import dep, patch_anchor
from .base import FeatureModule, ProjectContext

MIGRATION_SUFFIX = "_create_oban_jobs_table.exs"

_CONFIG_BLOCK = """
# Oban background jobs
config :{{ app_name }}, Oban,
  repo: {{ app_module }}.Repo,
  plugins: [Oban.Plugins.Pruner],
  queues: [default: 10, emails: 20, notifications: 15]
"""

_TEST_CONFIG_BLOCK = """
# Run Oban jobs inline during tests
config :{{ app_name }}, Oban, testing: :inline
"""

_CHILD_BLOCK = """      {Oban, Application.fetch_env!(:{{ app_name }}, Oban)},
"""


class ObanModule(FeatureModule):
    key = "oban"
    prompt = "Include Oban (background jobs)?"
    dependencies = (dep("oban", "~> 2.17"),)

    async def install(self, context: ProjectContext) -> None:
        self.add_dependencies(context)
        self.create_migration(context)
        self.write_tree("workers", context.lib_dir / "workers", context)
        self.configure(context)
        self.write_documentation(context)
        await self.fetch_dependencies(context)
        if context.config.run_migrations:
            await self.mix(context, "ecto.migrate")

    def create_migration(self, context: ProjectContext) -> str:
        """Create the jobs-table migration unless one is already present.

        The migration is numbered one past the highest numeric prefix in the
        migrations directory.  Returns the migration filename.
        """
        existing = sorted(p.name for p in context.migrations_dir.iterdir())
        for name in existing:
            if name.endswith(MIGRATION_SUFFIX):
                return name

        filename = f"{next_migration_number(existing)}{MIGRATION_SUFFIX}"
        self.write_file(
            context.migrations_dir, filename, context, template="create_oban_jobs_table.exs"
        )
        return filename

    def configure(self, context: ProjectContext) -> None:
        guard = f"config :{context.name}, Oban"
        patch_anchor(
            context.config_dir / "config.exs",
            "import Config\n",
            self.render_block(_CONFIG_BLOCK, context),
            guard=guard,
        )
        patch_anchor(
            context.config_dir / "test.exs",
            "import Config\n",
            self.render_block(_TEST_CONFIG_BLOCK, context),
            guard=guard,
        )
        patch_anchor(
            context.lib_dir / "application.ex",
            "children = [\n",
            self.render_block(_CHILD_BLOCK, context),
            guard="{Oban,",
        )


def next_migration_number(filenames: list[str]) -> int:
    """Return one more than the largest ``<digits>_`` prefix among ``.exs`` files."""
    numbers = [
        int(match.group(1))
        for name in filenames
        if name.endswith(".exs") and (match := re.match(r"^(\d+)_", name))
    ]
    return max(numbers, default=0) + 1
