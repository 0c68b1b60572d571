"""Credo static code analysis."""

from __future__ import annotations

from ..injector import Atom, dep
from .base import FeatureModule, ProjectContext


class CredoModule(FeatureModule):
    key = "credo"
    prompt = "Include Credo (code quality)?"
    dependencies = (
        dep("credo", "~> 1.7", only=[Atom("dev"), Atom("test")], runtime=False),
    )

    async def install(self, context: ProjectContext) -> None:
        self.add_dependencies(context)
        self.write_file(context.root, ".credo.exs", context, template="credo.exs")
        self.write_documentation(context)
        await self.fetch_dependencies(context)
