"""Dialyxir static analysis."""

from __future__ import annotations

from ..injector import Atom, dep
from .base import FeatureModule, ProjectContext


class DialyxirModule(FeatureModule):
    key = "dialyxir"
    prompt = "Include Dialyxir (static analysis)?"
    dependencies = (
        dep("dialyxir", "~> 1.3", only=[Atom("dev"), Atom("test")], runtime=False),
    )

    async def install(self, context: ProjectContext) -> None:
        self.add_dependencies(context)
        self.write_file(context.root, ".dialyzer.exs", context, template="dialyzer.exs")
        self.write_file(
            context.root, ".dialyzer_ignore.exs", context, template="dialyzer_ignore.exs"
        )
        self.write_documentation(context)
        await self.fetch_dependencies(context)
