"""ExMachina test factories."""

from __future__ import annotations

from ..injector import Atom, dep
from .base import FeatureModule, ProjectContext


class ExMachinaModule(FeatureModule):
    key = "ex_machina"
    prompt = "Include ExMachina (test factories)?"
    dependencies = (dep("ex_machina", "~> 2.7", only=Atom("test")),)

    async def install(self, context: ProjectContext) -> None:
        self.add_dependencies(context)
        self.write_tree("support", context.root / "test" / "support", context)
        self.write_documentation(context)
        await self.fetch_dependencies(context)
