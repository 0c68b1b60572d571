"""Bodyguard authorization: policies, an authorize plug and view helpers."""

from __future__ import annotations

from ..injector import dep
from .base import FeatureModule, ProjectContext


class BodyguardModule(FeatureModule):
    key = "bodyguard"
    prompt = "Include Bodyguard (authorization)?"
    dependencies = (dep("bodyguard", "~> 2.4"),)

    async def install(self, context: ProjectContext) -> None:
        self.add_dependencies(context)
        self.write_tree("policies", context.lib_dir / "policies", context)
        self.write_file(context.web_dir / "plugs", "authorize.ex", context)
        self.write_file(context.web_dir, "authorization.ex", context)
        self.write_documentation(context)
        await self.fetch_dependencies(context)
