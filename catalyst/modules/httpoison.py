"""HTTPoison: a JSON HTTP client module."""

from __future__ import annotations

from ..injector import dep
from .base import FeatureModule, ProjectContext


class HttpoisonModule(FeatureModule):
    key = "httpoison"
    prompt = "Include HTTPoison (HTTP requests)?"
    dependencies = (dep("httpoison", "~> 2.0"),)

    async def install(self, context: ProjectContext) -> None:
        self.add_dependencies(context)
        self.write_file(context.lib_dir / "clients", "http_client.ex", context)
        self.write_documentation(context)
        await self.fetch_dependencies(context)
