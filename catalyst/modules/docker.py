"""Docker: Dockerfile, docker-compose.yml and .dockerignore."""

from __future__ import annotations

from .base import FeatureModule, ProjectContext


class DockerModule(FeatureModule):
    key = "docker"
    prompt = "Include Docker support?"

    async def install(self, context: ProjectContext) -> None:
        self.write_tree("files", context.root, context)
        self.write_documentation(context)
