"""Swoosh email: mailer, an email sender and HEEx email templates."""

from __future__ import annotations

from ..injector import dep
from .base import FeatureModule, ProjectContext


class SwooshModule(FeatureModule):
    key = "swoosh"
    prompt = "Include Swoosh (email)?"
    dependencies = (dep("swoosh", "~> 1.11"),)

    async def install(self, context: ProjectContext) -> None:
        self.add_dependencies(context)
        self.write_file(context.lib_dir, "mailer.ex", context)
        self.write_file(context.lib_dir / "mailers", "email_sender.ex", context)
        self.write_tree("email_html", context.web_dir / "controllers" / "email_html", context)
        self.write_documentation(context)
        await self.fetch_dependencies(context)
