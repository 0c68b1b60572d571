"""User authentication through the ``phx.gen.auth`` generator."""

from __future__ import annotations

from ..injector import Atom, dep
from .base import FeatureModule, ProjectContext

GENERATOR_ARGS = ("phx.gen.auth", "Accounts", "User", "users", "--binary-id")


class AuthModule(FeatureModule):
    key = "auth"
    prompt = "Include Authentication (phx_gen_auth)?"
    dependencies = (
        dep("phx_gen_auth", "~> 0.7", only=[Atom("dev")], runtime=False),
    )

    async def install(self, context: ProjectContext) -> None:
        self.add_dependencies(context)
        if context.config.run_migrations and not self.is_generated(context):
            await self.mix(context, "deps.get")
            await self.mix(context, *GENERATOR_ARGS)
            await self.mix(context, "ecto.migrate")
        self.write_documentation(context)

    def is_generated(self, context: ProjectContext) -> bool:
        """The generator refuses to overwrite its own output, so run it once."""
        return (context.lib_dir / "accounts" / "user.ex").exists()
