"""Absinthe GraphQL: schema, types, a resolver and the GraphQL routes."""

from __future__ import annotations

from ..injector import dep, patch_anchor
from .base import FeatureModule, ProjectContext

# A scope without an alias so the plug names are not prefixed with the web module.
_ROUTES_BLOCK = """
  scope "/" do
    forward "/graphql", Absinthe.Plug, schema: {{ app_module }}.GraphQL.Schema

    if Mix.env() == :dev do
      forward "/graphiql", Absinthe.Plug.GraphiQL,
        schema: {{ app_module }}.GraphQL.Schema,
        interface: :playground
    end
  end
"""


class AbsintheModule(FeatureModule):
    key = "absinthe"
    prompt = "Include Absinthe (GraphQL)?"
    dependencies = (
        dep("absinthe", "~> 1.7"),
        dep("absinthe_plug", "~> 1.5"),
        dep("absinthe_phoenix", "~> 2.0"),
    )

    async def install(self, context: ProjectContext) -> None:
        self.add_dependencies(context)
        graphql_dir = context.lib_dir / "graphql"
        self.write_file(graphql_dir, "schema.ex", context)
        self.write_file(graphql_dir, "types.ex", context)
        self.write_tree("resolvers", graphql_dir / "resolvers", context)
        patch_anchor(
            context.router_path,
            f"use {context.web_identifier}, :router\n",
            self.render_block(_ROUTES_BLOCK, context),
            guard='"/graphql"',
        )
        self.write_documentation(context)
        await self.fetch_dependencies(context)
