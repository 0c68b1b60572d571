"""LiveView examples: counter, chat and todo list with their routes."""

from __future__ import annotations

from ..injector import patch_anchor
from .base import FeatureModule, ProjectContext, browser_scope_marker

_ROUTES_BLOCK = (
    '    live "/counter", CounterLive\n'
    '    live "/chat", ChatLive\n'
    '    live "/todo", TodoLive\n'
)


class LiveViewModule(FeatureModule):
    key = "liveview"
    prompt = "Include LiveView with examples?"

    async def install(self, context: ProjectContext) -> None:
        self.write_tree("live", context.web_dir / "live", context)
        patch_anchor(
            context.router_path,
            browser_scope_marker(context.web_identifier),
            _ROUTES_BLOCK,
            guard='live "/counter", CounterLive',
        )
        self.write_documentation(context)
