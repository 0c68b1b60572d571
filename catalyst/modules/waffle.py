"""Waffle file uploads: uploader, controller, templates and routes."""

from __future__ import annotations

from ..injector import dep, patch_anchor
from .base import FeatureModule, ProjectContext, browser_scope_marker

_ROUTES_BLOCK = '    resources "/uploads", UploadController, only: [:index, :new, :create]\n'


class WaffleModule(FeatureModule):
    key = "waffle"
    prompt = "Include Waffle (file uploads)?"
    dependencies = (
        dep("waffle", "~> 1.1"),
        dep("waffle_ecto", "~> 0.8"),
    )

    async def install(self, context: ProjectContext) -> None:
        self.add_dependencies(context)
        controllers_dir = context.web_dir / "controllers"
        self.write_file(context.lib_dir / "uploaders", "file_uploader.ex", context)
        self.write_file(controllers_dir, "upload_controller.ex", context)
        self.write_file(controllers_dir, "upload_html.ex", context)
        self.write_tree("upload_html", controllers_dir / "upload_html", context)
        patch_anchor(
            context.router_path,
            browser_scope_marker(context.web_identifier),
            _ROUTES_BLOCK,
            guard='resources "/uploads"',
        )
        self.write_documentation(context)
        await self.fetch_dependencies(context)
