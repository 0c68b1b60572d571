"""Alpine.js: asset entry point wiring and sample components."""

from __future__ import annotations

import re

from ..injector import patch_anchor
from .base import FeatureModule, ProjectContext

# First import statement in app.js, with the blank lines that follow it.
FIRST_IMPORT = re.compile(r"^import.*\n+", re.MULTILINE)

_ALPINE_BLOCK = """import Alpine from 'alpinejs'

// Make Alpine available on window object
window.Alpine = Alpine

// Start Alpine
Alpine.start()

"""

_COMPONENTS_BLOCK = """
// Import Alpine.js components
import * as Components from './components/alpine-components.js'

// Register components globally
Object.entries(Components).forEach(([name, component]) => {
  Alpine.data(name, component)
})
"""


class AlpineModule(FeatureModule):
    key = "alpine"
    prompt = "Include Alpine.js?"

    async def install(self, context: ProjectContext) -> None:
        self.write_tree("components", context.assets_dir / "js" / "components", context)
        app_js = context.assets_dir / "js" / "app.js"
        patch_anchor(app_js, FIRST_IMPORT, _ALPINE_BLOCK, guard="import Alpine from 'alpinejs'")
        patch_anchor(app_js, "Alpine.start()\n", _COMPONENTS_BLOCK, guard="alpine-components")
        self.write_documentation(context)
