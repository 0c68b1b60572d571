"""Per-module markdown documentation under ``docs/catalyst/``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .materializer import materialize

if TYPE_CHECKING:
    from ..modules.base import ProjectContext


def emit_documentation(context: ProjectContext, module_key: str, markdown: str) -> bool:
    """Write ``<docs_dir>/<module_key>.md`` unless it already exists.

    Returns:
        ``True`` if the document already existed.
    """
    return materialize(context.docs_dir, f"{module_key}.md", markdown)
