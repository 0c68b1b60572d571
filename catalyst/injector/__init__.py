"""Catalyst injector -- idempotent mutation of a generated project tree.

Four primitives, all synchronous file operations:

    materialize          - create a file once, never overwrite it
    inject_dependencies  - add ``{:dep, "~> x"}`` lines below ``defp deps do``
    patch_anchor         - splice a block after a marker, behind an explicit guard
    emit_documentation   - ``docs/catalyst/<key>.md`` through ``materialize``

Quick usage::

    from catalyst.injector import dep, inject_dependencies, patch_anchor

    inject_dependencies(root / "mix.exs", [dep("oban", "~> 2.17")])
    patch_anchor(router, 'scope "/", MyAppWeb do', block, guard="/graphql")
"""

from catalyst.injector.docs import emit_documentation
from catalyst.injector.manifest import (
    Atom,
    DependencyRecord,
    InjectionResult,
    dep,
    inject_dependencies,
    inject_dependency,
)
from catalyst.injector.materializer import materialize, materialize_tree
from catalyst.injector.patcher import AnchorPatch, apply_patch, apply_patches, patch_anchor
from catalyst.injector.templates import TemplateRenderer

__all__ = [
    "AnchorPatch",
    "Atom",
    "DependencyRecord",
    "InjectionResult",
    "TemplateRenderer",
    "apply_patch",
    "apply_patches",
    "dep",
    "emit_documentation",
    "inject_dependencies",
    "inject_dependency",
    "materialize",
    "materialize_tree",
    "patch_anchor",
]
