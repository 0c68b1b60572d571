"""Create-if-absent file generation.

Whole-file generation in Catalyst is "create once, never clobber": a file
that already exists is left exactly as it is, even when the template it was
rendered from has changed since.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .templates import TemplateRenderer


def materialize(directory: str | Path, filename: str, content: str) -> bool:
    """Write *content* to ``directory/filename`` unless that path exists.

    Intermediate directories are created as needed. *filename* may itself
    contain sub-directories.

    Returns:
        ``True`` if the file already existed (nothing was written),
        ``False`` if it was created.
    """
    path = Path(directory) / filename
    if path.exists():
        return True
    path.parent.mkdir(parents=True, exist_ok=True)
    write_text(path, content)
    return False


def materialize_tree(
    renderer: TemplateRenderer,
    template_prefix: str,
    output_dir: str | Path,
    variables: dict[str, Any],
) -> dict[Path, bool]:
    """Render every ``*.j2`` under *template_prefix* and materialize it.

    The directory structure below the prefix is preserved and the ``.j2``
    suffix is dropped, so ``docker/Dockerfile.j2`` rendered into the project
    root becomes ``<root>/Dockerfile``.

    Returns:
        Mapping of output path to its "already existed" flag, in template
        order.
    """
    results: dict[Path, bool] = {}
    out_base = Path(output_dir)
    for template_key in renderer.list_templates(template_prefix):
        rel = template_key[len(template_prefix):].lstrip("/")
        output_name = rel[: -len(".j2")]
        content = renderer.render(template_key, variables)
        results[out_base / output_name] = materialize(out_base, output_name, content)
    return results


def read_text(path: Path) -> str:
    """Read *path* as UTF-8 without translating line endings."""
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()


def write_text(path: Path, content: str) -> None:
    """Write *content* to *path* as UTF-8 without translating line endings."""
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)
