"""Idempotent dependency injection into ``mix.exs``.

Each dependency is rendered to the exact text ``inspect/1`` would produce
for the equivalent Elixir tuple, e.g.::

    {:oban, "~> 2.17"}
    {:credo, "~> 1.7", [only: [:dev, :test], runtime: false]}

A rendering is inserted on its own line directly below the ``defp deps do``
anchor, or below the list's opening ``[`` when that follows the anchor.
Every insertion goes to the same spot, so later records end up closer to
the anchor than earlier ones.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..errors import AnchorNotFoundError
from .materializer import read_text, write_text

DEFAULT_ANCHOR = "defp deps do"
INDENT = "    "


class Atom(str):
    """A string rendered as an Elixir atom (``:dev``) instead of a quoted string."""

    def __repr__(self) -> str:
        return f"Atom({str(self)!r})"


class DependencyRecord(BaseModel):
    """A single ``mix.exs`` dependency declaration."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=r"^[a-z][a-z0-9_]*$", description="Hex package name")
    requirement: str = Field(..., description="Version constraint, e.g. '~> 2.17'")
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Keyword options such as only/runtime, in declaration order",
    )

    def render(self) -> str:
        """Return the canonical textual form of the declaration."""
        parts = [f":{self.name}", _quote(self.requirement)]
        if self.options:
            keywords = ", ".join(
                f"{key}: {_render_value(value)}" for key, value in self.options.items()
            )
            parts.append(f"[{keywords}]")
        return "{" + ", ".join(parts) + "}"

    def __str__(self) -> str:
        return self.render()


def dep(name: str, requirement: str, **options: Any) -> DependencyRecord:
    """Shorthand used by the feature modules to declare a dependency."""
    return DependencyRecord(name=name, requirement=requirement, options=options)


@dataclass
class InjectionResult:
    """What :func:`inject_dependencies` did with each record."""

    inserted: list[DependencyRecord] = field(default_factory=list)
    present: list[DependencyRecord] = field(default_factory=list)
    conflicts: list[DependencyRecord] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.inserted)


def inject_dependencies(
    manifest_path: str | Path,
    dependencies: list[DependencyRecord],
    anchor: str = DEFAULT_ANCHOR,
) -> InjectionResult:
    """Insert every missing dependency below *anchor* in the manifest.

    A record is skipped when its exact rendering is already in the file, or
    when another declaration for the same package name is (recorded as a
    conflict). The manifest is rewritten only if something was inserted.

    Raises:
        AnchorNotFoundError: *anchor* does not occur in the manifest. The
            file is left untouched.
    """
    path = Path(manifest_path)
    content = read_text(path)
    result = InjectionResult()

    for record in dependencies:
        rendering = record.render()
        if rendering in content:
            result.present.append(record)
            continue
        if _declares(content, record.name):
            result.conflicts.append(record)
            continue

        point = _insertion_point(content, anchor)
        if point is None:
            raise AnchorNotFoundError(anchor, path)
        insert_at, indent = point
        content = f"{content[:insert_at]}\n{indent}{rendering},{content[insert_at:]}"
        result.inserted.append(record)

    if result.changed:
        write_text(path, content)
    return result


def inject_dependency(
    manifest_path: str | Path,
    dependency: DependencyRecord,
    anchor: str = DEFAULT_ANCHOR,
) -> InjectionResult:
    """Single-record form of :func:`inject_dependencies`."""
    return inject_dependencies(manifest_path, [dependency], anchor)


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _insertion_point(content: str, anchor: str) -> tuple[int, str] | None:
    """Offset and indentation for a new entry below the first *anchor*.

    When the anchor is directly followed by the list opener (``[`` on the
    next line, as ``mix phx.new`` writes it) the entry goes inside the list,
    indented one level past the bracket.
    """
    index = content.find(anchor)
    if index == -1:
        return None
    insert_at = index + len(anchor)
    opener = _LIST_OPENER.match(content, insert_at)
    if opener is None:
        return insert_at, INDENT
    return opener.end(), opener.group("indent") + "  "


_LIST_OPENER = re.compile(r"[ \t]*\r?\n(?P<indent>[ \t]*)\[")


def _declares(content: str, name: str) -> bool:
    """True when a live (uncommented) line declares the package *name*."""
    pattern = r"^[ \t]*\{\s*:" + re.escape(name) + r"\s*,"
    return re.search(pattern, content, re.MULTILINE) is not None


def _render_value(value: Any) -> str:
    if isinstance(value, Atom):
        return f":{value}"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_render_value(item) for item in value) + "]"
    raise TypeError(f"Cannot render dependency option value {value!r}")


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
