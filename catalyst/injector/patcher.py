"""Insertion of text blocks after a marker in a generated file.

The patcher itself has no idempotence: applied twice, it inserts the block
twice. Callers opt in to idempotence by passing a ``guard``, a substring
whose presence in the file means the patch is already applied. The
parameter is required so every call site states its choice; ``guard=None``
is an explicit request for an unconditional insert.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..errors import AnchorNotFoundError
from .materializer import read_text, write_text

Marker = Union[str, re.Pattern]


@dataclass(frozen=True)
class AnchorPatch:
    """A block to insert into *target* right after the first *marker* match."""

    target: Path
    marker: Marker
    block: str
    guard: str | None

    def apply(self) -> bool:
        return apply_patch(self)


def patch_anchor(
    path: str | Path,
    marker: Marker,
    block: str,
    *,
    guard: str | None,
) -> bool:
    """Insert *block* immediately after the first match of *marker*.

    Args:
        path: File to patch in place.
        marker: Literal text, or a compiled regular expression whose whole
            match is the insertion point.
        block: Text inserted verbatim after the match. The marker stays.
        guard: Skip the patch when this substring is already in the file.
            ``None`` always inserts.

    Returns:
        ``True`` if the file was changed, ``False`` if the guard matched.

    Raises:
        AnchorNotFoundError: The marker does not occur. The file is left
            unmodified.
    """
    target = Path(path)
    content = read_text(target)

    if guard is not None and guard in content:
        return False

    end = _match_end(content, marker)
    if end is None:
        raise AnchorNotFoundError(_describe(marker), target)

    write_text(target, content[:end] + block + content[end:])
    return True


def apply_patch(patch: AnchorPatch) -> bool:
    """Apply a single :class:`AnchorPatch`."""
    return patch_anchor(patch.target, patch.marker, patch.block, guard=patch.guard)


def apply_patches(patches: list[AnchorPatch]) -> list[bool]:
    """Apply *patches* in order and return each one's "changed" flag."""
    return [apply_patch(patch) for patch in patches]


def _match_end(content: str, marker: Marker) -> int | None:
    if isinstance(marker, re.Pattern):
        match = marker.search(content)
        return match.end() if match else None
    index = content.find(marker)
    return index + len(marker) if index != -1 else None


def _describe(marker: Marker) -> str:
    return marker.pattern if isinstance(marker, re.Pattern) else marker
