"""Grapheme cluster segmentation and terminal display-width helpers.

Cursor columns are code point offsets into a line. Everything that has to
line up with terminal cells (horizontal scrolling, rendering, word motion)
goes through the cluster boundaries computed here, so a cluster made of
several code points always moves and measures as one unit. Clusters are
extended grapheme clusters as matched by ``regex``'s ``\\X``.
"""

from __future__ import annotations

import bisect

import regex
from wcwidth import wcwidth

VS16 = "\ufe0f"
BLANKS = (" ", "\t")

_CLUSTER = regex.compile(r"\X")


def grapheme_boundaries(text: str) -> list[int]:
    """Return the code point offsets where clusters start, plus ``len(text)``.

    The result always begins with 0 and ends with ``len(text)``; an empty
    string yields ``[0]``.
    """
    return [m.start() for m in _CLUSTER.finditer(text)] + [len(text)]


def graphemes(text: str) -> list[str]:
    """Split ``text`` into grapheme clusters."""
    return _CLUSTER.findall(text)


def cluster_width(cluster: str) -> int:
    """Number of terminal cells one cluster occupies (0, 1 or 2).

    Tabs are drawn as a single blank cell. Control characters and lone
    combining marks take no cells.
    """
    if not cluster:
        return 0
    if cluster == "\t":
        return 1
    width = wcwidth(cluster[0])
    if width < 0:
        return 0
    if width == 1 and VS16 in cluster:
        # Emoji presentation selector widens text-default symbols
        return 2
    return min(width, 2)


def display_width(text: str) -> int:
    """Total display width of ``text``, summed cluster by cluster."""
    return sum(cluster_width(g) for g in graphemes(text))


def cluster_index_at(bounds: list[int], column: int) -> int:
    """Index of the cluster containing ``column`` (or the end sentinel)."""
    return max(0, bisect.bisect_right(bounds, column) - 1)


def visible_span(text: str, h_offset: int, width: int) -> tuple[int, int]:
    """Return the code point span of ``text`` visible in a scrolled window.

    The window starts at display column ``h_offset`` and is ``width`` cells
    wide. The first visible cluster is the first one whose right edge passes
    ``h_offset``; clusters are added while they still fit in ``width`` cells.
    A line that ends before ``h_offset`` yields an empty span at its end.
    """
    bounds = grapheme_boundaries(text)
    clusters = [text[a:b] for a, b in zip(bounds, bounds[1:])]

    start = len(clusters)
    cumulative = 0
    for i, g in enumerate(clusters):
        cumulative += cluster_width(g)
        if cumulative > h_offset:
            start = i
            break

    end = start
    used = 0
    while end < len(clusters):
        w = cluster_width(clusters[end])
        if used + w > width:
            break
        used += w
        end += 1

    return bounds[start], bounds[end]
