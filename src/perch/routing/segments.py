"""Path segment classification.

A binding path such as ``/pages/user/$[id].py`` is split into segments,
and each segment is classified purely from its lexical form::

    "$"        -> Segment(LAYOUT, "")
    "$index"   -> Segment(INDEX, "index")
    "$about"   -> Segment(PLAIN, "about")
    "$[id]"    -> Segment(PARAM, "id")      route path ":id"
    "user"     -> Segment(PLAIN, "user")
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from perch.config import TreeConfig
from perch.errors import ConfigurationError, SegmentSyntaxError


class SegmentKind(Enum):
    PLAIN = "plain"
    INDEX = "index"
    LAYOUT = "layout"
    PARAM = "param"


@dataclass(frozen=True, slots=True)
class Segment:
    """A parsed unit of a binding path.

    ``name`` has the marker (and brackets) stripped; ``raw`` is the text
    as it appeared in the path.
    """

    kind: SegmentKind
    name: str
    raw: str = ""

    def route_path(self, sigil: str = ":") -> str:
        """Render the segment as it appears in the compiled tree."""
        if self.kind is SegmentKind.PARAM:
            return f"{sigil}{self.name}"
        return self.name


@lru_cache(maxsize=8)
def _marker_patterns(marker: str) -> tuple[re.Pattern[str], re.Pattern[str]]:
    escaped = re.escape(marker)
    param = re.compile(rf"^{escaped}\[([\w-]+)\]$", re.ASCII)
    named = re.compile(rf"^{escaped}([\w-]+)$", re.ASCII)
    return param, named


def parse_segment(segment: str, *, marker: str = "$", index_name: str = "index", path: str = "") -> Segment:
    """Classify a single path segment.

    Args:
        segment: One ``/``-delimited part of a binding path, suffix removed.
        marker: The reserved marker character.
        index_name: Identifier that turns ``marker + name`` into an index.
        path: Full binding path, used only for error messages.

    Raises:
        SegmentSyntaxError: If the segment starts with the marker but
            matches none of the recognised shapes.
    """
    if segment == marker:
        return Segment(SegmentKind.LAYOUT, "", segment)

    if not segment.startswith(marker):
        return Segment(SegmentKind.PLAIN, segment, segment)

    param_re, named_re = _marker_patterns(marker)

    match = param_re.match(segment)
    if match:
        return Segment(SegmentKind.PARAM, match.group(1), segment)

    match = named_re.match(segment)
    if match:
        name = match.group(1)
        kind = SegmentKind.INDEX if name == index_name else SegmentKind.PLAIN
        return Segment(kind, name, segment)

    if segment.startswith(marker + "["):
        reason = f"expected a parameter like '{marker}[name]'"
    else:
        reason = f"expected '{marker}', '{marker}name' or '{marker}[name]'"
    raise SegmentSyntaxError(path or segment, segment, reason)


def strip_binding_path(path: str, config: TreeConfig) -> str:
    """Drop the pages root prefix and a recognised file suffix.

    ``/pages/home/$index.py`` -> ``home/$index``
    """
    prefix = config.root_prefix.rstrip("/")
    if prefix:
        if not path.startswith(prefix + "/"):
            msg = f"Binding path {path!r} is outside the pages root {prefix!r}"
            raise ConfigurationError(msg)
        rest = path[len(prefix) + 1 :]
    else:
        rest = path.lstrip("/")

    for suffix in config.suffixes:
        if rest.endswith(suffix):
            rest = rest[: -len(suffix)]
            break
    return rest


def split_path(path: str, config: TreeConfig | None = None) -> list[Segment]:
    """Parse a full binding path into classified segments.

    Layout and index markers decorate a directory, so they are only
    accepted as the last segment.

    Raises:
        ConfigurationError: If the path is outside the pages root.
        SegmentSyntaxError: On empty segments, misplaced layout/index
            markers, or malformed marker syntax.
    """
    config = config or TreeConfig()
    rest = strip_binding_path(path, config)
    if not rest:
        raise SegmentSyntaxError(path, rest, "path names no page below the pages root")

    parts = rest.split("/")
    segments: list[Segment] = []
    for position, part in enumerate(parts):
        if not part:
            raise SegmentSyntaxError(path, part, "empty path segment")
        segment = parse_segment(part, marker=config.marker, index_name=config.index_name, path=path)
        is_last = position == len(parts) - 1
        if not is_last and segment.kind in (SegmentKind.LAYOUT, SegmentKind.INDEX):
            raise SegmentSyntaxError(path, part, f"{segment.kind.value} marker must be the last segment")
        segments.append(segment)
    return segments
