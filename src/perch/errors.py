"""Perch exception hierarchy.

Shared across the segment parser, tree builder, compiler, and deferred
loader so every module raises and catches the same types.

Structural errors (``SegmentSyntaxError``, ``AmbiguousNodeError``) abort
compilation as a whole.  ``LoadError`` stays local to the element whose
loader failed.
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when tree configuration or a binding source is invalid.

    Covers bad ``TreeConfig`` values, binding paths outside the pages
    root, and manifests that reference missing files.
    """


class SegmentSyntaxError(PerchError):
    """A path segment uses the marker character in an unrecognised shape.

    Names the offending binding path so a startup failure points straight
    at the file to rename.
    """

    def __init__(self, path: str, segment: str, reason: str = "") -> None:
        self.path = path
        self.segment = segment
        self.reason = reason or "unrecognised marker syntax"
        super().__init__(f"Invalid segment {segment!r} in {path!r}: {self.reason}")


class AmbiguousNodeError(PerchError):
    """Two bindings claim the same key in one directory.

    Raised when a leaf and a directory collide (``home.py`` next to
    ``home/``), or when two files resolve to the same route or layout.
    The builder never guesses which one wins.
    """

    def __init__(self, key: str, first: str, second: str) -> None:
        self.key = key
        self.first = first
        self.second = second
        super().__init__(
            f"Ambiguous route key {key!r}: defined by both {first!r} and {second!r}"
        )


class LoadError(PerchError):
    """A deferred loader failed to produce its component.

    The original exception is available as ``cause`` (and as
    ``__cause__`` once raised).
    """

    def __init__(self, source: str | None, cause: BaseException) -> None:
        self.source = source
        self.cause = cause
        where = source or "<anonymous loader>"
        super().__init__(f"Failed to load {where}: {type(cause).__name__}: {cause}")
