"""Normalized virtual paths and prefix utilities.

Paths are independent of any backing filesystem. A `UPath` is an ordered
tuple of segments plus an absolute flag; absolute paths render with a
leading separator, relative paths never do. The root is the only absolute
path without segments.

Functions:
    first_segment: The first segment of a path ("/a/b/c" -> "/a")
    remove_prefix: Strip a directory prefix from a nested path
    add_prefix: Join a prefix in front of a path
"""

from __future__ import annotations

import posixpath
from typing import ClassVar, Final

from entryfs.errors import InvalidPathError

__all__ = [
    "SEPARATOR",
    "UPath",
    "add_prefix",
    "first_segment",
    "remove_prefix",
]

SEPARATOR: Final[str] = "/"


def _normalize(path: str) -> tuple[tuple[str, ...], bool]:
    """Split a path string into normalized segments.

    Args:
        path: Path text. Backslashes are treated as separators.

    Returns:
        Tuple of (segments, absolute).

    Raises:
        InvalidPathError: If the path contains a NUL character or an
            absolute path climbs above the root.
    """
    if "\x00" in path:
        raise InvalidPathError(f"Path contains a NUL character: {path!r}")
    text = path.replace("\\", SEPARATOR)
    absolute = text.startswith(SEPARATOR)
    result: list[str] = []
    for segment in text.split(SEPARATOR):
        if not segment or segment == ".":
            continue
        if segment == "..":
            if result and result[-1] != "..":
                result.pop()
                continue
            if absolute:
                raise InvalidPathError(f"Path '{path}' goes above the root")
        result.append(segment)
    return tuple(result), absolute


class UPath:
    """Immutable, normalized virtual path.

    Example:
        >>> UPath("/a/./b//c/../d")
        UPath('/a/b/d')
        >>> UPath("/a") / "b"
        UPath('/a/b')
    """

    __slots__ = ("_absolute", "_segments")

    ROOT: ClassVar[UPath]
    EMPTY: ClassVar[UPath]

    def __init__(self, path: str | UPath = "") -> None:
        """Parse and normalize a path.

        Args:
            path: Path text or another UPath.

        Raises:
            InvalidPathError: If the path is None or malformed.
        """
        if isinstance(path, UPath):
            self._segments: tuple[str, ...] = path._segments
            self._absolute: bool = path._absolute
            return
        if not isinstance(path, str):
            raise InvalidPathError(f"Path must be a string, got {path!r}")
        self._segments, self._absolute = _normalize(path)

    @classmethod
    def _from_segments(cls, segments: tuple[str, ...], absolute: bool) -> UPath:
        path = cls.__new__(cls)
        path._segments = segments
        path._absolute = absolute
        return path

    @property
    def segments(self) -> tuple[str, ...]:
        """Path segments without separators."""
        return self._segments

    @property
    def is_absolute(self) -> bool:
        return self._absolute

    @property
    def is_empty(self) -> bool:
        """True for the empty relative path."""
        return not self._absolute and not self._segments

    @property
    def is_root(self) -> bool:
        return self._absolute and not self._segments

    @property
    def full_name(self) -> str:
        """The rendered path string."""
        joined = SEPARATOR.join(self._segments)
        return SEPARATOR + joined if self._absolute else joined

    @property
    def name(self) -> str:
        """Last segment, or an empty string for the root and the empty path."""
        return self._segments[-1] if self._segments else ""

    @property
    def name_without_extension(self) -> str:
        return posixpath.splitext(self.name)[0]

    @property
    def extension(self) -> str:
        """Extension including the leading dot, or an empty string."""
        return posixpath.splitext(self.name)[1]

    @property
    def parent(self) -> UPath | None:
        """Containing directory, or None for the root and the empty path."""
        if not self._segments:
            return None
        return UPath._from_segments(self._segments[:-1], self._absolute)

    def to_absolute(self) -> UPath:
        if self._absolute:
            return self
        return UPath._from_segments(self._segments, True)

    def to_relative(self) -> UPath:
        if not self._absolute:
            return self
        return UPath._from_segments(self._segments, False)

    def is_in_directory(self, directory: UPath, recursive: bool = True) -> bool:
        """Check whether this path is the directory itself or lies below it.

        Args:
            directory: Candidate containing directory.
            recursive: When False, only direct children (and the directory
                itself) count.

        Returns:
            True if this path is equal to or nested under `directory`.
        """
        if self._absolute != directory._absolute:
            return False
        depth = len(directory._segments)
        if self._segments[:depth] != directory._segments:
            return False
        return recursive or len(self._segments) <= depth + 1

    def __truediv__(self, other: str | UPath) -> UPath:
        if isinstance(other, str):
            other = UPath(other)
        if not isinstance(other, UPath):
            return NotImplemented
        if other._absolute:
            return other
        if self.is_empty:
            return other
        if other.is_empty:
            return self
        return UPath(f"{self.full_name.rstrip(SEPARATOR)}{SEPARATOR}{other.full_name}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UPath):
            return NotImplemented
        return self._absolute == other._absolute and self._segments == other._segments

    def __hash__(self) -> int:
        return hash((self._absolute, self._segments))

    def __str__(self) -> str:
        return self.full_name

    def __repr__(self) -> str:
        return f"UPath({self.full_name!r})"


UPath.ROOT = UPath._from_segments((), True)
UPath.EMPTY = UPath._from_segments((), False)


def first_segment(path: UPath | None) -> UPath:
    """Get the first directory of a path.

    Everything up to, but not including, the second separator is kept.

    Args:
        path: The path to inspect.

    Returns:
        The first segment ("/a/b/c" -> "/a", "a/b" -> "a").

    Raises:
        InvalidPathError: If path is None.

    Example:
        >>> first_segment(UPath("/a/b/c"))
        UPath('/a')
    """
    if path is None:
        raise InvalidPathError("Path cannot be None")
    full_name = path.full_name
    index = full_name.find(SEPARATOR, 1)
    if index < 0:
        return UPath(full_name)
    return UPath(full_name[:index])


def remove_prefix(path: UPath | None, prefix: UPath | None) -> UPath:
    """Get the remaining path after a prefix.

    Args:
        path: The path to shorten.
        prefix: A directory that contains `path` (or equals it).

    Returns:
        The remainder as an absolute path, the root when both are equal.

    Raises:
        InvalidPathError: If the prefix is unset or empty, or `path` is not
            in `prefix`.
    """
    if prefix is None or prefix.is_empty:
        raise InvalidPathError("The prefix cannot be empty, it must at least be the root")
    if path is None:
        raise InvalidPathError("Path cannot be None")
    if not path.is_in_directory(prefix, recursive=True):
        raise InvalidPathError(f"Path '{path}' is not in '{prefix}'")
    return UPath._from_segments(path.segments[len(prefix.segments) :], True)


def add_prefix(path: UPath, prefix: UPath | None) -> UPath:
    """Put a prefix in front of a path.

    Args:
        path: The path to extend, treated as relative.
        prefix: Prefix to join, or None to leave `path` unchanged.

    Returns:
        The joined path.
    """
    if prefix is None:
        return path
    return prefix / path.to_relative()
