"""Read-only view over the built bundle directory.

The store is populated by the front-end build and never written to.
Every lookup is resolved strictly inside the root: symlinks are
followed and the final path must stay below the root directory.
"""

import errno
import mimetypes
import stat as stat_module
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from spaserve.errors import AssetStoreError, ConfigurationError, NotFound, PathTraversal

# Served with an explicit charset so browsers don't guess.
_TEXT_TYPES = frozenset(
    {
        "application/javascript",
        "application/json",
        "application/manifest+json",
        "application/xml",
        "image/svg+xml",
        "text/javascript",
    }
)

# Not in every platform's mime.types.
_EXTRA_TYPES = {
    ".webmanifest": "application/manifest+json",
    ".woff2": "font/woff2",
    ".map": "application/json",
    ".mjs": "text/javascript",
}

# Lookups failing with these mean "no such file": the name cannot exist
# on this file system, or a parent component is not a directory.
_MISSING_ERRNOS = frozenset(
    {errno.ENOENT, errno.ENOTDIR, errno.EISDIR, errno.ENAMETOOLONG, errno.EINVAL}
)


def guess_content_type(name: str) -> str:
    """Content type for a file name, with charset for textual types."""
    suffix = Path(name).suffix.lower()
    content_type = _EXTRA_TYPES.get(suffix) or mimetypes.guess_type(name)[0]
    if content_type is None:
        return "application/octet-stream"
    if content_type.startswith("text/") or content_type in _TEXT_TYPES:
        return f"{content_type}; charset=utf-8"
    return content_type


@dataclass(frozen=True, slots=True)
class AssetStat:
    """Metadata for one file in the store."""

    path: str
    size: int
    mtime_ns: int
    content_type: str

    @property
    def etag(self) -> str:
        """Weak validator derived from size and modification time."""
        return f'W/"{self.size:x}-{self.mtime_ns:x}"'


class AssetStore:
    """The built output directory, addressed by relative URL paths.

    Usage::

        store = AssetStore("dist")
        store.validate()
        if store.exists("assets/app.a1b2.js"):
            body = store.read("assets/app.a1b2.js")

    Relative paths use forward slashes and never start with ``/``.
    Lookups that resolve outside the root raise ``PathTraversal``.
    """

    __slots__ = ("_index", "_root")

    def __init__(self, root: str | Path, *, index: str = "index.html") -> None:
        self._root = Path(root).resolve()
        self._index = index

    @property
    def root(self) -> Path:
        return self._root

    @property
    def index(self) -> str:
        """Relative path of the application shell document."""
        return self._index

    def validate(self) -> None:
        """Check the store can serve the shell.

        Raises ``ConfigurationError`` when the root directory or the
        shell document is missing.
        """
        if not self._root.is_dir():
            msg = f"Build directory not found: {self._root}"
            raise ConfigurationError(msg)
        if not (self._root / self._index).is_file():
            msg = f"Shell document not found: {self._root / self._index}"
            raise ConfigurationError(msg)

    def resolve(self, relative: str) -> Path:
        """Absolute path for *relative*, guaranteed to be inside the root."""
        candidate = (self._root / relative.lstrip("/")).resolve()
        if not candidate.is_relative_to(self._root):
            raise PathTraversal(relative)
        return candidate

    def exists(self, relative: str) -> bool:
        """True if *relative* names a regular file in the store."""
        path = self.resolve(relative)
        try:
            return stat_module.S_ISREG(path.stat().st_mode)
        except OSError as exc:
            if exc.errno in _MISSING_ERRNOS:
                return False
            raise AssetStoreError(relative, exc) from exc

    def stat(self, relative: str) -> AssetStat:
        """Size, mtime and content type for *relative*.

        Raises ``NotFound`` if the file is missing.
        """
        path = self.resolve(relative)
        try:
            st = path.stat()
        except OSError as exc:
            if exc.errno in _MISSING_ERRNOS:
                raise NotFound(f"No such asset: {relative!r}") from None
            raise AssetStoreError(relative, exc) from exc
        return AssetStat(
            path=relative.lstrip("/"),
            size=st.st_size,
            mtime_ns=st.st_mtime_ns,
            content_type=guess_content_type(path.name),
        )

    def read(self, relative: str) -> bytes:
        """File contents for *relative*.

        Raises ``NotFound`` if the file vanished, ``AssetStoreError`` for
        any other I/O failure.
        """
        path = self.resolve(relative)
        try:
            return path.read_bytes()
        except OSError as exc:
            if exc.errno in _MISSING_ERRNOS:
                raise NotFound(f"No such asset: {relative!r}") from None
            raise AssetStoreError(relative, exc) from exc

    def walk(self) -> Iterator[AssetStat]:
        """Every regular file in the store, sorted by relative path."""
        if not self._root.is_dir():
            return
        for path in sorted(self._root.rglob("*")):
            if not path.is_file():
                continue
            relative = path.relative_to(self._root).as_posix()
            # Symlinks pointing outside the root are not part of the store.
            try:
                yield self.stat(relative)
            except PathTraversal:
                continue

    def __repr__(self) -> str:
        return f"AssetStore({str(self._root)!r})"
