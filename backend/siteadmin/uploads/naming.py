"""Destination filename resolution for uploaded images.

Two resolvers live here:

- Cover images are always stored as ``fmi<ext>``; only the extension is
  derived, from the original filename or the MIME type.
- Event images are stored under a name the client suggests (query
  parameter, then form field, then the original filename). The hint is
  untrusted, so it is sanitized and its extension forced into
  ``.png``/``.jpg``/``.jpeg``.

Both resolvers are pure and never fail: malformed input always yields
some valid name.

Examples:
    >>> resolve_event_filename("photo.gif", "image/gif", "My Event!!.GIF").name
    'my_event__.jpg'
    >>> resolve_cover_filename("x", "image/png").name
    'fmi.png'
"""
import posixpath
import re
from typing import NamedTuple, Optional

COVER_BASENAME = "fmi"
DEFAULT_EXTENSION = ".jpg"
ALLOWED_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg"})
ACCEPTED_MIME_MARKERS = ("jpeg", "jpg", "png")

_DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_TRAILING_EXTENSION = re.compile(r"\.[^.]+$")


class ResolvedFilename(NamedTuple):
    """A safe destination filename and its lower-cased extension."""
    name: str
    extension: str


def first_non_empty(*values: Optional[object]) -> Optional[object]:
    """Return the first value that is neither None nor empty, in order."""
    for value in values:
        if value is not None and value != "":
            return value
    return None


def _underscores(match: re.Match) -> str:
    # One per UTF-16 code unit, so astral characters (emoji) become "__".
    return "_" * (len(match.group().encode("utf-16-le", "surrogatepass")) // 2)


def sanitize(raw: str) -> str:
    """Replace every character outside ``[A-Za-z0-9._-]`` with ``_``."""
    return _DISALLOWED_CHARS.sub(_underscores, raw)


def extension_of(filename: Optional[str]) -> str:
    """Lower-cased extension of *filename* including the dot, or ``""``.

    Only the last path segment counts. A single leading dot marks a hidden
    file rather than an extension, so ``".png"`` and ``".."`` have none,
    while ``"..png"`` has ``".png"`` and ``"..."`` has ``"."``.
    """
    if not filename:
        return ""
    name = posixpath.basename(filename.rstrip("/"))
    i = name.rfind(".")
    if i <= 0 or name == "..":
        return ""
    return name[i:].lower()


def _extension_from_mime(mime_type: Optional[str]) -> str:
    if mime_type and "png" in mime_type:
        return ".png"
    return DEFAULT_EXTENSION


def resolve_cover_filename(original_filename: Optional[str], mime_type: Optional[str]) -> ResolvedFilename:
    """Resolve the fixed cover image name.

    The original filename's extension wins even if it is not an image
    extension; the MIME type is only consulted when there is none.
    """
    ext = extension_of(original_filename) or _extension_from_mime(mime_type)
    return ResolvedFilename(name=COVER_BASENAME + ext, extension=ext)


def resolve_event_filename(
    original_filename: Optional[str],
    mime_type: Optional[str],
    query_hint: Optional[str] = None,
    form_hint: Optional[str] = None,
) -> ResolvedFilename:
    """Resolve a safe event image name from the client's hints.

    Args:
        original_filename: Filename reported by the multipart part.
        mime_type: Content type reported by the multipart part.
        query_hint: ``filename`` query parameter, highest priority.
        form_hint: ``filename`` form field, used when there is no query hint.

    Returns:
        A lower-cased name made of ``[a-z0-9._-]`` ending in ``.png``,
        ``.jpg`` or ``.jpeg``.
    """
    original_filename = original_filename or ""
    raw = first_non_empty(query_hint, form_hint, original_filename)
    raw = str(raw or original_filename)

    base = sanitize(raw)
    ext = extension_of(base)
    if not ext:
        ext = extension_of(original_filename) or _extension_from_mime(mime_type)
        base += ext

    # Unknown extensions are swapped for .jpg; the bytes are left untouched.
    if ext not in ALLOWED_EXTENSIONS:
        base = _TRAILING_EXTENSION.sub("", base) + DEFAULT_EXTENSION
        ext = DEFAULT_EXTENSION

    return ResolvedFilename(name=base.lower(), extension=ext)


def is_accepted_image_type(mime_type: Optional[str]) -> bool:
    """Whether an event upload's MIME type is JPEG or PNG.

    A missing MIME type is accepted; the extension has already been
    normalized by :func:`resolve_event_filename`.
    """
    if not mime_type:
        return True
    return any(marker in mime_type for marker in ACCEPTED_MIME_MARKERS)
