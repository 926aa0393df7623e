"""Identifier and parameter formatting helpers.

All helpers accept any value convertible with ``str()`` and never raise.
"""

import re
from collections.abc import Iterable

from ..parser.comment_models import ParamTag

_OPTIONAL_MARKERS_RE = re.compile(r"\[|\]")
_UID_SEPARATOR_RE = re.compile(r"[^\w.]+", re.ASCII)
_UID_EDGE_HYPHEN_RE = re.compile(r"^-|-$")
_LEADING_GROUP_RE = re.compile(r"^, \[")


def format_param(content: object) -> str:
    """Return the bare parameter name of a raw name token.

    >>> format_param("[sound=bark]")
    'sound'
    """
    return _OPTIONAL_MARKERS_RE.sub("", str(content)).split("=")[0]


def format_default(content: object) -> str | None:
    """Return the default value declared in a raw name token, if any.

    >>> format_default("[sound=bark]")
    'bark'
    """
    parts = _OPTIONAL_MARKERS_RE.sub("", str(content)).split("=")
    if len(parts) < 2:
        return None
    return parts[1]


def format_uid(content: object) -> str:
    """Build a lower-case identifier safe for anchors and file names.

    >>> format_uid("index.js-Foo.bar baz")
    'index.js-foo.bar-baz'
    """
    uid = _UID_SEPARATOR_RE.sub("-", str(content).lower())
    return _UID_EDGE_HYPHEN_RE.sub("", uid)


def format_signature(tags: Iterable[ParamTag]) -> str:
    """Join top-level params into a signature fragment.

    Optional params are bracketed and adjacent optional groups merged, so
    ``a``, ``[b]``, ``[c]`` gives ``a, [b, c]`` and ``[a]``, ``[b]`` gives
    ``[a, b]``. Dotted names describe nested properties and are skipped.
    """
    names = []
    for tag in tags:
        if tag.is_dotted:
            continue
        name = format_param(tag.name)
        names.append(f"[{name}]" if tag.optional else name)
    signature = ", ".join(names).replace("], [", ", ")
    return _LEADING_GROUP_RE.sub("[, ", signature)
