"""HTML escaping."""

from __future__ import annotations

import re
from typing import Any

ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "`": "&#x60;",
}

ENTITIES_RE = re.compile("|".join(re.escape(char) for char in ENTITIES))


def escape(unsafe: Any) -> str:
    """Replace HTML-significant characters with entities.

    ``None`` becomes an empty string; anything else is passed through ``str()``
    first. Already escaped text is escaped again (``&amp;`` -> ``&amp;amp;``).

    Example:
        >>> escape("<a href='x'>")
        '&lt;a href=&#x27;x&#x27;&gt;'
    """
    if unsafe is None:
        return ""

    return ENTITIES_RE.sub(lambda match: ENTITIES[match.group(0)], str(unsafe))
