"""Named route templates for forum URLs.

Templates use ``{name}`` placeholders. Parameters that a template does not
consume are appended as a query string, so ``force=1`` on a destroy route
yields ``.../thread/7?force=1``.
"""

import string
from typing import Any
from urllib.parse import urlencode

from forum.core.config import settings

ROUTES: dict[str, str] = {
    "forum.thread.show": "/{prefix}/{category}-{categorySlug}/{thread}-{threadSlug}",
    "forum.post.create": "/{prefix}/{category}-{categorySlug}/{thread}-{threadSlug}/reply",
    "forum.api.v1.thread.update": "/{api}/thread/{thread}",
    "forum.api.v1.thread.destroy": "/{api}/thread/{thread}",
    "forum.api.v1.thread.restore": "/{api}/thread/{thread}/restore",
}

_formatter = string.Formatter()


def _placeholders(template: str) -> set[str]:
    return {field for _, field, _, _ in _formatter.parse(template) if field}


def build_route(name: str, params: dict[str, Any]) -> str:
    """Build the URL for a named route.

    Args:
        name: Route name, one of ROUTES
        params: Values for the template placeholders; extra keys become query parameters

    Returns:
        The relative URL.

    Raises:
        KeyError: Unknown route name or a missing placeholder value.
    """
    template = ROUTES[name]
    values = {
        "prefix": settings.FORUM_ROUTE_PREFIX.strip("/"),
        "api": settings.FORUM_API_PREFIX.strip("/"),
        **params,
    }
    used = _placeholders(template)
    missing = used - values.keys()
    if missing:
        raise KeyError(f"route {name!r} is missing parameters: {sorted(missing)}")

    url = template.format(**values)
    extra = {key: value for key, value in params.items() if key not in used}
    if extra:
        url = f"{url}?{urlencode(extra)}"
    return url
