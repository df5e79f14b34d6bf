from typing import Any

_HTML_ENTITIES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
})


def escape_html(value: Any) -> str:
    """Escape a value for interpolation into an HTML email body. Falsy values give ""."""
    if not value:
        return ""
    return str(value).translate(_HTML_ENTITIES)
