"""HTML escaping for user-supplied brief text rendered into templates"""

import re
import bleach

_HTTP_URL = re.compile(r'^https?://[^\s"\'<>`]+$', re.IGNORECASE)


def escape_html(text: str) -> str:
    """
    Escape HTML entities in user text.

    "@" and "//" are additionally written as character references so user text
    can never read as an @import rule or a protocol-relative URL in the page source.
    The rendered text is unchanged.
    """
    escaped = bleach.clean(text or "", tags=[], attributes={}, strip=False)
    return escaped.replace("@", "&#64;").replace("//", "&#47;&#47;")


def is_http_url(url: str) -> bool:
    return bool(url) and _HTTP_URL.match(url.strip()) is not None


def sanitize_link(url: str, label: str, css_class: str = "link") -> str:
    """
    Render an outbound <a> for an http(s) URL.

    Allows only <a> tags with href/class/target + rel=noopener.
    """
    anchor = (
        f'<a class="{css_class}" href="{url.strip()}" target="_blank" rel="noopener noreferrer">'
        f'{escape_html(label)}</a>'
    )
    return bleach.clean(
        anchor,
        tags=["a"],
        attributes={"a": ["href", "rel", "target", "class"]},
        protocols=["http", "https"],
    )
