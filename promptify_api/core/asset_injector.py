"""Replaces asset placeholder tokens with embedded image data"""
import re
from promptify_api.models.schemas import BG_PLACEHOLDER, LOGO_PLACEHOLDER, Brief

# Valid empty value for background-image; keeps the CSS well-formed when no image was uploaded
EMPTY_BACKGROUND = "none"

_PRIMARY_VAR = re.compile(r'--primary\s*:')
_ACCENT_VAR = re.compile(r'--accent\s*:')
_STYLE_OPEN = re.compile(r'<style\b[^>]*>', re.IGNORECASE)
_HEAD_CLOSE = re.compile(r'</head\s*>', re.IGNORECASE)


def inject_assets(html: str, brief: Brief) -> str:
    """
    Replace every occurrence of both placeholder tokens.

    Logo → the brief's logo data URL, or "" when absent.
    Background → the brief's background data URL, or "none" when absent.
    """
    html = html.replace(LOGO_PLACEHOLDER, brief.logo_asset or "")
    html = html.replace(BG_PLACEHOLDER, brief.background_asset or EMPTY_BACKGROUND)
    return html


def ensure_theme_variables(html: str, brief: Brief) -> str:
    """
    Guarantee the theme colours are defined when the model forgot them.

    If either --primary or --accent is missing, a :root block is inserted ahead
    of the first <style> (or before </head> when the page has no <style>).
    """
    if _PRIMARY_VAR.search(html) and _ACCENT_VAR.search(html):
        return html

    root_block = (
        f"<style>:root{{--primary:{brief.primary_color};"
        f"--accent:{brief.accent_color};"
        f"--bg:{brief.background_color};}}</style>"
    )
    style = _STYLE_OPEN.search(html)
    if style:
        return html[:style.start()] + root_block + html[style.start():]
    head_close = _HEAD_CLOSE.search(html)
    if head_close:
        return html[:head_close.start()] + root_block + html[head_close.start():]
    return html
