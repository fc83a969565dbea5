"""
Quality Gate - STRUCTURAL & CONTENT checks for candidate documents

CHECKS (run in order, first failure wins):
  1. Doctype        - document starts with <!doctype html>
  2. External refs  - no CDN/web-font hosts, stylesheet links, script src, @import, iframes
  3. Banned heading - no h1-h6 whose whole text is a generic label ("Fast", "Reliable", ...)
  4. Placeholders   - at least one asset placeholder token present

The failure reason is fed verbatim into the next revision prompt, so reasons
are written as instructions the model can act on.

No network calls, no LLM calls. Deterministic.
"""
import re
from typing import List, Optional, Tuple
from bs4 import BeautifulSoup
from pydantic import BaseModel
from promptify_api.models.schemas import BG_PLACEHOLDER, LOGO_PLACEHOLDER

BANNED_HEADINGS: Tuple[str, ...] = (
    "Fast",
    "Customizable",
    "Reliable",
    "Secure",
    "Scalable",
    "Powerful",
    "Easy to use",
)

REASON_DOCTYPE = "HTML must start with the <!doctype html> declaration, with nothing before it."
REASON_EXTERNAL = "HTML contains external resource references (fonts/scripts/stylesheets/iframes/CDNs/@import)."
REASON_BANNED_HEADING = "HTML uses a generic/banned heading (" + "/".join(BANNED_HEADINGS) + ")."
REASON_PLACEHOLDERS = f"HTML is missing the required asset placeholder tokens {LOGO_PLACEHOLDER} / {BG_PLACEHOLDER}."

_DOCTYPE = re.compile(r'<!doctype html>', re.IGNORECASE)

# Hosts of web-font services, generic CDNs and package CDNs, optionally behind subdomains
_EXTERNAL_HOST = re.compile(
    r'(?:https?:)?//(?:[a-z0-9-]+\.)*?'
    r'(?:fonts\.|cdn\.|cdnjs|unpkg|jsdelivr|googleapis|gstatic|bootstrap|tailwindcss|typekit|fontawesome|esm\.sh|skypack)',
    re.IGNORECASE,
)
_EXTERNAL_PATTERNS = (
    _EXTERNAL_HOST,
    re.compile(r'<link\b[^>]*\brel\s*=\s*["\']?[^"\'>]*\bstylesheet', re.IGNORECASE),
    re.compile(r'<script\b[^>]*\bsrc\s*=', re.IGNORECASE),
    re.compile(r'@import\b', re.IGNORECASE),
    re.compile(r'<iframe\b', re.IGNORECASE),
)

_BANNED = {h.lower() for h in BANNED_HEADINGS}
_HEADING_TAGS = re.compile(r'^h[1-6]$')
_WHITESPACE = re.compile(r'\s+')


class GateResult(BaseModel):
    """Outcome of running the gate on one candidate"""
    passed: bool
    check: Optional[str] = None  # name of the failing check
    reason: Optional[str] = None


def has_doctype(html: str) -> bool:
    return isinstance(html, str) and _DOCTYPE.match(html.strip()) is not None


def has_external_references(html: str) -> bool:
    return any(p.search(html) for p in _EXTERNAL_PATTERNS)


def banned_headings(html: str) -> List[str]:
    """Heading texts (tags stripped, trimmed) that exactly match a banned generic term"""
    soup = BeautifulSoup(html, "html.parser")
    found = []
    for heading in soup.find_all(_HEADING_TAGS):
        text = _WHITESPACE.sub(" ", heading.get_text()).strip()
        if text.lower() in _BANNED:
            found.append(text)
    return found


def has_placeholder(html: str) -> bool:
    return LOGO_PLACEHOLDER in html or BG_PLACEHOLDER in html


def evaluate(html: str) -> GateResult:
    """Run all four checks in order; short-circuits on the first failure"""
    if not has_doctype(html):
        return GateResult(passed=False, check="doctype", reason=REASON_DOCTYPE)
    if has_external_references(html):
        return GateResult(passed=False, check="external_resources", reason=REASON_EXTERNAL)
    if banned_headings(html):
        return GateResult(passed=False, check="banned_heading", reason=REASON_BANNED_HEADING)
    if not has_placeholder(html):
        return GateResult(passed=False, check="placeholders", reason=REASON_PLACEHOLDERS)
    return GateResult(passed=True)


def evaluate_structure(html: str) -> GateResult:
    """Doctype + external-resource subset, used to re-check documents after asset injection"""
    if not has_doctype(html):
        return GateResult(passed=False, check="doctype", reason=REASON_DOCTYPE)
    if has_external_references(html):
        return GateResult(passed=False, check="external_resources", reason=REASON_EXTERNAL)
    return GateResult(passed=True)
