"""Prompt construction for the landing page generator (system contract, brief, revision)"""
import json
from typing import Dict, List, Optional
from promptify_api.core.quality_gate import BANNED_HEADINGS
from promptify_api.models.schemas import BG_PLACEHOLDER, LOGO_PLACEHOLDER, Brief

_banned_list = ", ".join(f"“{h}”" for h in BANNED_HEADINGS)

GENERATOR_SYSTEM_PROMPT = " ".join([
    "You are a professional web studio (brand copywriter + senior front-end engineer).",
    "Return ONLY a COMPLETE, VALID single-file index.html. No commentary, no markdown fences.",
    "The output MUST start with the exact literal <!doctype html> and nothing before it.",
    "Inline ALL CSS in one <style> and ALL JS in one <script>.",
    "Absolutely NO external requests of any kind: no web fonts, no CDNs, no <link rel=stylesheet>,",
    "no <script src>, no @import, no <iframe>, no remote images.",
    "Semantic HTML, a11y landmarks and labels, focus-visible, mobile-first responsive, reduced-motion friendly.",
    "Use CSS variables in :root for colors (--primary, --accent, --bg) and a system-ui font stack.",
    "Design: dark premium, tasteful keyframe animations, hover lifts, soft shadows, glass/blur accents, scroll reveal.",
    "Copywriting MUST be specific to the given project name, ticker, and description.",
    f"Never use generic section headings like {_banned_list}.",
    "Do NOT mention prompts, models, AI, or how the page was generated.",
])


def brief_summary(brief: Brief) -> Dict[str, object]:
    """Structured brief sent to the model; placeholder tokens stand in for asset data"""
    return {
        "project": {
            "name": brief.name,
            "ticker": brief.ticker,
            "description": brief.description,
            "socials": {"twitter": brief.twitter_url, "telegram": brief.telegram_url},
        },
        "theme": {
            "primary": brief.primary_color,
            "accent": brief.accent_color,
            "bg": brief.background_color,
        },
        "assets": {
            "logo": LOGO_PLACEHOLDER,
            "background": BG_PLACEHOLDER,
        },
    }


def initial_prompt(brief: Brief) -> str:
    """First-attempt instruction; restates the brief verbatim to ground the copy"""
    return f"""
Build a polished, animated landing page for a crypto/Web3 style project.

PROJECT BRIEF
- Name: {brief.name}
- Ticker: {brief.ticker}
- Description: {brief.description}
- Socials: X = {brief.twitter_url or "-"} • Telegram = {brief.telegram_url or "-"}
- Theme colors: --primary: {brief.primary_color} • --accent: {brief.accent_color} • --bg: {brief.background_color}

ASSETS (IMPORTANT — PLACEHOLDERS):
- Use these exact placeholders in the HTML and styles, even if you think no image exists:
  - LOGO image: "{LOGO_PLACEHOLDER}"
  - BACKGROUND image: "{BG_PLACEHOLDER}"
  Example:
    <img src="{LOGO_PLACEHOLDER}" alt="project logo" class="logo">
    .hero{{ background-image: url({BG_PLACEHOLDER}); }}
- Do not remove or rename the placeholders; they are replaced after generation.

STRUCTURE
- Sticky header with logo (use the logo placeholder), project name/ticker, simple nav (About, Token & Utility, Roadmap, FAQ), and a primary CTA.
- Hero: big headline tied to the description, subheadline, CTA buttons (X/Telegram if provided), background uses the BACKGROUND placeholder with an overlay for readability.
- 4–6 unique features with specific titles (never {_banned_list}).
- Sections: About, Token & Utility (bullets/grid), Roadmap (steps), FAQ (details/summary).
- Footer: © YEAR, socials if provided.

INTERACTION & FINISHING
- Hover states on cards & buttons (lift + glow).
- Scroll reveal via IntersectionObserver that progressively reveals .reveal elements.
- Subtle keyframe accent animations (glow/orb/particles), elegant and performant.
- Focus-visible and prefers-reduced-motion friendly.

RULES
- Start with <!doctype html>.
- Put ALL styles in a single <style> and ALL scripts in a single <script>.
- Use only system fonts (no external links).
- Include color variables in :root using the provided colors.
- Never mention prompts/models or how it was generated.
- Output ONLY the final HTML (no fences/no extra text).
""".strip()


def revision_prompt(reason: str) -> str:
    """Retry instruction carrying the previous gate failure verbatim"""
    return f"""
REVISION NEEDED:
Last HTML failed because: {reason}
Please return ONLY a COMPLETE, VALID single-file index.html that fixes it.
Keep the same project brief, the placeholders {LOGO_PLACEHOLDER} and {BG_PLACEHOLDER}, animations, and premium style.
No external resources. No generic headings. Start with <!doctype html>.
""".strip()


def build_messages(brief: Brief, attempt: int, previous_reason: Optional[str] = None) -> List[Dict[str, str]]:
    """
    Build the Responses API input for one attempt.

    Args:
        brief: Normalized project brief
        attempt: 1-based attempt index
        previous_reason: Gate failure reason from the previous attempt (attempt > 1)

    Returns:
        [system instruction, brief summary JSON, stage instruction]
    """
    if attempt > 1 and previous_reason:
        stage = revision_prompt(previous_reason)
    else:
        stage = initial_prompt(brief)
    return [
        {"role": "system", "content": GENERATOR_SYSTEM_PROMPT},
        {"role": "user", "content": json.dumps(brief_summary(brief), ensure_ascii=False)},
        {"role": "user", "content": stage},
    ]
