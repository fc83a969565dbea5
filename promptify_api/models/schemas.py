"""API request/response schemas and the normalized project brief"""

import re
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from promptify_api.core.asset_encoder import is_data_url


# Sentinels the model must reproduce verbatim; replaced with real asset data after generation
LOGO_PLACEHOLDER = "%%LOGO_DATA_URL%%"
BG_PLACEHOLDER = "%%BG_DATA_URL%%"

DEFAULT_PRIMARY_COLOR = "#7c3aed"
DEFAULT_ACCENT_COLOR = "#06b6d4"
DEFAULT_BACKGROUND_COLOR = "#070811"

_HEX_COLOR = re.compile(r'^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$')
_FUNCTIONAL_COLOR = re.compile(r'^(?:rgb|rgba|hsl|hsla)\(\s*[0-9.,%\s/deg]+\)$', re.IGNORECASE)
_NAMED_COLOR = re.compile(r'^[a-zA-Z]{3,20}$')


def _first(*values: Any) -> Any:
    """Return the first value that is not None/empty string"""
    for value in values:
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


class Brief(BaseModel):
    """Normalized, immutable project brief. Defaults are applied once, here."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=60)
    ticker: str = Field(..., min_length=1, max_length=16)
    description: str = Field(..., min_length=8, max_length=4000)
    primary_color: str = DEFAULT_PRIMARY_COLOR
    accent_color: str = DEFAULT_ACCENT_COLOR
    background_color: str = DEFAULT_BACKGROUND_COLOR
    twitter_url: str = Field(default="", max_length=300)
    telegram_url: str = Field(default="", max_length=300)
    logo_asset: Optional[str] = None
    background_asset: Optional[str] = None

    @field_validator("primary_color", "accent_color", "background_color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """
        Accept only plain colour tokens.

        The value lands inside a <style> block, so anything that is not a hex,
        functional or keyword colour is rejected to keep CSS/HTML from being injected.
        """
        if _HEX_COLOR.match(v) or _FUNCTIONAL_COLOR.match(v) or _NAMED_COLOR.match(v):
            return v
        raise ValueError(f"Invalid colour token: {v!r}. Use a hex value like #7c3aed.")

    @field_validator("logo_asset", "background_asset")
    @classmethod
    def validate_asset(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        if not is_data_url(v):
            raise ValueError("Assets must be embeddable data:image/...;base64 URLs")
        return v

    @classmethod
    def from_raw(cls, payload: Dict[str, Any]) -> "Brief":
        """
        Build a Brief from the loose request shapes clients send.

        Accepts `prompt` or `description`, `xurl`/`twitter`, `tgurl`/`telegram`,
        colours as a nested `colors` object, flattened `colors[primary]` form keys
        or top-level `primary`/`accent`/`bg`, and assets under `assets` or as
        top-level `logo`/`bg` data URLs.

        Raises:
            pydantic.ValidationError: if required fields are missing or malformed
        """
        payload = payload or {}
        colors = payload.get("colors") if isinstance(payload.get("colors"), dict) else {}
        assets = payload.get("assets") if isinstance(payload.get("assets"), dict) else {}
        top_level_bg = payload.get("bg")

        data = {
            "name": payload.get("name"),
            "ticker": payload.get("ticker"),
            "description": _first(payload.get("prompt"), payload.get("description")),
            "primary_color": _first(colors.get("primary"), payload.get("colors[primary]"), payload.get("primary")),
            "accent_color": _first(colors.get("accent"), payload.get("colors[accent]"), payload.get("accent")),
            "background_color": _first(
                colors.get("bg"),
                payload.get("colors[bg]"),
                # a top-level `bg` holding a data URL is the background image, not a colour
                None if is_data_url(top_level_bg or "") else top_level_bg,
            ),
            "twitter_url": _first(payload.get("xurl"), payload.get("twitter")),
            "telegram_url": _first(payload.get("tgurl"), payload.get("telegram")),
            "logo_asset": _first(assets.get("logo"), payload.get("logo")),
            "background_asset": _first(
                assets.get("background"),
                top_level_bg if is_data_url(top_level_bg or "") else None,
            ),
        }
        # Drop absent values so field defaults apply
        return cls(**{k: v for k, v in data.items() if v is not None})


class GenerateResponse(BaseModel):
    """POST /api/generate and POST /generate-site response"""
    id: str
    url: str
    html: str
    length: int
    source: str = Field(..., description="ai|fallback")
    quality_gate: str = Field(..., description="passed|fallback")
    attempts: int


class HealthResponse(BaseModel):
    ok: bool = True
    service: str
    time: str


class ErrorResponse(BaseModel):
    """Error response"""
    error_id: str
    error: str
    message: str
    hint: Optional[str] = None
    retryable: bool = False
    details: Optional[Any] = None


def validation_details(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Reduce pydantic error entries to JSON-safe field/message pairs"""
    return [
        {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "")}
        for err in errors
    ]
