"""Generated site storage"""

import json
import logging
import re
import uuid
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

SITE_ID_PATTERN = re.compile(r'^site_[a-z0-9]{10}$')


class SiteStore:
    """Stores generated HTML in {base_path}/{site_id}/index.html (optionally meta.json)."""
    def __init__(self, base_path: str):
        self.base_path = Path(base_path).resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"[SiteStore] Using path: {self.base_path}")

    @staticmethod
    def new_site_id() -> str:
        return f"site_{uuid.uuid4().hex[:10]}"

    @staticmethod
    def is_valid_id(site_id: str) -> bool:
        return isinstance(site_id, str) and SITE_ID_PATTERN.match(site_id) is not None

    def _site_path(self, site_id: str) -> Path:
        if not self.is_valid_id(site_id):
            raise ValueError(f"Invalid site id: {site_id!r}")
        return self.base_path / site_id

    def put(self, site_id: str, html: str, meta: Optional[dict] = None) -> str:
        """Save the single HTML output (and meta if provided)."""
        site_path = self._site_path(site_id)
        site_path.mkdir(parents=True, exist_ok=True)
        (site_path / "index.html").write_text(html, encoding="utf-8")
        if meta is not None:
            (site_path / "meta.json").write_text(
                json.dumps(meta, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info(f"[SiteStore] ✓ Saved {site_id} ({len(html)} chars)")
        return str(site_path)

    def get(self, site_id: str) -> Optional[str]:
        """Load the HTML for this site, None if unknown."""
        if not self.is_valid_id(site_id):
            return None
        index_path = self.base_path / site_id / "index.html"
        if not index_path.exists():
            return None
        return index_path.read_text(encoding="utf-8")

    def get_meta(self, site_id: str) -> Optional[dict]:
        """Load the meta file for this site, None if unknown or unreadable."""
        if not self.is_valid_id(site_id):
            return None
        meta_path = self.base_path / site_id / "meta.json"
        if not meta_path.exists():
            return None
        try:
            with meta_path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"[SiteStore] Unreadable meta for {site_id}: {e}")
            return None
