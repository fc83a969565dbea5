"""Shared fixtures for generator tests"""
import pytest
from unittest.mock import AsyncMock, Mock
from promptify_api.models.schemas import Brief


COMPLIANT_DOC = """<!doctype html>
<html lang="en"><head><meta charset="utf-8"><title>Nova</title>
<style>:root{--primary:#7c3aed;--accent:#06b6d4}.hero{background-image:url(%%BG_DATA_URL%%)}</style></head>
<body><header><img src="%%LOGO_DATA_URL%%" alt="Nova logo"></header>
<section class="hero"><h1>Rewards that grow with the Nova community</h1><h2>Stake, earn, vote</h2></section>
<footer><img src="%%LOGO_DATA_URL%%" alt="Nova"></footer>
<script>document.querySelectorAll('.reveal').forEach(function(el){el.classList.add('in')});</script>
</body></html>"""


@pytest.fixture
def compliant_doc():
    return COMPLIANT_DOC


@pytest.fixture
def nova_brief():
    return Brief(
        name="Nova",
        ticker="$NOVA",
        description="A community-driven rewards token",
        primary_color="#7c3aed",
        accent_color="#06b6d4",
    )


@pytest.fixture
def make_model_client():
    """Build a fake model collaborator whose complete() yields the given outputs in order"""
    def _make(*outputs):
        client = Mock()
        client.complete = AsyncMock(side_effect=list(outputs))
        return client
    return _make
