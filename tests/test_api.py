"""HTTP tests for the generator API"""
import io
import pytest
from fastapi.testclient import TestClient
from PIL import Image
from promptify_api.core.config import GeneratorConfig
from promptify_api.core.dependencies import get_pipeline, get_site_store
from promptify_api.core.model_client import ModelClient
from promptify_api.core.site_store import SiteStore
from promptify_api.generator.pipeline import GenerationPipeline
from promptify_api.main import app
from promptify_api.api.generate import _brief_or_400
from promptify_api.models.errors import ApplicationError, ErrorCode, ModelCallError

BRIEF = {"name": "Nova", "ticker": "$NOVA", "prompt": "A community-driven rewards token"}


def _png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (2, 2), (6, 182, 212)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def store(tmp_path):
    return SiteStore(str(tmp_path / "sites"))


@pytest.fixture
def api(store):
    """Yield a function that builds a TestClient around a fake model client"""
    def _client(model_client):
        pipeline = GenerationPipeline(model_client, GeneratorConfig(max_attempts=2))
        app.dependency_overrides[get_pipeline] = lambda: pipeline
        app.dependency_overrides[get_site_store] = lambda: store
        return TestClient(app)
    yield _client
    app.dependency_overrides.clear()


def test_root_and_health(api, make_model_client):
    client = api(make_model_client())
    assert "running" in client.get("/").text
    for path in ("/health", "/api/health"):
        body = client.get(path).json()
        assert body["ok"] is True
        assert body["service"] == "promptify-backend"
        assert body["time"]


def test_generate_json_then_serve_site(api, make_model_client, compliant_doc, store):
    client = api(make_model_client(compliant_doc))
    response = client.post("/generate-site", json=BRIEF)

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "ai"
    assert body["quality_gate"] == "passed"
    assert body["attempts"] == 1
    assert body["length"] == len(body["html"])
    assert body["url"].endswith(f"/sites/{body['id']}/")
    assert SiteStore.is_valid_id(body["id"])

    served = client.get(f"/sites/{body['id']}/")
    assert served.status_code == 200
    assert served.text == body["html"]
    assert served.headers["content-type"].startswith("text/html")
    assert served.headers["cache-control"] == "public, max-age=60"
    assert store.get_meta(body["id"])["source"] == "ai"


def test_exhausted_generation_serves_fallback(api, make_model_client):
    client = api(make_model_client("nope", "nope"))
    body = client.post("/generate-site", json=BRIEF).json()
    assert body["source"] == "fallback"
    assert body["quality_gate"] == "fallback"
    assert body["attempts"] == 2
    assert body["html"].startswith("<!doctype html>")


def test_invalid_brief_is_400_without_model_call(api, make_model_client):
    model = make_model_client()
    client = api(model)
    response = client.post("/generate-site", json={"name": "Nova"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "INVALID_INPUT"
    assert {d["field"] for d in body["details"]} >= {"ticker", "description"}
    model.complete.assert_not_called()


def test_model_failure_is_502(api, make_model_client):
    client = api(make_model_client(ModelCallError("upstream 503")))
    response = client.post("/generate-site", json=BRIEF)

    assert response.status_code == 502
    body = response.json()
    assert body["error"] == "GENERATION_FAILED"
    assert body["retryable"] is True


def test_missing_api_key_is_500(api):
    client = api(ModelClient(GeneratorConfig(), api_key=""))
    response = client.post("/generate-site", json=BRIEF)
    assert response.status_code == 500
    assert response.json()["error"] == "CONFIGURATION_ERROR"


def test_multipart_with_logo_upload(api, make_model_client, compliant_doc):
    client = api(make_model_client(compliant_doc))
    response = client.post(
        "/api/generate",
        data={**BRIEF, "colors[primary]": "#112233", "xurl": "https://x.com/nova"},
        files={"logo": ("logo.png", _png_bytes(), "image/png")},
    )

    assert response.status_code == 200
    html = response.json()["html"]
    assert html.count("data:image/png;base64,") == 2
    assert "%%LOGO_DATA_URL%%" not in html


def test_multipart_odd_declared_type_uses_sniffed_type(api, make_model_client, compliant_doc):
    client = api(make_model_client(compliant_doc))
    response = client.post(
        "/api/generate",
        data=BRIEF,
        files={"logo": ("logo.png", _png_bytes(), "image/x_png")},
    )

    assert response.status_code == 200
    html = response.json()["html"]
    assert "data:image/png;base64," in html
    assert "image/x_png" not in html


def test_multipart_rejects_non_image(api, make_model_client):
    model = make_model_client()
    client = api(model)
    response = client.post(
        "/api/generate",
        data=BRIEF,
        files={"bg": ("notes.txt", b"just some text", "text/plain")},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_INPUT"
    model.complete.assert_not_called()


@pytest.mark.parametrize("path", ["/sites/site_0000000000/", "/sites/not-a-site", "/sites/site_abc"])
def test_unknown_site_is_404(api, make_model_client, path):
    response = api(make_model_client()).get(path)
    assert response.status_code == 404
    assert response.json()["error"] == "NOT_FOUND"


def test_normalized_brief_fields_validated_as_400():
    fields = {"name": "Nova", "ticker": "NOVA", "description": "Rewards for the community",
              "logo_asset": "data:image/x_png;base64,AAAA"}
    with pytest.raises(ApplicationError) as exc_info:
        _brief_or_400(fields, raw=False)
    assert exc_info.value.code == ErrorCode.INVALID_INPUT
    assert exc_info.value.http_status == 400
    assert exc_info.value.details[0]["field"] == "logo_asset"
