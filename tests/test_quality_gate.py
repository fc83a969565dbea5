"""Tests for quality_gate.py"""
import pytest
from promptify_api.core import quality_gate
from promptify_api.core.quality_gate import (
    REASON_BANNED_HEADING,
    REASON_DOCTYPE,
    REASON_EXTERNAL,
    REASON_PLACEHOLDERS,
    evaluate,
    evaluate_structure,
)


def _with_body(doc: str, snippet: str) -> str:
    return doc.replace("</body>", snippet + "</body>")


def test_compliant_document_passes(compliant_doc):
    result = evaluate(compliant_doc)
    assert result.passed
    assert result.reason is None


class TestDoctypeCheck:
    def test_missing_doctype_fails(self, compliant_doc):
        result = evaluate(compliant_doc.replace("<!doctype html>", ""))
        assert not result.passed
        assert result.check == "doctype"
        assert result.reason == REASON_DOCTYPE

    def test_doctype_is_case_insensitive(self, compliant_doc):
        assert evaluate(compliant_doc.replace("<!doctype html>", "<!DOCTYPE HTML>")).passed

    def test_leading_whitespace_is_trimmed(self, compliant_doc):
        assert evaluate("\n   " + compliant_doc).passed

    def test_doctype_must_be_first(self, compliant_doc):
        assert evaluate("<!-- generated -->" + compliant_doc).reason == REASON_DOCTYPE

    def test_empty_candidate_fails_doctype(self):
        assert evaluate("").reason == REASON_DOCTYPE


class TestExternalResourceCheck:
    @pytest.mark.parametrize("snippet", [
        '<link rel="stylesheet" href="styles.css">',
        "<link href='x.css' rel='preload stylesheet'>",
        '<script src="app.js"></script>',
        '<style>@import url("theme.css");</style>',
        '<iframe title="chart"></iframe>',
        '<img src="https://fonts.gstatic.com/x.png">',
        '<a href="//cdn.example.com/lib.js">lib</a>',
        '<img src="https://ajax.googleapis.com/logo.png">',
        '<img src="https://unpkg.com/thing/icon.svg">',
        '<img src="https://cdn.jsdelivr.net/npm/pkg/icon.svg">',
        '<img src="https://use.typekit.net/abc.png">',
    ])
    def test_external_reference_fails(self, compliant_doc, snippet):
        result = evaluate(_with_body(compliant_doc, snippet))
        assert not result.passed
        assert result.check == "external_resources"
        assert result.reason == REASON_EXTERNAL

    @pytest.mark.parametrize("snippet", [
        '<a href="https://t.me/nova">Telegram</a>',
        '<a href="https://x.com/nova">X</a>',
        '<link rel="icon" href="data:image/png;base64,AAAA">',
        '<script>console.log("inline")</script>',
        '<svg xmlns="http://www.w3.org/2000/svg"></svg>',
    ])
    def test_self_contained_markup_passes(self, compliant_doc, snippet):
        assert evaluate(_with_body(compliant_doc, snippet)).passed


class TestBannedHeadingCheck:
    @pytest.mark.parametrize("heading", [
        "<h2>Fast</h2>",
        "<h3>  reliable </h3>",
        "<h4><span>Custom</span>izable</h4>",
        "<h2>\n  Easy   to use\n</h2>",
        "<H5>SECURE</H5>",
    ])
    def test_generic_heading_fails(self, compliant_doc, heading):
        result = evaluate(_with_body(compliant_doc, heading))
        assert not result.passed
        assert result.check == "banned_heading"
        assert result.reason == REASON_BANNED_HEADING

    @pytest.mark.parametrize("snippet", [
        "<h2>Fast payouts for every holder</h2>",
        "<p>Fast</p>",
        "<strong>Reliable</strong>",
    ])
    def test_specific_or_non_heading_text_passes(self, compliant_doc, snippet):
        assert evaluate(_with_body(compliant_doc, snippet)).passed

    def test_banned_headings_lists_matches(self):
        html = "<h1>Nova</h1><h2>Fast</h2><h3>Scalable</h3>"
        assert quality_gate.banned_headings(html) == ["Fast", "Scalable"]


class TestPlaceholderCheck:
    def test_no_placeholder_fails(self, compliant_doc):
        doc = compliant_doc.replace("%%LOGO_DATA_URL%%", "").replace("%%BG_DATA_URL%%", "")
        result = evaluate(doc)
        assert result.check == "placeholders"
        assert result.reason == REASON_PLACEHOLDERS

    def test_logo_placeholder_alone_passes(self, compliant_doc):
        assert evaluate(compliant_doc.replace("%%BG_DATA_URL%%", "none")).passed

    def test_background_placeholder_alone_passes(self, compliant_doc):
        assert evaluate(compliant_doc.replace("%%LOGO_DATA_URL%%", "")).passed


class TestShortCircuit:
    def test_doctype_reported_before_external(self, compliant_doc):
        doc = _with_body(compliant_doc, '<script src="https://cdn.example.com/x.js"></script>')
        doc = doc.replace("<!doctype html>", "")
        assert evaluate(doc).reason == REASON_DOCTYPE

    def test_external_reported_before_banned_heading(self, compliant_doc):
        doc = _with_body(compliant_doc, "<iframe></iframe><h2>Fast</h2>")
        assert evaluate(doc).reason == REASON_EXTERNAL

    def test_banned_heading_reported_before_placeholders(self, compliant_doc):
        doc = compliant_doc.replace("%%LOGO_DATA_URL%%", "").replace("%%BG_DATA_URL%%", "")
        assert evaluate(_with_body(doc, "<h2>Fast</h2>")).reason == REASON_BANNED_HEADING


class TestStructuralCheck:
    def test_ignores_headings_and_placeholders(self):
        doc = "<!doctype html><html><body><h2>Fast</h2></body></html>"
        assert evaluate_structure(doc).passed

    def test_rejects_missing_doctype_and_external_refs(self):
        assert evaluate_structure("<html></html>").reason == REASON_DOCTYPE
        assert evaluate_structure("<!doctype html><iframe></iframe>").reason == REASON_EXTERNAL
