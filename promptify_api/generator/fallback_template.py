"""Deterministic fallback landing page used when generation is exhausted"""
from promptify_api.core.quality_gate import has_external_references
from promptify_api.models.schemas import BG_PLACEHOLDER, LOGO_PLACEHOLDER, Brief
from promptify_api.utils.sanitization import escape_html, is_http_url, sanitize_link

_NO_LINK = '<span class="muted">—</span>'


# Renders one social entry: an anchor for plain http(s) URLs, the label alone otherwise.
# URLs pointing at asset hosts are never emitted so the page stays free of external references.
def _social(label: str, url: str) -> str:
    if not url:
        return _NO_LINK
    if not is_http_url(url) or has_external_references(url):
        return f'<span class="muted">{escape_html(label)}</span>'
    return sanitize_link(url, label)


def _paragraphs(text: str) -> str:
    blocks = [b.strip() for b in text.splitlines() if b.strip()]
    return "\n".join(f"<p>{escape_html(b)}</p>" for b in blocks)


def render_fallback(brief: Brief) -> str:
    """
    Render the fallback page for a brief.

    The output passes the full quality gate for every valid brief: doctype first,
    no external references, no user text alone in a heading, and both
    placeholder tokens present for the asset injector.
    """
    name = escape_html(brief.name)
    ticker = escape_html(brief.ticker)
    description = _paragraphs(brief.description)
    x_link = _social("X (Twitter)", brief.twitter_url)
    tg_link = _social("Telegram", brief.telegram_url)

    return f"""<!doctype html>
<html lang="en"><head><meta charset="utf-8"/><meta name="viewport" content="width=device-width,initial-scale=1"/>
<title>{name} · {ticker}</title>
<style>
:root{{--primary:{brief.primary_color};--accent:{brief.accent_color};--bg:{brief.background_color};--ink:#e9ecff;--muted:#aab6d8}}
*{{box-sizing:border-box}}html,body{{height:100%}}
body{{margin:0;background:radial-gradient(1000px 600px at 70% -10%,rgba(109,97,255,.25),transparent 60%),linear-gradient(180deg,var(--bg),#0b0e1d);color:var(--ink);font-family:ui-sans-serif,system-ui,-apple-system,Segoe UI,Roboto,Arial,sans-serif}}
header{{position:sticky;top:0;display:flex;align-items:center;gap:12px;padding:12px 20px;background:rgba(7,8,17,.55);backdrop-filter:blur(8px);border-bottom:1px solid rgba(255,255,255,.08);z-index:10}}
.logo{{width:40px;height:40px;border-radius:10px;object-fit:cover}}
img[src=""]{{display:none}}
.container{{max-width:1100px;margin:36px auto;padding:0 16px}}
.card{{border:1px solid rgba(255,255,255,.08);border-radius:16px;background:linear-gradient(180deg,rgba(255,255,255,.05),rgba(255,255,255,.03));box-shadow:0 0 0 1px rgba(123,110,255,.14),0 14px 44px rgba(88,70,255,.18);overflow:hidden}}
.hero{{position:relative;display:flex;gap:24px;align-items:center;padding:48px 24px;border-bottom:1px solid rgba(255,255,255,.08);background-image:url('{BG_PLACEHOLDER}');background-size:cover;background-position:center}}
.hero::before{{content:"";position:absolute;inset:0;background:linear-gradient(180deg,rgba(7,8,17,.35),rgba(7,8,17,.8))}}
.hero>*{{position:relative}}
h1{{margin:0;font-size:clamp(28px,5vw,48px)}}
h1 .sep{{color:var(--muted);margin:0 .35em}}
.badge{{display:inline-block;background:linear-gradient(135deg,var(--primary),var(--accent));color:#fff;padding:6px 10px;border-radius:999px;font-weight:700;box-shadow:0 10px 34px rgba(104,88,255,.35);animation:glow 3s ease-in-out infinite alternate}}
p{{color:var(--muted);line-height:1.6}}
.muted{{color:var(--muted)}}
.btn{{display:inline-block;margin-top:8px;background:linear-gradient(135deg,var(--primary),var(--accent));color:#fff;text-decoration:none;padding:12px 16px;border-radius:12px;font-weight:700;box-shadow:0 10px 34px rgba(104,88,255,.35);transition:transform .2s,box-shadow .2s}}
.btn:hover,.btn:focus-visible{{transform:translateY(-2px);box-shadow:0 18px 64px rgba(104,88,255,.45)}}
.grid{{display:grid;grid-template-columns:1fr 1fr;gap:16px;padding:16px}}
.tile{{padding:18px;border:1px solid rgba(255,255,255,.08);border-radius:12px;background:rgba(255,255,255,.03);transition:transform .2s}}
.tile:hover{{transform:translateY(-3px)}}
a.link{{color:var(--ink)}}
a:focus-visible{{outline:2px solid var(--accent);outline-offset:2px}}
footer{{text-align:center;padding:24px;color:var(--muted)}}
@keyframes glow{{from{{box-shadow:0 10px 34px rgba(104,88,255,.25)}}to{{box-shadow:0 10px 44px rgba(104,88,255,.55)}}}}
@media (max-width:860px){{.hero{{flex-direction:column;align-items:flex-start}}.grid{{grid-template-columns:1fr}}}}
@media (prefers-reduced-motion:reduce){{*{{animation:none!important;transition:none!important}}}}
</style></head>
<body>
  <header>
    <img class="logo" src="{LOGO_PLACEHOLDER}" alt="{name} logo"/>
    <strong>{name}</strong>
    <span class="badge">{ticker}</span>
  </header>
  <main class="container">
    <div class="card">
      <section class="hero">
        <div>
          <div class="badge">{ticker}</div>
          <h1><span class="name">{name}</span><span class="sep" aria-hidden="true">·</span><span class="tick">{ticker}</span></h1>
          {description}
        </div>
      </section>
      <div class="grid">
        <section class="tile"><h2>About {name}</h2>{description}</section>
        <section class="tile"><h2>Join the {ticker} community</h2>
          <p>{x_link}</p>
          <p>{tg_link}</p>
          <a class="btn" href="#">Buy / Join</a>
        </section>
      </div>
    </div>
  </main>
  <footer>{name} · {ticker}</footer>
</body></html>"""
