"""Mermaid rendering handoff.

Chart text from the model goes through :func:`render`, which cleans it, gives
each attempt its own element id and turns engine failures into a visible
placeholder so the rest of the page keeps working.
"""
import html, json, logging, re, uuid
from dataclasses import dataclass
from typing import Callable, Optional

from .errors import RenderError

logger = logging.getLogger(__name__)

MERMAID_CDN = "https://cdn.jsdelivr.net/npm/mermaid@10/dist/mermaid.min.js"
_FENCE = re.compile(r"```(?:mermaid)?", re.I)

Engine = Callable[[str, str], str]


@dataclass(frozen=True)
class Rendered:
    render_id: str
    html: str
    ok: bool
    error: Optional[str] = None


def clean_chart(chart: str) -> str:
    return _FENCE.sub("", chart or "").strip()


def new_render_id() -> str:
    return f"mermaid-{uuid.uuid4().hex[:12]}"


def error_placeholder(chart: str, reason: str = "The AI generated invalid syntax.") -> str:
    return (
        '<div class="diagram-error" style="border:1px solid #ef4444;padding:12px;border-radius:6px;color:#fca5a5">'
        "<p><b>Diagram Render Error</b></p>"
        f"<p style=\"font-size:12px\">{html.escape(reason)}</p></div>"
        f'<pre style="font-size:10px;max-height:8rem;overflow:auto">{html.escape(chart)}</pre>'
    )


def _js(value) -> str:
    return json.dumps(value).replace("</", "<\\/")


def mermaid_js_engine(render_id: str, chart: str) -> str:
    """Browser-side engine: mermaid.js renders into ``render_id``.

    Syntax errors are caught in the page script and replaced with the same
    placeholder markup the Python side uses.
    """
    if not chart:
        raise RenderError("Empty diagram")
    fallback = error_placeholder(chart)
    return f"""<!DOCTYPE html><html><head><meta charset="UTF-8"><script src="{MERMAID_CDN}"></script></head>
<body style="margin:0;background:#0f172a"><div id="{render_id}-host" style="display:flex;justify-content:center;padding:16px"></div>
<script>
  const host = document.getElementById({_js(render_id + "-host")});
  const chart = {_js(chart)};
  mermaid.initialize({{ startOnLoad: false, theme: "dark", securityLevel: "loose" }});
  mermaid.render({_js(render_id)}, chart)
    .then(({{ svg }}) => {{ host.innerHTML = svg; }})
    .catch((err) => {{ console.error("Mermaid render error:", err); host.innerHTML = {_js(fallback)}; }});
</script></body></html>"""


def render(chart: str, engine: Engine = None) -> Rendered:
    engine = engine or mermaid_js_engine
    cleaned = clean_chart(chart)
    render_id = new_render_id()
    try:
        markup = engine(render_id, cleaned)
    except RenderError as exc:
        logger.warning("Diagram %s failed to render: %s", render_id, exc)
        return Rendered(render_id, error_placeholder(cleaned or chart or ""), False, str(exc))
    return Rendered(render_id, markup, True)


def render_in_streamlit(chart: str, height: int = 480) -> Rendered:
    import streamlit.components.v1 as components

    result = render(chart)
    components.html(result.html, height=height, scrolling=True)
    return result
