"""
Pagekit: Renderer

Pure function: (base content, render context, options?) → HTML string
No IO. Deterministic: same input → same output, always.

Three variants:
- canonical: base content, every region read-only, no banner
- preview: base content with the snapshot overlay merged in, plus a
  persistent "Preview Mode" banner linking to the exit action
- error: a full error page (no merge) that still carries the banner
"""

from __future__ import annotations

from html import escape

import chevron

from pagekit.types import BaseContent, RenderContext, RenderError, RenderOptions, Region

_DOCUMENT = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{title}}</title>
<meta name="description" content="{{description}}">
</head>
<body>
<div class="layout">
{{#banner}}
<aside role="alert"><a href="{{exit_url}}">Preview Mode</a></aside>
{{/banner}}
<main id="{{container_id}}" data-mode="{{mode}}">
{{{body}}}
</main>
</div>
</body>
</html>
"""

_ERROR_BODY = """<h1>Oops</h1>
<h2>Something unique to your preview went wrong.</h2>
<div class="explanation"><p>The production website is <strong>still available</strong> and this does not affect other users.</p></div>
<hr />
<h2>Reason</h2>
<div class="explanation"><p>{{message}}</p>{{#is_recoverable}}<p><a href="/">Reload</a></p>{{/is_recoverable}}</div>"""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render(
    base: BaseContent,
    context: RenderContext,
    options: RenderOptions | None = None,
) -> str:
    """
    Render a complete HTML document for one request.
    Pure function. No side effects. No IO.
    """
    opts = options or RenderOptions()

    if context.is_preview and context.error is not None:
        body = render_error(context.error)
        mode = "error"
    else:
        overlay = context.overlay.overlay() if context.is_preview and context.overlay else None
        body = render_content(base, overlay, editable=opts.edit_mode)
        mode = "edit" if opts.edit_mode else ("preview" if context.is_preview else "view")

    return chevron.render(
        _DOCUMENT,
        {
            "title": base.title,
            "description": base.description,
            "banner": context.is_preview,
            "exit_url": opts.exit_url,
            "container_id": opts.container_id,
            "mode": mode,
            "body": body,
        },
    )


def render_content(base: BaseContent, overlay: dict[str, str] | None = None, editable: bool = False) -> str:
    """
    Render the base layout with each region in place.

    Overlay text replaces a region's markup when its id is present; ids in
    the overlay with no matching region are ignored.
    """
    overlay = overlay or {}
    regions = {region.id: render_region(region, overlay.get(region.id), editable) for region in base.regions}
    return chevron.render(base.layout, {"regions": regions})


def render_region(region: Region, text: str | None = None, editable: bool = False) -> str:
    """Render one region wrapper. `text` is plain text and is escaped."""
    inner = region.html if text is None else text_to_html(text)
    flag = "true" if editable else "false"
    return (
        f'<div id="{escape(region.id)}" class="field">'
        f'<{region.tag} contenteditable="{flag}">{inner}</{region.tag}>'
        f"</div>"
    )


def render_error(error: RenderError) -> str:
    return chevron.render(_ERROR_BODY, {"message": error.message, "is_recoverable": error.is_recoverable})


def text_to_html(text: str) -> str:
    """Escape plain text; newlines become <br /> so captured text reads back unchanged."""
    return "<br />".join(escape(line, quote=False) for line in text.split("\n"))
