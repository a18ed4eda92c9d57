"""Canonical content of the home page and its editable regions."""

from __future__ import annotations

from pagekit.types import BaseContent, Region

_LAYOUT = """{{{regions.title}}}
<div class="features">
<div class="feature">{{{regions.feature-1-emoji}}}{{{regions.feature-1-text}}}</div>
<div class="feature">{{{regions.feature-2-emoji}}}{{{regions.feature-2-text}}}</div>
<div class="feature">{{{regions.feature-3-emoji}}}{{{regions.feature-3-text}}}</div>
</div>
{{{regions.title-2}}}
<div class="explanation">
<div class="p">{{{regions.explanation-1-inspect}}}<br />{{{regions.explanation-1-pre-curl}}}{{{regions.explanation-1-pre-response}}}</div>
{{{regions.explanation-2}}}
{{{regions.explanation-3}}}
{{{regions.explanation-4}}}
</div>"""

HOME_PAGE = BaseContent(
    title="Static Site | Preview Mode",
    description="A statically rendered page whose text can be edited in place and shared as a preview.",
    layout=_LAYOUT,
    regions=[
        Region(id="title", tag="h1", html="My Static Site"),
        Region(id="feature-1-emoji", tag="div", html="⚡"),
        Region(id="feature-1-text", tag="h4", html="Blazing fast"),
        Region(id="feature-2-emoji", tag="div", html="📡"),
        Region(id="feature-2-text", tag="h4", html="Always available"),
        Region(id="feature-3-emoji", tag="div", html="🏎"),
        Region(id="feature-3-text", tag="h4", html="Lighthouse 100"),
        Region(
            id="title-2",
            tag="h2",
            html=(
                "This demonstrates a static website whose pages are rendered once and "
                'served from the <a target="_blank" rel="noopener" href="/">edge</a>.'
            ),
        ),
        Region(id="explanation-1-inspect", tag="span", html="To inspect the response headers, run:"),
        Region(id="explanation-1-pre-curl", tag="pre", html="curl -sI http://localhost:8000/ | grep -i cache"),
        Region(id="explanation-1-pre-response", tag="pre", html="cache-control: public, max-age=300"),
        Region(
            id="explanation-2",
            tag="p",
            html="When people visit this site, the response always comes from the cached static render.",
        ),
        Region(
            id="explanation-3",
            tag="p",
            html=(
                "Unlike traditional static solutions, however, you can generate previews of edits that "
                "you can share with anyone you choose. Switch to edit mode, change the content, and "
                "share it to get a preview URL."
            ),
        ),
        Region(
            id="explanation-4",
            tag="p",
            html=(
                "Previews never touch the live page: a viewer sees the edited snapshot only while their "
                'preview session is active. <a href="/api/exit">Exit preview</a> to return to the live page.'
            ),
        ),
    ],
)
