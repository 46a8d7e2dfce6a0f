"""Assemble a stored portfolio into one servable HTML page.

The generated markup normally carries empty `<style></style>` and
`<script></script>` placeholders; the stored css/js are injected there. Markup
without a document shell is wrapped in a minimal page.
"""
from __future__ import annotations

from typing import Any, Dict

from jinja2 import Environment, select_autoescape

PAGE_SHELL = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ title }}</title>
<style>{{ css | safe }}</style>
</head>
<body>
{{ html | safe }}
<script>{{ js | safe }}</script>
</body>
</html>"""


def _get_env() -> Environment:
    return Environment(autoescape=select_autoescape(["html", "xml"]))


def render_template_to_html(template_str: str, context: Dict[str, Any]) -> str:
    """Render a Jinja2 template string with provided context."""
    env = _get_env()
    template = env.from_string(template_str)
    return template.render(context)


def _inject(html: str, placeholder: str, closing_tag: str, fragment: str) -> str:
    if placeholder in html:
        return html.replace(placeholder, fragment, 1)
    lowered = html.lower()
    index = lowered.rfind(closing_tag)
    if index == -1:
        return html
    return html[:index] + fragment + html[index:]


def render_portfolio_page(title: str, html: str, css: str, js: str) -> str:
    if "<html" not in html.lower():
        return render_template_to_html(PAGE_SHELL, {"title": title, "html": html, "css": css, "js": js})

    page = _inject(html, "<style></style>", "</head>", f"<style>{css}</style>")
    page = _inject(page, "<script></script>", "</body>", f"<script>{js}</script>")
    return page
