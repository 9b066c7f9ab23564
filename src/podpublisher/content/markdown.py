"""HTML to markdown conversion.

Turns a fetched page into markdown that keeps its heading structure, so
the model can tell the page's primary heading apart from body text.
"""

import re

from bs4 import BeautifulSoup, NavigableString, Tag

# Elements that never carry page content
SKIP_TAGS = {"script", "style", "noscript", "template", "svg", "iframe", "head", "nav", "footer"}

HEADING_TAGS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}

BLOCK_TAGS = {
    "p", "div", "section", "article", "main", "header", "aside", "figure",
    "figcaption", "table", "tr", "dl", "dt", "dd", "form", "body", "html",
}


def html_to_markdown(html: str) -> str:
    """Convert an HTML document to markdown.

    Args:
        html: Raw HTML

    Returns:
        Markdown text with collapsed blank lines
    """
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(sorted(SKIP_TAGS)):
        tag.decompose()

    markdown = _render_children(soup)
    return _tidy(markdown)


def _render_children(node: Tag) -> str:
    return "".join(_render(child) for child in node.children)


def _render(node: object) -> str:
    if isinstance(node, NavigableString):
        # Comments, doctypes and CDATA are NavigableString subclasses
        if type(node) is not NavigableString:
            return ""
        return re.sub(r"\s+", " ", str(node))

    if not isinstance(node, Tag):
        return ""

    name = node.name

    if name in HEADING_TAGS:
        text = _inline_text(node)
        return f"\n\n{'#' * HEADING_TAGS[name]} {text}\n\n" if text else ""

    if name == "br":
        return "\n"

    if name == "hr":
        return "\n\n---\n\n"

    if name == "pre":
        code = node.get_text()
        return f"\n\n```\n{code.strip(chr(10))}\n```\n\n"

    if name == "code":
        return f"`{node.get_text()}`"

    if name in ("strong", "b"):
        text = _inline_text(node)
        return f"**{text}**" if text else ""

    if name in ("em", "i"):
        text = _inline_text(node)
        return f"*{text}*" if text else ""

    if name == "a":
        text = _inline_text(node)
        href = node.get("href")
        if href and text:
            return f"[{text}]({href})"
        return text

    if name == "img":
        alt = node.get("alt") or ""
        return f"![{alt}]({node.get('src')})" if node.get("src") else ""

    if name in ("ul", "ol"):
        return _render_list(node, ordered=name == "ol")

    if name == "blockquote":
        inner = _tidy(_render_children(node))
        quoted = "\n".join(f"> {line}" if line else ">" for line in inner.splitlines())
        return f"\n\n{quoted}\n\n"

    if name in ("td", "th"):
        return f" {_inline_text(node)} |"

    if name in BLOCK_TAGS:
        return f"\n\n{_render_children(node)}\n\n"

    return _render_children(node)


def _render_list(node: Tag, ordered: bool) -> str:
    lines = []
    index = 1
    for item in node.find_all("li", recursive=False):
        text = _tidy(_render_children(item)).replace("\n", "\n  ")
        marker = f"{index}." if ordered else "-"
        lines.append(f"{marker} {text}")
        index += 1
    return "\n\n" + "\n".join(lines) + "\n\n"


def _inline_text(node: Tag) -> str:
    return re.sub(r"\s+", " ", _render_children(node)).strip()


def _tidy(markdown: str) -> str:
    lines = [line.strip() if not line.startswith("  ") else line.rstrip()
             for line in markdown.splitlines()]
    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()
