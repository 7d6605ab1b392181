"""
Content loading: Markdown/HTML posts with YAML frontmatter into scorer input.
"""

import logging
import re
from collections import Counter
from pathlib import Path

import yaml

from config import STOP_WORDS
from extract import parse_fragment
from scoring import ContentInput

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = {".md", ".markdown"}

_STOP_WORDS = set(STOP_WORDS)


def parse_frontmatter(content: str) -> tuple[dict, str]:
    frontmatter = {}
    body = content
    fm_match = re.match(r'^---\s*\n(.*?)\n---\s*\n(.*)$', content, re.DOTALL)
    if fm_match:
        try:
            loaded = yaml.safe_load(fm_match.group(1)) or {}
            frontmatter = loaded if isinstance(loaded, dict) else {}
        except yaml.YAMLError as e:
            logger.warning("Malformed frontmatter ignored: %s", e)
            frontmatter = {}
        body = fm_match.group(2)
    return frontmatter, body


def inline_format(text: str) -> str:
    # Images: ![alt](src)
    text = re.sub(r'!\[([^\]]*)\]\(([^\)]+)\)', r'<img src="\2" alt="\1">', text)
    # Links: [text](url)
    text = re.sub(r'\[([^\]]+)\]\(([^\)]+)\)', r'<a href="\2">\1</a>', text)
    # Bold: **text**
    text = re.sub(r'\*\*([^*]+)\*\*', r'<strong>\1</strong>', text)
    # Italic: *text*
    text = re.sub(r'\*([^*]+)\*', r'<em>\1</em>', text)
    return text


def markdown_to_html(body: str) -> str:
    """Convert a markdown body to an HTML fragment.

    Handles headings, paragraphs, links, images, bold, italic and lists.
    H1 lines are dropped since the title stands in for them. Blocks are
    separated by blank lines so paragraph boundaries survive in the text.
    """
    lines = body.strip().split('\n')
    html_lines = []
    paragraph_lines = []
    list_tag = None

    def flush_paragraph():
        if paragraph_lines:
            html_lines.append(f'<p>{inline_format(" ".join(paragraph_lines))}</p>')
            html_lines.append('')
            paragraph_lines.clear()

    def close_list():
        nonlocal list_tag
        if list_tag:
            html_lines.append(f'</{list_tag}>')
            html_lines.append('')
            list_tag = None

    def open_list(tag):
        nonlocal list_tag
        if list_tag != tag:
            close_list()
            html_lines.append(f'<{tag}>')
            list_tag = tag

    for line in lines:
        stripped = line.strip()

        if not stripped:
            flush_paragraph()
            close_list()
            continue

        h_match = re.match(r'^(#{1,6})\s+(.+)$', stripped)
        if h_match:
            flush_paragraph()
            close_list()
            level = len(h_match.group(1))
            if level == 1:
                continue
            html_lines.append(f'<h{level}>{inline_format(h_match.group(2))}</h{level}>')
            html_lines.append('')
            continue

        ul_match = re.match(r'^[-*]\s+(.+)$', stripped)
        if ul_match:
            flush_paragraph()
            open_list('ul')
            html_lines.append(f'  <li>{inline_format(ul_match.group(1))}</li>')
            continue

        ol_match = re.match(r'^\d+\.\s+(.+)$', stripped)
        if ol_match:
            flush_paragraph()
            open_list('ol')
            html_lines.append(f'  <li>{inline_format(ol_match.group(1))}</li>')
            continue

        close_list()
        paragraph_lines.append(stripped)

    flush_paragraph()
    close_list()
    return '\n'.join(html_lines).strip()


def _frontmatter_keyphrase(frontmatter: dict) -> str:
    for key in ("keyphrase", "focus_keyphrase"):
        if frontmatter.get(key):
            return str(frontmatter[key])
    keywords = frontmatter.get("keywords")
    if isinstance(keywords, list) and keywords:
        return str(keywords[0])
    if isinstance(keywords, str):
        return keywords.split(",")[0].strip()
    return ""


def parse_content(raw: str, markdown: bool = True, keyphrase: str | None = None,
                  site_origin: str | None = None, source: str | None = None) -> ContentInput:
    """Build scorer input from a post with optional YAML frontmatter.

    Explicit ``keyphrase``/``site_origin`` arguments win over frontmatter.
    """
    frontmatter, body = parse_frontmatter(raw)
    return ContentInput(
        title=str(frontmatter.get("title") or ""),
        meta_description=str(frontmatter.get("description") or frontmatter.get("meta_description") or ""),
        body_html=markdown_to_html(body) if markdown else body,
        focus_keyphrase=keyphrase if keyphrase is not None else _frontmatter_keyphrase(frontmatter),
        site_origin=site_origin or frontmatter.get("site") or None,
        source=source,
    )


def load_content(path: str | Path, keyphrase: str | None = None,
                 site_origin: str | None = None) -> ContentInput:
    path = Path(path)
    content = parse_content(
        path.read_text(encoding="utf-8"),
        markdown=path.suffix.lower() in MARKDOWN_SUFFIXES,
        keyphrase=keyphrase,
        site_origin=site_origin,
        source=str(path),
    )
    logger.debug("Loaded %s (title=%r, keyphrase=%r)", path, content.title, content.focus_keyphrase)
    return content


def _plain_text(html: str) -> str:
    return parse_fragment(html).get_text(" ")


def generate_meta_description(content: str, max_length: int = 160) -> str:
    if not content:
        return ''
    cleaned = re.sub(r'\s+', ' ', _plain_text(content)).strip()
    if len(cleaned) <= max_length:
        return cleaned

    truncated = cleaned[:max_length]
    last_space = truncated.rfind(' ')
    if last_space > max_length * 0.8:
        return truncated[:last_space] + '...'
    return truncated + '...'


def extract_keywords(content: str, max_keywords: int = 10) -> list[str]:
    if not content:
        return []
    words = [
        w for w in re.split(r'\W+', _plain_text(content).lower())
        if len(w) > 2 and w not in _STOP_WORDS and re.fullmatch(r'[a-z]+', w)
    ]
    ranked = sorted(Counter(words).items(), key=lambda kv: -kv[1])
    return [word for word, _ in ranked[:max_keywords]]


def suggest_keyphrase(content: ContentInput) -> str:
    keywords = extract_keywords(content.body_html, max_keywords=1)
    return keywords[0] if keywords else ''
