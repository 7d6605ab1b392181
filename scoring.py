"""
SEO Scoring Engine: the 16-point content analysis.

Every check returns a pass (1), warning (0.5) or fail (0) signal. The
overall score is the weight total as a percentage of the 16 possible
points, and the tier combines that score with the number of passes.
"""

import logging
import math
import re
from dataclasses import dataclass, field, asdict

from config import (
    FALLBACK_TIER,
    PASSIVE_AUXILIARIES,
    SCORING,
    TIERS,
    TOTAL_CHECKS,
    TRANSITION_WORDS,
)
from extract import (
    extract_headings,
    extract_images,
    extract_links,
    extract_text,
    has_alt_text,
)

logger = logging.getLogger(__name__)

PASS = "pass"
WARNING = "warning"
FAIL = "fail"

WEIGHTS = {PASS: 1.0, WARNING: 0.5, FAIL: 0.0}

TRANSITION_RE = re.compile(
    r"\b(" + "|".join(re.escape(w) for w in TRANSITION_WORDS) + r")\b", re.IGNORECASE
)
PASSIVE_RE = re.compile(r"\b(" + "|".join(PASSIVE_AUXILIARIES) + r")\s+\w+ed\b", re.IGNORECASE)
SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")


@dataclass
class ContentInput:
    title: str = ""
    meta_description: str = ""
    body_html: str = ""
    focus_keyphrase: str = ""
    site_origin: str | None = None
    source: str | None = None


@dataclass
class Check:
    id: str
    name: str
    status: str
    message: str
    weight: float


@dataclass
class ScoreReport:
    overall_score: int
    tier: str
    checks: list[Check] = field(default_factory=list)
    pass_count: int = 0
    warning_count: int = 0
    fail_count: int = 0

    def to_dict(self) -> dict:
        return {
            "overall_score": self.overall_score,
            "tier": self.tier,
            "pass_count": self.pass_count,
            "warning_count": self.warning_count,
            "fail_count": self.fail_count,
            "checks": [asdict(c) for c in self.checks],
        }

    def summary(self) -> str:
        bar_len = self.overall_score // 5
        bar = "█" * bar_len + "░" * (20 - bar_len)
        lines = [
            f"═══ SEO SCORE: {self.overall_score}/100 {bar} {self.tier.upper()} ═══",
            f"  ✓ {self.pass_count} passed   ! {self.warning_count} warnings   ✗ {self.fail_count} failed",
            "",
        ]
        markers = {PASS: "✓", WARNING: "!", FAIL: "✗"}
        for c in self.checks:
            lines.append(f"  {markers[c.status]} {c.name:<32} {c.message}")
        return "\n".join(lines)


@dataclass
class ParsedContent:
    title: str
    keyphrase: str
    description_text: str
    word_count: int
    first_words: str
    sentences: list[str]
    paragraphs: list[str]
    subheadings: list[str]
    internal_links: list[str]
    external_links: list[str]
    images: list[tuple[str, str | None]]
    all_text: str


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def contains_keyphrase(text: str, keyphrase: str) -> bool:
    if not keyphrase.strip():
        return False
    return keyphrase.lower() in (text or "").lower()


def prepare(title: str, meta_description: str, body_html: str, keyphrase: str,
            site_origin: str | None = None) -> ParsedContent:
    body_text = extract_text(body_html)
    description_text = extract_text(meta_description)
    all_text = f"{body_text} {description_text}"
    words = f"{title} {all_text}".split()

    body_headings = extract_headings(body_html, title)
    desc_headings = extract_headings(meta_description)
    subheadings = body_headings["h2"] + desc_headings["h2"] + body_headings["h3"] + desc_headings["h3"]

    body_links = extract_links(body_html, site_origin)
    desc_links = extract_links(meta_description, site_origin)

    window = SCORING["first_paragraph"]["word_window"]
    return ParsedContent(
        title=title,
        keyphrase=keyphrase,
        description_text=description_text,
        word_count=len(words),
        first_words=" ".join(all_text.split()[:window]),
        sentences=[s for s in SENTENCE_SPLIT_RE.split(all_text) if s.strip()],
        paragraphs=[p for p in PARAGRAPH_SPLIT_RE.split(all_text) if p.strip()],
        subheadings=subheadings,
        internal_links=body_links["internal"] + desc_links["internal"],
        external_links=body_links["external"] + desc_links["external"],
        images=extract_images(body_html) + extract_images(meta_description),
        all_text=all_text,
    )


def _check(id: str, name: str, status: str, message: str) -> Check:
    return Check(id=id, name=name, status=status, message=message, weight=WEIGHTS[status])


def check_seo_title(p: ParsedContent) -> Check:
    cfg = SCORING["seo_title"]
    name = "SEO Title"
    if not p.title.strip():
        return _check("seo-title", name, FAIL,
                      f"No SEO title. Write a {cfg['min_length']}-{cfg['max_length']} character title with the focus keyphrase.")
    length = len(p.title)
    in_range = cfg["min_length"] <= length <= cfg["max_length"]
    has_kp = contains_keyphrase(p.title, p.keyphrase)
    if in_range and has_kp:
        return _check("seo-title", name, PASS, f"Title is {length} characters and includes the focus keyphrase.")
    if has_kp:
        return _check("seo-title", name, WARNING,
                      f"Title includes the focus keyphrase but is {length} characters. Aim for {cfg['min_length']}-{cfg['max_length']}.")
    if in_range:
        return _check("seo-title", name, WARNING,
                      f"Title length is good ({length} characters) but the focus keyphrase is missing.")
    return _check("seo-title", name, FAIL, f"Title is {length} characters and missing the focus keyphrase.")


def check_meta_description(p: ParsedContent) -> Check:
    cfg = SCORING["meta_description"]
    name = "Meta Description"
    desc = p.description_text
    if not desc.strip():
        return _check("meta-description", name, FAIL,
                      f"No meta description. Write one under {cfg['max_length']} characters with the focus keyphrase.")
    length = len(desc)
    fits = length <= cfg["max_length"]
    has_kp = contains_keyphrase(desc, p.keyphrase)
    if fits and has_kp:
        return _check("meta-description", name, PASS,
                      f"Meta description is {length} characters and includes the focus keyphrase.")
    if has_kp:
        return _check("meta-description", name, WARNING,
                      f"Meta description includes the focus keyphrase but is {length} characters. Keep it under {cfg['max_length']}.")
    if fits:
        return _check("meta-description", name, WARNING,
                      f"Meta description length is good ({length} characters) but the focus keyphrase is missing.")
    return _check("meta-description", name, FAIL,
                  f"Meta description is {length} characters and missing the focus keyphrase.")


def check_focus_keyphrase(p: ParsedContent) -> Check:
    max_words = SCORING["focus_keyphrase"]["max_words"]
    name = "Focus Keyphrase"
    if not p.keyphrase.strip():
        return _check("focus-keyphrase", name, FAIL, "No focus keyphrase set.")
    count = len(p.keyphrase.split())
    if count <= max_words:
        return _check("focus-keyphrase", name, PASS, f'Focus keyphrase "{p.keyphrase}" is well-formed ({count} words).')
    return _check("focus-keyphrase", name, WARNING,
                  f'Focus keyphrase "{p.keyphrase}" has {count} words. Use 1-{max_words} words.')


def _presence_check(id: str, name: str, where: str, text: str, p: ParsedContent) -> Check:
    if not p.keyphrase.strip():
        return _check(id, name, FAIL, f"Set a focus keyphrase to check the {where}.")
    if contains_keyphrase(text, p.keyphrase):
        return _check(id, name, PASS, f"Focus keyphrase appears in the {where}.")
    return _check(id, name, FAIL, f'Focus keyphrase "{p.keyphrase}" does not appear in the {where}.')


def check_keyword_in_title(p: ParsedContent) -> Check:
    return _presence_check("keyword-in-title", "Keyword in Title", "title", p.title, p)


def check_keyword_in_meta_description(p: ParsedContent) -> Check:
    return _presence_check("keyword-in-meta-description", "Keyword in Meta Description",
                           "meta description", p.description_text, p)


def check_keyword_in_first_paragraph(p: ParsedContent) -> Check:
    window = SCORING["first_paragraph"]["word_window"]
    return _presence_check("keyword-in-first-paragraph", "Keyword in First Paragraph",
                           f"first {window} words", p.first_words, p)


def check_image_alt_text(p: ParsedContent) -> Check:
    name = "Image Alt Text"
    total = len(p.images)
    if total == 0:
        return _check("image-alt-text", name, WARNING, "No images found. Add relevant images with descriptive alt text.")
    missing = sum(1 for _, alt in p.images if not has_alt_text(alt))
    if missing == 0:
        return _check("image-alt-text", name, PASS, f"All {total} image(s) have alt text.")
    return _check("image-alt-text", name, FAIL, f"{missing} of {total} image(s) are missing alt text.")


def check_internal_links(p: ParsedContent) -> Check:
    count = len(p.internal_links)
    if count == 0:
        return _check("internal-links", "Internal Links", FAIL, "No internal links. Link to at least one related page on the site.")
    return _check("internal-links", "Internal Links", PASS, f"Found {count} internal link(s).")


def check_external_links(p: ParsedContent) -> Check:
    count = len(p.external_links)
    if count == 0:
        return _check("external-links", "External Links", FAIL, "No external links. Link to at least one credible outside source.")
    return _check("external-links", "External Links", PASS, f"Found {count} external link(s).")


def check_text_length(p: ParsedContent) -> Check:
    min_words = SCORING["text_length"]["min_words"]
    if p.word_count < min_words:
        return _check("text-length", "Text Length", FAIL,
                      f"Content is {p.word_count} words. Write at least {min_words}.")
    return _check("text-length", "Text Length", PASS, f"Content is {p.word_count} words.")


def check_paragraph_length(p: ParsedContent) -> Check:
    cfg = SCORING["paragraph_length"]
    name = "Paragraph Length"
    total = len(p.paragraphs)
    if total == 0:
        return _check("paragraph-length", name, WARNING, "No paragraph structure detected.")
    long_count = sum(1 for para in p.paragraphs if len(para.split()) > cfg["max_words"])
    if long_count == 0:
        return _check("paragraph-length", name, PASS, f"All {total} paragraph(s) are under {cfg['max_words']} words.")
    if long_count <= total * cfg["max_long_ratio"]:
        return _check("paragraph-length", name, WARNING,
                      f"{long_count} of {total} paragraph(s) are over {cfg['max_words']} words.")
    return _check("paragraph-length", name, FAIL,
                  f"{long_count} of {total} paragraph(s) are over {cfg['max_words']} words. Break them up.")


def check_subheadings(p: ParsedContent) -> Check:
    min_words = SCORING["subheadings"]["min_words_required"]
    name = "Subheadings (H2, H3)"
    total = len(p.subheadings)
    if p.word_count < min_words:
        return _check("subheadings", name, PASS, f"Content is short ({p.word_count} words); subheadings are optional.")
    if total == 0:
        return _check("subheadings", name, FAIL, f"No subheadings in {p.word_count} words. Add H2/H3 headings.")
    if not p.keyphrase.strip():
        return _check("subheadings", name, WARNING,
                      f"Found {total} subheading(s). Set a focus keyphrase to check them.")
    if any(contains_keyphrase(h, p.keyphrase) for h in p.subheadings):
        return _check("subheadings", name, PASS, f"Found {total} subheading(s), at least one with the focus keyphrase.")
    return _check("subheadings", name, WARNING,
                  f"Found {total} subheading(s) but none contain the focus keyphrase.")


def check_readable_content(p: ParsedContent) -> Check:
    cfg = SCORING["readable_content"]
    name = "Readable Content"
    total = len(p.sentences)
    if total == 0:
        return _check("readable-content", name, FAIL, "No sentences detected.")
    avg = p.word_count / total
    long_count = sum(1 for s in p.sentences if len(s.split()) > cfg["long_sentence_words"])
    if avg <= cfg["max_avg_sentence_words"] and long_count <= total * cfg["max_long_sentence_ratio"]:
        return _check("readable-content", name, PASS, f"Average sentence is {round_half_up(avg)} words.")
    return _check("readable-content", name, WARNING,
                  f"Average sentence is {round_half_up(avg)} words; {long_count} of {total} sentence(s) "
                  f"are over {cfg['long_sentence_words']} words.")


def _per_sentence_percentage(matches: int, p: ParsedContent) -> float:
    return matches / len(p.sentences) * 100 if p.sentences else 0.0


def check_transition_words(p: ParsedContent) -> Check:
    cfg = SCORING["transition_words"]
    name = "Transition Words"
    pct = _per_sentence_percentage(len(TRANSITION_RE.findall(p.all_text)), p)
    shown = round_half_up(pct)
    if pct >= cfg["pass_percentage"]:
        return _check("transition-words", name, PASS, f"Transition words at {shown}% of sentences.")
    if pct >= cfg["warning_percentage"]:
        return _check("transition-words", name, WARNING,
                      f"Transition words at {shown}% of sentences. Aim for {cfg['pass_percentage']}%.")
    return _check("transition-words", name, FAIL,
                  f'Transition words at {shown}% of sentences. Use words like "however" or "therefore".')


def check_passive_voice(p: ParsedContent) -> Check:
    cfg = SCORING["passive_voice"]
    name = "Passive Voice"
    pct = _per_sentence_percentage(len(PASSIVE_RE.findall(p.all_text)), p)
    shown = round_half_up(pct)
    if pct <= cfg["pass_percentage"]:
        return _check("passive-voice", name, PASS, f"Passive voice at {shown}% (at most {cfg['pass_percentage']}%).")
    if pct <= cfg["warning_percentage"]:
        return _check("passive-voice", name, WARNING,
                      f"Passive voice at {shown}%. Aim for {cfg['pass_percentage']}% or less.")
    return _check("passive-voice", name, FAIL, f"Passive voice at {shown}%. Rewrite sentences in active voice.")


def check_keyphrase_in_alt(p: ParsedContent) -> Check:
    name = "Keyphrase in Image Alt Text"
    total = len(p.images)
    if total == 0:
        return _check("keyphrase-in-alt", name, WARNING, "No images found. Add an image whose alt text uses the keyphrase.")
    if not p.keyphrase.strip():
        return _check("keyphrase-in-alt", name, WARNING, f"Found {total} image(s). Set a focus keyphrase to check alt text.")
    if any(contains_keyphrase(alt or "", p.keyphrase) for _, alt in p.images):
        return _check("keyphrase-in-alt", name, PASS, "Focus keyphrase appears in image alt text.")
    return _check("keyphrase-in-alt", name, FAIL, f'No image alt text contains "{p.keyphrase}".')


CHECKS = [
    check_seo_title,
    check_meta_description,
    check_focus_keyphrase,
    check_keyword_in_title,
    check_keyword_in_meta_description,
    check_keyword_in_first_paragraph,
    check_image_alt_text,
    check_internal_links,
    check_external_links,
    check_text_length,
    check_paragraph_length,
    check_subheadings,
    check_readable_content,
    check_transition_words,
    check_passive_voice,
    check_keyphrase_in_alt,
]


def classify(score: int, pass_count: int) -> str:
    for tier in TIERS:
        if score >= tier["min_score"] and pass_count >= tier["min_passes"]:
            return tier["name"]
    return FALLBACK_TIER


def build_report(checks: list[Check]) -> ScoreReport:
    total = sum(c.weight for c in checks)
    score = round_half_up(total / TOTAL_CHECKS * 100)
    passes = sum(1 for c in checks if c.status == PASS)
    return ScoreReport(
        overall_score=score,
        tier=classify(score, passes),
        checks=checks,
        pass_count=passes,
        warning_count=sum(1 for c in checks if c.status == WARNING),
        fail_count=sum(1 for c in checks if c.status == FAIL),
    )


def analyze_content(title: str = "", meta_description: str = "", body_html: str = "",
                    focus_keyphrase: str = "", site_origin: str | None = None) -> ScoreReport:
    p = prepare(title or "", meta_description or "", body_html or "", focus_keyphrase or "", site_origin)
    report = build_report([check(p) for check in CHECKS])
    logger.debug("Scored %d words: %d/100 (%s)", p.word_count, report.overall_score, report.tier)
    return report


def score_content(content: ContentInput) -> ScoreReport:
    return analyze_content(
        title=content.title,
        meta_description=content.meta_description,
        body_html=content.body_html,
        focus_keyphrase=content.focus_keyphrase,
        site_origin=content.site_origin,
    )
