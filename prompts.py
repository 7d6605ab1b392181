"""
Prompt templates for post generation and report-driven improvement.
"""

from config import SCORING


def get_generation_prompt(keyphrase: str, topic: str) -> str:
    title = SCORING["seo_title"]
    meta = SCORING["meta_description"]
    return f"""You are an expert SEO content writer.

## ASSIGNMENT

Write a blog post about: **{topic}**

Focus keyphrase: **{keyphrase}**

## REQUIREMENTS

### Format

- Output a complete markdown file with YAML frontmatter
- Frontmatter MUST include: title ({title['min_length']}-{title['max_length']} characters, containing the keyphrase), description (meta description under {meta['max_length']} characters, containing the keyphrase), keyphrase

### Content

- At least {SCORING['text_length']['min_words']} words
- Use the keyphrase within the first {SCORING['first_paragraph']['word_window']} words
- Use H2/H3 subheadings, at least one containing the keyphrase
- Keep every paragraph under {SCORING['paragraph_length']['max_words']} words
- Keep sentences short: average at most {SCORING['readable_content']['max_avg_sentence_words']} words
- Use transition words ("however", "for example", "as a result") in at least {SCORING['transition_words']['pass_percentage']}% of sentences
- Prefer active voice
- Include at least one internal link (a relative path like /blog/...) and one external link to a credible source
- Include at least one image in markdown form with alt text containing the keyphrase

Write the complete post now. Output ONLY the markdown content starting with the --- frontmatter delimiter. No additional commentary."""


def get_improvement_prompt(
    content: str,
    report_dict: dict,
    keyphrase: str,
    iteration: int,
    markdown: bool = True,
) -> str:
    checks = report_dict["checks"]
    failing = [c for c in checks if c["status"] == "fail"]
    warnings = [c for c in checks if c["status"] == "warning"]
    passing = [c for c in checks if c["status"] == "pass"]

    def fmt(items):
        return "\n".join(f"- **{c['name']}**: {c['message']}" for c in items) or "- none"

    if markdown:
        fence, output_rule = "markdown", "Output ONLY the complete improved markdown post starting with the --- frontmatter delimiter."
    else:
        fence, output_rule = "html", "Output ONLY the complete improved HTML body, keeping any --- frontmatter block at the top."

    return f"""You are improving an SEO blog post with focus keyphrase **"{keyphrase}"**.

## CURRENT SCORE: {report_dict['overall_score']}/100 ({report_dict['tier']})

This is improvement iteration #{iteration}.

## FAILING CHECKS (fix these first):

{fmt(failing)}

## WARNINGS:

{fmt(warnings)}

## ALREADY PASSING (do not regress):

{chr(10).join(f"- {c['name']}" for c in passing) or "- none"}

## CURRENT POST:

```{fence}
{content}
```

## INSTRUCTIONS

Rewrite the post to fix the failing checks and then the warnings. Important rules:

- Keep everything that already passes
- Maintain natural, readable prose; don't sacrifice quality for metrics
- Preserve the YAML frontmatter format (title, description, keyphrase)

{output_rule} No additional commentary."""
