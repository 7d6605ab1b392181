#!/usr/bin/env python3
"""
Score one post with the 16-point SEO analysis.

Usage:
    python analyze.py --input posts/react-portfolio.md
    python analyze.py --input page.html --keyphrase "react portfolio" --site https://example.com --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from config import configure_logging, load_config
from content import generate_meta_description, load_content, suggest_keyphrase
from scoring import score_content


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Yoast-style SEO analysis for a single post")
    parser.add_argument("--input", required=True, help="Markdown (with YAML frontmatter) or HTML file")
    parser.add_argument("--keyphrase", default=None, help="Focus keyphrase (overrides frontmatter)")
    parser.add_argument("--site", default=None, help="Site origin used to tell internal from external links")
    parser.add_argument("--config", default=None, help="YAML config file (default: seo.yaml if present)")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--output", default=None, help="Also write the JSON report to this path")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    cfg = load_config(args.config)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: {input_path} not found")
        sys.exit(1)

    content = load_content(input_path, keyphrase=args.keyphrase,
                           site_origin=args.site or cfg["site"]["origin"] or None)
    report = score_content(content)

    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps(report.to_dict(), indent=2))

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
        return 0

    print(f"\n  {input_path}")
    if not content.focus_keyphrase.strip():
        suggestion = suggest_keyphrase(content)
        if suggestion:
            print(f"  No focus keyphrase set. Most frequent keyword: '{suggestion}'")
    if not content.meta_description.strip():
        suggestion = generate_meta_description(content.body_html)
        if suggestion:
            print(f"  No meta description set. Suggested: {suggestion}")
    print(f"\n{report.summary()}\n")
    if args.output:
        print(f"  Report: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
