#!/usr/bin/env python3
"""
SEO Post Optimizer: rescoring rewrite loop driven by the 16-point analysis.

Usage:
    python optimizer.py --input posts/react-portfolio.md
    python optimizer.py --keyphrase "react portfolio" --topic "Building a React portfolio" --iterations 8
"""

import argparse
import json
import logging
import re
import sys
import time
from datetime import datetime
from pathlib import Path

import anthropic

from config import configure_logging, load_config
from content import MARKDOWN_SUFFIXES, parse_content, suggest_keyphrase
from prompts import get_generation_prompt, get_improvement_prompt
from scoring import score_content

logger = logging.getLogger(__name__)


def call_claude(client: anthropic.Anthropic, prompt: str, model: str, max_tokens: int = 8192) -> str:
    message = client.messages.create(
        model=model,
        max_tokens=max_tokens,
        messages=[{"role": "user", "content": prompt}],
    )
    return message.content[0].text


def extract_markdown(response: str, fence: str = "```markdown") -> str:
    if fence in response:
        start = response.index(fence) + len(fence)
        end = response.rindex("```")
        return response[start:end].strip()
    elif "```" in response and response.strip().startswith("```"):
        start = response.index("\n") + 1
        end = response.rindex("```")
        return response[start:end].strip()
    return response.strip()


def slugify(text: str) -> str:
    text = text.lower().strip()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    text = re.sub(r'-+', '-', text)
    return text.strip('-')[:60] or "post"


def run_optimization(
    input_path: str | None = None,
    keyphrase: str | None = None,
    topic: str | None = None,
    iterations: int | None = None,
    model: str | None = None,
    output_dir: str | None = None,
    site_origin: str | None = None,
    client=None,
    config: dict | None = None,
    verbose: bool = True,
) -> dict:
    if not input_path and not keyphrase:
        raise ValueError("Provide an input post or a keyphrase to generate one from")

    cfg = config or load_config()
    iter_cfg = cfg["iterations"]
    model = model or cfg["optimizer"]["model"]
    max_tokens = cfg["optimizer"]["max_tokens"]
    site_origin = site_origin or cfg["site"]["origin"] or None
    if iterations is None:
        iterations = iter_cfg["default_count"]
    iterations = min(iterations, iter_cfg["max_count"])

    if client is None:
        client = anthropic.Anthropic()

    # ── ITERATION 0: load or generate ────────────────────────────────
    if input_path:
        source = Path(input_path)
        content = source.read_text(encoding="utf-8")
        markdown = source.suffix.lower() in MARKDOWN_SUFFIXES
        parsed = parse_content(content, markdown=markdown,
                               keyphrase=keyphrase, site_origin=site_origin)
        if not parsed.focus_keyphrase.strip():
            parsed.focus_keyphrase = suggest_keyphrase(parsed)
            logger.info("No focus keyphrase in %s, using %r", source, parsed.focus_keyphrase)
        keyphrase = parsed.focus_keyphrase
        slug = slugify(source.stem)
        gen_time = 0.0
    else:
        topic = topic or keyphrase
        start_time = time.time()
        content = extract_markdown(call_claude(client, get_generation_prompt(keyphrase, topic), model, max_tokens))
        gen_time = time.time() - start_time
        parsed = parse_content(content, keyphrase=keyphrase, site_origin=site_origin)
        slug = slugify(keyphrase)
        markdown = True

    run_dir = Path(output_dir or cfg["output"]["dir"]) / slug
    run_dir.mkdir(parents=True, exist_ok=True)
    save_versions = cfg["output"]["save_all_versions"]
    ext = ".md" if markdown else ".html"

    report = score_content(parsed)
    logger.info("v0 scored %d/100 for keyphrase %r", report.overall_score, keyphrase)

    if verbose:
        print(f"\n{'='*70}")
        print(f"  SEO POST OPTIMIZER")
        print(f"{'='*70}")
        print(f"  Keyphrase:    {keyphrase}")
        print(f"  Model:        {model}")
        print(f"  Iterations:   {iterations}")
        print(f"  Output:       {run_dir}")
        print(f"{'='*70}\n")
        print(f"{report.summary()}\n")

    if save_versions:
        (run_dir / f"v0{ext}").write_text(content)
        (run_dir / "v0_score.json").write_text(json.dumps(report.to_dict(), indent=2))

    history = [{
        "iteration": 0, "score": report.overall_score, "tier": report.tier,
        "generation_time": gen_time, "pass_count": report.pass_count,
    }]

    best_content = content
    best_score = report.overall_score
    best_iteration = 0
    plateau_count = 0

    # ── ITERATIONS 1-N ───────────────────────────────────────────────
    for i in range(1, iterations + 1):
        if verbose:
            print(f"▶ Improvement iteration {i}/{iterations}...")

        prompt = get_improvement_prompt(content=content, report_dict=report.to_dict(),
                                        keyphrase=keyphrase, iteration=i, markdown=markdown)
        start_time = time.time()
        new_content = extract_markdown(call_claude(client, prompt, model, max_tokens),
                                       fence="```markdown" if markdown else "```html")
        iter_time = time.time() - start_time

        new_report = score_content(parse_content(new_content, markdown=markdown,
                                                 keyphrase=keyphrase or None, site_origin=site_origin))
        improvement = new_report.overall_score - report.overall_score
        logger.info("v%d scored %d/100 (%+d)", i, new_report.overall_score, improvement)

        if verbose:
            print(f"  Completed in {iter_time:.1f}s")
            print(f"\n{new_report.summary()}")
            delta = "↑" if improvement > 0 else "↓" if improvement < 0 else "→"
            print(f"\n  {delta} Change from last iteration: {improvement:+d} points\n")

        if save_versions:
            (run_dir / f"v{i}{ext}").write_text(new_content)
            (run_dir / f"v{i}_score.json").write_text(json.dumps(new_report.to_dict(), indent=2))

        history.append({
            "iteration": i, "score": new_report.overall_score, "tier": new_report.tier,
            "generation_time": iter_time, "pass_count": new_report.pass_count,
            "improvement": improvement,
        })

        if new_report.overall_score > best_score:
            best_content = new_content
            best_score = new_report.overall_score
            best_iteration = i
            plateau_count = 0
        else:
            plateau_count += 1

        content = new_content
        report = new_report

        if plateau_count >= iter_cfg["plateau_patience"]:
            if verbose:
                print(f"  ⚠ Plateau detected, no improvement for {plateau_count} iterations. Stopping.\n")
            break

    # ── FINALIZE ─────────────────────────────────────────────────────
    final_path = run_dir / f"FINAL{ext}"
    final_path.write_text(best_content)

    summary = {
        "keyphrase": keyphrase, "model": model, "source": input_path,
        "best_score": best_score, "best_iteration": best_iteration,
        "total_iterations": len(history) - 1, "history": history,
        "timestamp": datetime.now().isoformat(),
    }
    (run_dir / "run_summary.json").write_text(json.dumps(summary, indent=2))

    if verbose:
        print(f"\n{'='*70}")
        print(f"  OPTIMIZATION COMPLETE")
        print(f"{'='*70}")
        print(f"  Best score:     {best_score}/100")
        print(f"  Best iteration: v{best_iteration}")
        print(f"  Improvement:    {best_score - history[0]['score']:+d} points from v0")
        print(f"  Output:         {final_path}")
        print()
        print("  SCORE PROGRESSION:")
        for h in history:
            bar_len = int(h["score"] / 2.5)
            bar = "█" * bar_len + "░" * (40 - bar_len)
            delta = f" ({h['improvement']:+d})" if "improvement" in h else ""
            print(f"    v{h['iteration']}: {bar} {h['score']}{delta}")
        print(f"{'='*70}\n")

    return {
        "best_content": best_content, "best_score": best_score,
        "best_iteration": best_iteration,
        "all_scores": [h["score"] for h in history],
        "iterations_run": len(history) - 1,
        "improvement_history": history,
        "output_dir": str(run_dir), "final_path": str(final_path),
    }


def main():
    parser = argparse.ArgumentParser(description="Iteratively improve a post against the 16-point SEO analysis")
    parser.add_argument("--input", default=None, help="Existing post to improve (markdown or HTML)")
    parser.add_argument("--keyphrase", default=None, help="Focus keyphrase (required without --input)")
    parser.add_argument("--topic", default=None, help="Topic for a newly generated post")
    parser.add_argument("--iterations", type=int, default=None, help="Improvement iterations")
    parser.add_argument("--model", default=None, help="Anthropic model")
    parser.add_argument("--site", default=None, help="Site origin for internal link detection")
    parser.add_argument("--output-dir", default=None, help="Output directory")
    parser.add_argument("--config", default=None, help="YAML config file")
    parser.add_argument("--quiet", action="store_true", help="Suppress verbose output")

    args = parser.parse_args()
    configure_logging(logging.WARNING if args.quiet else logging.INFO)

    if not args.input and not args.keyphrase:
        print("Error: specify --input or --keyphrase")
        sys.exit(1)
    if args.input and not Path(args.input).exists():
        print(f"Error: {args.input} not found")
        sys.exit(1)

    run_optimization(
        input_path=args.input, keyphrase=args.keyphrase, topic=args.topic,
        iterations=args.iterations, model=args.model, output_dir=args.output_dir,
        site_origin=args.site, config=load_config(args.config), verbose=not args.quiet,
    )


if __name__ == "__main__":
    main()
