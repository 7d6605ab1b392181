#!/usr/bin/env python3
"""
Batch runner: score (or optimize) many posts at once.

Usage:
    python batch.py --input-dir content/blog
    python batch.py --files posts/a.md posts/b.html --site https://example.com
    python batch.py --input-dir content/blog --optimize --iterations 3
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from config import configure_logging, load_config
from content import load_content
from optimizer import run_optimization
from scoring import score_content

logger = logging.getLogger(__name__)


def collect_files(input_dir: str | None, files: list[str] | None, pattern: str) -> list[Path]:
    if files:
        return [Path(f) for f in files]
    if input_dir:
        return sorted(p for p in Path(input_dir).glob(pattern) if p.is_file())
    return []


def score_files(paths: list[Path], site_origin: str | None = None) -> list[dict]:
    results = []
    for path in paths:
        try:
            report = score_content(load_content(path, site_origin=site_origin))
            results.append({
                "file": str(path), "status": "success",
                "score": report.overall_score, "tier": report.tier,
                "pass_count": report.pass_count, "warning_count": report.warning_count,
                "fail_count": report.fail_count,
                "failing": [c.id for c in report.checks if c.status == "fail"],
            })
        except Exception as e:
            logger.error("Could not score %s: %s", path, e)
            results.append({"file": str(path), "status": "error", "error": str(e)})
    return results


def optimize_files(paths: list[Path], iterations: int | None, cfg: dict,
                   output_dir: str | None = None, client=None) -> list[dict]:
    results = []
    for i, path in enumerate(paths, 1):
        print(f"\n{'─'*70}")
        print(f"  [{i}/{len(paths)}] {path}")
        print(f"{'─'*70}")
        try:
            result = run_optimization(input_path=str(path), iterations=iterations, config=cfg,
                                      output_dir=output_dir, client=client, verbose=False)
            results.append({
                "file": str(path), "status": "success",
                "score": result["best_score"], "iterations": result["iterations_run"],
                "improvement": result["all_scores"][-1] - result["all_scores"][0] if len(result["all_scores"]) > 1 else 0,
                "output": result["final_path"],
            })
        except Exception as e:
            print(f"  ✗ Error: {e}")
            results.append({"file": str(path), "status": "error", "error": str(e)})
    return results


def print_results(results: list[dict]) -> None:
    print(f"\n\n{'='*70}")
    print(f"  BATCH RESULTS")
    print(f"{'='*70}\n")
    success = [r for r in results if r["status"] == "success"]
    if success:
        avg_score = sum(r["score"] for r in success) / len(success)
        print(f"  Successful: {len(success)}/{len(results)}")
        print(f"  Avg score:  {avg_score:.1f}/100\n")
        for r in sorted(success, key=lambda x: x["score"], reverse=True):
            bar_len = int(r["score"] / 2.5)
            bar = "█" * bar_len + "░" * (40 - bar_len)
            label = Path(r["file"]).name
            print(f"  {label:<30} {bar} {r['score']} {r.get('tier', '')}")
    for r in results:
        if r["status"] == "error":
            print(f"  ✗ {r['file']}: {r['error']}")


def write_report(results: list[dict], output_dir: str) -> Path:
    report_path = Path(output_dir) / f"batch_report_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(json.dumps(results, indent=2))
    return report_path


def main():
    parser = argparse.ArgumentParser(description="Batch SEO analysis of posts")
    parser.add_argument("--input-dir", help="Directory of posts")
    parser.add_argument("--files", nargs="+", help="Specific post files")
    parser.add_argument("--pattern", default="*.md", help="Glob inside --input-dir (default: *.md)")
    parser.add_argument("--site", default=None, help="Site origin for internal link detection")
    parser.add_argument("--output-dir", default=None, help="Where to write the batch report")
    parser.add_argument("--config", default=None, help="YAML config file")
    parser.add_argument("--optimize", action="store_true", help="Run the optimizer on each post")
    parser.add_argument("--iterations", type=int, default=None, help="Optimizer iterations per post")

    args = parser.parse_args()
    configure_logging(logging.WARNING)
    cfg = load_config(args.config)

    paths = collect_files(args.input_dir, args.files, args.pattern)
    if not paths:
        print("Specify --input-dir or --files (no posts found)")
        sys.exit(1)

    output_dir = args.output_dir or cfg["output"]["dir"]
    if args.site:
        cfg["site"]["origin"] = args.site

    print(f"\n{'='*70}")
    print(f"  BATCH SEO {'OPTIMIZATION' if args.optimize else 'ANALYSIS'}")
    print(f"  Posts: {len(paths)}")
    print(f"{'='*70}\n")

    if args.optimize:
        results = optimize_files(paths, args.iterations, cfg, output_dir=output_dir)
    else:
        results = score_files(paths, site_origin=cfg["site"]["origin"] or None)

    print_results(results)
    report_path = write_report(results, output_dir)
    print(f"\n  Report: {report_path}")
    print(f"{'='*70}\n")


if __name__ == "__main__":
    main()
