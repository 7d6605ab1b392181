"""
Configuration for the SEO content scorer and optimizer
"""

import logging
import os
from pathlib import Path

import yaml

SITE = {
    "origin": "",
}

SCORING = {
    "seo_title": {
        "min_length": 50,
        "max_length": 60,
    },
    "meta_description": {
        "max_length": 160,
    },
    "focus_keyphrase": {
        "max_words": 4,
    },
    "first_paragraph": {
        "word_window": 100,
    },
    "text_length": {
        "min_words": 300,
    },
    "paragraph_length": {
        "max_words": 150,
        "max_long_ratio": 0.5,
    },
    "subheadings": {
        "min_words_required": 300,
    },
    "readable_content": {
        "max_avg_sentence_words": 20,
        "long_sentence_words": 20,
        "max_long_sentence_ratio": 0.25,
    },
    "transition_words": {
        "pass_percentage": 30,
        "warning_percentage": 20,
    },
    "passive_voice": {
        "pass_percentage": 10,
        "warning_percentage": 20,
    },
}

TOTAL_CHECKS = 16

# evaluated in order, first match wins
TIERS = [
    {"name": "excellent", "min_score": 80, "min_passes": 12},
    {"name": "good", "min_score": 60, "min_passes": 8},
    {"name": "needs-improvement", "min_score": 40, "min_passes": 0},
]
FALLBACK_TIER = "poor"

TRANSITION_WORDS = [
    "however", "moreover", "furthermore", "additionally", "consequently",
    "therefore", "meanwhile", "subsequently", "nevertheless", "nonetheless",
    "thus", "hence", "accordingly", "likewise", "similarly", "conversely",
    "alternatively", "specifically", "particularly", "especially", "notably",
    "significantly", "importantly", "ultimately", "finally", "initially",
    "previously", "currently", "recently", "frequently", "occasionally",
    "simultaneously", "immediately", "eventually", "gradually", "suddenly",
    "certainly", "obviously", "clearly", "definitely", "probably", "possibly",
    "perhaps", "maybe", "indeed", "actually", "essentially", "basically",
    "generally", "typically", "usually", "often", "sometimes", "rarely",
    "never", "always", "still", "yet", "already", "just", "only", "even",
    "also", "too", "as well", "in addition", "on the other hand",
    "in contrast", "in comparison", "for example", "for instance", "such as",
    "including", "excluding", "except", "besides", "apart from", "due to",
    "because of", "as a result", "in conclusion", "to sum up", "in summary",
    "overall", "in general",
]

PASSIVE_AUXILIARIES = ["was", "were", "is", "are", "been", "being"]

STOP_WORDS = [
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "is", "are", "was", "were", "be", "been", "have",
    "has", "had", "do", "does", "did", "will", "would", "could", "should",
    "may", "might", "must", "can", "this", "that", "these", "those", "i",
    "you", "he", "she", "it", "we", "they", "me", "him", "her", "us", "them",
]

ITERATIONS = {
    "default_count": 5,
    "max_count": 15,
    "plateau_patience": 2,
}

OPTIMIZER = {
    "model": "claude-sonnet-4-5-20250929",
    "max_tokens": 8192,
}

OUTPUT = {
    "dir": "output",
    "save_all_versions": True,
}

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging if it has not been configured yet."""
    if logging.getLogger().handlers:
        return
    logging.basicConfig(level=level, format=LOG_FORMAT)


def deep_merge(base: dict, update: dict) -> dict:
    result = dict(base)
    for key, value in update.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: str | None = None) -> dict:
    """Return the effective configuration.

    Defaults come from this module, an optional YAML file is merged on top
    (``seo.yaml`` in the working directory when no path is given), and a
    few environment variables win over both. Scoring thresholds are not
    overridable; they are part of the scoring rules.
    """
    cfg = {
        "site": dict(SITE),
        "iterations": dict(ITERATIONS),
        "optimizer": dict(OPTIMIZER),
        "output": dict(OUTPUT),
    }

    cfg_path = Path(path) if path else Path("seo.yaml")
    if cfg_path.exists():
        try:
            loaded = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            logging.getLogger(__name__).warning("Ignoring malformed config %s: %s", cfg_path, e)
            loaded = {}
        if isinstance(loaded, dict):
            cfg = deep_merge(cfg, loaded)

    if os.getenv("SEO_SITE_ORIGIN"):
        cfg["site"]["origin"] = os.environ["SEO_SITE_ORIGIN"].rstrip("/")
    if os.getenv("SEO_OUTPUT_DIR"):
        cfg["output"]["dir"] = os.environ["SEO_OUTPUT_DIR"]
    if os.getenv("SEO_MODEL"):
        cfg["optimizer"]["model"] = os.environ["SEO_MODEL"]
    if os.getenv("SEO_MAX_ITERATIONS"):
        cfg["iterations"]["max_count"] = int(os.environ["SEO_MAX_ITERATIONS"])

    return cfg
