"""
Checker configuration management.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Any

from ..errors import ConfigurationError
from ..matching.metrics import Metric


def _optional_float(value: str | None) -> float | None:
    return float(value) if value else None


def _optional_int(value: str | None) -> int | None:
    return int(value) if value else None


def add_args(parser: argparse.ArgumentParser) -> None:
    """
    Add checker arguments to the parser.

    Arguments can be overridden by environment variables.
    """

    parser.add_argument(
        "--untrusted.dir",
        dest="untrusted_dir",
        type=str,
        help="Directory of texts to screen for plagiarism.",
        default=os.environ.get("UNTRUSTED_DIR", ""),
    )

    parser.add_argument(
        "--trusted.dir",
        dest="trusted_dir",
        type=str,
        help="Directory of reference texts. Omit to only compare untrusted texts.",
        default=os.environ.get("TRUSTED_DIR", ""),
    )

    parser.add_argument(
        "--file_glob",
        type=str,
        help="Glob pattern selecting text files inside each directory.",
        default=os.environ.get("FILE_GLOB", "*.txt"),
    )

    parser.add_argument(
        "--ngram.n",
        dest="ngram_n",
        type=int,
        help="Fragment length in words.",
        default=int(os.environ.get("NGRAM_N", "6")),
    )

    parser.add_argument(
        "--metric.name",
        dest="metric_name",
        type=str,
        choices=[m.value for m in Metric],
        help="Fragment comparison rule.",
        default=os.environ.get("METRIC", Metric.EQUAL.value),
    )

    parser.add_argument(
        "--metric.cutoff",
        dest="metric_cutoff",
        type=int,
        help="Metric cutoff: max edit distance, or min overlap ratio (0-100).",
        default=int(os.environ.get("METRIC_CUTOFF", "0")),
    )

    parser.add_argument(
        "--output",
        type=str,
        help="Path of the JSON report. '-' writes to stdout.",
        default=os.environ.get("OUTPUT_PATH", "-"),
    )

    parser.add_argument(
        "--include_text",
        action="store_true",
        help="Include normalized text of every owner in the report.",
        default=os.environ.get("INCLUDE_TEXT", "false").lower() == "true",
    )

    parser.add_argument(
        "--prefer_trusted_text",
        action="store_true",
        help="Report the trusted text when an owner id is in both directories.",
        default=os.environ.get("PREFER_TRUSTED_TEXT", "false").lower() == "true",
    )

    parser.add_argument(
        "--max_concurrent",
        type=int,
        help="Owner pairs compared at the same time. 1 = sequential.",
        default=int(os.environ.get("MAX_CONCURRENT", "1")),
    )

    parser.add_argument(
        "--deadline_seconds",
        type=float,
        help="Wall-clock limit per comparison run. Partial results are reported.",
        default=_optional_float(os.environ.get("DEADLINE_SECONDS")),
    )

    parser.add_argument(
        "--max_comparisons",
        type=int,
        help="Limit on fragment comparisons per run. Partial results are reported.",
        default=_optional_int(os.environ.get("MAX_COMPARISONS")),
    )

    parser.add_argument(
        "--log_level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level.",
        default=os.environ.get("LOG_LEVEL", "INFO"),
    )


def get_config(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse arguments and return configuration."""
    parser = argparse.ArgumentParser(
        description="N-gram Plagiarism Checker",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    add_args(parser)
    config = parser.parse_args(argv)

    # Convert paths to Path objects
    config.untrusted_dir = Path(config.untrusted_dir) if config.untrusted_dir else None
    config.trusted_dir = Path(config.trusted_dir) if config.trusted_dir else None

    return config


def check_config(config: argparse.Namespace) -> None:
    """
    Validate configuration.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    if config.untrusted_dir is None:
        raise ConfigurationError(
            "--untrusted.dir is required (or set UNTRUSTED_DIR env var)"
        )

    if config.ngram_n < 1:
        raise ConfigurationError(f"--ngram.n must be >= 1, got {config.ngram_n}")

    if config.metric_cutoff < 0:
        raise ConfigurationError(
            f"--metric.cutoff must be >= 0, got {config.metric_cutoff}"
        )

    if config.max_concurrent < 1:
        raise ConfigurationError(
            f"--max_concurrent must be >= 1, got {config.max_concurrent}"
        )


def config_to_dict(config: argparse.Namespace) -> dict[str, Any]:
    """Convert config to dictionary for logging."""
    return {
        "untrusted_dir": str(config.untrusted_dir) if config.untrusted_dir else None,
        "trusted_dir": str(config.trusted_dir) if config.trusted_dir else None,
        "file_glob": config.file_glob,
        "ngram_n": config.ngram_n,
        "metric_name": config.metric_name,
        "metric_cutoff": config.metric_cutoff,
        "output": config.output,
        "include_text": config.include_text,
        "prefer_trusted_text": config.prefer_trusted_text,
        "max_concurrent": config.max_concurrent,
        "deadline_seconds": config.deadline_seconds,
        "max_comparisons": config.max_comparisons,
        "log_level": config.log_level,
    }


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
