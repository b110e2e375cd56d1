"""
Plagiarism checker over directories of text files.

Loads every matching file of the untrusted (and optionally trusted)
directory into a corpus store, runs both comparisons and writes a JSON
report. The owner id of a text is its file name without extension.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from ..corpus import ComparisonBatch, CorpusStore, create_corpus_store
from ..errors import ConfigurationError
from .config import check_config, config_to_dict, get_config, setup_logging
from .errors import CheckerError, CorpusDirectoryError

logger = logging.getLogger(__name__)


def load_texts(directory: Path, pattern: str = "*.txt") -> dict[str, str]:
    """
    Read every file matching pattern in a directory.

    Args:
        directory: Directory to read (not recursive)
        pattern: Glob pattern for file names

    Returns:
        Mapping of file stem -> file contents, in sorted file order.
        Undecodable bytes are replaced, not fatal.

    Raises:
        CorpusDirectoryError: If the directory is missing or a file
            cannot be read
    """
    if not directory.is_dir():
        raise CorpusDirectoryError(
            f"Corpus directory not found: {directory}", path=str(directory)
        )

    texts: dict[str, str] = {}
    for path in sorted(directory.glob(pattern)):
        if not path.is_file():
            continue
        try:
            texts[path.stem] = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise CorpusDirectoryError(
                f"Failed to read {path}: {e}", path=str(path)
            ) from e

    logger.info(f"Loaded {len(texts)} texts from {directory}")
    return texts


def build_store(config: argparse.Namespace) -> CorpusStore:
    """Create a store from checker config and fill it from the corpus directories."""
    store = create_corpus_store(
        n=config.ngram_n,
        s=config.metric_cutoff,
        metric=config.metric_name,
        prefer_untrusted_text=not config.prefer_trusted_text,
        deadline_seconds=config.deadline_seconds,
        max_comparisons=config.max_comparisons,
    )

    if config.trusted_dir is not None:
        for owner, text in load_texts(config.trusted_dir, config.file_glob).items():
            store.add_trusted(owner, text)

    for owner, text in load_texts(config.untrusted_dir, config.file_glob).items():
        store.add_untrusted(owner, text)

    return store


async def run_check(config: argparse.Namespace) -> dict[str, Any]:
    """
    Run the full check described by config.

    Returns:
        Report dictionary, see build_report()

    Raises:
        ConfigurationError: If config is invalid
        CorpusDirectoryError: If a corpus directory cannot be loaded
    """
    check_config(config)
    store = build_store(config)

    if config.max_concurrent > 1:
        untrusted = await store.compare_untrusted_async(config.max_concurrent)
    else:
        untrusted = store.compare_untrusted()

    trusted: ComparisonBatch | None = None
    if config.trusted_dir is not None:
        if config.max_concurrent > 1:
            trusted = await store.compare_trusted_async(config.max_concurrent)
        else:
            trusted = store.compare_trusted()

    return build_report(store, untrusted, trusted, include_text=config.include_text)


def build_report(
    store: CorpusStore,
    untrusted: ComparisonBatch,
    trusted: ComparisonBatch | None,
    include_text: bool = False,
) -> dict[str, Any]:
    """
    Assemble the JSON report.

    Shape:
        {
            "config": {...corpus config...},
            "owners": {"trusted": [...], "untrusted": [...]},
            "untrusted": {...batch...},
            "trusted": {...batch...} | None,
            "texts": {owner: [words...]}   # only with include_text
        }
    """
    report: dict[str, Any] = {
        "config": store.config.to_dict(),
        "owners": {
            "trusted": store.trusted_owners,
            "untrusted": store.untrusted_owners,
        },
        "untrusted": untrusted.to_dict(),
        "trusted": trusted.to_dict() if trusted is not None else None,
    }
    if include_text:
        report["texts"] = store.all_normalized_text()
    return report


def write_report(report: dict[str, Any], output: str) -> None:
    """Write the report as JSON to a file, or to stdout for '-'."""
    payload = json.dumps(report, indent=2)
    if output == "-":
        sys.stdout.write(payload + "\n")
        return
    Path(output).write_text(payload + "\n", encoding="utf-8")
    logger.info(f"Report written to {output}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    config = get_config(argv)
    setup_logging(config.log_level)

    logger.info(f"Config: {config_to_dict(config)}")

    try:
        report = asyncio.run(run_check(config))
        write_report(report, config.output)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    except (CheckerError, OSError) as e:
        logger.error(f"Check failed: {e}")
        return 1

    flagged = len(report["untrusted"]["results"])
    if report["trusted"] is not None:
        flagged += len(report["trusted"]["results"])
    logger.info(f"Check complete: {flagged} flagged owner pairs")

    return 0
