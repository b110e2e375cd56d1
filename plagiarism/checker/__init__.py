"""
Command-line checker for directories of text files.

Usage:
    python -m plagiarism.checker --untrusted.dir ./submissions \\
        --trusted.dir ./sources --ngram.n 5 --output report.json

    python -m plagiarism.checker --untrusted.dir ./submissions \\
        --metric.name levenshtein --metric.cutoff 3
"""

from .checker import build_report, load_texts, main, run_check, write_report
from .config import check_config, config_to_dict, get_config
from .errors import CheckerError, CorpusDirectoryError

__all__ = [
    "main",
    "run_check",
    "build_report",
    "load_texts",
    "write_report",
    "get_config",
    "check_config",
    "config_to_dict",
    "CheckerError",
    "CorpusDirectoryError",
]
