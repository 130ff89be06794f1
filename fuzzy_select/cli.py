"""Command-line entry point: fuzzy search over a file of candidates."""

import argparse
import json
import sys
from typing import Any, Optional

import pandas as pd

from fuzzy_select import __version__
from fuzzy_select.builders import scorer_builder
from fuzzy_select.errors import SettingsError, ValidationError
from fuzzy_select.process import extract, extract_one
from fuzzy_select.similarity.scoring import get_scorer, score_components
from fuzzy_select.similarity.types import MatchResult, Scorer
from fuzzy_select.utils.io_utils import load_settings, read_candidates
from fuzzy_select.utils.logging_utils import get_logger, setup_logging
from fuzzy_select.utils.metadata import get_metadata
from fuzzy_select.utils.perf_utils import PerformanceProfiler, time_stage
from fuzzy_select.utils.settings import get_section, get_settings, validate_settings
from fuzzy_select.utils.validation_utils import max_length, non_empty_string, validate

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fuzzy-select",
        description="Find the closest matches for a query among candidate strings",
    )
    parser.add_argument("query", help="Query string to match")
    parser.add_argument(
        "--input",
        required=True,
        help="Candidates file (.csv, or plain text with one candidate per line)",
    )
    parser.add_argument("--column", help="CSV column holding the candidates (default: first)")
    parser.add_argument(
        "--limit",
        type=int,
        help="Number of results (default: extract.default_limit from settings)",
    )
    parser.add_argument(
        "--scorer",
        help="Scorer name: weighted, simple, partial, token_sort, token_set "
        "(default: scorer.default from settings)",
    )
    parser.add_argument("--best", action="store_true", help="Return only the single best match")
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Include every component score for each result",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--config", help="Settings YAML file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: logging.level from settings)",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Log a timing report for the selection step",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"fuzzy-select v{__version__}",
        help="Show version information and exit",
    )
    return parser


def format_results(
    query: str,
    results: list[MatchResult],
    as_json: bool = False,
    explain: bool = False,
) -> str:
    """Render results as tab-separated lines or a JSON list."""
    rows: list[dict[str, Any]] = []
    for result in results:
        row = result.as_dict()
        if explain:
            row["components"] = dict(score_components(query, result.choice))
        rows.append(row)

    if as_json:
        return json.dumps(rows, indent=2, ensure_ascii=False)

    lines = []
    for row in rows:
        line = f"{row['score']:.2f}\t{row['choice']}"
        if explain:
            parts = ", ".join(f"{k}={v:.2f}" for k, v in row["components"].items())
            line = f"{line}\t[{parts}]"
        lines.append(line)
    return "\n".join(lines)


MAX_QUERY_LENGTH = 1000


def build_scorer(name: str, settings: dict[str, Any]) -> Scorer:
    """Resolve a scorer name and memoize it with the "cache" settings.

    Raises:
        ValueError: If the name is not a known scorer

    """
    algorithm = get_metadata("algorithm", get_scorer(name))
    cache_cfg = get_section(settings, "cache")
    return (
        scorer_builder()
        .with_algorithm(algorithm)
        .with_cache(cache_cfg["max_size"], cache_cfg["ttl_seconds"])
        .build()
    )


@validate(non_empty_string, max_length(MAX_QUERY_LENGTH))
def select(
    query: str,
    candidates: list[str],
    scorer: Scorer,
    limit: int,
    best: bool,
    settings: dict[str, Any],
    profiler: PerformanceProfiler,
) -> list[MatchResult]:
    """Run extract_one (best) or extract under the profiler."""
    if best:
        result = profiler.measure(
            "extract_one", extract_one, query, candidates, scorer, settings=settings
        )
        return [result] if result is not None else []
    return profiler.measure("extract", extract, query, candidates, scorer, limit, settings=settings)


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config) if args.config else get_settings()
    except SettingsError as e:
        setup_logging("INFO")
        logger.error(str(e))
        return 1

    log_cfg = get_section(settings, "logging")
    setup_logging(args.log_level or log_cfg["level"], log_cfg["file"], log_cfg["format"])

    for warning in validate_settings(settings):
        logger.warning(f"Settings: {warning}")

    try:
        scorer = build_scorer(args.scorer or get_section(settings, "scorer")["default"], settings)
    except ValueError as e:
        logger.error(str(e))
        return 1

    limit = args.limit if args.limit is not None else get_section(settings, "extract")["default_limit"]

    try:
        with time_stage("load_candidates", logger):
            candidates = read_candidates(args.input, args.column)
    except (FileNotFoundError, KeyError, UnicodeDecodeError, pd.errors.ParserError) as e:
        logger.error(f"Could not read candidates: {e}")
        return 1

    profiler = PerformanceProfiler()
    try:
        with time_stage("select", logger):
            results = select(args.query, candidates, scorer, limit, args.best, settings, profiler)
    except ValidationError as e:
        logger.error(f"Invalid {e.field}: {e}")
        return 1

    logger.debug(f"Scorer cache: {scorer.cache_info()}")  # type: ignore[attr-defined]
    if args.profile:
        logger.info(profiler.report())

    if not results:
        logger.info("No candidates to match against")

    output = format_results(args.query, results, as_json=args.json, explain=args.explain)
    if output:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
