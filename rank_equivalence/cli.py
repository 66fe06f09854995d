#!/usr/bin/env python3
"""
Rank equivalence command line interface.

Commands:
- build:   scraped text lines for one game -> normalized distribution CSV
- convert: tier in one game -> equivalent tier in another game
- table:   every tier of one game -> equivalent tiers in another game
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd
import yaml

from rank_equivalence.analytics.distribution_builder import parse_and_build
from rank_equivalence.analytics.equivalence_mapper import NoEquivalentRank, build_equivalence_table, convert_rank
from rank_equivalence.analytics.errors import RankDataError
from rank_equivalence.config import get_game_config, load_config
from rank_equivalence.io.distribution_store import distribution_path, load_distribution, save_distribution
from rank_equivalence.normalizers.text_normalizer import prepare_lines
from rank_equivalence.utils.logger import setup_logging
from rank_equivalence.validators.verify_distribution import summarize_distribution


def _display_name(config: dict, game: str) -> str:
    try:
        return get_game_config(config, game)["DISPLAY_NAME"]
    except ValueError:
        return game


def run_build(args: argparse.Namespace, config: dict, logger) -> int:
    game_cfg = get_game_config(config, args.game)

    input_path = Path(args.input)
    logger.info(f"📡 Reading scraped lines for {game_cfg['DISPLAY_NAME']} from {input_path}")
    with open(input_path, "r", encoding="utf-8") as f:
        texts = f.read().splitlines()

    lines = prepare_lines(texts, header=game_cfg["HEADER"], split_cells=game_cfg["SPLIT_CELLS"])
    if not lines:
        logger.warning(f"⚠️ No rank lines found in {input_path}")

    raw_entries, distribution = parse_and_build(lines, game=args.game)
    summarize_distribution(raw_entries, distribution, logger)

    output_path = Path(args.output) if args.output else distribution_path(config["DATA_DIR"], args.game)
    save_distribution(distribution, output_path)
    print(f"Saved {len(distribution)} tiers for {game_cfg['DISPLAY_NAME']} to {output_path}")
    return 0


def _load_pair(args: argparse.Namespace, config: dict):
    source_file = args.source_file or distribution_path(config["DATA_DIR"], args.source_game)
    target_file = args.target_file or distribution_path(config["DATA_DIR"], args.target_game)
    return (load_distribution(source_file, game=args.source_game),
            load_distribution(target_file, game=args.target_game))


def run_convert(args: argparse.Namespace, config: dict, logger) -> int:
    source, target = _load_pair(args, config)
    if args.tier not in source:
        logger.warning(f"⚠️ Tier '{args.tier}' not found; known {args.source_game} tiers: {list(source.tiers)}")
    outcome = convert_rank(source, args.tier, target)

    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2))
        return 0

    source_name = _display_name(config, args.source_game)
    target_name = _display_name(config, args.target_game)

    if isinstance(outcome, NoEquivalentRank):
        print(f"{source_name} {args.tier} (top {outcome.source_percentile}%): "
              f"no equivalent rank in {target_name}")
        return 0

    print(f"{source_name} {outcome.source_tier} ({outcome.source_percentile}%) → "
          f"{target_name} {outcome.tier} ({outcome.tier_percentile}%), "
          f"{outcome.within_tier_percentile}% into the tier")
    return 0


def run_table(args: argparse.Namespace, config: dict, logger) -> int:
    source, target = _load_pair(args, config)
    table = build_equivalence_table(source, target)

    with pd.option_context("display.max_rows", None, "display.width", 120):
        print(table.to_string(index=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cross-game rank equivalence")
    parser.add_argument("--config", type=str, default=None,
                        help="Configuration file path (default: bundled app_conf.yaml)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build a normalized distribution from scraped lines")
    build.add_argument("--game", type=str, required=True, help="Game name from the config GAMES section")
    build.add_argument("--input", type=str, required=True, help="Text file with one scraped element per line")
    build.add_argument("--output", type=str, default=None, help="Output CSV (default: <DATA_DIR>/<game>.csv)")
    build.set_defaults(handler=run_build)

    for name, help_text in (("convert", "Convert one tier into another game"),
                            ("table", "Convert every tier into another game")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--source-game", type=str, required=True, help="Game the rank comes from")
        sub.add_argument("--target-game", type=str, required=True, help="Game to convert into")
        sub.add_argument("--source-file", type=str, default=None, help="Source distribution CSV")
        sub.add_argument("--target-file", type=str, default=None, help="Target distribution CSV")
        if name == "convert":
            sub.add_argument("--tier", type=str, required=True, help="Source tier, e.g. 'Gold 2'")
            sub.add_argument("--json", action="store_true", help="Print the result as JSON")
            sub.set_defaults(handler=run_convert)
        else:
            sub.set_defaults(handler=run_table)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the rank equivalence engine."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, yaml.YAMLError) as e:
        print(f"❌ Could not load configuration: {e}", file=sys.stderr)
        return 1

    logger = setup_logging(config)

    try:
        return args.handler(args, config, logger)
    except (RankDataError, FileNotFoundError, ValueError) as e:
        logger.error(f"❌ {args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
