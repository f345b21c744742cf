from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from game.config import BriefingConfig, load_briefing_config
from game.engines.briefing import BriefingCompositor
from game.engines.rng import RNG
from game.output.render import BriefingRenderer
from game.world.campaign import CampaignGenerator
from game.world.catalog import ContentCatalog
from game.world.state import GameState

logger = logging.getLogger(__name__)


def _existing_dir(value: str) -> Path:
    path = Path(value)
    if not path.is_dir():
        raise argparse.ArgumentTypeError(f"Content directory '{value}' does not exist.")
    return path


def _existing_file(value: str) -> Path:
    path = Path(value)
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"State file '{value}' does not exist.")
    return path


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer.") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {number}.")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Weekly Briefing Engine",
    )
    subparsers = parser.add_subparsers(dest="command")

    campaign_parser = subparsers.add_parser(
        "new-campaign",
        help="Generate the week-one game state for a party",
    )
    campaign_parser.add_argument("--party", required=True, help="Party archetype handle")
    campaign_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write the state JSON here instead of stdout",
    )
    campaign_parser.add_argument(
        "--content-dir",
        type=_existing_dir,
        default=None,
        help="Directory holding parties.yaml and demographics.yaml",
    )

    brief_parser = subparsers.add_parser(
        "brief",
        help="Generate the briefing packet for a game state",
    )
    brief_parser.add_argument("--state", required=True, type=_existing_file, help="Game state JSON file")
    brief_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for recommendation draws (default: BRIEFING_SEED or random)",
    )
    brief_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )
    brief_parser.add_argument(
        "--max-lines",
        type=_positive_int,
        default=80,
        help="Maximum lines of text output (default: 80)",
    )
    brief_parser.add_argument(
        "--content-dir",
        type=_existing_dir,
        default=None,
        help="Directory holding briefing_items.yaml and strategic_directions.yaml",
    )

    return parser


def _handle_new_campaign(args: argparse.Namespace, settings: BriefingConfig) -> None:
    generator = CampaignGenerator.from_files(args.content_dir or settings.content_dir)
    state = generator.run(args.party)
    if args.out:
        state.save(args.out)
        print(f"Campaign state written to {args.out}")
    else:
        print(json.dumps(state.to_mapping(), indent=2))


def _handle_brief(args: argparse.Namespace, settings: BriefingConfig) -> None:
    catalog = ContentCatalog.from_files(args.content_dir or settings.content_dir)
    state = GameState.from_file(args.state)
    seed = args.seed if args.seed is not None else settings.seed
    compositor = BriefingCompositor(catalog=catalog, rng=RNG(seed), settings=settings)
    packet = compositor.generate_briefing(state)
    BriefingRenderer(view=args.format, max_lines=args.max_lines).present(packet)


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_briefing_config()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.WARNING))

    try:
        if args.command == "new-campaign":
            _handle_new_campaign(args, settings)
        elif args.command == "brief":
            _handle_brief(args, settings)
        else:
            parser.print_help()
    except (FileNotFoundError, ValueError) as exc:
        logger.error("cli.command.failed", extra={"command": args.command, "error": str(exc)})
        parser.exit(status=1, message=f"error: {exc}\n")


if __name__ == "__main__":
    main()
