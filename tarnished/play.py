import argparse
import logging
import os
import random
from typing import Optional

from tarnished.engine.actions import AutoPilot
from tarnished.engine.encounter import Encounter, EncounterOutcome
from tarnished.engine.player import Player
from tarnished.engine.roster import boss_ids, build_boss, build_catalog, load_campaign
from tarnished.engine.rules import load_rules, rule
from tarnished.flow.action_prompt import PromptActionSource
from tarnished.flow.character_creation import DEFAULT_NAME, run_character_creation
from tarnished.flow.grace import run_site_of_grace
from tarnished.ui.cli_provider import CLIProvider
from tarnished.ui.ui import UI


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_CATALOG = "stormveil_gate"
AUTO_MAX_ATTEMPTS = 3

INTRO = [
    "In the beginning, there was only a single Erdtree.",
    "It is said that when a Tarnished ascends to divinity, they shall wreak havoc and chaos upon all.",
    "At long last, you are that Tarnished.",
]

TUTORIAL = [
    "Boss attacks are divided into phases: charge-up, attack, and cooldown.",
    "Each action costs time. The attack lands when its charge-up runs out.",
    "Dodge in the right direction during the last 2 ticks of a charge-up to evade it.",
    "A mistimed dodge costs 2 extra ticks.",
    "After the attack, the boss enters a cooldown where it is vulnerable.",
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tarnished", description="Turn-based boss encounters.")
    parser.add_argument("--boss", default=None, help=f"Fight a single boss by id ({', '.join(boss_ids())}).")
    parser.add_argument("--catalog", default=DEFAULT_CATALOG, help="Weapon catalog offered at the Site of Grace.")
    parser.add_argument("--campaign", action="store_true", help="Play every chapter in game-data/campaign.json.")
    parser.add_argument("--auto", action="store_true", help="Run in automated mode (no prompts).")
    parser.add_argument("--pace", action="store_true", help="Wait for Enter after every combat line.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for combo selection and the autopilot.")
    parser.add_argument("--max-attempts", type=int, default=None,
                        help=f"Give up after N losses (default: unlimited, {AUTO_MAX_ATTEMPTS} with --auto).")
    parser.add_argument("--rules", default=None, help="JSON file merged over game-data/rules.json.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG shows every tick).")
    parser.add_argument("--log-file", default=None, help="Write logs here instead of stderr.")
    return parser


def configure_logging(level: str, log_file: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format=LOG_FORMAT,
        filename=log_file,
    )


def maybe_attach_debugger() -> None:
    if os.getenv("DEBUGPY"):
        import debugpy

        debugpy.listen(("0.0.0.0", 5678))
        print("Waiting for debugger attach on 5678...")
        debugpy.wait_for_client()


def action_source_for(ui, player, args, rng: random.Random):
    if args.auto:
        return AutoPilot(rng, dodge_window=int(rule(args.rules_table, "dodge_window")))
    return PromptActionSource(ui, player)


def fight_boss(ui, player: Player, boss_id: str, catalog, args, rng: random.Random) -> EncounterOutcome:
    boss = build_boss(boss_id)
    ui.scene(f"{boss.name} stands before you.")

    between = None
    if not args.auto:
        def between(p):
            run_site_of_grace(ui, p, catalog, args.rules_table)

    max_attempts = args.max_attempts
    if max_attempts is None and args.auto:
        max_attempts = AUTO_MAX_ATTEMPTS

    encounter = Encounter(
        player,
        boss,
        action_source_for(ui, player, args, rng),
        ui=ui,
        rng=rng,
        rules=args.rules_table,
        between_attempts=between,
        max_attempts=max_attempts,
    )
    outcome = encounter.fight()
    if outcome.won:
        ui.system(f"{boss.name} falls after {outcome.attempts} attempt(s). Runes: {player.runes}")
    else:
        ui.system(f"You leave {boss.name} behind after {outcome.attempts} attempt(s).")
    return outcome


def new_player(ui, catalog, args) -> Player:
    if args.auto:
        return Player(DEFAULT_NAME)
    for line in TUTORIAL:
        ui.narration(line)
    return run_character_creation(ui, catalog, rules=args.rules_table)


def run_campaign(ui, args, rng: random.Random) -> bool:
    campaign = load_campaign()
    player = None
    for chapter in campaign.chapters:
        catalog = build_catalog(chapter.catalog)
        if player is None:
            player = new_player(ui, catalog, args) if chapter.opening == "character_creation" \
                else Player(DEFAULT_NAME)
        elif chapter.opening == "grace" and not args.auto:
            run_site_of_grace(ui, player, catalog, args.rules_table)

        outcome = fight_boss(ui, player, chapter.boss, catalog, args, rng)
        if not outcome.won:
            logger.info("Campaign stopped at %s", chapter.boss)
            return False
    ui.scene("The Erdtree falls. You have ascended.")
    return True


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    maybe_attach_debugger()

    args.rules_table = load_rules(args.rules)
    rng = random.Random(args.seed)
    ui = UI(CLIProvider(pace=args.pace))

    for line in INTRO:
        ui.narration(line)

    if args.campaign or not args.boss:
        won = run_campaign(ui, args, rng)
    else:
        catalog = build_catalog(args.catalog)
        player = new_player(ui, catalog, args)
        won = fight_boss(ui, player, args.boss, catalog, args, rng).won
    return 0 if won else 1


if __name__ == "__main__":
    raise SystemExit(main())
