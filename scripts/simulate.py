#!/usr/bin/env python3
"""Advance a saved game headlessly and print its balance sheet.

Runs the day-advance command the given number of times against a JSON save
directory, stopping early if the game pauses itself (foreclosure warning or
win) or ends.
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from property_sim.config import SimConfig
from property_sim.engine.balance_sheet import calculate_overall_balance_sheet
from property_sim.engine.calendar import format_date
from property_sim.logging import setup_logging
from property_sim.storage.json_file import JsonFileStorage
from property_sim.storage.serialization import serialize_value
from property_sim.store.game import GameStore

logger = logging.getLogger(__name__)


def run(store: GameStore, days: int) -> int:
    """Advance up to ``days`` days. Returns the number actually simulated."""
    for simulated in range(days):
        state = store.state
        if state.game_over is not None:
            logger.warning("Game over on %s: %s", format_date(state.game_over.date), state.game_over.reason)
            return simulated
        if state.game_time.is_paused:
            logger.warning("Game paused on %s", format_date(state.game_time.current_date))
            return simulated
        store.advance_day()
    return days


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Advance a property game headlessly")
    parser.add_argument(
        "--days",
        type=int,
        default=365,
        help="Number of days to simulate (default: 365)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: PROPERTY_SIM_SEED or unseeded)",
    )
    parser.add_argument(
        "--storage-dir",
        type=str,
        default=None,
        help="Save directory (default: PROPERTY_SIM_STORAGE_DIR or ./saves)",
    )
    parser.add_argument(
        "--new",
        action="store_true",
        help="Discard any existing save and start a new game",
    )
    parser.add_argument(
        "--resume",
        action="store_true",
        help="Unpause a paused game before simulating",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["standard", "json"],
        default="standard",
        help="Log output format (default: standard)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the final balance sheet as JSON",
    )
    args = parser.parse_args()

    config = SimConfig.from_env()
    if args.seed is not None:
        config.seed = args.seed
    if args.storage_dir is not None:
        config.storage = replace(config.storage, directory=Path(args.storage_dir))

    setup_logging(config.log_level, args.log_format)

    store = GameStore(JsonFileStorage(config.storage.directory), config)
    if args.new:
        store.reset()
    if args.resume and store.state.game_time.is_paused:
        store.toggle_pause()

    start = store.state.game_time.current_date
    simulated = run(store, args.days)
    sheet = calculate_overall_balance_sheet(store.state)

    if args.json:
        print(json.dumps(serialize_value(sheet), indent=2))
        return

    print(f"Simulated {simulated} days: {format_date(start)} -> {format_date(store.state.game_time.current_date)}")
    print(f"  Cash:           {sheet.total_cash:>14,.2f}")
    print(f"  Property value: {sheet.total_property_value:>14,.2f}")
    print(f"  Debt:           {sheet.total_debt:>14,.2f}")
    print(f"  Net worth:      {sheet.net_worth:>14,.2f}")
    print(f"  Properties:     {sheet.total_properties:>14d}")
    print(f"  Monthly flow:   {sheet.monthly_cash_flow:>14,.2f}")


if __name__ == "__main__":
    main()
