"""Single-owner game store.

``GameStore`` holds the one current ``GameState``. Every command goes through
``dispatch``, which swaps in the command's result and writes the whole state
to storage.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from property_sim import commands
from property_sim.config import SimConfig
from property_sim.exceptions import StorageError
from property_sim.logging import set_game_date
from property_sim.models.enums import District, MortgageType, StaffType
from property_sim.models.state import GameState
from property_sim.random_source import RandomSource, seeded
from property_sim.scenarios.new_game import NewGameScenario
from property_sim.storage.base import InMemoryStorage, KeyValueStorage
from property_sim.storage.serialization import dump_state, load_state

logger = logging.getLogger(__name__)


class GameStore:
    """Owner of the current game state and its persistence."""

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        config: SimConfig | None = None,
        *,
        rand: RandomSource | None = None,
        scenario: NewGameScenario | None = None,
    ) -> None:
        """Initialize the store and load (or create) the game.

        Parameters
        ----------
        storage : KeyValueStorage | None
            Persistence backend. Defaults to in-memory storage.
        config : SimConfig | None
            Configuration. Defaults to ``SimConfig()``.
        rand : RandomSource | None
            Random source for every roll. Defaults to one seeded from config.
        scenario : NewGameScenario | None
            Builder for fresh games; also supplies listing and staff generators.
        """
        self.config = config or SimConfig()
        self.storage = storage if storage is not None else InMemoryStorage()
        self.rand = rand or seeded(self.config.seed)
        self.scenario = scenario or NewGameScenario(config=self.config, rand=self.rand)
        self.state = self.load()
        set_game_date(self.state.game_time.current_date)

    @property
    def key(self) -> str:
        return self.config.storage.key

    def load(self) -> GameState:
        """Load the saved game, falling back to a fresh one if it is missing or unreadable."""
        try:
            blob = self.storage.get(self.key)
            if blob is None:
                return self.scenario.generate()
            state = load_state(blob)
        except StorageError as exc:
            logger.error("Failed to load game state, starting a new game: %s", exc)
            return self.scenario.generate()

        logger.info("Loaded game on %s", state.game_time.current_date)
        return state

    def save(self) -> None:
        try:
            self.storage.set(self.key, dump_state(self.state, pretty=self.config.storage.pretty_json))
        except (StorageError, ValueError) as exc:
            logger.error("Failed to save game state: %s", exc)

    def dispatch(self, command: Callable[..., GameState], *args: Any, **kwargs: Any) -> GameState:
        """Apply a command to the current state, swap in the result and save it."""
        self.state = command(self.state, *args, **kwargs)
        set_game_date(self.state.game_time.current_date)
        self.save()
        return self.state

    # --- Time ---

    def advance_day(self) -> GameState:
        return self.dispatch(commands.advance_day, self.rand, self.scenario.listing_generator)

    def set_speed(self, speed: float) -> GameState:
        return self.dispatch(commands.set_speed, speed)

    def toggle_pause(self) -> GameState:
        return self.dispatch(commands.toggle_pause)

    def reset(self) -> GameState:
        return self.dispatch(commands.reset, self.scenario)

    # --- Properties ---

    def set_property_vacant_settings(self, property_id: str, rent_markup: int, period_months: int) -> GameState:
        return self.dispatch(commands.set_property_vacant_settings, property_id, rent_markup, period_months)

    def set_default_rent_markup(self, rent_markup: int) -> GameState:
        return self.dispatch(commands.set_default_rent_markup, rent_markup)

    def carry_out_maintenance(self, property_id: str) -> GameState:
        return self.dispatch(commands.carry_out_maintenance, property_id)

    def buy_property_instant(self, listing_id: str) -> GameState:
        return self.dispatch(commands.buy_property_instant, listing_id)

    def make_offer(self, listing_id: str, offer_percentage: float) -> GameState:
        return self.dispatch(commands.make_offer, listing_id, offer_percentage, self.rand)

    def buy_property_with_mortgage(
        self,
        listing_id: str,
        mortgage_type: MortgageType,
        deposit_percentage: int,
        term_years: int,
        fixed_period_years: int,
    ) -> GameState:
        return self.dispatch(
            commands.buy_property_with_mortgage,
            listing_id,
            mortgage_type,
            deposit_percentage,
            term_years,
            fixed_period_years,
        )

    def buy_auction_property_instant(self, listing_id: str) -> GameState:
        return self.dispatch(commands.buy_auction_property_instant, listing_id)

    def make_auction_offer(self, listing_id: str, offer_percentage: float) -> GameState:
        return self.dispatch(commands.make_auction_offer, listing_id, offer_percentage, self.rand)

    def list_property_for_sale(self, property_id: str, asking_percentage: float) -> GameState:
        return self.dispatch(commands.list_property_for_sale, property_id, asking_percentage)

    def cancel_listing(self, property_id: str) -> GameState:
        return self.dispatch(commands.cancel_listing, property_id)

    def list_property_now(self, property_id: str) -> GameState:
        return self.dispatch(commands.list_property_now, property_id)

    # --- Mortgages ---

    def remortgage_property(
        self,
        property_id: str,
        mortgage_type: MortgageType,
        term_years: int,
        fixed_period_years: int,
    ) -> GameState:
        return self.dispatch(
            commands.remortgage_property, property_id, mortgage_type, term_years, fixed_period_years
        )

    def pay_off_mortgage(self, mortgage_id: str) -> GameState:
        return self.dispatch(commands.pay_off_mortgage, mortgage_id)

    # --- Staff ---

    def hire_staff(self, staff_type: StaffType, district: District) -> GameState:
        return self.dispatch(commands.hire_staff, staff_type, district, self.scenario.staff_generator)

    def fire_staff(self, staff_id: str, staff_type: StaffType) -> GameState:
        return self.dispatch(commands.fire_staff, staff_id, staff_type)

    def promote_staff(self, staff_id: str, staff_type: StaffType) -> GameState:
        return self.dispatch(commands.promote_staff, staff_id, staff_type)

    def assign_property_to_staff(self, property_id: str, staff_id: str, staff_type: StaffType) -> GameState:
        return self.dispatch(commands.assign_property_to_staff, property_id, staff_id, staff_type)

    def unassign_property(self, property_id: str, staff_type: StaffType) -> GameState:
        return self.dispatch(commands.unassign_property, property_id, staff_type)

    # --- Modals and prestige ---

    def dismiss_balance_sheet_modal(self) -> GameState:
        return self.dispatch(commands.dismiss_balance_sheet_modal)

    def dismiss_game_win_modal(self) -> GameState:
        return self.dispatch(commands.dismiss_game_win_modal)

    def open_prestige_modal(self) -> GameState:
        return self.dispatch(commands.open_prestige_modal)

    def close_prestige_modal(self) -> GameState:
        return self.dispatch(commands.close_prestige_modal)

    def prestige(self) -> GameState:
        return self.dispatch(commands.prestige, self.scenario)
