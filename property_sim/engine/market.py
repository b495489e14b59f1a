"""Property valuation, maintenance and the market/auction pools."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from property_sim.engine.calendar import add_months, is_after_or_equal
from property_sim.exceptions import (
    EntityNotFoundError,
    InsufficientFundsError,
    InvalidEntityStateError,
)
from property_sim.models.base import GameDate
from property_sim.models.enums import ListingPool, PropertyType
from property_sim.models.property import (
    Area,
    MarketProperty,
    Property,
    PropertyFeatures,
    PropertySale,
    VacantSettings,
)
from property_sim.models.state import GameState
from property_sim.random_source import RandomSource, chance

if TYPE_CHECKING:
    from property_sim.generators.listing import ListingGenerator

logger = logging.getLogger(__name__)

BASE_PROPERTY_VALUE = 1000

TYPE_MULTIPLIERS = {
    PropertyType.FLAT: 0.8,
    PropertyType.TERRACED: 1.0,
    PropertyType.SEMI_DETACHED: 1.2,
    PropertyType.DETACHED: 1.5,
}
BEDROOM_MULTIPLIERS = {1: 0.8, 2: 1.0, 3: 1.2, 4: 1.4, 5: 1.6}
GARDEN_MULTIPLIER = 1.1
PARKING_MULTIPLIER = 1.05

MAINTENANCE_COST_RATE = 0.10
MIN_LETTABLE_MAINTENANCE = 25
OCCUPIED_DECAY_PER_MONTH = 1.0
VACANT_DECAY_PER_MONTH = 0.2

POOL_CAPS = {ListingPool.MARKET: 12, ListingPool.AUCTION: 4}
INITIAL_POOL_SIZES = {ListingPool.MARKET: 6, ListingPool.AUCTION: 2}
SPAWN_CHANCE = 0.10
# Offers this far below 100% have zero chance of acceptance
OFFER_ZERO_CHANCE_DISCOUNT = {ListingPool.MARKET: 20.0, ListingPool.AUCTION: 40.0}

SALE_BASE_CHANCE = 0.03
SALE_PRICE_SENSITIVITY = 10
DEFAULT_SALE_PERCENTAGE = 100.0
MORTGAGE_EPSILON = 0.01


def rating_multiplier(rating: int) -> float:
    return 0.8 + 0.1 * (rating - 1)


def compute_base_value(features: PropertyFeatures, area: Area, district_modifier: float) -> float:
    """Intrinsic worth from feature, area-rating and district multipliers."""
    value = BASE_PROPERTY_VALUE
    value *= TYPE_MULTIPLIERS[features.property_type]
    value *= BEDROOM_MULTIPLIERS[features.bedrooms]
    if features.has_garden:
        value *= GARDEN_MULTIPLIER
    if features.has_parking:
        value *= PARKING_MULTIPLIER
    for rating in (area.crime, area.schools, area.transport, area.economy):
        value *= rating_multiplier(rating)
    value *= district_modifier
    return float(round(value))


def calculate_market_value(prop: Property | MarketProperty) -> float:
    """Base value discounted by condition: half value at 0%, full value at 100%."""
    return prop.base_value * (0.5 + prop.maintenance / 200)


def calculate_maintenance_cost(prop: Property) -> float:
    return MAINTENANCE_COST_RATE * prop.base_value * (100 - prop.maintenance) / 100


def can_be_let_out(prop: Property) -> bool:
    return prop.maintenance >= MIN_LETTABLE_MAINTENANCE and not prop.is_under_maintenance


def decay_maintenance(prop: Property) -> None:
    """Apply one month of wear."""
    if prop.tenancy is not None:
        prop.maintenance = max(0.0, prop.maintenance - OCCUPIED_DECAY_PER_MONTH)
    elif not prop.is_under_maintenance:
        prop.maintenance = max(0.0, prop.maintenance - VACANT_DECAY_PER_MONTH)


def start_maintenance(state: GameState, prop: Property, started_by: str | None = None) -> float:
    """Pay for a repair and mark the property as under maintenance.

    ``started_by`` records the caretaker who ordered the repair, if any.

    Returns
    -------
    float
        The amount paid.

    Raises
    ------
    InvalidEntityStateError
        If the property is occupied, listed for sale, already being repaired or
        in perfect condition.
    InsufficientFundsError
        If the player cannot afford the repair.
    """
    if prop.is_under_maintenance:
        raise InvalidEntityStateError(f"Property {prop.property_id} is already under maintenance")
    if prop.tenancy is not None:
        raise InvalidEntityStateError(f"Property {prop.property_id} is occupied")
    if prop.sale_info is not None:
        raise InvalidEntityStateError(f"Property {prop.property_id} is listed for sale")
    if prop.maintenance >= 100:
        raise InvalidEntityStateError(f"Property {prop.property_id} needs no maintenance")

    cost = calculate_maintenance_cost(prop)
    if cost > state.player.cash:
        raise InsufficientFundsError(f"Maintenance costs {cost:.2f}, cash is {state.player.cash:.2f}")

    state.player.cash -= cost
    prop.total_maintenance_paid += cost
    prop.is_under_maintenance = True
    prop.maintenance_start_date = state.game_time.current_date
    prop.maintenance_started_by = started_by
    prop.listed_date = None
    return cost


def complete_maintenance(state: GameState, today: GameDate) -> list[Property]:
    """Finish repairs that started at least one calendar month ago.

    Returns
    -------
    list[Property]
        Properties whose repair completed today.
    """
    completed = []
    for prop in state.player.properties:
        if not prop.is_under_maintenance or prop.maintenance_start_date is None:
            continue
        if is_after_or_equal(today, add_months(prop.maintenance_start_date, 1)):
            prop.maintenance = 100.0
            prop.is_under_maintenance = False
            prop.maintenance_start_date = None
            prop.maintenance_started_by = None
            completed.append(prop)
    return completed


# --- Listing pools ---


def pool_listings(state: GameState, pool: ListingPool) -> list[MarketProperty]:
    return state.markets.market if pool == ListingPool.MARKET else state.markets.auction


def find_listing(state: GameState, pool: ListingPool, listing_id: str) -> MarketProperty:
    for listing in pool_listings(state, pool):
        if listing.listing_id == listing_id:
            return listing
    raise EntityNotFoundError(f"{pool.value.title()} listing {listing_id} not found")


def remove_listing(state: GameState, pool: ListingPool, listing_id: str) -> None:
    listings = pool_listings(state, pool)
    listings[:] = [lst for lst in listings if lst.listing_id != listing_id]


def churn_pools(state: GameState, rand: RandomSource, generator: ListingGenerator) -> None:
    """Age listings, purge expired ones and maybe spawn one new listing per pool."""
    for pool in (ListingPool.MARKET, ListingPool.AUCTION):
        listings = pool_listings(state, pool)
        for listing in listings:
            listing.days_on_market += 1
        listings[:] = [lst for lst in listings if lst.days_on_market <= lst.days_until_removal]

        if len(listings) < POOL_CAPS[pool] and chance(rand, SPAWN_CHANCE):
            listings.append(generator.generate(state.areas, pool))


def acquire_listing(state: GameState, listing: MarketProperty, price: float) -> Property:
    """Turn a listing into an owned property and add it to the portfolio."""
    today = state.game_time.current_date
    prop = Property(
        property_id=listing.listing_id,
        name=listing.name,
        base_value=listing.base_value,
        purchase_base_value=listing.base_value,
        purchase_price=price,
        purchase_date=today,
        features=listing.features,
        area=listing.area,
        district=listing.district,
        district_modifier=listing.district_modifier,
        maintenance=listing.maintenance,
        vacant_settings=VacantSettings(
            rent_markup=state.settings.default_rent_markup,
            period_months=state.settings.default_period_months,
        ),
    )
    state.player.properties.append(prop)
    return prop


def buy_listing(state: GameState, pool: ListingPool, listing_id: str) -> Property:
    """Buy a listing outright at its market value."""
    listing = find_listing(state, pool, listing_id)
    price = calculate_market_value(listing)
    if price > state.player.cash:
        raise InsufficientFundsError(f"Listing costs {price:.2f}, cash is {state.player.cash:.2f}")

    state.player.cash -= price
    remove_listing(state, pool, listing_id)
    prop = acquire_listing(state, listing, price)
    logger.info("Bought %s for %.2f from the %s pool", prop.name, price, pool.value.lower())
    return prop


def offer_acceptance_probability(offer_percentage: float, pool: ListingPool) -> float:
    if offer_percentage >= 100:
        return 1.0
    discount = 100 - offer_percentage
    return max(0.0, 1 - discount / OFFER_ZERO_CHANCE_DISCOUNT[pool])


def make_offer(
    state: GameState,
    pool: ListingPool,
    listing_id: str,
    offer_percentage: float,
    rand: RandomSource,
) -> Property | None:
    """Offer a percentage of market value.

    The listing leaves the pool whether or not the offer is accepted.

    Returns
    -------
    Property | None
        The acquired property, or None if the seller rejected the offer.
    """
    listing = find_listing(state, pool, listing_id)
    offer_percentage = sanitize_percentage(offer_percentage)
    price = calculate_market_value(listing) * offer_percentage / 100
    if price > state.player.cash:
        raise InsufficientFundsError(f"Offer of {price:.2f} exceeds cash {state.player.cash:.2f}")

    remove_listing(state, pool, listing_id)
    if not chance(rand, offer_acceptance_probability(offer_percentage, pool)):
        logger.info("Offer of %.0f%% on %s rejected", offer_percentage, listing.name)
        return None

    state.player.cash -= price
    logger.info("Offer of %.0f%% on %s accepted at %.2f", offer_percentage, listing.name, price)
    return acquire_listing(state, listing, price)


# --- Sales ---


def sanitize_percentage(percentage: float) -> float:
    """Replace NaN or non-positive percentages with 100%."""
    if percentage is None or math.isnan(percentage) or percentage <= 0:
        logger.warning("Invalid sale percentage %r, using %.0f%%", percentage, DEFAULT_SALE_PERCENTAGE)
        return DEFAULT_SALE_PERCENTAGE
    return float(percentage)


def sale_probability(asking_percentage: float) -> float:
    """Daily chance a listed property sells; cheaper asks sell faster."""
    return min(1.0, SALE_BASE_CHANCE * (100 / asking_percentage) ** SALE_PRICE_SENSITIVITY)


def sell_property(state: GameState, prop: Property, sale_price: float, today: GameDate) -> PropertySale:
    """Complete a sale: settle the mortgage, record history and drop the property."""
    proceeds = sale_price
    interest_paid = 0.0
    for mortgage in state.player.mortgages:
        if mortgage.property_id != prop.property_id:
            continue
        interest_paid += mortgage.total_interest_paid
        repayment = min(proceeds, mortgage.outstanding_balance)
        mortgage.outstanding_balance -= repayment
        mortgage.total_principal_paid += repayment
        proceeds -= repayment
        mortgage.property_id = None
        if mortgage.outstanding_balance >= MORTGAGE_EPSILON:
            logger.warning(
                "Sold %s underwater, %.2f of mortgage %s remains",
                prop.name,
                mortgage.outstanding_balance,
                mortgage.mortgage_id,
            )
    state.player.mortgages = [
        m for m in state.player.mortgages if m.outstanding_balance >= MORTGAGE_EPSILON
    ]

    state.player.cash += proceeds
    for member in state.all_staff():
        if prop.property_id in member.assigned_properties:
            member.assigned_properties.remove(prop.property_id)

    sale = PropertySale(
        property_id=prop.property_id,
        name=prop.name,
        purchase_price=prop.purchase_price,
        purchase_date=prop.purchase_date,
        sale_price=sale_price,
        sale_date=today,
        total_rent_income=prop.total_income_earned,
        total_maintenance_paid=prop.total_maintenance_paid,
        total_mortgage_interest=interest_paid,
    )
    state.player.property_sales.append(sale)
    state.player.properties = [p for p in state.player.properties if p.property_id != prop.property_id]
    logger.info("Sold %s for %.2f", prop.name, sale_price)
    return sale


def process_sales(state: GameState, rand: RandomSource, today: GameDate) -> list[PropertySale]:
    """Roll once for every property listed for sale."""
    sales = []
    for prop in list(state.player.properties):
        if prop.sale_info is None:
            continue
        if chance(rand, sale_probability(prop.sale_info.asking_percentage)):
            sales.append(sell_property(state, prop, prop.sale_info.asking_price, today))
    return sales
