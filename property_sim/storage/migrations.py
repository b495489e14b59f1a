"""Forward migrations for stored game states.

Each migration is a pure function taking the JSON dict of version ``n`` and
returning the dict of version ``n + 1``. They are applied in order from the
stored version up to ``CURRENT_VERSION``:

- v1 -> v2: economy block, savings baseline, property purchase base value and
  tenancy valuation fields
- v2 -> v3: staff roster, staff cost tracking and property assignments
- v3 -> v4: foreclosure, win, prestige and tracking fields
- v4 -> v5: lifetime mortgage totals on the player, repair ownership and
  the extra balance sheet averages
"""

from __future__ import annotations

import copy
import logging
from dataclasses import asdict
from typing import Any, Callable

from property_sim.engine.economy import create_initial_economy
from property_sim.exceptions import MigrationError
from property_sim.models.state import CURRENT_VERSION

logger = logging.getLogger(__name__)

Migration = Callable[[dict[str, Any]], dict[str, Any]]

# Base rate assumed for tenancies signed before the economy existed
LEGACY_BASE_RATE = 3.0


def initial_economy_data() -> dict[str, Any]:
    economy = create_initial_economy()
    data = asdict(economy)
    data["economic_phase"] = economy.economic_phase.value
    del data["inflation_index"]
    return data


def migrate_v1_to_v2(data: dict[str, Any]) -> dict[str, Any]:
    data = copy.deepcopy(data)
    data.setdefault("economy", initial_economy_data())
    player = data.setdefault("player", {})
    player.setdefault("savings_baseline", player.get("cash", 0.0))

    for prop in player.get("properties", []):
        prop.setdefault("purchase_base_value", prop.get("base_value", 0.0))
        tenancy = prop.get("tenancy")
        if tenancy is not None:
            maintenance = prop.get("maintenance", 100.0)
            tenancy.setdefault("market_value_at_start", prop.get("base_value", 0.0) * (0.5 + maintenance / 200))
            tenancy.setdefault("base_rate_at_start", LEGACY_BASE_RATE)

    data["version"] = 2
    return data


def migrate_v2_to_v3(data: dict[str, Any]) -> dict[str, Any]:
    data = copy.deepcopy(data)
    staff = data.setdefault("staff", {})
    staff.setdefault("estate_agents", [])
    staff.setdefault("caretakers", [])
    data["economy"].setdefault("inflation_index", 1.0)

    player = data["player"]
    player.setdefault("total_staff_costs", 0.0)
    for prop in player.get("properties", []):
        prop.setdefault("assigned_estate_agent", None)
        prop.setdefault("assigned_caretaker", None)

    data["version"] = 3
    return data


def migrate_v3_to_v4(data: dict[str, Any]) -> dict[str, Any]:
    data = copy.deepcopy(data)
    data.setdefault("foreclosure_warning", None)
    data.setdefault("game_over", None)
    data.setdefault("game_win", None)
    data.setdefault("show_game_win_modal", False)
    data.setdefault("show_prestige_modal", False)
    data.setdefault("prestige", {"level": 0, "total_wins": 0})
    data.setdefault(
        "tracking",
        {
            "peak_net_worth": 0.0,
            "peak_property_count": len(data["player"].get("properties", [])),
            "days_played": 0,
        },
    )

    data["version"] = 4
    return data


def migrate_v4_to_v5(data: dict[str, Any]) -> dict[str, Any]:
    """Seed lifetime mortgage totals from what the save still records.

    Interest paid on leftover mortgages after an underwater sale was never
    recorded separately, so it is only counted from here on.
    """
    data = copy.deepcopy(data)
    player = data["player"]
    mortgages = player.get("mortgages", [])
    attached = [m for m in mortgages if m.get("property_id") is not None]
    player.setdefault(
        "total_mortgage_interest_paid",
        sum(m.get("total_interest_paid", 0.0) for m in attached)
        + sum(s.get("total_mortgage_interest", 0.0) for s in player.get("property_sales", [])),
    )
    player.setdefault("total_mortgage_principal_paid", sum(m.get("total_principal_paid", 0.0) for m in mortgages))

    for prop in player.get("properties", []):
        repairing = prop.get("is_under_maintenance", False)
        prop.setdefault("maintenance_started_by", prop.get("assigned_caretaker") if repairing else None)

    for sheet in data.get("balance_sheet_history", []):
        value = sheet.get("total_property_value", 0.0)
        count = sheet.get("total_properties", 0)
        interest = sheet.get("total_mortgage_interest", 0.0)
        sheet.setdefault("total_mortgage_payments", interest + sheet.get("total_mortgage_principal", 0.0))
        sheet.setdefault("total_value_change_percent", 0.0)
        sheet.setdefault("avg_property_value", value / count if count else 0.0)
        sheet.setdefault("avg_equity_percent", sheet.get("total_equity", 0.0) / value * 100 if value > 0 else 0.0)

    data["version"] = 5
    return data


MIGRATIONS: dict[int, Migration] = {
    1: migrate_v1_to_v2,
    2: migrate_v2_to_v3,
    3: migrate_v3_to_v4,
    4: migrate_v4_to_v5,
}


def migrate(data: dict[str, Any]) -> dict[str, Any]:
    """Bring a stored state dict up to ``CURRENT_VERSION``.

    A missing version is treated as version 1.

    Raises
    ------
    MigrationError
        If the version is newer than this build or no migration path exists.
    """
    version = data.get("version", 1)
    if not isinstance(version, int) or version > CURRENT_VERSION:
        raise MigrationError(f"Cannot load save version {version!r} (current is {CURRENT_VERSION})")

    while version < CURRENT_VERSION:
        step = MIGRATIONS.get(version)
        if step is None:
            raise MigrationError(f"No migration from version {version}")
        logger.info("Migrating save from version %d to %d", version, version + 1)
        try:
            data = step(data)
        except (KeyError, TypeError, AttributeError) as exc:
            raise MigrationError(f"Save version {version} is malformed: {exc}") from exc
        version = data["version"]
    return data
