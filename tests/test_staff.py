"""Tests for staff management and automation."""

import pytest

from property_sim.engine.staff import (
    LEVEL_THRESHOLDS,
    add_staff,
    adjust_listing,
    apply_wage_inflation,
    assign_property,
    can_promote,
    capacity,
    find_staff,
    gain_experience,
    process_payroll,
    promote,
    remove_staff,
    run_staff_tasks,
)
from property_sim.exceptions import (
    EntityNotFoundError,
    InsufficientFundsError,
    InvalidEntityStateError,
)
from property_sim.models import (
    CaretakerRole,
    District,
    EstateAgentRole,
    GameDate,
    GameState,
    StaffMember,
    StaffType,
)


@pytest.fixture
def make_member(today: GameDate):
    """Factory for level-1 staff in the outskirts."""

    def _make(staff_id: str = "agent-001", staff_type: StaffType = StaffType.ESTATE_AGENT, **overrides):
        role = EstateAgentRole(last_adjustment_check=today) if staff_type == StaffType.ESTATE_AGENT else CaretakerRole()
        member = StaffMember(
            staff_id=staff_id,
            name=f"Staff {staff_id}",
            district=District.OUTSKIRTS,
            base_salary=500.0,
            current_salary=500.0,
            hired_date=today,
            role=role,
        )
        for name, value in overrides.items():
            setattr(member, name, value)
        return member

    return _make


class TestProgression:
    """Tests for experience, capacity and promotion."""

    def test_experience_per_assigned_property(self, state: GameState, make_member) -> None:
        member = make_member(assigned_properties=["a", "b"])
        add_staff(state, member)

        gain_experience(state)

        assert member.experience == 2

    def test_experience_capped_at_next_threshold(self, state: GameState, make_member) -> None:
        member = make_member(experience=299, assigned_properties=["a", "b", "c"])
        add_staff(state, member)

        gain_experience(state)

        assert member.experience == LEVEL_THRESHOLDS[2]

    def test_promote(self, state: GameState, make_member) -> None:
        member = make_member(experience=300)
        add_staff(state, member)

        assert can_promote(member)
        assert promote(state, member) == 1000.0
        assert member.level == 2
        assert member.current_salary == pytest.approx(600.0)
        assert capacity(member) == 5
        assert state.player.cash == 49000.0
        assert state.player.total_staff_costs == 1000.0

    def test_promote_requires_experience(self, state: GameState, make_member) -> None:
        member = make_member(experience=299)

        with pytest.raises(InvalidEntityStateError):
            promote(state, member)

    def test_promote_requires_cash(self, state: GameState, make_member) -> None:
        member = make_member(experience=300)
        state.player.cash = 999.0

        with pytest.raises(InsufficientFundsError):
            promote(state, member)
        assert member.level == 1

    def test_find_staff_unknown(self, state: GameState) -> None:
        with pytest.raises(EntityNotFoundError):
            find_staff(state, "missing", StaffType.CARETAKER)


class TestAssignment:
    """Tests for assigning properties to staff."""

    def test_agent_assignment_lists_property(self, state: GameState, make_member, make_property, today) -> None:
        member = make_member()
        prop = make_property()
        add_staff(state, member)
        state.player.properties.append(prop)

        assign_property(state, prop, member)

        assert member.assigned_properties == ["prop-001"]
        assert prop.assigned_estate_agent == "agent-001"
        assert prop.listed_date == today

    def test_district_must_match(self, state: GameState, make_member, make_property) -> None:
        member = make_member(district=District.INNER_CITY)

        with pytest.raises(InvalidEntityStateError):
            assign_property(state, make_property(), member)

    def test_capacity_enforced(self, state: GameState, make_member, make_property) -> None:
        member = make_member(assigned_properties=["a", "b", "c"])

        with pytest.raises(InvalidEntityStateError):
            assign_property(state, make_property(), member)

    def test_reassignment_moves_property(self, state: GameState, make_member, make_property) -> None:
        first = make_member("care-001", StaffType.CARETAKER)
        second = make_member("care-002", StaffType.CARETAKER)
        prop = make_property()
        for member in (first, second):
            add_staff(state, member)
        state.player.properties.append(prop)

        assign_property(state, prop, first)
        assign_property(state, prop, second)

        assert first.assigned_properties == []
        assert second.assigned_properties == ["prop-001"]
        assert prop.assigned_caretaker == "care-002"

    def test_remove_agent_withdraws_listings(self, state: GameState, make_member, make_property) -> None:
        member = make_member()
        prop = make_property()
        add_staff(state, member)
        state.player.properties.append(prop)
        assign_property(state, prop, member)

        remove_staff(state, member)

        assert state.staff.estate_agents == []
        assert prop.assigned_estate_agent is None
        assert prop.listed_date is None

    def test_remove_caretaker_cancels_repairs(self, state: GameState, make_member, make_property, today) -> None:
        member = make_member("care-001", StaffType.CARETAKER, assigned_properties=["prop-001"])
        prop = make_property(
            assigned_caretaker="care-001",
            is_under_maintenance=True,
            maintenance_start_date=today,
            maintenance_started_by="care-001",
        )
        add_staff(state, member)
        state.player.properties.append(prop)

        remove_staff(state, member)

        assert state.staff.caretakers == []
        assert not prop.is_under_maintenance
        assert prop.maintenance_start_date is None
        assert prop.maintenance_started_by is None

    def test_remove_caretaker_keeps_player_repairs(self, state: GameState, make_member, make_property, today) -> None:
        member = make_member("care-001", StaffType.CARETAKER, assigned_properties=["prop-001"])
        prop = make_property(
            assigned_caretaker="care-001",
            is_under_maintenance=True,
            maintenance_start_date=today,
        )
        add_staff(state, member)
        state.player.properties.append(prop)

        remove_staff(state, member)

        assert prop.assigned_caretaker is None
        assert prop.is_under_maintenance
        assert prop.maintenance_start_date == today


class TestPayroll:
    """Tests for monthly wages, arrears and the wage ratchet."""

    def test_pays_everyone(self, state: GameState, make_member) -> None:
        add_staff(state, make_member("agent-001"))
        add_staff(state, make_member("care-001", StaffType.CARETAKER))

        assert process_payroll(state) == []
        assert state.player.cash == 49000.0
        assert state.player.total_staff_costs == 1000.0

    def test_unpaid_staff_quit_after_three_months(self, state: GameState, make_member) -> None:
        member = make_member()
        add_staff(state, member)
        state.player.cash = 100.0

        assert process_payroll(state) == []
        assert process_payroll(state) == []
        assert member.unpaid_wages == 1000.0
        assert process_payroll(state) == [member]
        assert state.staff.estate_agents == []
        assert state.player.cash == 100.0

    def test_arrears_cleared_when_affordable(self, state: GameState, make_member) -> None:
        member = make_member(unpaid_wages=500.0, months_unpaid=1)
        add_staff(state, member)

        process_payroll(state)

        assert state.player.cash == 49000.0
        assert member.unpaid_wages == 0.0
        assert member.months_unpaid == 0

    def test_wage_ratchet(self, make_member) -> None:
        member = make_member()

        apply_wage_inflation(member, 1.1)
        assert member.current_salary == pytest.approx(550.0)

        apply_wage_inflation(member, 1.05)
        assert member.current_salary == pytest.approx(550.0)
        assert member.highest_inflation_index == pytest.approx(1.1)


class TestAutomation:
    """Tests for estate agent and caretaker daily tasks."""

    def test_adjust_listing_down(self, make_property) -> None:
        prop = make_property()

        adjust_listing(prop, lambda: 0.0)

        assert prop.vacant_settings.rent_markup == 4
        assert prop.vacant_settings.period_months == 6

    def test_adjust_listing_up(self, make_property) -> None:
        prop = make_property()

        adjust_listing(prop, lambda: 0.99)

        assert prop.vacant_settings.rent_markup == 6
        assert prop.vacant_settings.period_months == 12

    def test_adjust_listing_respects_bounds(self, make_property) -> None:
        prop = make_property()
        prop.vacant_settings.rent_markup = 1

        adjust_listing(prop, lambda: 0.0)

        assert prop.vacant_settings.rent_markup == 1

    def test_agent_reprices_stale_listing(self, state: GameState, make_member, make_property, today) -> None:
        member = make_member(assigned_properties=["prop-001"])
        prop = make_property(assigned_estate_agent="agent-001", listed_date=today)
        add_staff(state, member)
        state.player.properties.append(prop)

        state.game_time.current_date = GameDate(2025, 2, 13)
        run_staff_tasks(state, StaffType.ESTATE_AGENT, lambda: 0.99)
        assert prop.vacant_settings.rent_markup == 5

        state.game_time.current_date = GameDate(2025, 2, 14)
        run_staff_tasks(state, StaffType.ESTATE_AGENT, lambda: 0.99)
        assert prop.vacant_settings.rent_markup == 6
        assert member.role.last_adjustment_check == GameDate(2025, 2, 14)

    def test_caretaker_repairs_worn_vacancy(self, state: GameState, make_member, make_property, today) -> None:
        member = make_member("care-001", StaffType.CARETAKER, assigned_properties=["prop-001"])
        prop = make_property(maintenance=80.0, assigned_caretaker="care-001")
        add_staff(state, member)
        state.player.properties.append(prop)

        run_staff_tasks(state, StaffType.CARETAKER, lambda: 0.0)

        assert prop.is_under_maintenance
        assert prop.maintenance_start_date == today
        assert prop.maintenance_started_by == "care-001"
        # 10% of base value per 100 points of wear
        assert state.player.cash == pytest.approx(50000.0 - 200.0)

    def test_caretaker_skips_good_condition(self, state: GameState, make_member, make_property) -> None:
        member = make_member("care-001", StaffType.CARETAKER, assigned_properties=["prop-001"])
        prop = make_property(maintenance=95.0, assigned_caretaker="care-001")
        add_staff(state, member)
        state.player.properties.append(prop)

        run_staff_tasks(state, StaffType.CARETAKER, lambda: 0.0)

        assert not prop.is_under_maintenance

    def test_caretaker_without_cash_does_nothing(self, state: GameState, make_member, make_property) -> None:
        member = make_member("care-001", StaffType.CARETAKER, assigned_properties=["prop-001"])
        prop = make_property(maintenance=10.0, assigned_caretaker="care-001")
        add_staff(state, member)
        state.player.properties.append(prop)
        state.player.cash = 50.0

        run_staff_tasks(state, StaffType.CARETAKER, lambda: 0.0)

        assert not prop.is_under_maintenance
        assert state.player.cash == 50.0
