"""Tests for economy module."""
import pytest

from clicksim.catalog import UPGRADES, UpgradeCategory, UpgradeDefinition, get_upgrade
from clicksim.config import MIN_TICK_MS
from clicksim.economy import Rejected, compute_next_cost, current_progress, purchase, tier
from clicksim.state import SimulationState, UpgradeProgress


def _upgrade(id: str) -> UpgradeDefinition:
    udef = get_upgrade(id)
    assert udef is not None
    return udef


class TestCatalog:
    def test_ids_unique(self):
        ids = [u.id for u in UPGRADES]
        assert len(ids) == len(set(ids)) == 8

    def test_categories(self):
        manual = [u.id for u in UPGRADES if u.category is UpgradeCategory.MANUAL]
        auto = [u.id for u in UPGRADES if u.category is UpgradeCategory.AUTOMATION]
        assert manual == ["finger-training", "titanium-pointer", "quantum-glove", "nanobot-squad"]
        assert auto == ["macro-rig", "drone-fleet", "fusion-reactor", "chroniton-loop"]

    def test_get_upgrade_unknown(self):
        assert get_upgrade("nope") is None

    def test_get_upgrade_custom_catalog(self):
        custom = (
            UpgradeDefinition("x", "X", "", 1, 2, 1, UpgradeCategory.MANUAL),
        )
        assert get_upgrade("x", custom) is custom[0]
        assert get_upgrade("finger-training", custom) is None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"base_cost": 0},
            {"cost_growth": 1.0},
            {"base_power": -1},
        ],
    )
    def test_invalid_definition(self, kwargs):
        params = dict(
            id="bad", name="Bad", description="", base_cost=10,
            cost_growth=1.1, base_power=1, category=UpgradeCategory.MANUAL,
        )
        params.update(kwargs)
        with pytest.raises(ValueError):
            UpgradeDefinition(**params)


class TestComputeNextCost:
    def test_base_level(self):
        assert compute_next_cost(_upgrade("finger-training"), 0) == 15

    def test_rounds_up(self):
        # 15 * 1.15 = 17.25, 15 * 1.15^2 = 19.8375
        assert compute_next_cost(_upgrade("finger-training"), 1) == 18
        assert compute_next_cost(_upgrade("finger-training"), 2) == 20

    def test_strictly_increasing_for_catalog(self):
        for udef in UPGRADES:
            costs = [compute_next_cost(udef, level) for level in range(120)]
            for lo, hi in zip(costs, costs[1:]):
                assert hi > lo, udef.id

    def test_default_progress(self):
        progress = current_progress(_upgrade("macro-rig"), SimulationState.fresh())
        assert progress == UpgradeProgress(level=0, next_cost=75)


class TestPurchase:
    def test_unknown_upgrade(self):
        result = purchase(SimulationState(resources=1e9), "nonexistent")
        assert isinstance(result, Rejected)
        assert result.reason == "Unknown upgrade"

    def test_cannot_afford(self):
        result = purchase(SimulationState.fresh(), "finger-training")
        assert isinstance(result, Rejected)
        assert "afford" in result.reason.lower()

    def test_exactly_affordable(self):
        result = purchase(SimulationState(resources=15), "finger-training")
        assert not isinstance(result, Rejected)
        assert result.resources == 0

    def test_manual_upgrade(self):
        state = SimulationState(resources=100)
        delta = purchase(state, "finger-training")
        assert delta.resources == 85
        assert delta.manual_power == 2
        assert delta.automation_rate is None
        assert delta.upgrades == {"finger-training": UpgradeProgress(1, 18)}

    def test_automation_upgrade(self):
        state = SimulationState(resources=100)
        delta = purchase(state, "macro-rig")
        assert delta.resources == 25
        assert delta.automation_rate == pytest.approx(0.5)
        assert delta.manual_power is None
        assert delta.tick_interval_ms == 1000
        assert delta.upgrades["macro-rig"].level == 1

    def test_purchase_does_not_mutate_state(self):
        state = SimulationState(resources=100)
        purchase(state, "finger-training")
        assert state.resources == 100
        assert state.upgrades == {}

    def test_uses_stored_next_cost(self):
        state = SimulationState(
            resources=20,
            upgrades={"finger-training": UpgradeProgress(level=2, next_cost=20)},
        )
        delta = purchase(state, "finger-training")
        assert delta.resources == 0
        assert delta.upgrades["finger-training"] == UpgradeProgress(
            3, compute_next_cost(_upgrade("finger-training"), 3)
        )


class TestAutomationTiers:
    def _state_at_level(self, level: int, interval: int = 1000) -> SimulationState:
        udef = _upgrade("macro-rig")
        return SimulationState(
            resources=1e6,
            automation_rate=0.5 * level,
            tick_interval_ms=interval,
            upgrades={"macro-rig": UpgradeProgress(level, compute_next_cost(udef, level))},
        )

    def test_fifth_level_reduces_interval(self):
        delta = purchase(self._state_at_level(4), "macro-rig")
        assert delta.upgrades["macro-rig"].level == 5
        assert delta.tick_interval_ms == 970

    def test_other_levels_keep_interval(self):
        for level in (0, 1, 2, 3, 5, 6):
            delta = purchase(self._state_at_level(level), "macro-rig")
            assert delta.tick_interval_ms == 1000

    def test_interval_floor(self):
        delta = purchase(self._state_at_level(9, interval=260), "macro-rig")
        assert delta.tick_interval_ms == MIN_TICK_MS

    def test_manual_fifth_level_no_pacing_change(self):
        udef = _upgrade("finger-training")
        state = SimulationState(
            resources=1e6,
            upgrades={"finger-training": UpgradeProgress(4, compute_next_cost(udef, 4))},
        )
        delta = purchase(state, "finger-training")
        assert delta.tick_interval_ms is None

    def test_interval_never_below_floor(self):
        state = SimulationState(resources=1e300)
        for _ in range(500):
            state = state.apply(purchase(state, "macro-rig"))
        assert state.level_of("macro-rig") == 500
        assert state.tick_interval_ms == MIN_TICK_MS

    def test_tier(self):
        assert tier(0) == 0
        assert tier(4) == 0
        assert tier(5) == 1
        assert tier(14) == 2
