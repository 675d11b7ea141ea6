from __future__ import annotations

import json
import logging
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from clicksim.config import BASELINE_TICK_MS, MIN_TICK_MS, SCHEMA_VERSION, STORAGE_KEY
from clicksim.state import SimulationState, UpgradeProgress
from clicksim.storage import BlobStore, StorageError

_LOGGER = logging.getLogger(__name__)


class UpgradeRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    level: int = Field(ge=0)
    cost: float = Field(gt=0)


class Snapshot(BaseModel):
    """Persisted record; field names are the on-disk format."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    resources: float = Field(ge=0)
    total_actions: float = Field(alias="totalActions", ge=0)
    manual_power: float = Field(alias="manualPower", ge=0)
    automation_rate: float = Field(alias="automationRate", ge=0)
    upgrades: Dict[str, UpgradeRecord] = Field(default_factory=dict)
    milestones: Dict[str, bool] = Field(default_factory=dict)
    tick_interval_ms: int = Field(
        alias="tickIntervalMs", ge=MIN_TICK_MS, le=BASELINE_TICK_MS
    )
    schema_version: int = Field(alias="schemaVersion", strict=True)

    @classmethod
    def from_state(cls, state: SimulationState) -> Snapshot:
        return cls(
            resources=state.resources,
            total_actions=state.total_actions,
            manual_power=state.manual_power,
            automation_rate=state.automation_rate,
            upgrades={
                uid: UpgradeRecord(level=p.level, cost=p.next_cost)
                for uid, p in state.upgrades.items()
            },
            milestones={mid: True for mid in sorted(state.achieved_milestones)},
            tick_interval_ms=state.tick_interval_ms,
            schema_version=state.schema_version,
        )

    def to_state(self) -> SimulationState:
        return SimulationState(
            resources=self.resources,
            total_actions=self.total_actions,
            manual_power=self.manual_power,
            automation_rate=self.automation_rate,
            upgrades={
                uid: UpgradeProgress(level=r.level, next_cost=r.cost)
                for uid, r in self.upgrades.items()
            },
            achieved_milestones={mid for mid, ok in self.milestones.items() if ok},
            tick_interval_ms=self.tick_interval_ms,
            schema_version=self.schema_version,
        )


def save(state: SimulationState) -> str:
    """Serialize *state* to a JSON blob."""
    return Snapshot.from_state(state).model_dump_json(by_alias=True)


def load(blob: Optional[str]) -> Optional[SimulationState]:
    """Parse a blob. Absent, malformed or other-version data yields None."""
    if not blob:
        return None
    try:
        raw = json.loads(blob)
    except json.JSONDecodeError as e:
        _LOGGER.warning("Discarding unreadable save: %s", e)
        return None
    if not isinstance(raw, dict):
        _LOGGER.warning("Discarding save: expected an object, got %s", type(raw).__name__)
        return None

    version = raw.get("schemaVersion")
    if version != SCHEMA_VERSION or isinstance(version, bool):
        _LOGGER.warning(
            "Discarding save with schemaVersion %r (expected %d)", version, SCHEMA_VERSION
        )
        return None

    try:
        snapshot = Snapshot.model_validate(raw)
    except ValidationError as e:
        _LOGGER.warning("Discarding malformed save: %s", e)
        return None
    return snapshot.to_state()


class PersistenceManager:
    """Write-through saving to a single storage key.

    Storage failures are logged and swallowed; the in-memory state stays
    authoritative. A manager with no store does nothing.
    """

    def __init__(self, store: BlobStore | None, key: str = STORAGE_KEY) -> None:
        self.store = store
        self.key = key

    def persist(self, state: SimulationState) -> bool:
        if self.store is None:
            return False
        try:
            self.store.set(self.key, save(state))
        except (StorageError, OSError) as e:
            _LOGGER.warning("Save failed, continuing in memory: %s", e)
            return False
        return True

    def restore(self) -> SimulationState | None:
        if self.store is None:
            return None
        try:
            blob = self.store.get(self.key)
        except (StorageError, OSError) as e:
            _LOGGER.warning("Load failed, starting fresh: %s", e)
            return None
        return load(blob)

    def clear(self) -> None:
        if self.store is None:
            return
        try:
            self.store.remove(self.key)
        except (StorageError, OSError) as e:
            _LOGGER.warning("Could not clear save: %s", e)
