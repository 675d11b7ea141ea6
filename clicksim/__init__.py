# clicksim: Clicker Simf idle engine and headless balance simulation

from clicksim.config import (
    BASELINE_TICK_MS,
    MIN_TICK_MS,
    SCHEMA_VERSION,
    STORAGE_KEY,
    EngineConfig,
    configure_logging,
)
from clicksim.catalog import UPGRADES, UpgradeCategory, UpgradeDefinition, get_upgrade
from clicksim.state import SimulationState, StateDelta, UpgradeProgress
from clicksim.economy import Rejected, compute_next_cost, purchase
from clicksim.accrual import advance, manual_action
from clicksim.milestone import MILESTONES, Metric, Milestone, evaluate
from clicksim.storage import BlobStore, FileStore, MemoryStore, StorageError
from clicksim.persistence import PersistenceManager, Snapshot, load, save
from clicksim.driver import AsyncioTickDriver, ManualTickDriver, TickDriver
from clicksim.controller import SimulationController
from clicksim.view import (
    MilestoneView,
    StateView,
    UpgradeView,
    build_view,
    project_milestones,
    project_upgrades,
)
from clicksim.api import ActionAPI
from clicksim.strategy import GreedyCheapest, SaveForBest, Strategy, TapProfile
from clicksim.metrics import MetricsCollector
from clicksim.simulation import Simulation
from clicksim.report import SimulationReport, build_report
from clicksim.formatting import format_number, format_state_view, format_text_report

__all__ = [
    # Config
    "BASELINE_TICK_MS",
    "MIN_TICK_MS",
    "SCHEMA_VERSION",
    "STORAGE_KEY",
    "EngineConfig",
    "configure_logging",
    # Catalog
    "UPGRADES",
    "UpgradeCategory",
    "UpgradeDefinition",
    "get_upgrade",
    # State
    "SimulationState",
    "StateDelta",
    "UpgradeProgress",
    # Economy
    "Rejected",
    "compute_next_cost",
    "purchase",
    # Accrual
    "advance",
    "manual_action",
    # Milestones
    "MILESTONES",
    "Metric",
    "Milestone",
    "evaluate",
    # Persistence
    "BlobStore",
    "FileStore",
    "MemoryStore",
    "StorageError",
    "PersistenceManager",
    "Snapshot",
    "load",
    "save",
    # Driver
    "AsyncioTickDriver",
    "ManualTickDriver",
    "TickDriver",
    # Controller
    "SimulationController",
    "ActionAPI",
    # Views
    "MilestoneView",
    "StateView",
    "UpgradeView",
    "build_view",
    "project_milestones",
    "project_upgrades",
    # Simulation
    "GreedyCheapest",
    "SaveForBest",
    "Strategy",
    "TapProfile",
    "MetricsCollector",
    "Simulation",
    "SimulationReport",
    "build_report",
    # Formatting
    "format_number",
    "format_state_view",
    "format_text_report",
]
