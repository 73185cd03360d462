"""Mode manager, operator pipeline, and dispatch logic."""

from .base_mode import (
    HostAction,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
)
from .command_mode import CommandMode
from .insert_mode import InsertMode
from .keymap_helpers import KeymapMode
from .mode_manager import ModeManager
from .normal_mode import NormalMode
from .operator_pipeline import OperatorOutcome, OperatorPipeline
from .pending import Operator, PendingOperator

__all__ = [
    "HostAction",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "KeymapMode",
    "ModeManager",
    "NormalMode",
    "InsertMode",
    "CommandMode",
    "Operator",
    "OperatorOutcome",
    "OperatorPipeline",
    "PendingOperator",
]
