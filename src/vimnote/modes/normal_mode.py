"""Normal mode: motions, operators, paste, and the entry points to other modes."""

from __future__ import annotations

from .base_mode import KeyInput, ModeContext, ModeResult
from .keymap_helpers import KeymapMode
from .operator_pipeline import OperatorPipeline


class NormalMode(KeymapMode):
    name = "normal"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.pipeline = OperatorPipeline(context)
        context.extras["operator_pipeline"] = self.pipeline

    @property
    def label(self) -> str:
        pending = self.context.operator.label
        if pending:
            return f"NORMAL ({pending})"
        return "NORMAL"

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        if self.context.operator.active:
            self.pipeline.abandon()

    def handle_key(self, key: KeyInput) -> ModeResult:
        # A pending operator sees the key first. When it declines, the key is
        # resolved below exactly as if no operator had been pending.
        result = self.pipeline.feed(key)
        if result is not None:
            return result
        return self.dispatch_keymap(key)


__all__ = ["NormalMode"]
