"""Operator-pending grammar: ``d``/``y``/``c`` followed by a motion.

The pipeline looks at every Normal-mode key before the keymap does. While an
operator is pending it either completes it (doubling, ``w``, ``iw``), records
the ``i`` lookahead, or abandons the operator and hands the key back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from vimnote.buffer import Buffer, motions
from vimnote.runtime import telemetry

from .base_mode import KeyInput, ModeContext, ModeResult
from .keymap_helpers import update_flag
from .pending import Operator, PendingOperator

Motion = Literal["line", "word", "inner_word"]


@dataclass(slots=True)
class OperatorOutcome:
    operator: Operator
    motion: Motion
    start: int
    end: int
    text: str


class OperatorPipeline:
    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self.logger = telemetry.get_logger("vimnote.modes.operator")

    @property
    def state(self) -> PendingOperator:
        return self.context.operator

    @property
    def buffer(self) -> Buffer:
        return self.context.buffer

    def begin(self, operator: Operator) -> ModeResult:
        self.state.begin(operator)
        self._sync_flags()
        return ModeResult(
            consumed=True, status="operator_pending", message=self.state.label
        )

    def abandon(self) -> None:
        self.state.clear()
        self._sync_flags()

    def feed(self, key: KeyInput) -> Optional[ModeResult]:
        """Offer ``key`` to a pending operator.

        Returns ``None`` when no operator is pending or when the key abandoned
        it; the caller then treats the key as an ordinary Normal-mode key.
        """

        operator = self.state.operator
        if operator is None:
            return None

        token = key.token
        if self.state.expecting_inner:
            if token == "w":
                return self._complete(operator, "inner_word")
        elif token == operator.key:
            return self._complete(operator, "line")
        elif token == "w":
            return self._complete(operator, "word")
        elif token == "i" and operator is not Operator.YANK:
            self.state.expecting_inner = True
            self._sync_flags()
            return ModeResult(
                consumed=True, status="operator_pending", message=self.state.label
            )

        telemetry.record_event(
            "operator.abandon",
            level="debug",
            data={"operator": self.state.label, "key": token},
        )
        self.abandon()
        return None

    def _complete(self, operator: Operator, motion: Motion) -> ModeResult:
        self.abandon()
        with telemetry.span(
            "operator::apply",
            component="operators",
            metadata={"operator": operator.key, "motion": motion},
        ):
            if motion == "line":
                outcome = self._apply_line(operator)
            else:
                outcome = self._apply_span(operator, motion)

        if outcome.text:
            self.context.bus.emit(
                "register.store",
                {"operator": operator.key, "motion": motion, "text": outcome.text},
            )
        telemetry.record_event(
            "operator.apply",
            level="debug",
            data={
                "operator": operator.key,
                "motion": motion,
                "start": outcome.start,
                "end": outcome.end,
            },
        )
        return ModeResult(
            consumed=True,
            switch_to="insert" if operator is Operator.CHANGE else None,
            status=f"operator_{operator.name.lower()}",
            message=motion,
        )

    def _apply_span(self, operator: Operator, motion: Motion) -> OperatorOutcome:
        text = self.buffer.text
        position = self.buffer.position
        if motion == "word":
            start, end = position, motions.word_forward_end(text, position)
        else:
            start, end = motions.inner_word_span(text, position)

        captured = text[start:end]
        if captured:
            self.buffer.register.store(captured)
            if operator is not Operator.YANK:
                self.buffer.delete_range(
                    start, end, label=f"{operator.name.lower()}_{motion}", cursor=start
                )
        return OperatorOutcome(operator, motion, start, end, captured)

    def _apply_line(self, operator: Operator) -> OperatorOutcome:
        text = self.buffer.text
        start, content_end = motions.line_span(text, self.buffer.position)
        line_text = text[start:content_end]

        if operator is Operator.YANK:
            self.buffer.register.store(line_text + "\n")
            return OperatorOutcome(operator, "line", start, content_end, line_text + "\n")

        if operator is Operator.CHANGE:
            if line_text:
                self.buffer.register.store(line_text)
            self.buffer.delete_range(start, content_end, label="change_line", cursor=start)
            return OperatorOutcome(operator, "line", start, content_end, line_text)

        self.buffer.register.store(line_text + "\n")
        end = motions.line_end_inclusive(text, start)
        if end > content_end:
            cut = (start, end)
        elif start > 0:
            # last line: take the terminator that precedes it
            cut = (start - 1, content_end)
        else:
            cut = (start, content_end)
        self.buffer.delete_range(*cut, label="delete_line")
        remaining = self.buffer.text
        landing = motions.line_start(remaining, min(start, len(remaining)))
        self.buffer.move_to(landing)
        return OperatorOutcome(operator, "line", cut[0], cut[1], line_text + "\n")

    def _sync_flags(self) -> None:
        update_flag(self.context, "operator_pending", self.state.active)
        update_flag(self.context, "inner_pending", self.state.expecting_inner)


__all__ = ["OperatorPipeline", "OperatorOutcome", "Motion"]
