"""Operator keys: ``d``, ``y`` and ``c`` only arm the pending operator."""

from __future__ import annotations

from vimnote.keymaps import ResolutionMatch
from vimnote.modes.base_mode import ModeContext, ModeResult
from vimnote.modes.operator_pipeline import OperatorPipeline
from vimnote.modes.pending import Operator


def _pipeline(context: ModeContext) -> OperatorPipeline:
    pipeline = context.extras.get("operator_pipeline")
    if not isinstance(pipeline, OperatorPipeline):
        raise RuntimeError("ModeContext.extras missing 'operator_pipeline'")
    return pipeline


def begin_delete(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _pipeline(context).begin(Operator.DELETE)


def begin_yank(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _pipeline(context).begin(Operator.YANK)


def begin_change(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _pipeline(context).begin(Operator.CHANGE)


__all__ = ["begin_delete", "begin_yank", "begin_change"]
