"""Conditional block tracker.

Recognizes try-then-fallback guards around imports:

    try:
        import ujson as json      # PRIMARY
    except ImportError:
        import json               # FALLBACK

Each open guard is a frame on an explicit stack, so nested guards never need
recursion or backtracking. A frame moves IN_PRIMARY_ARM -> IN_FALLBACK_ARM on
every arm token at its own indentation; any later arm is FALLBACK as well.
The frame closes on an else/finally token or when a statement dedents to or
past the guard keyword.

Payloads held inside a guard are released only when the outermost guard
closes, because a guard whose imports sit in fewer than two arms is not an
alternative-import pattern: its payloads inherit the enclosing arm instead
(or NONE at top level).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..grammars import Grammar
from ..models import ConditionalBranch
from .joiner import LogicalStatement


class GuardState(Enum):
    """Position of the scanner relative to the innermost guard."""

    OUTSIDE_GUARD = "outside_guard"
    IN_PRIMARY_ARM = "in_primary_arm"
    IN_FALLBACK_ARM = "in_fallback_arm"


@dataclass
class _Slot:
    payload: Any
    arm: int | None = None
    guard_id: int | None = None


@dataclass
class _GuardFrame:
    guard_id: int
    indent: int
    state: GuardState = GuardState.IN_PRIMARY_ARM
    arm: int = 0
    slots: list[_Slot] = field(default_factory=list)
    arms_with_imports: set[int] = field(default_factory=set)


class GuardTracker:
    """Tags payloads with their guard arm, one tracker per file."""

    def __init__(self, grammar: Grammar):
        self.syntax = grammar.guard
        self._frames: list[_GuardFrame] = []
        self._held: list[_Slot] = []
        self._next_id = 0

    @property
    def state(self) -> GuardState:
        if not self._frames:
            return GuardState.OUTSIDE_GUARD
        return self._frames[-1].state

    @property
    def depth(self) -> int:
        return len(self._frames)

    def observe(self, statement: LogicalStatement) -> str | None:
        """Advance the state machine over one statement.

        Returns the text written after a guard keyword on the same line
        (possibly empty) when the statement was a guard token, else None.
        """
        if self.syntax is None:
            return None

        text = statement.text
        arm = self.syntax.arm_pattern.match(text)
        close = self.syntax.close_pattern.match(text)
        continues_top = (arm or close) is not None

        while self._frames:
            top = self._frames[-1]
            if statement.indent > top.indent:
                break
            if statement.indent == top.indent and continues_top:
                break
            self._close()

        opened = self.syntax.open_pattern.match(text)
        if opened is not None:
            self._frames.append(_GuardFrame(guard_id=self._next_id, indent=statement.indent))
            self._next_id += 1
            return opened["body"].strip()

        if not self._frames or self._frames[-1].indent != statement.indent:
            return None

        if arm is not None:
            top = self._frames[-1]
            top.arm += 1
            top.state = GuardState.IN_FALLBACK_ARM
            return arm["body"].strip()

        self._close()
        return close["body"].strip()

    def hold(self, payload: Any):
        """Attach a payload to the current arm of the innermost guard."""
        slot = _Slot(payload)
        self._held.append(slot)
        if self._frames:
            top = self._frames[-1]
            slot.arm = top.arm
            top.slots.append(slot)
            top.arms_with_imports.add(top.arm)

    def drain(self, final: bool = False) -> list[tuple[Any, ConditionalBranch, int | None]]:
        """Release payloads whose tagging can no longer change, in source order."""
        if final:
            while self._frames:
                self._close()
        if self._frames:
            return []

        released = [(slot.payload, _branch(slot), slot.guard_id) for slot in self._held]
        self._held = []
        return released

    def _close(self):
        frame = self._frames.pop()
        parent = self._frames[-1] if self._frames else None

        if len(frame.arms_with_imports) >= 2:
            for slot in frame.slots:
                slot.guard_id = frame.guard_id
            if parent is not None:
                parent.arms_with_imports.add(parent.arm)
            return

        # Not an alternative-import guard: hand the payloads to the enclosing arm
        for slot in frame.slots:
            slot.arm = None
            if parent is not None:
                slot.arm = parent.arm
                parent.slots.append(slot)
        if parent is not None and frame.slots:
            parent.arms_with_imports.add(parent.arm)


def _branch(slot: _Slot) -> ConditionalBranch:
    if slot.guard_id is None:
        return ConditionalBranch.NONE
    if slot.arm == 0:
        return ConditionalBranch.PRIMARY
    return ConditionalBranch.FALLBACK
