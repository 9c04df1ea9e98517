"""Transition-table state machine."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

_LOG = logging.getLogger(__name__)

TState = TypeVar("TState")


@dataclass(frozen=True, slots=True)
class FlowContext(Generic[TState]):
    """Transition execution context."""

    trigger: str
    source: TState
    target: TState
    payload: object | None = None


TransitionGuard = Callable[[FlowContext[TState]], bool]
TransitionHook = Callable[[FlowContext[TState]], None]


@dataclass(frozen=True, slots=True)
class FlowTransition(Generic[TState]):
    """One transition definition. A `None` source matches any state."""

    trigger: str
    source: TState | None
    target: TState
    guard: TransitionGuard[TState] | None = None
    before: TransitionHook[TState] | None = None
    after: TransitionHook[TState] | None = None


class FlowMachine(Generic[TState]):
    """Deterministic transition table executor.

    Transitions are matched in registration order. `before` hooks run while
    the machine is still in the source state, `after` hooks once the target
    is current. Listeners are notified after the `after` hook.
    """

    def __init__(
        self,
        initial_state: TState,
        transitions: Iterable[FlowTransition[TState]] = (),
    ) -> None:
        self._state = initial_state
        self._transitions: list[FlowTransition[TState]] = list(transitions)
        self._listeners: list[TransitionHook[TState]] = []

    @property
    def state(self) -> TState:
        return self._state

    def add_transition(self, transition: FlowTransition[TState]) -> None:
        """Register one transition."""
        self._transitions.append(transition)

    def add_listener(self, listener: TransitionHook[TState]) -> None:
        """Register a callback run after every completed transition."""
        self._listeners.append(listener)

    def can_trigger(self, event: str, *, payload: object | None = None) -> bool:
        """Return whether `event` would change state right now. Hooks are not run."""
        return self._match(event, payload) is not None

    def trigger(self, event: str, *, payload: object | None = None) -> bool:
        """Execute first matching transition. Returns whether state changed."""
        match = self._match(event, payload)
        if match is None:
            _LOG.debug("flow_trigger_ignored trigger=%s state=%s", event, self._state)
            return False
        transition, context = match
        if transition.before is not None:
            transition.before(context)
        self._state = transition.target
        _LOG.debug("flow_transition trigger=%s %s->%s", event, context.source, context.target)
        if transition.after is not None:
            transition.after(context)
        for listener in tuple(self._listeners):
            listener(context)
        return True

    def _match(
        self, event: str, payload: object | None
    ) -> tuple[FlowTransition[TState], FlowContext[TState]] | None:
        source_state = self._state
        for transition in self._transitions:
            if transition.trigger != event:
                continue
            if transition.source is not None and transition.source != source_state:
                continue
            context = FlowContext(
                trigger=event,
                source=source_state,
                target=transition.target,
                payload=payload,
            )
            if transition.guard is not None and not transition.guard(context):
                continue
            return transition, context
        return None
