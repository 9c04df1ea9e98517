"""Game phase transition table."""

from __future__ import annotations

from collections.abc import Callable

from broadside.core.models import PLACING_PHASES, Phase
from broadside.runtime.flow import FlowContext, FlowMachine, FlowTransition

OPEN = "open"
OPENING_FINISHED = "opening_finished"
SHIP_PLACED = "ship_placed"
BEGIN_COMBAT = "begin_combat"
FLEET_DESTROYED = "fleet_destroyed"
REMATCH = "rematch"
CLOSING_FINISHED = "closing_finished"

# The restart button is live from the end of the opening animation onwards.
REMATCH_SOURCES: tuple[Phase, ...] = (
    *PLACING_PHASES,
    Phase.SETUP_COMPLETE,
    Phase.COMBAT,
    Phase.TERMINAL,
)

PhaseHook = Callable[[FlowContext[Phase]], None]


def default_phase_transitions(
    *,
    on_open: PhaseHook | None = None,
    on_reset: PhaseHook | None = None,
) -> tuple[FlowTransition[Phase], ...]:
    """Build the phase transition table.

    `on_open` runs after the board starts opening (opponent fleet placement);
    `on_reset` runs as the closed board reopens (state wipe and re-placement).
    """
    placing_chain = (*PLACING_PHASES, Phase.SETUP_COMPLETE)
    transitions: list[FlowTransition[Phase]] = [
        FlowTransition(trigger=OPEN, source=Phase.CLOSED, target=Phase.OPENING, after=on_open),
        FlowTransition(
            trigger=OPENING_FINISHED, source=Phase.OPENING, target=PLACING_PHASES[0]
        ),
    ]
    transitions.extend(
        FlowTransition(trigger=SHIP_PLACED, source=source, target=target)
        for source, target in zip(placing_chain, placing_chain[1:])
    )
    transitions.extend(
        (
            FlowTransition(trigger=BEGIN_COMBAT, source=Phase.SETUP_COMPLETE, target=Phase.COMBAT),
            FlowTransition(trigger=FLEET_DESTROYED, source=Phase.COMBAT, target=Phase.TERMINAL),
        )
    )
    transitions.extend(
        FlowTransition(trigger=REMATCH, source=source, target=Phase.CLOSING)
        for source in REMATCH_SOURCES
    )
    transitions.append(
        FlowTransition(
            trigger=CLOSING_FINISHED, source=Phase.CLOSING, target=Phase.OPENING, after=on_reset
        )
    )
    return tuple(transitions)


def create_phase_machine(
    *,
    on_open: PhaseHook | None = None,
    on_reset: PhaseHook | None = None,
) -> FlowMachine[Phase]:
    """Create a phase machine starting with the board closed."""
    return FlowMachine(
        Phase.CLOSED, default_phase_transitions(on_open=on_open, on_reset=on_reset)
    )
