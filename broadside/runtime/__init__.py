"""Host-independent runtime primitives: deferred tasks, flows, events, logging."""

from broadside.runtime.events import EventBus, Subscription
from broadside.runtime.flow import FlowContext, FlowMachine, FlowTransition
from broadside.runtime.host import LocalHost
from broadside.runtime.scheduler import Scheduler

__all__ = [
    "EventBus",
    "FlowContext",
    "FlowMachine",
    "FlowTransition",
    "LocalHost",
    "Scheduler",
    "Subscription",
]
