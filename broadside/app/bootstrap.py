"""Composition helpers wiring config, host, event bus and controller."""

from __future__ import annotations

import logging
import random

from broadside.app.controller import GameController
from broadside.app.ports import HostControl
from broadside.infra.config import GameConfig, load_default_env_files, load_game_config
from broadside.infra.logging import setup_logging
from broadside.runtime.events import EventBus
from broadside.runtime.host import LocalHost

logger = logging.getLogger(__name__)


def create_controller(
    *,
    host: HostControl | None = None,
    config: GameConfig | None = None,
    rng: random.Random | None = None,
    events: EventBus | None = None,
) -> GameController:
    """Create a controller. Missing collaborators fall back to local defaults."""
    resolved_config = config or load_game_config()
    resolved_rng = rng or random.Random(resolved_config.seed)
    controller = GameController(
        host=host or LocalHost(),
        rng=resolved_rng,
        config=resolved_config,
        events=events or EventBus(),
    )
    logger.info(
        "controller_created opponent_delay=%.2f seed=%s",
        resolved_config.opponent_delay_seconds,
        resolved_config.seed,
    )
    return controller


def bootstrap(
    *, host: HostControl | None = None, install_logging: bool = True
) -> GameController:
    """Load env files, set up logging and build a controller from the environment."""
    load_default_env_files(override_existing=False)
    if install_logging:
        setup_logging()
    return create_controller(host=host)
