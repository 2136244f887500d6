"""
Fitness evaluation for pendulum controllers.
"""
from .pendulum import (
    BALANCE_HEIGHT,
    DEAD_ZONE,
    DEFAULT_DT,
    DEFAULT_TICKS,
    observe,
    run_simulation,
    set_pendulum_inputs,
    speed_to_direction,
    tick_score,
)

__all__ = [
    'BALANCE_HEIGHT',
    'DEAD_ZONE',
    'DEFAULT_DT',
    'DEFAULT_TICKS',
    'observe',
    'run_simulation',
    'set_pendulum_inputs',
    'speed_to_direction',
    'tick_score',
]
