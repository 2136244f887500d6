"""
Physics simulation used both for fitness evaluation and live control.
"""
from .pendulum import Direction, PendulumEnvironment, PendulumState

__all__ = [
    'Direction',
    'PendulumEnvironment',
    'PendulumState',
]
