"""
Background training loop for pendulum controllers.

This module provides:
- Orchestrator: runs the evolution engine forever, tracks the best score
- BestAgentChannel: one-way, non-blocking hand-off of new best agents
"""
from .orchestrator import BestAgentChannel, ChannelClosed, Orchestrator

__all__ = [
    'BestAgentChannel',
    'ChannelClosed',
    'Orchestrator',
]
