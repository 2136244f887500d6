"""
Configuration for physics, mutation and evolution runs.

All configuration is plain dataclasses with defaults tuned for a
30 Hz control loop. Values can be overridden in code or, for the
evolution run, from ``PENDULUM_*`` environment variables.
"""
import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


TICKS_PER_SECOND = 30
SIMULATION_SECONDS = 100


@dataclass(frozen=True)
class PhysicsConfig:
    """Constants of the cart-and-pendulum simulation."""

    # Cart actuator
    acceleration: float = 4.0
    max_speed: float = 2.0

    # Track bounds for the cart centre
    track_min_x: float = -0.5
    track_max_x: float = 0.5

    # Pendulum
    rod_radius: float = 0.3
    gravity: float = 9.81
    swing_factor: float = 1.0 / TICKS_PER_SECOND

    # Velocity damping per second
    cart_friction: float = 1.0
    angular_friction: float = 0.1

    def __post_init__(self):
        if self.track_min_x >= self.track_max_x:
            raise ValueError(
                f"track_min_x ({self.track_min_x}) must be below "
                f"track_max_x ({self.track_max_x})"
            )
        if self.rod_radius <= 0:
            raise ValueError(f"rod_radius must be positive, got {self.rod_radius}")
        if self.max_speed <= 0:
            raise ValueError(f"max_speed must be positive, got {self.max_speed}")


@dataclass
class MutationConfig:
    """Per-element probabilities and step sizes for graph mutation."""

    # Parameter (weight / bias) perturbation
    parameter_rate: float = 0.2
    reset_rate: float = 0.2
    large_perturbation_rate: float = 0.25
    large_delta: float = 1.0
    small_delta: float = 0.01

    # Structural growth
    split_edge_rate: float = 0.25
    add_connection_rate: float = 0.25

    def __post_init__(self):
        for name in (
            'parameter_rate',
            'reset_rate',
            'large_perturbation_rate',
            'split_edge_rate',
            'add_connection_rate',
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")


@dataclass
class EvolutionConfig:
    """Configuration for an evolution run."""

    # Population
    population_size: int = 10
    elite_count: int = 3
    max_nodes: int = 30

    # Fitness rollout
    ticks: int = TICKS_PER_SECOND * SIMULATION_SECONDS
    tick_rate: int = TICKS_PER_SECOND

    # Parallel evaluation
    max_workers: Optional[int] = None
    executor: str = 'process'  # 'process' or 'thread'

    # Reproducibility of the selection / mutation stream
    seed: Optional[int] = None

    def __post_init__(self):
        if self.population_size < 1:
            raise ValueError(
                f"population_size must be positive, got {self.population_size}"
            )
        if not 0 <= self.elite_count <= self.population_size:
            raise ValueError(
                f"elite_count must be in [0, population_size], got {self.elite_count}"
            )
        if self.ticks < 0:
            raise ValueError(f"ticks must be non-negative, got {self.ticks}")
        if self.tick_rate < 1:
            raise ValueError(f"tick_rate must be positive, got {self.tick_rate}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")
        if self.executor not in ('process', 'thread'):
            raise ValueError(f"Unknown executor: {self.executor}")

    @property
    def tick_duration(self) -> float:
        """Simulated seconds per rollout tick."""
        return 1.0 / self.tick_rate

    @classmethod
    def from_env(cls, prefix: str = 'PENDULUM_', **overrides: Any) -> 'EvolutionConfig':
        """
        Build a config from environment variables.

        Each field maps to ``<prefix><FIELD_NAME>``, e.g.
        ``PENDULUM_POPULATION_SIZE=20``. Explicit keyword overrides
        win over the environment.

        Args:
            prefix: Environment variable prefix.
            **overrides: Field values that take precedence.

        Returns:
            A validated EvolutionConfig.
        """
        values: Dict[str, Any] = {}
        for field_ in fields(cls):
            raw = os.environ.get(f"{prefix}{field_.name.upper()}")
            if raw is None or raw == '':
                continue
            if field_.name == 'executor':
                values[field_.name] = raw
            else:
                values[field_.name] = int(raw)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = 'INFO') -> None:
    """
    Set up console logging for the pendulum_lab loggers.

    Only entry points call this; library modules just log.
    """
    logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    logging.getLogger('pendulum_lab').setLevel(level.upper())
