"""
Cart-and-pendulum dynamics.

A cart slides along a bounded track and carries a rigid rod with a bob
at its end. The simulation is a pure function of state, the commanded
acceleration and elapsed time, integrated with semi-implicit Euler.

Conventions:
- angle 0 is the pendulum hanging straight down, angle pi is upright
- bob_angular_velocity is expressed in radians per step
- positive x is to the right
"""
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from ..config import PhysicsConfig


class Direction(Enum):
    """Actuator command for the cart."""
    LEFT = -1
    STOP = 0
    RIGHT = 1


@dataclass
class PendulumState:
    """Complete mutable state of one simulation."""
    cart_position: float = 0.0
    cart_linear_velocity: float = 0.0
    cart_linear_acceleration: float = 0.0
    bob_angular_velocity: float = 0.0
    bob_angle: float = 0.0


class PendulumEnvironment:
    """
    Deterministic single-cart pendulum simulator.

    Shared by fitness rollouts and the live control loop. Identical
    initial state, command sequence and dt sequence always produce an
    identical trajectory.

    Attributes:
        config: Physical constants.

    Example:
        env = PendulumEnvironment()
        env.command(Direction.RIGHT)
        env.step(1 / 30)
        x, y = env.bob_position()
    """

    def __init__(
        self,
        config: Optional[PhysicsConfig] = None,
        state: Optional[PendulumState] = None,
    ):
        """
        Create an environment, by default at rest with the cart centred
        and the pendulum hanging down.

        Args:
            config: Physical constants. Defaults to PhysicsConfig().
            state: Initial state to start from instead of rest. Copied.
        """
        self.config = config or PhysicsConfig()
        self._state = replace(state) if state is not None else PendulumState()

    def reset(self) -> None:
        """Return to the initial resting state."""
        self._state = PendulumState()

    @property
    def state(self) -> PendulumState:
        """A copy of the current state."""
        return replace(self._state)

    # Actuator

    def command(self, direction: Direction) -> None:
        """Set the constant cart acceleration for subsequent steps."""
        self._state.cart_linear_acceleration = direction.value * self.config.acceleration

    def move_left(self) -> None:
        self.command(Direction.LEFT)

    def move_right(self) -> None:
        self.command(Direction.RIGHT)

    def stop(self) -> None:
        self.command(Direction.STOP)

    # Dynamics

    def step(self, dt: float) -> None:
        """
        Advance the simulation by dt seconds.

        Args:
            dt: Elapsed time in seconds. A zero dt only applies the
                per-step angle increment.
        """
        cfg = self.config
        s = self._state

        x = s.cart_position
        v = s.cart_linear_velocity
        new_v = v + s.cart_linear_acceleration * dt
        if dt > 0:
            # Never leave the track within one step
            new_v = min(max(new_v, (cfg.track_min_x - x) / dt), (cfg.track_max_x - x) / dt)
        new_v = min(max(new_v, -cfg.max_speed), cfg.max_speed)

        s.cart_position = x + new_v * dt
        s.cart_linear_velocity = new_v

        dvel = new_v - v
        angle = s.bob_angle
        s.bob_angular_velocity += cfg.swing_factor * (
            -dvel * math.cos(angle) - cfg.gravity * dt * math.sin(angle)
        ) / cfg.rod_radius
        s.bob_angle = angle + s.bob_angular_velocity

        s.cart_linear_velocity *= max(0.0, 1.0 - cfg.cart_friction * dt)
        s.bob_angular_velocity *= max(0.0, 1.0 - cfg.angular_friction * dt)

    # Observables

    def cart_x(self) -> float:
        return self._state.cart_position

    def angvel(self) -> float:
        return self._state.bob_angular_velocity

    def bob_position(self) -> Tuple[float, float]:
        """Cartesian bob position in track coordinates (track at y=0)."""
        nx, ny = self.bob_position_normalized()
        radius = self.config.rod_radius
        return self._state.cart_position + radius * nx, radius * ny

    def bob_position_normalized(self) -> Tuple[float, float]:
        """
        Bob position relative to the pivot on the unit circle.

        y is -1 hanging down and +1 balanced upright; used for scoring.
        """
        angle = self._state.bob_angle
        return math.sin(angle), -math.cos(angle)
