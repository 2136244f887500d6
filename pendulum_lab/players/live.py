"""
Live control loop driven by the best published agent.

Once per visual frame the controller polls the best-agent channel,
keeps the newest agent it has seen, lets that agent choose the cart
command from the live observables and advances its own environment by
the elapsed wall-clock time.
"""
import time
from typing import Callable, Optional

from ..evaluation import set_pendulum_inputs
from ..networks import GraphAgent
from ..physics import Direction, PendulumEnvironment
from ..training import BestAgentChannel


# Longest simulated step per frame; slow frames run the pendulum slower
MAX_FRAME_DURATION = 1.0 / 30.0


class LiveController:
    """
    Consumer side of the best-agent channel.

    Attributes:
        environment: The live environment being controlled.
        agent: The most recently received agent, or None before the
               first publication.
        frames: Number of frames processed.

    Example:
        controller = LiveController(orchestrator.channel)
        while running:
            controller.update()
            render(controller.environment.bob_position())
    """

    def __init__(
        self,
        channel: BestAgentChannel,
        environment: Optional[PendulumEnvironment] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            channel: Channel the orchestrator publishes to.
            environment: Environment to drive. Defaults to a fresh one.
            clock: Monotonic time source in seconds.
        """
        self.channel = channel
        self.environment = environment or PendulumEnvironment()
        self.agent: Optional[GraphAgent] = None
        self.frames = 0
        self._clock = clock
        self._previous = clock()

    def poll(self) -> bool:
        """
        Take the newest pending agent, if any.

        Returns:
            True if the held agent changed.
        """
        updated = False
        while True:
            agent = self.channel.try_receive()
            if agent is None:
                return updated
            self.agent = agent
            updated = True

    def update(self) -> Optional[Direction]:
        """
        Process one frame.

        Returns:
            The command the agent chose this frame, or None while no
            agent has been received (the cart keeps its last command).
        """
        self.poll()

        direction = None
        if self.agent is not None:
            direction = set_pendulum_inputs(self.environment, self.agent)

        now = self._clock()
        duration = min(now - self._previous, MAX_FRAME_DURATION)
        self.environment.step(max(duration, 0.0))
        self._previous = now
        self.frames += 1
        return direction

    def reset(self) -> None:
        """Put the pendulum back to rest; the held agent is kept."""
        self.environment.reset()

    def close(self) -> None:
        """Stop consuming; the orchestrator stops publishing."""
        self.channel.close()
