"""
Background evolution loop and best-agent publishing.

The orchestrator owns the population and runs generations forever on
a daemon thread. Whenever a generation's top score beats the best ever
seen, a clone of that agent is pushed onto a single-consumer
channel. The consumer polls the channel without blocking, once per
frame, and keeps using the last agent it received.

Nothing but the channel crosses the thread boundary.
"""
import logging
import queue
import threading
from typing import List, Optional

from ..evolution import EvolutionEngine, Individual
from ..networks import GraphAgent


logger = logging.getLogger(__name__)


class ChannelClosed(Exception):
    """Raised when publishing to a channel whose consumer has gone."""


class BestAgentChannel:
    """
    Unbounded single-producer / single-consumer agent channel.

    There is no back-pressure: snapshots queue up until the consumer
    polls. Closing the channel tells the producer the consumer is gone.

    Example:
        channel = BestAgentChannel()
        channel.send(agent.clone())
        latest = channel.try_receive()  # None when nothing is pending
    """

    def __init__(self):
        self._queue: 'queue.SimpleQueue[GraphAgent]' = queue.SimpleQueue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, agent: GraphAgent) -> None:
        """
        Publish an agent snapshot.

        Raises:
            ChannelClosed: If the consumer closed the channel.
        """
        if self.closed:
            raise ChannelClosed("Best-agent consumer has gone")
        self._queue.put(agent)

    def try_receive(self) -> Optional[GraphAgent]:
        """Return the next pending snapshot, or None without blocking."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def pending(self) -> int:
        """Number of snapshots waiting for the consumer."""
        return self._queue.qsize()

    def close(self) -> None:
        """Mark the consumer as gone."""
        self._closed.set()


class Orchestrator:
    """
    Runs the evolution engine indefinitely and publishes new bests.

    The best-ever score and the population are the only state carried
    from one generation to the next.

    Attributes:
        engine: The evolution engine.
        channel: Where new best agents are published.
        best_score: Best score seen so far (starts at 0.0).
        publishing: False once the consumer has gone.

    Example:
        orchestrator = Orchestrator(EvolutionEngine(config))
        orchestrator.start()
        ...
        agent = orchestrator.channel.try_receive()
    """

    def __init__(
        self,
        engine: Optional[EvolutionEngine] = None,
        channel: Optional[BestAgentChannel] = None,
    ):
        self.engine = engine or EvolutionEngine()
        self.channel = channel or BestAgentChannel()
        self.best_score = 0.0
        self.best_individual: Optional[Individual] = None
        self.publishing = True
        self.agents: List[GraphAgent] = []
        self._thread: Optional[threading.Thread] = None
        self._stop_requested = threading.Event()

    @property
    def generation(self) -> int:
        return self.engine.generation

    def run_generation(self) -> List[Individual]:
        """
        Run one generation and publish its winner if it is a new best.

        Returns:
            The generation's ranking, ascending by score.
        """
        if not self.agents:
            self.agents = self.engine.initial_population()

        ranked, self.agents = self.engine.step(self.agents)

        best = ranked[-1]
        if best.score > self.best_score:
            self.best_score = best.score
            self.best_individual = best
            logger.info(
                f"New best score: {best.score} (generation {best.generation}, "
                f"{best.agent.node_count} nodes, {best.agent.edge_count} edges)"
            )
            logger.debug(f"Best agent graph: {best.agent.to_dict()}")
            self._publish(best.agent.clone())

        return ranked

    def _publish(self, agent: GraphAgent) -> None:
        if not self.publishing:
            return
        try:
            self.channel.send(agent)
        except ChannelClosed:
            self.publishing = False
            logger.warning("Best-agent consumer has gone, no longer publishing")

    def run_experiment(self, max_generations: Optional[int] = None) -> None:
        """
        Run generations until stopped.

        Args:
            max_generations: Stop after this many generations.
                             None runs until ``stop()`` is called.
        """
        logger.info(
            f"Starting evolution: population={self.engine.config.population_size} "
            f"elites={self.engine.config.elite_count} "
            f"max_nodes={self.engine.config.max_nodes}"
        )
        run = 0
        try:
            while not self._stop_requested.is_set():
                if max_generations is not None and run >= max_generations:
                    break
                self.run_generation()
                run += 1
        finally:
            self.engine.close()
            logger.info(
                f"Evolution stopped after {self.generation} generations, "
                f"best score {self.best_score}"
            )

    def start(self, max_generations: Optional[int] = None) -> threading.Thread:
        """Run the experiment on a daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("Evolution is already running")
        self._stop_requested.clear()
        self._thread = threading.Thread(
            target=self.run_experiment,
            kwargs={'max_generations': max_generations},
            name='pendulum-evolution',
            daemon=True,
        )
        self._thread.start()
        return self._thread

    def stop(self, timeout: Optional[float] = None) -> None:
        """Ask the loop to finish after the current generation and wait."""
        self._stop_requested.set()
        if self._thread is not None:
            self._thread.join(timeout)
