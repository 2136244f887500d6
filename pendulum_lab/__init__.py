"""
Neuroevolution of inverted-pendulum controllers.

A population of graph-structured networks is evolved by a genetic
algorithm (structural + weight mutation, fitness-proportionate
selection with elitism) to balance a pendulum on a moving cart.

Subpackages:
- physics: deterministic cart-and-pendulum dynamics
- networks: the acyclic graph agent and its pendulum arity
- evaluation: fitness rollouts and the per-tick control decision
- evolution: mutation, selection and the evolution engine
- training: the background orchestrator and best-agent channel
- players: the live control loop that consumes published agents

Example usage:
    from pendulum_lab.training import Orchestrator

    orchestrator = Orchestrator()
    receiver = orchestrator.channel
    orchestrator.start()

    # Once per frame
    agent = receiver.try_receive()
"""
__version__ = '0.1.0'
