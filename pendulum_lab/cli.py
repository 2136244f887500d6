"""
Command-line entry point.

Usage:
    pendulum-lab [--population-size 10] [--generations N] [--workers 4]
                 [--watch] [--plot evolution.png]

Without --generations evolution runs until interrupted. With --watch a
headless live controller follows the best published agent at 30 Hz
and logs the cart and bob once per second.
"""
import argparse
import logging
import sys
import time
from typing import List, Optional

from .config import TICKS_PER_SECOND, EvolutionConfig, configure_logging
from .evolution import EvolutionEngine
from .players import LiveController
from .training import Orchestrator
from .visualization import format_evolution_summary, plot_evolution_progress


logger = logging.getLogger('pendulum_lab.cli')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pendulum-lab',
        description='Evolve graph-network controllers for an inverted pendulum',
    )
    parser.add_argument(
        '--population-size',
        type=int,
        help='Number of agents per generation (default: 10)',
    )
    parser.add_argument(
        '--elite-count',
        type=int,
        help='Agents carried over unmodified each generation (default: 3)',
    )
    parser.add_argument(
        '--max-nodes',
        type=int,
        help='Node cap for structural growth (default: 30)',
    )
    parser.add_argument(
        '--ticks',
        type=int,
        help='Control ticks per fitness rollout (default: 3000)',
    )
    parser.add_argument(
        '--workers',
        type=int,
        dest='max_workers',
        help='Parallel evaluation workers (default: CPU count, 1 = serial)',
    )
    parser.add_argument(
        '--executor',
        choices=['process', 'thread'],
        help='Worker pool kind (default: process)',
    )
    parser.add_argument(
        '--seed',
        type=int,
        help='Seed for selection and mutation',
    )
    parser.add_argument(
        '--generations',
        type=int,
        default=None,
        help='Stop after this many generations (default: run until interrupted)',
    )
    parser.add_argument(
        '--watch',
        action='store_true',
        help='Drive a live controller with the best agent while evolving',
    )
    parser.add_argument(
        '--plot',
        metavar='PATH',
        help='Save a score-over-generations plot (needs --generations)',
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO)',
    )
    return parser


def watch(orchestrator: Orchestrator, max_generations: Optional[int]) -> None:
    """Evolve in the background while a live controller follows along."""
    controller = LiveController(orchestrator.channel)
    thread = orchestrator.start(max_generations=max_generations)
    frame = 1.0 / TICKS_PER_SECOND
    try:
        while thread.is_alive():
            controller.update()
            if controller.frames % TICKS_PER_SECOND == 0:
                bob_x, bob_y = controller.environment.bob_position()
                logger.info(
                    f"Live: cart={controller.environment.cart_x():+.3f} "
                    f"bob=({bob_x:+.3f}, {bob_y:+.3f}) "
                    f"angvel={controller.environment.angvel():+.3f}"
                )
            time.sleep(frame)
    finally:
        controller.close()
        orchestrator.stop()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.plot and args.generations is None:
        parser.error('--plot needs --generations')

    configure_logging(args.log_level)

    try:
        config = EvolutionConfig.from_env(
            population_size=args.population_size,
            elite_count=args.elite_count,
            max_nodes=args.max_nodes,
            ticks=args.ticks,
            max_workers=args.max_workers,
            executor=args.executor,
            seed=args.seed,
        )
    except ValueError as e:
        parser.error(str(e))

    orchestrator = Orchestrator(EvolutionEngine(config))

    try:
        if args.watch:
            watch(orchestrator, args.generations)
        else:
            orchestrator.run_experiment(max_generations=args.generations)
    except KeyboardInterrupt:
        logger.info("Interrupted")

    stats_history = orchestrator.engine.stats_history
    sys.stdout.write(
        format_evolution_summary(stats_history, orchestrator.best_individual) + "\n"
    )

    if args.plot:
        path = plot_evolution_progress(stats_history, save_path=args.plot)
        if path:
            sys.stdout.write(f"Saved plot to {path}\n")

    return 0


if __name__ == '__main__':
    sys.exit(main())
