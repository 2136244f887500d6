"""
Evolution visualization utilities.

- Two-panel progress chart: scores with record generations, graph size
- Text summary of a run
"""
from typing import List, Optional, Tuple

import numpy as np

try:
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

from ..evolution import GenerationStats, Individual


def new_best_generations(stats_history: List[GenerationStats]) -> List[int]:
    """Generations whose best score beat every earlier generation."""
    marks = []
    record = 0.0
    for stats in stats_history:
        if stats.best_score > record:
            record = stats.best_score
            marks.append(stats.generation)
    return marks


def plot_evolution_progress(
    stats_history: List[GenerationStats],
    save_path: str,
    show_spread: bool = True,
    figsize: Tuple[int, int] = (10, 8),
) -> Optional[str]:
    """
    Save a two-panel chart of an evolution run.

    The upper panel tracks the best score, the population mean with a
    one-standard-deviation band, and marks every generation that set a
    new record. The lower panel tracks mean graph size.

    Args:
        stats_history: Engine statistics, one entry per generation.
        save_path: Where to write the image.
        show_spread: Shade mean +/- std around the average score.
        figsize: Figure size in inches.

    Returns:
        save_path, or None when the history is empty.
    """
    if not HAS_MATPLOTLIB:
        raise ImportError("matplotlib required, install the 'viz' extra")

    if not stats_history:
        return None

    gens = np.array([s.generation for s in stats_history])
    best = np.array([s.best_score for s in stats_history])
    mean = np.array([s.avg_score for s in stats_history])
    spread = np.array([s.score_std for s in stats_history])

    fig, (score_ax, size_ax) = plt.subplots(
        2, 1, sharex=True, figsize=figsize,
        gridspec_kw={'height_ratios': [3, 1]},
    )

    score_ax.step(gens, best, where='post', color='tab:green', label='Best')
    score_ax.plot(gens, mean, color='tab:blue', label='Mean')
    if show_spread:
        score_ax.fill_between(
            gens, np.maximum(mean - spread, 0.0), mean + spread,
            color='tab:blue', alpha=0.15, label='Mean +/- std',
        )
    records = np.isin(gens, new_best_generations(stats_history))
    score_ax.scatter(gens[records], best[records], color='tab:red', zorder=3, label='New best')
    score_ax.set_ylabel('Rollout score')
    score_ax.legend(loc='upper left')

    size_ax.plot(gens, [s.mean_nodes for s in stats_history], label='Nodes')
    size_ax.plot(gens, [s.mean_edges for s in stats_history], label='Edges')
    size_ax.set_xlabel('Generation')
    size_ax.set_ylabel('Mean graph size')
    size_ax.legend(loc='upper left')

    fig.suptitle(f'Pendulum evolution ({len(stats_history)} generations)')
    fig.savefig(save_path, dpi=120)
    plt.close(fig)
    return save_path


def format_evolution_summary(
    stats_history: List[GenerationStats],
    best_individual: Optional[Individual] = None,
) -> str:
    """
    Generate a text summary of evolution.

    Args:
        stats_history: Generation statistics.
        best_individual: Best individual found.

    Returns:
        Formatted text summary.
    """
    lines = [
        "=" * 50,
        "EVOLUTION SUMMARY",
        "=" * 50,
        "",
        f"Total generations: {len(stats_history)}",
    ]

    if stats_history:
        first = stats_history[0]
        last = stats_history[-1]

        lines.extend([
            "",
            "Score progression:",
            f"  Initial best: {first.best_score:.3f}",
            f"  Final best: {last.best_score:.3f}",
            f"  Final average: {last.avg_score:.3f}",
            f"  Improvement: {last.best_score - first.best_score:.3f}",
            f"  Total evaluation time: {sum(s.elapsed for s in stats_history):.1f}s",
        ])

    if best_individual:
        agent = best_individual.agent
        lines.extend([
            "",
            "Best individual:",
            f"  ID: {best_individual.id}",
            f"  Score: {best_individual.score:.3f}",
            f"  Generation: {best_individual.generation}",
            f"  Graph: {agent.node_count} nodes, {agent.edge_count} edges",
        ])

    lines.extend(["", "=" * 50])

    return "\n".join(lines)

