"""
Plotting and reporting for evolution runs.

Plots use matplotlib (optional 'viz' extra) and are written to files.

Example usage:
    from pendulum_lab.visualization import plot_evolution_progress

    plot_evolution_progress(engine.stats_history, save_path='evolution.png')
"""
from .evolution import (
    HAS_MATPLOTLIB,
    format_evolution_summary,
    new_best_generations,
    plot_evolution_progress,
)

__all__ = [
    'HAS_MATPLOTLIB',
    'format_evolution_summary',
    'new_best_generations',
    'plot_evolution_progress',
]
