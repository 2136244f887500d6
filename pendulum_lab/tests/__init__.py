"""
Tests for pendulum_lab.

This package contains tests for:
- Physics dynamics and determinism
- Graph agent evaluation and structural edits
- Mutation and selection operators
- The evolution engine and orchestrator
- The live controller, reporting and command line
"""
