"""Compute backends for Monte Carlo methods."""

from pyresampling.montecarlo.backends.cpu import CPUReplicateBackend

__all__ = ["CPUReplicateBackend"]
