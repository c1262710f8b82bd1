"""Deterministic random number generators and sequence sampling utilities."""

__version__ = "0.1.0"
__all__ = ["rng", "mock", "xoshiro", "adapter", "index", "slices", "iters"]