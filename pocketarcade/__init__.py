"""
Pocket Arcade: rules engines for five casual games.

Each game lives in its own sub-package with immutable state models and pure
transition functions. The ``engine`` package wires those transitions to a
platform adapter, a persistence service and a random source.
"""

__version__ = "0.1.0"
