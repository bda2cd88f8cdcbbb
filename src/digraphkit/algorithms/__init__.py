"""Read-only graph algorithms.

Algorithms only read a graph through its public query methods and never
share mutable state with one another. They must never import from
services or config.
"""
