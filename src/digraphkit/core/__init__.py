"""Core layer — the graph store.

Depends on domain and algorithms only.
"""
