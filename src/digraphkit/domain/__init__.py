"""Domain layer — error taxonomy and shared type aliases.

This layer depends only on stdlib.
It must never import from core, algorithms, services, or config.
"""
