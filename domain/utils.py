"""
Pizzeria utility functions
"""


def normalize_ingredient_name(name: str) -> str:
    """Canonical catalog form of an ingredient name: trimmed and lowercased."""
    return name.strip().lower()
