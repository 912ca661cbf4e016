"""
ID generation utilities for LifeLog.

- Memories: mem_xxx
"""

from uuid import uuid4


def generate_memory_id() -> str:
    """
    Generate unique Memory ID.

    Returns:
        ID in format "mem_xxx" where xxx is 12 hex characters
    """
    return f"mem_{uuid4().hex[:12]}"


def mask_secret(secret: str | None, visible: int = 4) -> str:
    """Return the first few characters of a secret followed by an ellipsis."""
    if not secret:
        return "<none>"
    return f"{secret[:visible]}..."
