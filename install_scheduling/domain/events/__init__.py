"""
Domain events package.
"""

from .engineer_work_reset import EngineerWorkReset

__all__ = [
    "EngineerWorkReset",
]
