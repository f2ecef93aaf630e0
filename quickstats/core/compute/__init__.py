"""
Shared compute infrastructure for quickstats.

IMPORTANT: This is NOT where domain-specific algorithms live. Those go in
{domain}/. This module contains shared infrastructure only.

Submodules:
    timing: Execution timing utilities
"""

from quickstats.core.compute.timing import Timer

__all__ = [
    "Timer",
]
