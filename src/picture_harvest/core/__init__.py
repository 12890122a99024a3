# ABOUTME: Aggregation and orchestration layer
# ABOUTME: Pipeline stage: record pages → concurrent traversal → one deduplicated picture set

"""
Core Layer: Aggregation and concurrency coordination

This layer handles:
- The thread-safe picture id accumulator
- Fanning record traversal out to a worker pool
- Joining all work and summarizing the run

Data Flow: store/ pages → extraction/ traversal → persistence/ output
"""

from .models import HarvestSummary
from .pictures import PictureSet

# Import the harvester on-demand to avoid circular imports
# Use: from picture_harvest.core.harvester import PictureHarvester

__all__ = [
    "HarvestSummary",
    "PictureSet",
]
