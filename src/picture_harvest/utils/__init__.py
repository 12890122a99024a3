# ABOUTME: Cross-cutting utilities and shared infrastructure
# ABOUTME: Supporting services: logging, retry policy, console tables

"""
Utils Layer: Shared infrastructure and cross-cutting concerns

This layer provides:
- Logging configuration and structured loggers
- Retry policy for store requests
- Rich console tables for the CLI

Data Flow: Supporting services for all other layers
"""

from . import logging

__all__ = [
    "logging",
]
