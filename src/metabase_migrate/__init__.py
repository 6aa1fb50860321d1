"""Metabase Migration Tool

Exports collections, cards and dashboards from a Metabase instance as a
self-contained, renumbered state ready to be replayed on another instance.
"""

__version__ = '0.1.0'

from .cli.main import main

__all__ = ['main']
