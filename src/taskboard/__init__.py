"""Taskboard - project proposal board with active and finished lists.

This package provides the authoritative project store, the status transition
rules used by drag-and-drop, and the headless views and terminal session that
subscribe to the store.
"""

__version__ = "0.1.0"
