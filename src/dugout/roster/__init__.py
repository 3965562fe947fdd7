"""Roster ordering helpers."""

from .sorting import any_stats_recorded, last_name, sort_roster

__all__ = ["any_stats_recorded", "last_name", "sort_roster"]
