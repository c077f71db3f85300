"""Scheduler and background tasks package."""
from app.scheduler.purge_scheduler import (
    start_scheduler,
    stop_scheduler,
    purge_past_shifts
)

__all__ = [
    'start_scheduler',
    'stop_scheduler',
    'purge_past_shifts'
]
