"""
Scheduling Domain

Slot conflict detection and free-slot computation for a professional's day.
conflicts.py holds the pure functions; service.py loads the agenda and calls them.
"""
