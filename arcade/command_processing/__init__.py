"""Command validation.

Every command from any input source goes through the same per-game pipeline,
so rejected input is handled (and logged) in one place.
"""
