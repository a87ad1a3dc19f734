"""Shared vocabulary types: commands, statuses and render snapshots."""
