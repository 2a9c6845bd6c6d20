"""State/store layer.

This package is the single source of truth for which hourly snapshots of
the current load cycle are available, and for the policy that turns a
settled cycle into a status.
"""
