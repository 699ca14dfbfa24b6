"""Raspberry Pi provisioning tool.

Core design goals:
- Grouped operations with per-group pass/partial/fail reporting
- Best effort: one failing operation never aborts its group
- Structured command invocations (argv, never shell strings)
- Centralized, append-only logging
"""

__all__ = []
