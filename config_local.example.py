# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for anything environment specific. Only these switches are read:
CONSOLE_ENABLED, REMOTE_ENABLED, PERSIST_REMOVALS.
"""

# Example: work purely from the local store
# REMOTE_ENABLED = False

# Example: keep removals session-local
# PERSIST_REMOVALS = False
