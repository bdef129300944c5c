# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for anything else. This file should contain only safe overrides.
"""

# Example: print metrics and exit instead of starting the console
# CONSOLE_ENABLED = False

# Example: load the initial tasks from a dev server
# TASKS_SOURCE = "http://localhost:5173/tasks.json"
