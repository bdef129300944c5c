# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKPULSE_APP_NAME": "App display name (default: taskpulse).",
    "TASKPULSE_LOG_LEVEL": "Console logging level (default: INFO).",
    # Connectors
    "TASKPULSE_CONSOLE_ENABLED": "Run the console REPL; when false, print metrics and exit.",
    # Data
    "TASKPULSE_DATA_DIR": "Local data directory for logs (default: .local/taskpulse).",
    "TASKPULSE_TASKS_SOURCE": "Initial tasks: http(s) URL or local JSON path (default: tasks.json).",
    # Metrics policy
    "TASKPULSE_TARGET_REVENUE_PER_HOUR": (
        "Target rate used for time efficiency: 100% means revenue/hour == target (default: 100)."
    ),
}
