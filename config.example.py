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
    "TASKMGR_APP_NAME": "App display name (default: taskmanager).",
    "TASKMGR_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "TASKMGR_CONSOLE_ENABLED": "Enable the console REPL (true/false).",
    # Remote task source
    "TASKMGR_REMOTE_ENABLED": "Fetch the remote task list on start (true/false).",
    "TASKMGR_REMOTE_BASE_URL": (
        "Remote API base URL (default: https://jsonplaceholder.typicode.com/). Empty disables the remote."
    ),
    "TASKMGR_REMOTE_TASKS_PATH": "Path of the task list below the base URL (default: todos).",
    "TASKMGR_REMOTE_TIMEOUT_SECONDS": "HTTP timeout for the fetch (default: 15, minimum 1).",
    # Behaviour
    "TASKMGR_PERSIST_REMOVALS": (
        "Delete removed tasks from the local store (default: true). "
        "false keeps removals session-local: they come back on the next start."
    ),
    # Paths (gitignored)
    "TASKMGR_DATA_DIR": "Local data directory (default: .local/taskmanager).",
    "TASKMGR_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
}
