# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use .env (local, gitignored) for machine-specific values.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKS_APP_NAME": "Name shown in the banner (default: Task Manager).",
    "TASKS_LOG_LEVEL": "Console logging level (default: WARNING).",
    "TASKS_LOG_TO_FILE": "Also write a DEBUG log to <data_dir>/tasks.log (default: true).",
    # Paths (gitignored)
    "TASKS_DATA_DIR": "Local data directory (default: .local/tasks).",
    "TASKS_DEFAULT_FILE": (
        "File used when the save/load prompt is left empty (default: <data_dir>/tasks.json)."
    ),
    # Store behaviour
    "TASKS_SAVE_OVERWRITE": "Overwrite an existing file on save (default: true).",
    "TASKS_UNIQUE_NAMES": "Reject a new task whose name already exists, ignoring case (default: false).",
}
