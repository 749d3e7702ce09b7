# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKDESK_APP_NAME": "App display name, also the console prompt (default: taskdesk).",
    "TASKDESK_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKDESK_DATA_DIR": "Local directory for the debug log file (default: .local/taskdesk).",
    "TASKDESK_LOG_TO_FILE": "Write DEBUG logs to <data_dir>/taskdesk.log (true/false, default: true).",
    # Startup
    "TASKDESK_SEED_SAMPLE_TASKS": "Create a few sample tasks at startup (true/false, default: true).",
    # Validation limits
    "TASKDESK_TITLE_MAX_LENGTH": "Max title length (default: 200).",
    "TASKDESK_DESCRIPTION_MAX_LENGTH": "Max description length (default: 1000).",
    "TASKDESK_MAX_TAGS": "Max tags per task (default: 10).",
    "TASKDESK_TAG_MAX_LENGTH": "Max length of one tag (default: 50).",
    "TASKDESK_ALLOW_PAST_DUE_DATES": "Accept due dates in the past (true/false, default: false).",
}
