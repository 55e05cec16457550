DEFAULT_TASKS_FILE = "tasks.json"
DEFAULT_ACCOUNTS_FILE = "accounts.json"
CONFIG_FILE = "todo_tracker.yaml"

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_ATOMIC_WRITES = True

SAVE_FAILURE_ROLLBACK = "rollback"
SAVE_FAILURE_KEEP = "keep"
SAVE_FAILURE_POLICIES = {SAVE_FAILURE_ROLLBACK, SAVE_FAILURE_KEEP}
DEFAULT_SAVE_FAILURE_POLICY = SAVE_FAILURE_ROLLBACK

FIRST_TASK_ID = 1

VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
