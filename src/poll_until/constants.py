"""Constants for the poll-until CLI."""

DEFAULT_INTERVAL = "5s"

DEFAULT_SHELL = "sh"

DEFAULT_LOG_LEVEL = "WARNING"

# Environment variables read by load_config
ENV_INTERVAL = "POLL_UNTIL_INTERVAL"
ENV_SHELL = "POLL_UNTIL_SHELL"
ENV_LOG_LEVEL = "POLL_UNTIL_LOG_LEVEL"

# Keys accepted in a poll definition file
DEFINITION_KEYS = ("command", "equals", "interval", "on_finish", "shell")
