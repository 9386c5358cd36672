"""logscan — concurrent access-log search counter."""
