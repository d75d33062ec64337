"""task: a personal task tracker for the command line."""

# Replaced at release time; "dev" falls back to the installed distribution metadata.
__version__ = "dev"

DIST_NAME = "task-cli"
