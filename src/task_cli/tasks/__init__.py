"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority) and their JSON form
- task_ids.py: short id generation
- task_store.py: JSON-file backed store (load / mutate / save)
- errors.py: error hierarchy surfaced to the command layer
"""
