"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority) and display formatting
- task_store.py: ordered in-memory store + JSON file persistence
- errors.py: TaskStoreError and its subclasses
"""
