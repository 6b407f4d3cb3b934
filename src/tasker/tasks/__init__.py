"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Outcome)
- task_store.py: SQLite-backed store, every write committed immediately
- json_store.py: JSON document store, rewritten atomically on save()
"""
