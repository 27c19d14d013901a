"""
To-do subsystem.

Components:
- todo_models.py: the Todo record and its JSON form
- todo_store.py: JSON-file store (upsert/remove/lookup, atomic whole-file writes)
- todo_api.py: the operations the UI calls (save/remove + reminder sync)
"""
