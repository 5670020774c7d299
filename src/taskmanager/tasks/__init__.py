"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskFilter, TaskUiState)
- task_errors.py: collaborator fault taxonomy
- task_store.py: SQLite-backed storage
- task_source.py: remote list fetch (httpx) + offline fallback
- task_sync.py: session state, reconciliation and derived views
"""
