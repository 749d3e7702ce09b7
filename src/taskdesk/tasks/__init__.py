"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskPriority, TaskStatus, filters, statistics)
- task_results.py: error taxonomy and OperationResult
- task_store.py: in-memory storage + query/update helpers
- task_validators.py: field-level validation of create/update candidates
- task_formatters.py: console rendering of tasks and statistics
- task_api.py: small high-level helpers used by the rest of the app
"""
