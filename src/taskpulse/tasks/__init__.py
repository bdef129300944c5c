"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskDraft, DerivedTask, Metrics)
- task_ingest.py: untyped payload -> Task normalization boundary
- task_store.py: in-memory store with single-level delete undo
- task_derive.py: per-task ROI / grade and the display ordering
- task_metrics.py: collection-wide metrics
- task_source.py: initial data loader (URL or local JSON file)
- task_api.py: TaskBoard, the handle consumers read from and mutate through
"""
