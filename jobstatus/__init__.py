"""Job progress and status tracking for Celery background jobs."""
