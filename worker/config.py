"""Worker configuration.

Environment-based configuration for the Temporal worker.
"""
import os
from datetime import timedelta


class WorkerSettings:
    """Worker configuration from environment variables."""

    def __init__(self):
        # Temporal configuration
        self.TEMPORAL_ADDRESS = os.getenv("TEMPORAL_ADDRESS", "localhost:7233")
        self.TEMPORAL_NAMESPACE = os.getenv("TEMPORAL_NAMESPACE", "default")
        self.WORKER_TASK_QUEUE = os.getenv("WORKER_TASK_QUEUE", "contract-workflows")

        # One activity covers a whole orchestrated run, retries included
        self.ACTIVITY_TIMEOUT_S = int(os.getenv("WORKER_ACTIVITY_TIMEOUT_S", "900"))

    @property
    def activity_timeout(self) -> timedelta:
        return timedelta(seconds=self.ACTIVITY_TIMEOUT_S)

    def __repr__(self):
        return (
            f"WorkerSettings(temporal={self.TEMPORAL_ADDRESS}, "
            f"queue={self.WORKER_TASK_QUEUE}, "
            f"namespace={self.TEMPORAL_NAMESPACE})"
        )


worker_settings = WorkerSettings()
