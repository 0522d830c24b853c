"""Temporal Worker entry point.

This worker polls the contract-workflows queue for workflow and activity tasks.
"""
import asyncio
import logging
import signal

from temporalio.client import Client
from temporalio.worker import Worker

from realty_contracts.core.config import settings as app_settings
from realty_contracts.core.logging import setup_logging
from realty_contracts.db.session import init_db
from realty_contracts.deps import build_services
from worker.activities import run_contract_workflow, run_feedback_processing
from worker.config import WorkerSettings
from worker.workflows import ContractWorkflow, FeedbackWorkflow

logger = logging.getLogger("worker")


def _install_signal_handlers(stop_event: asyncio.Event) -> None:
    """Install signal handlers for graceful shutdown."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:  # pragma: no cover - Windows
            signal.signal(sig, lambda *_: stop_event.set())


async def run_worker() -> None:
    """Run the Temporal worker."""
    settings = WorkerSettings()

    logger.info(
        "Starting worker: temporal=%s, namespace=%s, queue=%s",
        settings.TEMPORAL_ADDRESS,
        settings.TEMPORAL_NAMESPACE,
        settings.WORKER_TASK_QUEUE,
    )

    # feedback and search_history tables
    await init_db()

    # connect the vector store and uploads bucket before polling
    services = await build_services()
    logger.info(
        "Services ready: vector_store=%s, uploads_bucket=%s",
        app_settings.VECTOR_STORE_BACKEND,
        services.loader.bucket,
    )

    client = await Client.connect(
        settings.TEMPORAL_ADDRESS,
        namespace=settings.TEMPORAL_NAMESPACE
    )

    # Activities are async, so no activity executor is needed
    worker = Worker(
        client,
        task_queue=settings.WORKER_TASK_QUEUE,
        workflows=[ContractWorkflow, FeedbackWorkflow],
        activities=[run_contract_workflow, run_feedback_processing],
    )

    stop_event = asyncio.Event()
    _install_signal_handlers(stop_event)

    logger.info("Worker running, polling for tasks...")
    worker_task = asyncio.create_task(worker.run())

    await stop_event.wait()
    logger.info("Shutdown signal received, stopping worker...")

    worker_task.cancel()
    await asyncio.gather(worker_task, return_exceptions=True)
    logger.info("Worker stopped")


def main() -> None:
    """Main entry point."""
    setup_logging()
    asyncio.run(run_worker())


if __name__ == "__main__":
    main()
