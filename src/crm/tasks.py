"""
Module for Highrise to Slack synchronization tasks.
"""

from loguru import logger

from src.crm.runner import run_sync_cycle
from src.tasks.worker import celery_app


@celery_app.task(bind=True, ignore_result=False)
def sync_highrise_recordings(self):
    """
    Task to post new Highrise recordings to Slack.
    Errors are not retried; the next scheduled run starts from the last
    saved checkpoint.

    Returns:
        dict: Result of the operation
    """
    try:
        logger.info("Starting Highrise sync task")
        result = run_sync_cycle()
        logger.info(
            f"Highrise sync completed with status: {result.get('status', 'unknown')}"
        )
        return result
    except Exception as e:
        logger.error(f"Error in Highrise sync task: {str(e)}")
        raise


__all__ = ["sync_highrise_recordings"]
