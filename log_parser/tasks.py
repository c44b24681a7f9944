from celery import shared_task
import logging

from .arguments import build_options
from .pipeline import build_pipeline

logger = logging.getLogger(__name__)


@shared_task
def run_parser_job(accesslog, start_date, duration, threshold):
    """
    Celery task running one ingestion and detection job.
    Arguments use the same text forms as the command line.
    """
    job = build_options(
        accesslog=accesslog,
        start_date=start_date,
        duration=duration,
        threshold=threshold,
    )
    logger.info(f"Starting parser job for {job.accesslog} ({job.duration.token} from {job.start_date})")

    result = build_pipeline().run(job.accesslog, job.start_date, job.duration, job.threshold)

    logger.info(
        f"Parser job completed. Loaded {result.records_loaded} records, blocked {result.entries_blocked} IPs"
    )
    return result.summary()
