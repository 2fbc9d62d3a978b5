import sys
import time
import logging
import signal
import argparse
import threading

from tenacity import retry, stop_after_attempt, wait_fixed
from core.config_loader import load_config
from core.errors import MatchEngineError
from database.database import init_db, create_session_factory
from pipeline import MatchJobRunner, PipelineController, PipelineLockedError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Set by SIGINT/SIGTERM; checked by the runner between subjects
stop_event = threading.Event()


def signal_handler(sig, frame):
    logger.info("Shutdown signal received")
    stop_event.set()


@retry(stop=stop_after_attempt(5), wait=wait_fixed(3), reraise=True)
def init_db_with_retry(bind):
    """The database container may still be starting."""
    init_db(bind)


def run_once(runner, user_id=None):
    """Run one recompute. Returns True on full success."""
    if user_id:
        result = runner.recompute_for_user(user_id, stop_event=stop_event)
    else:
        result = runner.recompute_for_population(stop_event=stop_event, source="cli")

    logger.info(
        f"Result: success={result.success}, created={result.created_count}, "
        f"updated={result.updated_count}, failed={result.failed_count}, "
        f"skipped_pairs={result.skipped_pairs}, pairs_evaluated={result.pairs_evaluated}"
    )
    if result.error:
        logger.warning(f"Run reported: {result.error}")
    return result.success


def run_scheduler(runner, interval):
    """Run population recomputes every `interval` seconds until stopped."""
    cycle_count = 0
    while not stop_event.is_set():
        cycle_count += 1
        cycle_start = time.time()
        logger.info(f"=== Starting Cycle #{cycle_count} ===")
        try:
            result = runner.recompute_for_population(stop_event=stop_event, source="scheduler")
            logger.info(f"Cycle #{cycle_count}: success={result.success}, written={result.written_count}")
        except PipelineLockedError as e:
            logger.warning(f"Skipping cycle #{cycle_count}: {e}")
        except Exception as e:
            logger.error(f"Error in main loop: {e}", exc_info=True)

        cycle_elapsed = time.time() - cycle_start
        if not stop_event.is_set():
            logger.info(f"=== Cycle #{cycle_count} completed in {cycle_elapsed:.2f}s. Sleeping for {interval} seconds... ===")
            stop_event.wait(interval)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Match Engine Driver")
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to config.yaml')
    parser.add_argument('--user-id', type=str, default=None,
                        help='Recompute matches for a single user and exit')
    parser.add_argument('--once', action='store_true',
                        help='Run one population recompute and exit')
    parser.add_argument('--init-db', action='store_true',
                        help='Create missing tables before running')
    args = parser.parse_args(argv)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    config = load_config(args.config)

    session_factory = create_session_factory(config.database.url, config.database.pool_pre_ping)
    if args.init_db:
        init_db_with_retry(session_factory.kw["bind"])

    runner = MatchJobRunner(
        config.matching,
        session_factory=session_factory,
        controller=PipelineController(),
    )

    if args.user_id or args.once:
        try:
            ok = run_once(runner, user_id=args.user_id)
        except (MatchEngineError, PipelineLockedError) as e:
            logger.error(str(e))
            return 1
        return 0 if ok else 1

    logger.info(f"Match engine scheduler starting (interval={config.schedule.interval_seconds}s)")
    run_scheduler(runner, config.schedule.interval_seconds)
    logger.info("Match engine scheduler stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
