import argparse
import time

from src.util.sentry import init as init_sentry


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Post new Highrise recordings to Slack"
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="keep running, one cycle every SYNC_INTERVAL_SECONDS",
    )
    parser.add_argument(
        "--since",
        help="ISO-8601 checkpoint to start from instead of the stored one",
    )
    return parser.parse_args(argv)


def main(argv=None):
    # Import modules inside function to avoid import issues
    from src.crm.runner import run_sync_cycle
    from src.settings import app_settings
    from src.util.date_utils import parse_datetime
    from src.util.logging import setup_logging

    args = parse_args(argv)

    logger = setup_logging(
        log_level=app_settings.log_level,
        json_logs=app_settings.log_json,
        log_to_file=app_settings.log_to_file,
    )
    init_sentry()

    logger.info(
        f"Starting {app_settings.app_name} in {'debug' if app_settings.debug else 'production'} mode"
    )

    since = parse_datetime(args.since) if args.since else None
    result = run_sync_cycle(since=since)
    logger.info(f"Sync result: {result}")

    while args.watch:
        time.sleep(app_settings.sync_interval_seconds)
        try:
            result = run_sync_cycle()
            logger.info(f"Sync result: {result}")
        except Exception as e:
            logger.exception(f"Sync cycle failed: {e}")

    return result


if __name__ == "__main__":
    main()
