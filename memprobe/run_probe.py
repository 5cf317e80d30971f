#!/usr/bin/env python3
"""
Memory probe entry point.

Starts the configured server several times in a row, measures its memory
once it reports readiness, and prints the averaged result as JSON on
stdout. Diagnostics go to stderr.
"""
import logging
import sys
from typing import List, Optional

from memprobe.cli.cli import parse_probe_args
from memprobe.config.config_loader import ConfigLoader
from memprobe.config.probe_config import ProbeConfig
from memprobe.consts.errors import ConfigError
from memprobe.models.memory_result import ErrorReport
from memprobe.service.runner.launcher import ProcessLauncher
from memprobe.service.task_executor.orchestrator import SampleOrchestrator
from memprobe.service.task_executor.reporter import MemoryReporter
from memprobe.service.task_executor.run_outcome import RunOutcome
from memprobe.util.log_config import configure_logging, setup_logger
from memprobe.util.time_utils import now_iso

logger = setup_logger(__name__)


def build_reporter(config: ProbeConfig) -> MemoryReporter:
    launcher = ProcessLauncher(config.target)
    orchestrator = SampleOrchestrator(launcher=launcher, config=config.measurement)
    return MemoryReporter(orchestrator, sample_count=config.measurement.sample_count)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run a full measurement and print the result document.

    Returns:
        Process exit status: 0 with an aggregate, 1 with an error document
    """
    args = parse_probe_args(argv, "Measure the memory footprint of a server after startup")
    configure_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    logger.info("=" * 60)
    logger.info("Starting Memory Measurement")
    logger.info("=" * 60)

    try:
        config = ConfigLoader(args.config_dir, env=args.env).config_data
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        outcome = RunOutcome.failure(ErrorReport(error=str(e), timestamp=now_iso()))
    else:
        if args.env:
            logger.info(f"Loaded configuration with environment override: {args.env}")
        target = config.target
        logger.info(f"Target: {target.executable} {' '.join(target.args)} (cwd={target.cwd})")
        logger.info(f"Cycles: {config.measurement.sample_count}, "
                    f"settle={config.measurement.settle_time}s, "
                    f"startup timeout={config.measurement.startup_timeout}s")
        outcome = build_reporter(config).run()

    print(outcome.to_json(), flush=True)
    if outcome.ok:
        logger.info("Measurement completed successfully!")
    return outcome.exit_code


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
