"""
Unified command orchestrator for a crawl run.
This is the SINGLE place where the run folder, the log sink and the engine are wired together.
"""
import logging
from typing import Callable, Optional

from dircrawl.core.engine import SystemClock, TraversalEngine
from dircrawl.core.interfaces import Clock
from dircrawl.core.models import CrawlParams, RunStatistics
from dircrawl.services.log_sink import LogFileSink
from dircrawl.services.run_directory import RunDirectory

logger = logging.getLogger(__name__)


class CrawlCommand:
    """
    Orchestrates a whole crawl:
    1. Create the timestamped run folder (fatal if impossible)
    2. Exclude that folder from traversal
    3. Open the log files and run the traversal engine over every root

    Usage:
        params = CrawlParams(roots=["/data"], output_base="/tmp")
        command = CrawlCommand()
        stats = command.execute(params, echo=print)
        print(command.run_directory.path)
    """

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or SystemClock()
        self.run_directory: Optional[RunDirectory] = None

    def execute(
            self,
            params: CrawlParams,
            echo: Optional[Callable[[str], None]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> RunStatistics:
        """
        Execute a crawl with given parameters.

        Args:
            params: Validated crawl parameters
            echo: Receives summary lines for console display
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Final run statistics

        Raises:
            RuntimeError: If the run folder or its log files cannot be created
        """
        started_at = self.clock.now()
        self.run_directory = RunDirectory(params.output_base, started_at)
        self.run_directory.find_or_make()

        # Never walk our own output
        config = params.to_engine_config(extra_excluded=[self.run_directory.path])

        with LogFileSink(
            self.run_directory,
            algorithm=params.algorithm,
            tab_separated=params.tab_separated,
            justify_fields=params.justify_fields,
            echo=echo
        ) as sink:
            sink.log_start(params.roots, started_at)
            engine = TraversalEngine(config, sink, clock=self.clock)
            stats = engine.run(params.roots, progress_callback=progress_callback)

        logger.debug(f"Run folder: {self.run_directory.path}")
        return stats
