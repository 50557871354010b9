"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/run_directory.py
Timestamped output folder for a crawl run: <base>/dircrawl/<yymmdd.HHMMSS>/
"""
import os
import logging
from datetime import datetime

from dircrawl.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


class RunDirectory:
    """
    Names and creates the folder holding one run's log files.
    A folder that already exists (two runs in the same second) is reused.
    """
    PARENT_NAME = "dircrawl"

    def __init__(self, base_dir: str, started_at: datetime):
        self.base_dir = os.path.abspath(base_dir)
        self.stamp = ConvertUtils.datetime_to_stamp(started_at)
        self.path = os.path.join(self.base_dir, self.PARENT_NAME, self.stamp)

    def find_or_make(self) -> bool:
        """
        Ensure the run folder exists.

        Returns:
            True if the folder was created, False if an existing folder is reused

        Raises:
            RuntimeError: If the folder cannot be created (fatal for the run)
        """
        if os.path.isdir(self.path):
            logger.debug(f"Using existing log folder: {self.path}")
            return False
        try:
            os.makedirs(self.path, exist_ok=True)
        except OSError as e:
            raise RuntimeError(f"Could not create directory {self.path}: {e}") from e
        logger.debug(f"Created log folder: {self.path}")
        return True

    def file_path(self, name: str) -> str:
        return os.path.join(self.path, name)

    def __repr__(self):
        return f"<RunDirectory path={self.path}>"
