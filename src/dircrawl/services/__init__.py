from .run_directory import RunDirectory
from .log_sink import LogFileSink

__all__ = ["RunDirectory", "LogFileSink"]
