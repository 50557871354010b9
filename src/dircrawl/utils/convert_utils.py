"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
from datetime import datetime
from typing import Optional, Tuple


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.5KB, 3.2MB).
        """
        if size_bytes < 0:
            return "0B"

        units = ["B", "KB", "MB", "GB", "TB", "PB"]
        for unit in units:
            if size_bytes < 1024:
                return f"{size_bytes:.2f}{unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f}EB"

    @staticmethod
    def datetime_to_stamp(dt: Optional[datetime], placeholder: str = "NA") -> str:
        """
        Format a datetime as 'yymmdd.HHMMSS' (2-digit year, month, day, dot, hour, minute, second).
        Returns the placeholder when the time is unavailable.
        """
        if dt is None:
            return placeholder
        return dt.strftime("%y%m%d.%H%M%S")

    @staticmethod
    def metric_equivalencies(value: float) -> str:
        """
        Express a byte quantity in every larger binary unit while it stays >= 0.01.

        Examples:
            1536 → " = 1.5K"
            3 * 1024 ** 3 → " = 3145728K = 3072M = 3G"
        """
        result = ""
        for suffix in ("K", "M", "G", "T"):
            value /= 1024
            if abs(value) < 0.01:
                break
            text = f"{value:.2f}".rstrip("0").rstrip(".")
            result += f" = {text}{suffix}"
        return result

    @staticmethod
    def elapsed_breakdown(seconds: float) -> Tuple[float, float, float, float]:
        """Elapsed time as (seconds, minutes, hours, days)."""
        minutes = seconds / 60
        hours = minutes / 60
        return seconds, minutes, hours, hours / 24
