"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import time
from typing import List, Optional, Tuple


class ConvertUtils:
    @staticmethod
    def seconds_to_human(seconds: float) -> str:
        """
        Format a duration as h,mm,ss (e.g., 0h,05m,09s).
        """
        seconds = max(0, int(seconds))
        h = seconds // 3600
        m = (seconds % 3600) // 60
        s = seconds % 60
        return f"{h}h,{m:02d}m,{s:02d}s"

    @staticmethod
    def timestamp_to_human(timestamp: Optional[float] = None, fmt: str = "%Y%m%d%H%M%S") -> str:
        """
        Convert a Unix timestamp (default: now) to a compact local time string.
        Used for log file names and the log header.
        """
        if timestamp is None:
            timestamp = time.time()
        return time.strftime(fmt, time.localtime(timestamp))

    @staticmethod
    def parse_selection(selection: str, count: int) -> Tuple[List[int], List[str]]:
        """
        Parse a comma separated list of 1-based indices (e.g., "1,3,4").
        Returns (valid indices in input order without repeats, rejected tokens).
        Non-numeric tokens and indices outside 1..count are rejected.
        """
        indices = []
        rejected = []
        for token in selection.split(","):
            token = token.strip()
            if not token:
                continue
            try:
                index = int(token)
            except ValueError:
                rejected.append(token)
                continue
            if not 1 <= index <= count:
                rejected.append(token)
                continue
            if index not in indices:
                indices.append(index)
        return indices, rejected

    @staticmethod
    def estimate_total_seconds(elapsed: float, done: int, total: int) -> float:
        """
        Linear estimate of the total run time from progress so far.
        """
        if done <= 0:
            return 0.0
        return elapsed * total / done
