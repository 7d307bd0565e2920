"""
Rate limiting for outbound AI provider calls.

Each provider config carries a requests-per-minute budget; calls beyond it
are refused instead of being sent to the vendor.
"""

import time
import logging
from collections import defaultdict
from threading import Lock

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    In-memory rate limiter with sliding window.

    Keys are arbitrary strings (one per agent type in practice).
    """

    def __init__(self):
        self._requests = defaultdict(list)
        self._lock = Lock()

    def _clean_old_requests(self, key: str, window_seconds: int):
        """Remove requests outside the current window."""
        cutoff = time.time() - window_seconds
        self._requests[key] = [t for t in self._requests[key] if t > cutoff]

    def is_rate_limited(
        self,
        key: str,
        max_requests: int,
        window_seconds: int = 60,
    ) -> tuple[bool, dict]:
        """
        Check and record one request for a key.

        Returns:
            Tuple of (is_limited, info_dict)
        """
        with self._lock:
            self._clean_old_requests(key, window_seconds)

            current_count = len(self._requests[key])
            remaining = max(0, max_requests - current_count)

            if current_count >= max_requests:
                if self._requests[key]:
                    oldest = min(self._requests[key])
                    retry_after = int(oldest + window_seconds - time.time()) + 1
                else:
                    retry_after = window_seconds

                logger.warning(f"Rate limit hit for {key}: {current_count}/{max_requests}")
                return True, {
                    'limit': max_requests,
                    'remaining': 0,
                    'retry_after': retry_after,
                }

            # Record this request
            self._requests[key].append(time.time())

            return False, {
                'limit': max_requests,
                'remaining': remaining - 1,
            }

    def reset(self, key: str):
        with self._lock:
            self._requests.pop(key, None)

    def get_stats(self, key: str) -> dict:
        """Get current rate limit stats for a key."""
        with self._lock:
            return {
                'key': key,
                'request_count': len(self._requests.get(key, []))
            }
