"""Rolling hourly processing budget."""

from dataclasses import dataclass
from datetime import datetime, timedelta

WINDOW_LENGTH = timedelta(hours=1)


@dataclass
class RateWindow:
    """Count of keywords processed since ``window_start``.

    Owned by one pipeline instance. The window resets once more than an hour
    has passed since it started; it is not aligned to clock hours.

    Attributes:
        cap: Maximum successes per window
        count: Successes in the current window
        window_start: When the current window began
    """

    cap: int
    window_start: datetime
    count: int = 0

    def refresh(self, now: datetime) -> bool:
        """Start a new window if the current one has expired.

        Returns:
            True if the window was reset
        """
        if now - self.window_start > WINDOW_LENGTH:
            self.count = 0
            self.window_start = now
            return True
        return False

    @property
    def remaining(self) -> int:
        return max(self.cap - self.count, 0)

    @property
    def exhausted(self) -> bool:
        return self.count >= self.cap

    def consume(self) -> None:
        """Record one successful keyword.

        Raises:
            RuntimeError: If the budget is already exhausted
        """
        if self.exhausted:
            raise RuntimeError(f"Rate window exhausted ({self.count}/{self.cap})")
        self.count += 1

    def snapshot(self) -> dict[str, object]:
        return {
            "count": self.count,
            "cap": self.cap,
            "remaining": self.remaining,
            "window_start": self.window_start.isoformat(),
        }


__all__ = ["RateWindow", "WINDOW_LENGTH"]
