"""
Analytics Service - Best-effort usage recording.

record() never raises. Its outcome is returned as a value that callers
inspect only to decide whether to log; nothing about it can reach the
client response.
"""
from dataclasses import dataclass
from typing import Optional

from aptix.core.exceptions import AnalyticsWriteError
from aptix.core.logging_config import get_logger
from aptix.database.repository import AnalyticsRecord, AnalyticsRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnalyticsOutcome:
    """
    Result of one analytics write.

    Attributes:
        ok: Whether the record was written
        error: The failure, when ``ok`` is False
    """
    ok: bool
    error: Optional[AnalyticsWriteError] = None


class AnalyticsRecorder:
    """Writes one interaction record per successful interaction."""

    def __init__(self, repository: AnalyticsRepository):
        self.repository = repository

    async def record(self, agent: str, message_length: int, response_length: int) -> AnalyticsOutcome:
        """
        Append an interaction record.

        Args:
            agent: Agent name
            message_length: Length of the user's message
            response_length: Length of the reply sent back

        Returns:
            AnalyticsOutcome; failures are captured, not raised
        """
        record = AnalyticsRecord(
            agent=agent,
            message_length=message_length,
            response_length=response_length,
        )
        try:
            await self.repository.append(record)
        except AnalyticsWriteError as e:
            return AnalyticsOutcome(ok=False, error=e)
        except Exception as e:
            return AnalyticsOutcome(ok=False, error=AnalyticsWriteError(str(e) or type(e).__name__))

        logger.debug("Analytics recorded", extra={"agent": agent})
        return AnalyticsOutcome(ok=True)
