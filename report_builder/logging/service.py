"""Service layer for reading request logs."""

from typing import List, Optional

from report_builder.logging.dao import LogDAO
from report_builder.logging.schemas import LogRead


class LogService:
    """Read access to persisted request logs."""

    def __init__(self, log_dao: LogDAO):
        self.dao = log_dao

    def get_logs_with_filters(
        self,
        limit: int = 50,
        offset: int = 0,
        hours: int = 24,
        status_min: Optional[int] = None,
        status_max: Optional[int] = None,
        search: Optional[str] = None,
    ) -> List[LogRead]:
        logs = self.dao.get_logs_with_filters(
            limit=limit,
            offset=offset,
            hours=hours,
            status_min=status_min,
            status_max=status_max,
            search=search,
        )
        return [LogRead.model_validate(log) for log in logs]

    def get_by_id(self, log_id: int) -> Optional[LogRead]:
        log = self.dao.get_by_id(log_id)
        return LogRead.model_validate(log) if log else None

    def count(self) -> int:
        return self.dao.count()
