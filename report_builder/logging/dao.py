# report_builder/logging/dao.py
"""Data access for request logs."""

from sqlalchemy.orm import Session
from sqlalchemy import select, or_, cast, String
from typing import List, Optional
from datetime import datetime, timedelta

from report_builder.core.base_dao import BaseDAO
from report_builder.logging.models import Log


class LogDAO(BaseDAO[Log]):
    """DAO for Log operations."""

    def __init__(self, db_session: Session):
        super().__init__(Log, db_session)

    def get_logs_with_filters(
        self,
        limit: int = 50,
        offset: int = 0,
        hours: int = 24,
        status_min: Optional[int] = None,
        status_max: Optional[int] = None,
        search: Optional[str] = None,
    ) -> List[Log]:
        """Get recent logs, newest first, with optional status and text filters."""
        time_threshold = datetime.now() - timedelta(hours=hours)
        query = select(self.model).where(self.model.timestamp >= time_threshold)

        if status_min is not None:
            query = query.where(self.model.status_code >= status_min)
        if status_max is not None:
            query = query.where(self.model.status_code <= status_max)

        if search:
            search_term = f"%{search}%"
            query = query.where(
                or_(
                    self.model.path.ilike(search_term),
                    self.model.method.ilike(search_term),
                    self.model.username.ilike(search_term),
                    cast(self.model.status_code, String).ilike(search_term),
                )
            )

        query = query.order_by(self.model.timestamp.desc(), self.model.id.desc()).offset(offset).limit(limit)
        return list(self.db.execute(query).scalars().all())
