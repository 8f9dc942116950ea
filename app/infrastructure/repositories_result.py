# app/infrastructure/repositories_result.py
from __future__ import annotations

import builtins
from typing import Any

from sqlalchemy.orm import Session

from .exceptions import ResultNotFoundError
from .logging import log_database_operation as log_op
from .models import AssessmentResultORM
from .repositories_base import BaseRepository as GenericBaseRepository


class ResultRepo(GenericBaseRepository[AssessmentResultORM]):
    model = AssessmentResultORM

    def __init__(self, session: Session):
        super().__init__(session)

    @log_op("assessment.create")
    def create(self, **fields: Any) -> AssessmentResultORM:
        return super().create(**fields)

    @log_op("assessment.get_required")
    def get_by_id_required(self, id_: Any) -> AssessmentResultORM:
        obj = self.get(id_)
        if obj is None:
            raise ResultNotFoundError(str(id_))
        return obj

    @log_op("assessment.list_for_user")
    def list_for_user(
        self, user_id: str, limit: int | None = None
    ) -> builtins.list[AssessmentResultORM]:
        # Newest first
        return self.list(
            self.model.user_id == user_id,
            order_by=[self.model.completed_at.desc()],
            limit=limit,
        )

    @log_op("assessment.list_for_organization")
    def list_for_organization(
        self, organization_id: str, limit: int | None = None
    ) -> builtins.list[AssessmentResultORM]:
        return self.list(
            self.model.organization_id == organization_id,
            order_by=[self.model.completed_at.desc()],
            limit=limit,
        )

    @log_op("assessment.count_for_organization")
    def count_for_organization(self, organization_id: str) -> int:
        return self.count(self.model.organization_id == organization_id)
