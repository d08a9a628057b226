from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from pagecraft.db.models import CustomVariableRecord
from pagecraft.schemas.personalization import normalize_token


class CustomVariablesRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self) -> list[CustomVariableRecord]:
        stmt = select(CustomVariableRecord).order_by(CustomVariableRecord.name)
        return list(self.session.scalars(stmt).all())

    def create(self, *, name: str, token: str, fallback_value: str = "") -> CustomVariableRecord:
        variable = CustomVariableRecord(name=name, token=normalize_token(token), fallback_value=fallback_value)
        self.session.add(variable)
        self.session.commit()
        self.session.refresh(variable)
        return variable

    def update(self, *, variable_id: str, **fields) -> Optional[CustomVariableRecord]:
        variable: Optional[CustomVariableRecord] = self.session.get(CustomVariableRecord, variable_id)
        if not variable:
            return None
        if fields.get("token") is not None:
            fields["token"] = normalize_token(fields["token"])
        for key, value in fields.items():
            setattr(variable, key, value)
        self.session.commit()
        self.session.refresh(variable)
        return variable

    def delete(self, *, variable_id: str) -> bool:
        variable: Optional[CustomVariableRecord] = self.session.get(CustomVariableRecord, variable_id)
        if not variable:
            return False
        self.session.delete(variable)
        self.session.commit()
        return True
