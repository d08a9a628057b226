from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pagecraft.db.base import get_session
from pagecraft.db.repositories.custom_variables import CustomVariablesRepository
from pagecraft.schemas.personalization import CustomVariable, CustomVariableUpdate
from pagecraft.services.personalization import SYSTEM_VARIABLES

router = APIRouter(prefix="/variables", tags=["variables"])


@router.get("")
def list_variables(session: Session = Depends(get_session)) -> dict[str, object]:
    custom = [CustomVariable.model_validate(record) for record in CustomVariablesRepository(session).list()]
    return {"system": list(SYSTEM_VARIABLES), "custom": custom}


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CustomVariable)
def create_variable(payload: CustomVariable, session: Session = Depends(get_session)) -> CustomVariable:
    repo = CustomVariablesRepository(session)
    try:
        record = repo.create(name=payload.name, token=payload.token, fallback_value=payload.fallback_value)
    except IntegrityError as exc:
        session.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"A variable with token {payload.token} already exists.",
        ) from exc
    return CustomVariable.model_validate(record)


@router.delete("/{variable_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_variable(variable_id: str, session: Session = Depends(get_session)) -> None:
    if not CustomVariablesRepository(session).delete(variable_id=variable_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Variable not found")


@router.patch("/{variable_id}", response_model=CustomVariable)
def update_variable(
    variable_id: str,
    payload: CustomVariableUpdate,
    session: Session = Depends(get_session),
) -> CustomVariable:
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    try:
        record = CustomVariablesRepository(session).update(variable_id=variable_id, **fields)
    except IntegrityError as exc:
        session.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"A variable with token {fields.get('token')} already exists.",
        ) from exc
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Variable not found")
    return CustomVariable.model_validate(record)
