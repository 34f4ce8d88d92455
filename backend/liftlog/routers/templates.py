from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user_id
from liftlog.schemas.template import (
    TemplateCreate,
    TemplateDeleted,
    TemplateDetail,
    TemplateUpdate,
    TemplateWriteResult,
)
from liftlog.services import assembler, pipeline

router = APIRouter(prefix="/templates", tags=["templates"])

@router.post("/create", response_model=TemplateWriteResult, status_code=status.HTTP_201_CREATED)
def create_template(
    payload: TemplateCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return pipeline.save_template(db, user_id, payload)

@router.get("", response_model=list[TemplateDetail])
def list_my_templates(db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    return assembler.list_templates(db, user_id)

@router.put("/{template_id}", response_model=TemplateWriteResult)
def update_template(
    template_id: str,
    payload: TemplateUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return pipeline.update_template(db, user_id, template_id, payload)

@router.delete("/{template_id}", response_model=TemplateDeleted)
def delete_template(
    template_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return pipeline.delete_template(db, user_id, template_id)
