from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.schemas.program import ProgramRecommendation, ProgramTemplate, Questionnaire
from liftlog.schemas.routine import RoutineRead
from liftlog.services.programs import apply_template, get_template, load_templates, recommend

router = APIRouter(prefix="/programs", tags=["programs"])

@router.get("/templates", response_model=list[ProgramTemplate])
def list_templates():
    return list(load_templates())

@router.get("/templates/{template_id}", response_model=ProgramTemplate)
def get_program_template(template_id: str):
    template = get_template(template_id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return template

@router.post("/recommend", response_model=list[ProgramRecommendation])
def recommend_programs(payload: Questionnaire):
    return recommend(payload)

@router.post("/templates/{template_id}/apply", response_model=list[RoutineRead],
             status_code=status.HTTP_201_CREATED)
def apply_program_template(template_id: str, db: Session = Depends(get_db)):
    template = get_template(template_id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return apply_template(db, template)
