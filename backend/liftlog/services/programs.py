# liftlog/services/programs.py
from __future__ import annotations
import json
import logging
from functools import lru_cache
from pathlib import Path

from sqlalchemy.orm import Session

from liftlog.models import Routine
from liftlog.models.enums import EquipmentType
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.repositories.routine_repo import RoutineRepository
from liftlog.schemas.program import GOAL_NAMES, ProgramRecommendation, ProgramTemplate, Questionnaire

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "data" / "templates"
TEMPLATE_NAMES = (
    "starting_strength",
    "ppl",
    "upper_lower",
    "full_body_3x",
    "five_three_one",
)
MAX_RECOMMENDATIONS = 3

@lru_cache(maxsize=1)
def load_templates() -> tuple[ProgramTemplate, ...]:
    templates = []
    for name in TEMPLATE_NAMES:
        path = TEMPLATE_DIR / f"{name}.json"
        with path.open("r", encoding="utf-8") as f:
            templates.append(ProgramTemplate.model_validate(json.load(f)))
    return tuple(templates)

def get_template(template_id: str) -> ProgramTemplate | None:
    return next((t for t in load_templates() if t.id == template_id), None)

def score_template(template: ProgramTemplate, q: Questionnaire) -> ProgramRecommendation | None:
    """Additive score of one template, or None when it is filtered out."""
    if q.experience not in template.experience_levels:
        return None
    if q.goal not in template.goals:
        return None
    score = 30.0
    rationale = [f"Matches your {GOAL_NAMES[q.goal]} goal"]

    days_diff = abs(template.days_per_week - q.days_per_week)
    if days_diff == 0:
        score += 25
        rationale.append(f"Exactly {q.days_per_week} days/week as requested")
    elif days_diff == 1:
        score += 10
        rationale.append(
            f"Close match: {template.days_per_week} days/week (you wanted {q.days_per_week})"
        )
    else:
        return None

    duration_diff = abs(template.estimated_session_minutes - q.session_minutes)
    if duration_diff <= 15:
        score += 20
        rationale.append("Fits within your time budget")
    elif duration_diff <= 30:
        score += 5
        rationale.append("May slightly exceed your time budget")

    known = {e.value for e in EquipmentType}
    required = {EquipmentType(r) for r in template.required_equipment if r in known}
    missing = sorted(required - set(q.available_equipment), key=lambda e: e.value)
    if not missing:
        score += 25
        rationale.append("All required equipment available")
    else:
        score -= 10.0 * len(missing)
        rationale.append("Missing equipment: " + ", ".join(m.value.capitalize() for m in missing))

    avoided = [m.strip().lower() for m in q.movements_to_avoid if m.strip()]
    if avoided:
        names = [ex.exercise_name.lower() for day in template.days for ex in day.exercises]
        conflicts = [n for n in names if any(a in n for a in avoided)]
        if conflicts:
            score -= 5.0 * len(conflicts)
            rationale.append(f"Contains {len(conflicts)} exercise(s) you may want to substitute")

    return ProgramRecommendation(template=template, score=score, rationale=rationale)

def recommend(q: Questionnaire) -> list[ProgramRecommendation]:
    scored = [r for r in (score_template(t, q) for t in load_templates()) if r is not None]
    # stable: equal scores keep template order
    scored.sort(key=lambda r: r.score, reverse=True)
    return scored[:MAX_RECOMMENDATIONS]

def apply_template(db: Session, template: ProgramTemplate) -> list[Routine]:
    """One routine per program day; unknown exercise names leave an empty slot."""
    exercises = ExerciseRepository(db)
    routines = RoutineRepository(db)
    created: list[Routine] = []
    unmatched = 0
    for day in template.days:
        routine = routines.create(
            name=f"{template.name} - {day.name}",
            is_template=True,
            source=template.name,
            commit=False,
        )
        for index, item in enumerate(day.exercises):
            exercise = exercises.get_by_name(item.exercise_name)
            if exercise is None:
                unmatched += 1
            routines.add_exercise(
                routine,
                exercise_id=exercise.id if exercise is not None else None,
                order=index,
                target_sets=item.sets,
                target_rep_min=item.rep_min,
                target_rep_max=item.rep_max,
                rest_seconds=item.rest_seconds,
                commit=False,
            )
        created.append(routine)
    db.commit()
    for routine in created:
        db.refresh(routine)
    log.info("template applied id=%s routines=%s unmatched=%s", template.id, len(created), unmatched)
    return created
