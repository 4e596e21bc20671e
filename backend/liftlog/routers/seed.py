from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.services.seed import seed_if_needed

router = APIRouter(tags=["seed"])

@router.post("/seed")
def seed(db: Session = Depends(get_db)):
    """Load the bundled exercise library and a default bar/plate set into empty tables."""
    return seed_if_needed(db)
