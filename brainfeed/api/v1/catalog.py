"""Reference data endpoints: categories and authors."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from brainfeed.core.database import get_db
from brainfeed.models import Author, Category
from brainfeed.schemas.articles import AuthorOut, CategoryOut

router = APIRouter()


@router.get("/categories", response_model=list[CategoryOut], tags=["categories"])
def list_categories(db: Annotated[Session, Depends(get_db)]) -> list[CategoryOut]:
    categories = db.execute(select(Category).order_by(Category.id)).scalars().all()
    return [CategoryOut.model_validate(c) for c in categories]


@router.get("/authors", response_model=list[AuthorOut], tags=["authors"])
def list_authors(db: Annotated[Session, Depends(get_db)]) -> list[AuthorOut]:
    authors = db.execute(select(Author).order_by(Author.id)).scalars().all()
    return [AuthorOut.model_validate(a) for a in authors]
