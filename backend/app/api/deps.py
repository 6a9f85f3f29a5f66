from collections.abc import Generator
from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from app.core.catalog import get_catalog
from app.core.db import engine
from nikkedex import CharacterCatalog


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]
CatalogDep = Annotated[CharacterCatalog, Depends(get_catalog)]
