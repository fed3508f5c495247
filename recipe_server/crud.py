import json
import logging
from typing import Iterable, List, Optional

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models, schemas
from .errors import EmptyStore, RecipeDecodeError, RecipeImportError, RecipeNotFound


log = logging.getLogger(__name__)


def encode_list(items: Optional[List[str]]) -> Optional[str]:
    if items is None:
        return None
    return json.dumps(list(items))


def decode_list(text: Optional[str], column: str, recipe_id) -> List[str]:
    """Decode a JSON-encoded list-of-strings column.

    Anything other than a JSON array of strings is a corrupt row; there is
    no fallback to an empty list.
    """
    if text is None:
        raise RecipeDecodeError(f"recipe {recipe_id!r}: {column} is NULL")
    try:
        value = json.loads(text)
    except ValueError as e:
        raise RecipeDecodeError(f"recipe {recipe_id!r}: {column} is not valid JSON: {e}") from e
    if not isinstance(value, list) or not all(isinstance(i, str) for i in value):
        raise RecipeDecodeError(f"recipe {recipe_id!r}: {column} is not a list of strings")
    return value


# Column rows rather than entities: the ORM drops entity rows whose key is NULL
COLUMNS = (
    models.Recipe.id,
    models.Recipe.name,
    models.Recipe.ingredients,
    models.Recipe.instructions,
    models.Recipe.tags,
    models.Recipe.source,
)


def to_recipe(row) -> schemas.Recipe:
    if row.id is None:
        raise RecipeDecodeError(f"recipe row {row.name!r} has no id")
    ingredients = decode_list(row.ingredients, "ingredients", row.id)
    tags = None if row.tags is None else decode_list(row.tags, "tags", row.id)
    try:
        return schemas.Recipe(
            id=row.id,
            name=row.name,
            ingredients=ingredients,
            instructions=row.instructions,
            tags=tags,
            source=row.source,
        )
    except ValidationError as e:
        raise RecipeDecodeError(f"recipe {row.id!r}: {e}") from e


def get_recipe(db: Session, recipe_id: str) -> schemas.Recipe:
    row = db.query(*COLUMNS).filter(models.Recipe.id == recipe_id).first()
    if row is None:
        raise RecipeNotFound(recipe_id)
    return to_recipe(row)


def _random_row(db: Session, *columns):
    row = db.query(*columns).order_by(func.random()).first()
    if row is None:
        raise EmptyStore("no recipes stored")
    return row


def get_random_recipe(db: Session) -> schemas.Recipe:
    return to_recipe(_random_row(db, *COLUMNS))


def get_random_recipe_id(db: Session) -> str:
    row = _random_row(db, models.Recipe.id, models.Recipe.name)
    if row.id is None:
        raise RecipeDecodeError(f"recipe row {row.name!r} has no id")
    return row.id


def count_recipes(db: Session) -> int:
    return db.query(func.count()).select_from(models.Recipe).scalar()


def insert_recipes(db: Session, recipes: Iterable[schemas.Recipe]) -> int:
    """Insert all recipes in one transaction, or none of them."""
    added = 0
    try:
        for recipe in recipes:
            db.add(
                models.Recipe(
                    id=recipe.id,
                    name=recipe.name,
                    ingredients=encode_list(recipe.ingredients),
                    instructions=recipe.instructions,
                    tags=encode_list(recipe.tags),
                    source=recipe.source,
                )
            )
            added += 1
        db.commit()
    except (TypeError, ValueError, SQLAlchemyError) as e:
        db.rollback()
        raise RecipeImportError(f"could not store recipes: {e}") from e
    log.info("inserted %d recipe(s)", added)
    return added
