from typing import Optional

from sqlalchemy.orm import Session

from . import crud, schemas


def select_recipe(db: Session, recipe_id: Optional[str] = None) -> schemas.Recipe:
    """Return the recipe with ``recipe_id``, or a random one when it is None.

    Store errors (not found, empty store, decode failures) propagate as-is.
    """
    if recipe_id is not None:
        return crud.get_recipe(db, recipe_id)
    return crud.get_random_recipe(db)
