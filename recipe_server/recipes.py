import json
import logging
from pathlib import Path
from typing import List

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from . import crud, schemas
from .errors import RecipeImportError


log = logging.getLogger(__name__)

_RECIPE_LIST = TypeAdapter(List[schemas.Recipe])


def load_recipes(path) -> List[schemas.Recipe]:
    """Load recipes from a JSON file holding an array of recipe objects.

    Args:
        path (str or Path): Path to the JSON file.

    Returns:
        list: validated recipes, in file order.

    Raises:
        RecipeImportError: the file is missing or unreadable, is not JSON,
            or an entry is not a valid recipe.
    """
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise RecipeImportError(f"could not find recipe file {p}: {e}") from e
    except ValueError as e:
        raise RecipeImportError(f"could not read recipe file {p}: {e}") from e
    try:
        return _RECIPE_LIST.validate_python(data)
    except ValidationError as e:
        raise RecipeImportError(f"could not read recipe file {p}: {e}") from e


def seed_from_file(db: Session, path) -> int:
    recipes = load_recipes(path)
    log.info("loaded %d recipe(s) from %s", len(recipes), path)
    return crud.insert_recipes(db, recipes)
