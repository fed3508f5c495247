from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Recipe(BaseModel):
    """A recipe as read from the store or from a seed file."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., json_schema_extra={"example": "pbj-sandwich"})
    name: str = Field(..., json_schema_extra={"example": "PB&J Sandwich"})
    ingredients: List[str] = Field(
        ...,
        json_schema_extra={"example": ["Bread", "peanut butter", "jelly"]},
    )
    instructions: str = Field(
        ...,
        json_schema_extra={
            "example": "Spread peanut butter on bread. Spread jelly on "
            "another bread slice. Put them together. Enjoy!"
        },
    )
    # None means no tags were recorded, which is not the same as []
    tags: Optional[List[str]] = Field(
        default=None, json_schema_extra={"example": ["quick", "lunch"]}
    )
    source: Optional[str] = Field(
        default=None, json_schema_extra={"example": "Grandma"}
    )


class RecipeView(Recipe):
    tag_string: str = ""


class RecipePayload(BaseModel):
    id: str
    name: str
    ingredients: List[str]
    instructions: str
    tags: Optional[List[str]] = Field(
        default=None,
        description=(
            "Recipe tags, or null when none were recorded. With the default "
            "'set' policy duplicates are removed and the tags are sorted; "
            "with the 'list' policy the stored order is kept."
        ),
    )
    source: Optional[str] = None


class ErrorDetail(BaseModel):
    detail: str = Field(..., json_schema_extra={"example": "No recipe found"})
