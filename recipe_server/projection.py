from .config import TagsPolicy
from .schemas import Recipe, RecipePayload, RecipeView


def tag_string(recipe: Recipe) -> str:
    return ", ".join(recipe.tags or [])


def to_view(recipe: Recipe) -> RecipeView:
    return RecipeView(**recipe.model_dump(), tag_string=tag_string(recipe))


def project_tags(tags, policy: TagsPolicy):
    if tags is None:
        return None
    if policy == TagsPolicy.set:
        return sorted(set(tags))
    return list(tags)


def to_payload(recipe: Recipe, policy: TagsPolicy = TagsPolicy.set) -> RecipePayload:
    return RecipePayload(
        id=recipe.id,
        name=recipe.name,
        ingredients=recipe.ingredients,
        instructions=recipe.instructions,
        tags=project_tags(recipe.tags, policy),
        source=recipe.source,
    )
