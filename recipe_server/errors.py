class RecipeError(Exception):
    pass


class RecipeNotFound(RecipeError):
    pass


class EmptyStore(RecipeError):
    pass


class RecipeDecodeError(RecipeError):
    """A stored row could not be turned back into a recipe.

    Raised for malformed JSON list columns and for rows with a NULL id.
    """


class InvalidConfiguration(RecipeError):
    pass


class RecipeImportError(RecipeError):
    pass


class StoreIOError(RecipeError):
    pass


# Errors the request path reports as "no recipe found"
UNAVAILABLE = (RecipeNotFound, EmptyStore, RecipeDecodeError)
