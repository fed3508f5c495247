from recipe_server.config import TagsPolicy
from recipe_server.projection import to_payload, to_view

from conftest import make_recipe


def test_view_joins_tags():
    view = to_view(make_recipe(tags=["quick", "lunch"]))
    assert view.tag_string == "quick, lunch"


def test_view_without_tags_is_empty_string():
    assert to_view(make_recipe(tags=None)).tag_string == ""
    assert to_view(make_recipe(tags=[])).tag_string == ""


def test_view_passes_fields_through():
    recipe = make_recipe(source="Grandma")
    view = to_view(recipe)
    assert view.model_dump(exclude={"tag_string"}) == recipe.model_dump()


def test_payload_set_policy_collapses_duplicates():
    payload = to_payload(make_recipe(tags=["quick", "breakfast", "quick"]), TagsPolicy.set)
    assert payload.tags == ["breakfast", "quick"]


def test_payload_list_policy_keeps_order():
    payload = to_payload(make_recipe(tags=["quick", "breakfast", "quick"]), TagsPolicy.list)
    assert payload.tags == ["quick", "breakfast", "quick"]


def test_payload_absent_and_empty_tags():
    for policy in TagsPolicy:
        assert to_payload(make_recipe(tags=None), policy).tags is None
        assert to_payload(make_recipe(tags=[]), policy).tags == []


def test_payload_passes_fields_through():
    recipe = make_recipe(ingredients=["b", "a"], source="Book")
    payload = to_payload(recipe)
    assert payload.id == recipe.id
    assert payload.name == recipe.name
    assert payload.ingredients == ["b", "a"]
    assert payload.instructions == recipe.instructions
    assert payload.source == "Book"
