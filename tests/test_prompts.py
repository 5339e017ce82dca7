import pytest

from chef.prompts import SYSTEM_PROMPT, SuggestRecipePrompt, join_ingredients


@pytest.mark.parametrize(
    "ingredients,expected",
    (
        (["eggs"], "eggs"),
        (["eggs", "flour"], "eggs and flour"),
        (["eggs", "flour", "milk", "sugar"], "eggs, flour, milk and sugar"),
    ),
)
def test_join_ingredients(ingredients: list[str], expected: str) -> None:
    assert join_ingredients(ingredients) == expected


def test_join_ingredients_empty() -> None:
    with pytest.raises(ValueError):
        join_ingredients([])


def test_suggest_recipe_prompt() -> None:
    prompt = SuggestRecipePrompt(["eggs", "flour", "milk", "sugar"])
    assert str(prompt) == (
        "I have eggs, flour, milk and sugar. "
        "Please give me a recipe you'd recommend I make!"
    )


def test_system_prompt_asks_for_markdown() -> None:
    assert "markdown" in SYSTEM_PROMPT
