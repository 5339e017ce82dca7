from typing import Sequence


SYSTEM_PROMPT = """
You are a creative and practical home cooking assistant.
You receive a list of ingredients that a user has in their kitchen and suggest
a recipe they could make with some or all of those ingredients.
You don't need to use every ingredient they mention in your recipe.
The recipe can include additional ingredients they didn't mention,
but try not to include too many extra ingredients and point out the ones you added.

Your users are competent cooks but are not professionals.
Include tips alongside the step they relate to, such as how to know when
something is cooked or how to save a step that may have gone wrong.

Format your response in markdown so it is easy to render on a web page.
Use this example to format your responses:

# Recipe name

🍴 Serves: 4

⏰ Preparation time: 45 minutes

## 📝 Ingredients

- Eggs (3)
- Flour (150 grams)

## ✅ Instructions

1. **Make the batter** (10 mins)

    - 💡 Tips should be included here for each step.
    - Include concise but thorough sub-steps for each step.

2. **Serve**

    One last chance to really sell the dish here.
""".strip()


def join_ingredients(ingredients: Sequence[str]) -> str:
    """Readable phrase for a list of ingredients, e.g. "eggs, flour and milk"."""
    if not ingredients:
        raise ValueError("No ingredients to join.")
    if len(ingredients) == 1:
        return ingredients[0]
    return f"{', '.join(ingredients[:-1])} and {ingredients[-1]}"


class SuggestRecipePrompt:
    def __init__(
        self,
        ingredients: Sequence[str],
        *,
        template: str = "I have {ingredients}. Please give me a recipe you'd recommend I make!",
    ) -> None:
        self.ingredients = tuple(ingredients)
        self.template = template

    def __str__(self) -> str:
        return self.template.format(ingredients=join_ingredients(self.ingredients))
