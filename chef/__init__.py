"""Describes the Chef domain. Centres around the `Kitchen`.

A kitchen collects ingredients until there are enough of them to be worth
cooking with, then asks a large language model for a recipe.

- The ingredient list only grows.
- A kitchen asks for one recipe at a time.
- The model sits behind an api, so the gateway to it is injected.
"""

from chef.errors import (
    ChefError,
    NotEnoughIngredients,
    RecipeRequestFailed,
    RecipeRequestPending,
)
from chef.gateway import RecipeGateway
from chef.ingredients import MIN_INGREDIENTS, IngredientStore
from chef.models import MarkdownRenderer, Recipe, Renderer
from chef.session import Kitchen, KitchenPool, RecipeState


__all__ = [
    "ChefError",
    "IngredientStore",
    "Kitchen",
    "KitchenPool",
    "MIN_INGREDIENTS",
    "MarkdownRenderer",
    "NotEnoughIngredients",
    "Recipe",
    "RecipeGateway",
    "RecipeRequestFailed",
    "RecipeRequestPending",
    "RecipeState",
    "Renderer",
]
