class ChefError(Exception):
    pass


class RecipeRequestFailed(ChefError):
    """The model did not produce a usable recipe.

    The underlying problem (network, authentication, rate limit, a malformed
    response) is available as `__cause__`.
    """


class NotEnoughIngredients(ChefError):
    def __init__(self, have: int, need: int) -> None:
        super().__init__(f"Have {have} ingredients, need at least {need}.")
        self.have = have
        self.need = need


class RecipeRequestPending(ChefError):
    pass
