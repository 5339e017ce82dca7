from jinja2 import Environment
from markupsafe import Markup

from chef.models import Recipe


class RecipeView:
    def __init__(
        self,
        recipe: Recipe | None,
        *,
        environment: Environment,
        template_name: str = "recipe.html",
        error: str | None = None,
        scroll: bool = False,
    ) -> None:
        self.recipe = recipe
        self.env = environment
        self.name = template_name
        self.error = error
        self.scroll = scroll

    @property
    def title(self) -> str:
        return "" if self.recipe is None else self.recipe.title

    @property
    def content(self) -> str:
        return Markup("") if self.recipe is None else Markup(self.recipe.html)

    def render(self) -> str:
        return self.env.get_template(self.name).render(
            recipe=self if self.recipe is not None else None,
            error=self.error,
            scroll=self.scroll,
        )
