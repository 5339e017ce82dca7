import asyncio
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.text import Text

from chef.errors import ChefError
from chef.gateway import RecipeGateway
from chef.session import Kitchen
import config


class RichRenderer:
    """Renders recipe markdown to the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = Console() if console is None else console

    def render(self, text: str) -> str:
        with self.console.capture() as capture:
            self.console.print(Markdown(text))
        return capture.get()


async def main() -> None:
    cfg = config.Config()
    logging.basicConfig(
        level=logging.INFO if cfg.env == config.Env.local else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler()],
    )

    console = Console()
    renderer = RichRenderer(console)
    kitchen = Kitchen(threshold=cfg.min_ingredients, renderer=renderer)
    gateway = RecipeGateway.from_api_key(
        cfg.openai_api_key.get_secret_value(),
        model=cfg.core_model,
        max_tokens=cfg.max_tokens,
        base_url=cfg.openai_base_url,
        timeout=cfg.request_timeout,
    )

    console.print("Add ingredients one at a time. 'r' for a recipe, 'q' to quit.")
    try:
        await prompt_loop(console, kitchen, gateway)
    finally:
        await gateway.close()


async def prompt_loop(console: Console, kitchen: Kitchen, gateway: RecipeGateway) -> None:
    while True:
        try:
            msg = input("Ingredient: ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if msg in ["q", "Q"]:
            break
        if msg not in ["r", "R"]:
            kitchen.add_ingredient(msg)
            console.print(", ".join(kitchen.ingredients), markup=False)
            if not kitchen.ready:
                console.print(f"Add {kitchen.store.remaining} more to get a recipe.")
            continue
        try:
            recipe = await kitchen.suggest_recipe(gateway)
        except ChefError as e:
            console.print(f"[red]{e}[/red]")
        else:
            console.print(Text.from_ansi(recipe.html))
        console.print()


if __name__ == "__main__":
    asyncio.run(main())
