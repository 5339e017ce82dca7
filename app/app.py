import contextlib
import functools
import logging
from pathlib import Path
from typing import AsyncIterator, Awaitable, Callable

import openai
from jinja2 import Environment, FileSystemLoader, select_autoescape
from rich.logging import RichHandler
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, RedirectResponse, Response
from starlette.routing import Route

from app.html.recipe_view import RecipeView
from chef.errors import NotEnoughIngredients, RecipeRequestFailed, RecipeRequestPending
from chef.gateway import RecipeGateway
from chef.session import Kitchen, KitchenPool
import config


CONFIG = config.Config()


logger = logging.getLogger(__name__)


def templates(html_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(html_dir),
        autoescape=select_autoescape(),
    )


def get_kitchen(request: Request, *, create: bool = False) -> Kitchen:
    """The kitchen for this browser.

    Unknown cookies get an empty kitchen that is only kept when `create` is set.
    """
    cfg: config.Config = request.app.state.config
    kitchens: KitchenPool = request.app.state.kitchens
    kitchen = kitchens.get(request.cookies.get(cfg.session_cookie))
    if kitchen is not None:
        return kitchen
    if not create:
        return Kitchen(threshold=cfg.min_ingredients)

    kitchen = kitchens.create()
    request.state.new_kitchen = kitchen.id
    logger.info("New kitchen %s", kitchen.id)
    return kitchen


def with_kitchen_cookie(request: Request, response: Response) -> Response:
    id = getattr(request.state, "new_kitchen", None)
    if id is not None:
        cfg: config.Config = request.app.state.config
        response.set_cookie(cfg.session_cookie, id, httponly=True, samesite="lax")
    return response


def aHTMLResponse(route: Callable[[Request], Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(request: Request) -> Response:
        resp = await route(request)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return with_kitchen_cookie(request, HTMLResponse(html, status_code=code))

    return wrapper


def failure_message(error: RecipeRequestFailed) -> str:
    match error.__cause__:
        case openai.RateLimitError():
            return "The chef is busy right now. Please try again in a moment."
        case openai.AuthenticationError():
            return "The recipe service is not configured correctly."
        case openai.APIConnectionError():
            return "Could not reach the recipe service. Please try again."
        case _:
            return "Could not get a recipe right now. Please try again."


@aHTMLResponse
async def homepage(request: Request) -> str:
    kitchen = get_kitchen(request)
    env: Environment = request.app.state.templates
    recipe = (
        None
        if kitchen.recipe is None
        else RecipeView(kitchen.recipe, environment=env)
    )
    error = None if kitchen.error is None else failure_message(kitchen.error)
    return env.get_template("index.html").render(
        kitchen=kitchen,
        recipe=recipe,
        error=error,
        scroll=False,
    )


async def add_ingredient(request: Request) -> Response:
    kitchen = get_kitchen(request, create=True)
    async with request.form() as form:
        text = str(form.get("ingredient", ""))
    kitchen.add_ingredient(text)

    if "hx-request" not in request.headers:
        return with_kitchen_cookie(request, RedirectResponse("/", status_code=303))

    env: Environment = request.app.state.templates
    html = env.get_template("ingredients.html").render(kitchen=kitchen)
    return with_kitchen_cookie(request, HTMLResponse(html))


@aHTMLResponse
async def recipe(request: Request) -> str | tuple[str, int]:
    kitchen = get_kitchen(request)
    gateway: RecipeGateway = request.app.state.gateway
    env: Environment = request.app.state.templates

    try:
        suggested = await kitchen.suggest_recipe(gateway)
    except NotEnoughIngredients as e:
        return RecipeView(None, environment=env, error=str(e)).render(), 400
    except RecipeRequestPending:
        error = "Still waiting on the last recipe."
        return RecipeView(None, environment=env, error=error).render(), 409
    except RecipeRequestFailed as e:
        logger.warning("Recipe request failed for kitchen %s: %r", kitchen.id, e.__cause__ or e)
        return RecipeView(None, environment=env, error=failure_message(e)).render()

    return RecipeView(suggested, environment=env, scroll=True).render()


def create_app(
    cfg: config.Config | None = None,
    *,
    gateway: RecipeGateway | None = None,
) -> Starlette:
    cfg = CONFIG if cfg is None else cfg
    gateway = (
        RecipeGateway.from_api_key(
            cfg.openai_api_key.get_secret_value(),
            model=cfg.core_model,
            max_tokens=cfg.max_tokens,
            base_url=cfg.openai_base_url,
            timeout=cfg.request_timeout,
        )
        if gateway is None
        else gateway
    )

    if cfg.env == config.Env.local:
        logging.basicConfig(level=logging.INFO, format="%(message)s", handlers=[RichHandler()])

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        logger.info("Serving recipes from %s", gateway.model)
        yield
        await gateway.close()

    app = Starlette(
        debug=True if cfg.env == config.Env.local else False,
        routes=[
            Route("/", homepage),
            Route("/ingredients", add_ingredient, methods=["POST"]),
            Route("/recipe", recipe, methods=["POST"]),
        ],
        lifespan=lifespan,
    )
    app.state.config = cfg
    app.state.gateway = gateway
    app.state.kitchens = KitchenPool(
        max_kitchens=cfg.max_kitchens,
        threshold=cfg.min_ingredients,
    )
    app.state.templates = templates(cfg.html_dir)
    return app


app = create_app()
