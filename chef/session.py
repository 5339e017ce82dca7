from collections import OrderedDict
from enum import Enum
import logging
import uuid

from chef.errors import NotEnoughIngredients, RecipeRequestFailed, RecipeRequestPending
from chef.gateway import RecipeGateway
from chef.ingredients import MIN_INGREDIENTS, Ingredient, IngredientStore
from chef.models import Recipe, Renderer


logger = logging.getLogger(__name__)


class RecipeState(Enum):
    idle = "idle"
    pending = "pending"
    ready = "ready"
    failed = "failed"


class Kitchen:
    """One user's ingredients and the last recipe suggested for them."""

    def __init__(
        self,
        *,
        id: str | None = None,
        threshold: int = MIN_INGREDIENTS,
        renderer: Renderer | None = None,
    ) -> None:
        self.id = uuid.uuid4().hex if id is None else id
        self.store = IngredientStore(threshold=threshold)
        self.renderer = renderer
        self.state = RecipeState.idle
        self.recipe: Recipe | None = None
        self.error: RecipeRequestFailed | None = None

    def __repr__(self) -> str:
        return f"<Kitchen(id={self.id}, ingredients={len(self.store)}, state={self.state.value})>"

    def add_ingredient(self, text: str) -> bool:
        return self.store.add(text)

    @property
    def ingredients(self) -> tuple[Ingredient, ...]:
        return self.store.list()

    @property
    def ready(self) -> bool:
        return self.store.ready

    @property
    def pending(self) -> bool:
        return self.state == RecipeState.pending

    async def suggest_recipe(self, gateway: RecipeGateway) -> Recipe:
        if not self.store.ready:
            raise NotEnoughIngredients(len(self.store), self.store.threshold)
        if self.pending:
            raise RecipeRequestPending(f"Kitchen {self.id} is already waiting on a recipe.")

        ingredients = self.store.list()
        self.state = RecipeState.pending
        self.error = None
        logger.info(
            "Requesting recipe for kitchen %s with %d ingredients from %s",
            self.id,
            len(ingredients),
            gateway.model,
        )
        try:
            content = await gateway.request_recipe(ingredients)
        except RecipeRequestFailed as e:
            self.state = RecipeState.failed
            self.recipe = None
            self.error = e
            raise
        except BaseException:
            # Cancelled or a bug, either way the kitchen must not stay pending.
            self.state = RecipeState.idle
            raise

        self.recipe = Recipe(
            id=uuid.uuid4().hex,
            ingredients=ingredients,
            content=content,
            renderer=self.renderer,
        )
        self.state = RecipeState.ready
        logger.info("Got recipe %r for kitchen %s", self.recipe, self.id)
        return self.recipe


class KitchenPool:
    """Kitchens by id, dropping the least recently used past `max_kitchens`."""

    def __init__(
        self,
        *,
        max_kitchens: int = 1000,
        threshold: int = MIN_INGREDIENTS,
    ) -> None:
        self.max_kitchens = max_kitchens
        self.threshold = threshold
        self._kitchens: OrderedDict[str, Kitchen] = OrderedDict()

    def __len__(self) -> int:
        return len(self._kitchens)

    def __contains__(self, id: str) -> bool:
        return id in self._kitchens

    def get(self, id: str | None) -> Kitchen | None:
        if id is None or id not in self._kitchens:
            return None
        self._kitchens.move_to_end(id)
        return self._kitchens[id]

    def create(self) -> Kitchen:
        kitchen = Kitchen(threshold=self.threshold)
        self._kitchens[kitchen.id] = kitchen
        while len(self._kitchens) > self.max_kitchens:
            id, _ = self._kitchens.popitem(last=False)
            logger.info("Dropped kitchen %s", id)
        return kitchen
