from typing import Iterator


type Ingredient = str


MIN_INGREDIENTS = 4


class IngredientStore:
    """Ordered, append only collection of ingredients."""

    def __init__(self, *, threshold: int = MIN_INGREDIENTS) -> None:
        self.threshold = threshold
        self._ingredients: list[Ingredient] = []

    def __len__(self) -> int:
        return len(self._ingredients)

    def __iter__(self) -> Iterator[Ingredient]:
        return iter(self.list())

    def __repr__(self) -> str:
        return f"<IngredientStore(count={len(self)}, ready={self.ready})>"

    def add(self, text: str) -> bool:
        # Blank entries are ignored rather than treated as an error.
        if not text.strip():
            return False
        self._ingredients.append(text)
        return True

    def list(self) -> tuple[Ingredient, ...]:
        return tuple(self._ingredients)

    @property
    def count(self) -> int:
        return len(self)

    @property
    def ready(self) -> bool:
        return len(self) >= self.threshold

    @property
    def remaining(self) -> int:
        return max(0, self.threshold - len(self))
