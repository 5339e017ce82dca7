import re
from typing import Protocol, Sequence

import markdown2  # pyright: ignore[reportMissingTypeStubs]
from markupsafe import Markup


HEADING = re.compile(r"^\s{0,3}#{1,6}\s+(?P<title>.+?)\s*#*\s*$", re.MULTILINE)
DEFAULT_TITLE = "Your recipe"


class Renderer(Protocol):
    def render(self, text: str) -> str:
        ...


class MarkdownRenderer:
    """Markdown to html, safe to drop straight into a jinja2 template.

    Raw html in the markdown is escaped rather than passed through.
    """

    def __init__(self, extras: Sequence[str] = ("fences", "tables")) -> None:
        self.extras = list(extras)

    def render(self, text: str) -> str:
        return Markup(
            markdown2.markdown(  # pyright: ignore[reportUnknownMemberType]
                text, extras=self.extras, safe_mode="escape"
            )
        )


class Recipe:
    def __init__(
        self,
        *,
        id: str,
        ingredients: Sequence[str],
        content: str,
        renderer: Renderer | None = None,
    ) -> None:
        self.id = id
        self.ingredients = tuple(ingredients)
        self.content = content
        self.renderer = MarkdownRenderer() if renderer is None else renderer

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, title={self.title})>"

    def __str__(self) -> str:
        return self.content

    @property
    def title(self) -> str:
        match = HEADING.search(self.content)
        if match is None:
            return DEFAULT_TITLE
        return match.group("title").strip("*_ ") or DEFAULT_TITLE

    @property
    def html(self) -> str:
        return self.renderer.render(self.content)

    def to_dict(self) -> dict[str, str | list[str]]:
        return {
            "id": self.id,
            "title": self.title,
            "ingredients": list(self.ingredients),
            "content": self.content,
        }
