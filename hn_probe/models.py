from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class Item(BaseModel):
    """Fields shared by every Hacker News item."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    type: Optional[str] = None
    by: Optional[str] = None
    time: Optional[int] = None
    text: Optional[str] = None
    dead: Optional[bool] = None
    deleted: Optional[bool] = None
    parent: Optional[int] = None
    kids: Optional[List[int]] = None

    @property
    def is_dead(self) -> bool:
        """True only when the item carries an explicit dead flag."""
        return self.dead is True

    @property
    def has_kids(self) -> bool:
        """True when the item has at least one direct child."""
        return bool(self.kids)


class Story(Item):
    """A Hacker News story."""

    poll: Optional[int] = None
    url: Optional[str] = None
    score: Optional[int] = None
    title: Optional[str] = None
    parts: Optional[List[int]] = None
    descendants: Optional[int] = None

    @property
    def has_url(self) -> bool:
        return bool(self.url)

    def __str__(self) -> str:
        return f"Story(id={self.id}, title={self.title!r}, by={self.by!r}, score={self.score})"


class Comment(Item):
    """A Hacker News comment."""

    def __str__(self) -> str:
        text = self.text
        if text is not None and len(text) > 50:
            text = text[:50] + "..."
        return f"Comment(id={self.id}, by={self.by!r}, parent={self.parent}, text={text!r})"
