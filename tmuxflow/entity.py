"""Speculative/realized state shared by sessions and windows."""

import logging
from typing import Optional

from .errors import RealizationError

logger = logging.getLogger(__name__)


class Realizable:
    """
    Mixin for entities that start out as a declaration and later bind to tmux.

    An entity is speculative while ``id`` is None. ``_realize`` binds it to
    the name and id tmux reported, exactly once, mutating the object in place
    so references held elsewhere follow the promotion.
    """

    name: str
    id: Optional[int]

    @property
    def is_realized(self) -> bool:
        return self.id is not None

    def _realize(self, name: str, id: int) -> None:
        kind = type(self).__name__
        if self.is_realized:
            raise RealizationError(f"{kind} {self.name!r} is already realized with id {self.id}")
        self.name = name
        self.id = id
        logger.info(f"{kind} realized: {name} (id {id})")
