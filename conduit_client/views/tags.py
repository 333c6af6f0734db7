"""Popular-tags sidebar state."""

from typing import Optional, Tuple

from conduit_client.api import TagsApi
from conduit_client.protocols import LoggerProtocol
from conduit_client.state import StateCell
from conduit_client.utils.logging import get_component_logger


class TagsSidebar:
    """``loaded`` distinguishes "still loading" from "no tags yet"."""

    def __init__(self, tags_api: TagsApi, logger: Optional[LoggerProtocol] = None) -> None:
        self._api = tags_api
        self._logger = get_component_logger("TagsSidebar", logger)
        self.tags: StateCell[Tuple[str, ...]] = StateCell((), name="tags")
        self.loaded: StateCell[bool] = StateCell(False, name="tags_loaded")

    async def load(self) -> Tuple[str, ...]:
        tags = tuple(await self._api.get_all())
        self.tags.set(tags)
        self.loaded.set(True)
        self._logger.debug("tags_loaded", count=len(tags))
        return tags
