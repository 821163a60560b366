"""Building block catalog: compliance, feature and governance capabilities."""

from .catalog import (
    BlockCategory,
    BuildingBlock,
    BUILDING_BLOCKS,
    parse_category,
    list_by_category,
    is_known_block,
    get_block,
)

__all__ = [
    "BlockCategory",
    "BuildingBlock",
    "BUILDING_BLOCKS",
    "parse_category",
    "list_by_category",
    "is_known_block",
    "get_block",
]
