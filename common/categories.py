"""
common.categories

Transaction categories exposed by the explorer's account module.
"""
from enum import Enum


class Category(str, Enum):
    NORMAL = "normal"
    INTERNAL = "internal"
    ERC20 = "erc20"
    ERC721 = "erc721"

    @property
    def action(self) -> str:
        return ACTIONS[self]


ACTIONS = {
    Category.NORMAL: "txlist",
    Category.INTERNAL: "txlistinternal",
    Category.ERC20: "tokentx",
    Category.ERC721: "tokennfttx",
}

# rows are written in this order, categories are never interleaved
EXPORT_ORDER = (Category.NORMAL, Category.INTERNAL, Category.ERC20, Category.ERC721)
