from stockroom.item.item import Item, ItemStore

__all__ = ["Item", "ItemStore"]
