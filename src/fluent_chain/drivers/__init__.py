from .base import Driver, Element, SearchContext
from .journal import JournalDriver, JournalElement

__all__ = ["Driver", "Element", "SearchContext", "JournalDriver", "JournalElement"]
