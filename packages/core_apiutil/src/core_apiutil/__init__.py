from .expandable import Expandable

__all__ = ["Expandable"]
