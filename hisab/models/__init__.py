from .worker import Worker
from .advance import Advance

__all__ = ["Worker", "Advance"]
