from .plugin import plugin
from .serve import serve

__all__ = ["plugin", "serve"]
