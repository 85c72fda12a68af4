from .session import Database

__all__ = ["Database"]
