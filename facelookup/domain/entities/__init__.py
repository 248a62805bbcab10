"""Domain entities package."""
from .person import PersonRecord

__all__ = ["PersonRecord"]
