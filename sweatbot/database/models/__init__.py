from .report import MemberReport

__all__ = [
    "MemberReport",
]
