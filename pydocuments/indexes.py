from enum import Enum


class DocumentIndex(str, Enum):
    """
    GIN index flavours for whole-document indexes (Postgres only)
    """

    FULL = "full"
    """Standard ``jsonb_ops`` operator class, supporting every JSONB operator"""

    OPTIMIZED = "optimized"
    """``jsonb_path_ops`` operator class, smaller and faster but limited to ``@>``, ``@?`` and ``@@``"""
