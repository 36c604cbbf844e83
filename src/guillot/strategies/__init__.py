"""패킹 전략 모듈"""
from .guillotine_search import (
    DEFAULT_CANDIDATES_BY_DEPTH,
    GuillotineSearchPacker,
    ProgressEvent,
    SearchStats,
)

__all__ = [
    'DEFAULT_CANDIDATES_BY_DEPTH',
    'GuillotineSearchPacker',
    'ProgressEvent',
    'SearchStats',
]
