"""Guillot - 이미지 페이지 배치

Guillotine Cut 조건을 지키며 이미지(사각형)를 최소한의 페이지에 배치하는 도구
"""

from .packing import (
    Cut,
    GuillotError,
    InputValidationError,
    Inventory,
    Item,
    PackingInvariantError,
    Page,
    PlacedRect,
    Rectangle,
    Region,
)
from .strategies import GuillotineSearchPacker

__all__ = [
    'Cut',
    'GuillotError',
    'GuillotineSearchPacker',
    'InputValidationError',
    'Inventory',
    'Item',
    'PackingInvariantError',
    'Page',
    'PlacedRect',
    'Rectangle',
    'Region',
]
