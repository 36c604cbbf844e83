"""
기본 클래스 모듈
- Rectangle / Inventory: 아직 배치되지 않은 이미지 사각형 집합
- Candidate / Region / PlacedRect / Cut / FitResult / Page: 탐색 중 주고받는 값
- PackingStrategy: 패킹 전략 베이스 클래스 (페이지 크기, 간격, 여백, 회전)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from collections.abc import Hashable, Iterable, Iterator, Mapping


class GuillotError(Exception):
    """guillot 예외 베이스"""


class InputValidationError(GuillotError, ValueError):
    """페이지에 들어가지 않는 아이템이 있음 (아이템별 메시지 포함)"""

    def __init__(self, errors: list[str]) -> None:
        self.errors: list[str] = list(errors)
        super().__init__("\n".join(self.errors))


class PackingInvariantError(GuillotError, RuntimeError):
    """남은 아이템이 있는데 한 장도 배치하지 못함"""


@dataclass(frozen=True)
class Rectangle:
    """배치할 이미지 하나"""
    id: Hashable
    width: int
    height: int
    rotatable: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"{self.id}: 크기는 양수여야 합니다 ({self.width}x{self.height})")

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Candidate:
    """현재 영역에 먼저 놓아볼 배치 후보 (원래 방향 또는 90' 회전)"""
    id: Hashable
    width: int
    height: int
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"{self.id}: 후보 크기는 양수여야 합니다 ({self.width}x{self.height})")

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def footprint(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class Region:
    """절단으로 생긴 영역 (좌표는 항상 현재 재귀 호출 기준)"""
    width: int
    height: int

    @property
    def is_feasible(self) -> bool:
        # 간격(spacing)이 남은 공간을 모두 먹으면 0 이하가 됨
        return self.width > 0 and self.height > 0

    @property
    def area(self) -> int:
        return self.width * self.height if self.is_feasible else 0

    def fits(self, width: int, height: int) -> bool:
        return width <= self.width and height <= self.height


@dataclass(frozen=True)
class PlacedRect:
    """배치된 사각형 (페이지까지 올라오면 절대 좌표)"""
    id: Hashable
    x: int
    y: int
    width: int
    height: int
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"{self.id}: 배치 크기는 양수여야 합니다 ({self.width}x{self.height})")

    @property
    def area(self) -> int:
        return self.width * self.height

    def translated(self, dx: int, dy: int) -> PlacedRect:
        return PlacedRect(self.id, self.x + dx, self.y + dy, self.width, self.height, self.rotated)

    def overlaps(self, other: PlacedRect) -> bool:
        return (self.x < other.x + other.width and other.x < self.x + self.width and
                self.y < other.y + other.height and other.y < self.y + self.height)


@dataclass(frozen=True)
class Cut:
    """Guillotine 절단선

    - 'V': x=position 에서 y ∈ [start, end] 수직 절단
    - 'H': y=position 에서 x ∈ [start, end] 수평 절단
    """
    direction: str
    position: int
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.direction not in ('V', 'H'):
            raise ValueError(f"절단 방향은 'V' 또는 'H' 입니다: {self.direction!r}")
        if self.end < self.start:
            raise ValueError(f"절단 구간이 뒤집혔습니다: {self.start}..{self.end}")

    def translated(self, dx: int, dy: int) -> Cut:
        if self.direction == 'V':
            return Cut('V', self.position + dx, self.start + dy, self.end + dy)
        return Cut('H', self.position + dy, self.start + dx, self.end + dx)

    def crosses(self, rect: PlacedRect) -> bool:
        """절단선이 사각형 내부를 지나는지"""
        if self.direction == 'V':
            return (rect.x < self.position < rect.x + rect.width and
                    self.start < rect.y + rect.height and rect.y < self.end)
        return (rect.y < self.position < rect.y + rect.height and
                self.start < rect.x + rect.width and rect.x < self.end)


class Inventory(Mapping):
    """아직 배치되지 않은 사각형들 (id -> Rectangle)

    형제 탐색 분기끼리 상태를 공유하지 않도록 변경은 without()으로만 한다.
    Rectangle은 불변이므로 사본끼리 그대로 공유된다.
    """

    __slots__ = ('_items',)

    def __init__(self, rectangles: Iterable[Rectangle] = ()) -> None:
        items: dict = {}
        for rect in rectangles:
            if rect.id in items:
                raise ValueError(f"중복된 id: {rect.id}")
            items[rect.id] = rect
        self._items = items

    @classmethod
    def _from_dict(cls, items: dict) -> Inventory:
        inv = cls.__new__(cls)
        inv._items = items
        return inv

    def __getitem__(self, key: Hashable) -> Rectangle:
        return self._items[key]

    def __iter__(self) -> Iterator:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Inventory({list(self._items)!r})"

    def without(self, *ids: Hashable) -> Inventory:
        """ids를 뺀 새 Inventory (자신은 그대로)"""
        items = dict(self._items)
        for key in ids:
            del items[key]
        return Inventory._from_dict(items)

    def sorted_by(self, key) -> list[Rectangle]:
        """key 내림차순 정렬 (동률은 기존 순서 유지)"""
        return sorted(self._items.values(), key=key, reverse=True)

    @property
    def total_area(self) -> int:
        return sum(rect.area for rect in self._items.values())


@dataclass(frozen=True)
class FitResult:
    """영역 하나에 대한 탐색 결과"""
    placements: tuple[PlacedRect, ...]
    leftover: Inventory
    covered_area: int = 0
    cuts: tuple[Cut, ...] = ()

    def __post_init__(self) -> None:
        if self.covered_area != sum(p.area for p in self.placements):
            raise ValueError(
                f"covered_area({self.covered_area})가 배치 면적 합과 다릅니다")


@dataclass
class Page:
    """한 페이지의 최종 배치 (여백 반영된 절대 좌표)"""
    placements: list[PlacedRect] = field(default_factory=list)
    cuts: list[Cut] = field(default_factory=list)

    @property
    def covered_area(self) -> int:
        return sum(p.area for p in self.placements)


@dataclass(frozen=True)
class Item:
    """입력 아이템 (rotatable=None이면 전체 회전 설정을 따름)"""
    id: Hashable
    width: int
    height: int
    rotatable: bool | None = None


def validate_items(items: Iterable[Item], usable_width: int, usable_height: int,
                   default_rotatable: bool = False) -> Inventory:
    """아이템을 검증하고 Inventory로 변환

    모든 아이템을 검사한 뒤, 하나라도 페이지에 들어가지 않으면
    아이템별 메시지를 담아 InputValidationError 발생 (배치 시작 전 중단)
    """
    errors: list[str] = []
    rectangles: list[Rectangle] = []
    seen: set = set()

    for item in items:
        w, h = item.width, item.height
        rotatable = default_rotatable if item.rotatable is None else bool(item.rotatable)

        if item.id in seen:
            errors.append(f"{item.id}: 중복된 아이템입니다")
            continue
        seen.add(item.id)

        if w <= 0 or h <= 0:
            errors.append(f"{item.id} ({w}x{h}): 크기는 양수여야 합니다")
            continue

        fits_upright = w <= usable_width and h <= usable_height
        fits_rotated = rotatable and h <= usable_width and w <= usable_height
        if not (fits_upright or fits_rotated):
            errors.append(
                f"{item.id} ({w}x{h}): 페이지({usable_width}x{usable_height})에 들어가지 않습니다")
            continue

        rectangles.append(Rectangle(item.id, w, h, rotatable))

    if errors:
        raise InputValidationError(errors)

    return Inventory(rectangles)


class PackingStrategy(ABC):
    """패킹 전략 베이스 클래스"""

    def __init__(self, page_width: int, page_height: int, spacing: int = 0,
                 margin: int = 0, allow_rotation: bool = False) -> None:
        if page_width <= 0 or page_height <= 0:
            raise ValueError(f"페이지 크기는 양수여야 합니다 ({page_width}x{page_height})")
        if spacing < 0:
            raise ValueError(f"간격은 0 이상이어야 합니다 ({spacing})")
        if margin < 0:
            raise ValueError(f"여백은 0 이상이어야 합니다 ({margin})")
        if page_width - 2 * margin <= 0 or page_height - 2 * margin <= 0:
            raise ValueError(f"여백 {margin}을 빼면 페이지에 남는 공간이 없습니다")

        self.page_width: int = page_width
        self.page_height: int = page_height
        self.spacing: int = spacing
        self.margin: int = margin
        self.allow_rotation: bool = allow_rotation

    @property
    def usable_width(self) -> int:
        """여백을 뺀 페이지 너비"""
        return self.page_width - 2 * self.margin

    @property
    def usable_height(self) -> int:
        """여백을 뺀 페이지 높이"""
        return self.page_height - 2 * self.margin

    def build_inventory(self, items: Iterable[Item]) -> Inventory:
        """아이템 검증 후 Inventory 생성"""
        return validate_items(items, self.usable_width, self.usable_height, self.allow_rotation)

    def pack(self, items: Iterable[Item]) -> list[Page]:
        """아이템들을 페이지에 배치

        Args:
            items: Item 목록

        Returns:
            페이지별 배치 결과 리스트
        """
        return self.pack_inventory(self.build_inventory(items))

    @abstractmethod
    def pack_inventory(self, inventory: Inventory) -> list[Page]:
        """검증된 Inventory를 모두 배치할 때까지 페이지 생성"""
        pass
