"""
재귀 Guillotine 탐색 전략

후보 하나를 영역 왼쪽 위에 놓고, 남은 공간을 두 가지 guillotine 절단으로 나눈 뒤
각 하위 영역에 나머지 사각형을 재귀적으로 채운다.
- 깊이별 후보 수 제한 [1, 3, 2, 1] 로 탐색 폭을 묶음
- 깊이 0은 면적, 이후 높이/너비를 번갈아 가며 정렬
- 가장 많이 덮는 결과만 유지 (전역 최적 아님)
"""

from __future__ import annotations
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..candidates import select_candidates
from ..packing import (
    Candidate,
    Cut,
    FitResult,
    Inventory,
    PackingInvariantError,
    PackingStrategy,
    Page,
    PlacedRect,
    Rectangle,
    Region,
)

DEFAULT_CANDIDATES_BY_DEPTH: tuple[int, ...] = (1, 3, 2, 1)


@dataclass(frozen=True)
class SubRegion:
    """부모 영역 안의 하위 영역 (부모 기준 오프셋 포함)"""
    region: Region
    dx: int
    dy: int


@dataclass(frozen=True)
class Decomposition:
    """후보를 (0, 0)에 놓은 뒤의 guillotine 분할

    primary는 영역 전체를 관통하는 첫 절단, secondary는 그 안의 부분 절단
    """
    full: SubRegion
    partial: SubRegion
    primary: Cut
    secondary: Cut
    primary_inside: bool = True


@dataclass
class SearchStats:
    """탐색 통계"""
    fit_calls: int = 0
    candidates_evaluated: int = 0


@dataclass(frozen=True)
class ProgressEvent:
    """진행 상황 알림

    kind: 'page_start' | 'search' | 'page_done'
    """
    kind: str
    page: int
    remaining: int
    depth: int = 0
    placed: int = 0
    elapsed: float = 0.0


ProgressCallback = Callable[[ProgressEvent], None]


class GuillotineSearchPacker(PackingStrategy):
    """깊이 제한 재귀 Guillotine 탐색 패킹

    페이지마다 전체 영역에 대해 fit()을 호출하고, 남은 아이템이 없을 때까지 반복
    """

    def __init__(self, page_width: int, page_height: int, spacing: int = 0, margin: int = 0,
                 allow_rotation: bool = False, enough: float = 1.0,
                 candidates_by_depth: Sequence[int] = DEFAULT_CANDIDATES_BY_DEPTH,
                 progress: ProgressCallback | None = None,
                 progress_interval: float = 1.0) -> None:
        super().__init__(page_width, page_height, spacing, margin, allow_rotation)

        if not 0.5 <= enough <= 1.0:
            raise ValueError(f"enough는 0.5 ~ 1.0 사이여야 합니다 ({enough})")
        candidates_by_depth = tuple(candidates_by_depth)
        if not candidates_by_depth or any(n <= 0 for n in candidates_by_depth):
            raise ValueError(f"깊이별 후보 수는 양수여야 합니다 ({candidates_by_depth})")

        self.enough: float = enough
        self.candidates_by_depth: tuple[int, ...] = candidates_by_depth
        self.progress = progress
        self.progress_interval: float = progress_interval
        self.stats = SearchStats()

        self._page = 0
        self._page_remaining = 0
        self._page_started = 0.0
        self._last_report: float | None = None

    def pack_inventory(self, inventory: Inventory) -> list[Page]:
        """남은 아이템이 없을 때까지 페이지를 하나씩 채움"""
        pages: list[Page] = []
        remaining = inventory
        page_region = Region(self.usable_width, self.usable_height)
        self.stats = SearchStats()
        self._last_report = None

        while remaining:
            self._page = len(pages) + 1
            self._page_remaining = len(remaining)
            self._page_started = time.monotonic()
            self._notify('page_start')

            result = self.fit(0, page_region, remaining)

            if not result.placements:
                raise PackingInvariantError(
                    f"페이지 {self._page}: 남은 아이템 {len(remaining)}개 중 하나도 배치하지 못했습니다")

            page = Page(
                placements=[p.translated(self.margin, self.margin) for p in result.placements],
                cuts=[c.translated(self.margin, self.margin) for c in result.cuts],
            )
            pages.append(page)
            remaining = result.leftover

            self._notify('page_done', placed=len(page.placements))

        return pages

    def max_candidates(self, depth: int) -> int:
        """깊이별 후보 수 (전체 회전이면 두 배)"""
        table = self.candidates_by_depth
        count = table[min(depth, len(table) - 1)]
        if self.allow_rotation:
            count *= 2
        return count

    @staticmethod
    def sort_key(depth: int) -> Callable[[Rectangle], int]:
        """깊이 0: 면적, 홀수 깊이: 높이, 짝수 깊이: 너비"""
        if depth == 0:
            return lambda rect: rect.area
        if depth % 2 == 1:
            return lambda rect: rect.height
        return lambda rect: rect.width

    def decompose(self, region: Region, candidate: Candidate) -> tuple[Decomposition, Decomposition]:
        """후보를 놓은 뒤 가능한 두 가지 guillotine 분할

        A: 수직 절단 먼저 (오른쪽 전체 높이 + 후보 아래)
        B: 수평 절단 먼저 (아래쪽 전체 너비 + 후보 오른쪽)
        """
        w, h, s = candidate.width, candidate.height, self.spacing
        right = (w + s, 0)
        below = (0, h + s)

        vertical_first = Decomposition(
            full=SubRegion(Region(region.width - w - s, region.height - s), *right),
            partial=SubRegion(Region(w - s, region.height - h - s), *below),
            primary=Cut('V', w, 0, region.height),
            secondary=Cut('H', h, 0, w),
            primary_inside=w < region.width,
        )
        horizontal_first = Decomposition(
            full=SubRegion(Region(region.width - s, region.height - h - s), *below),
            partial=SubRegion(Region(region.width - w - s, h - s), *right),
            primary=Cut('H', h, 0, region.width),
            secondary=Cut('V', w, 0, h),
            primary_inside=h < region.height,
        )
        return vertical_first, horizontal_first

    def exploration_orders(self, region: Region, candidate: Candidate
                           ) -> list[tuple[Decomposition, tuple[SubRegion, SubRegion]]]:
        """두 분할 x 두 탐색 순서 = 4가지"""
        orders = [(d, (d.full, d.partial)) for d in self.decompose(region, candidate)]
        orders += [(d, (second, first)) for d, (first, second) in orders]
        return orders

    def fit(self, depth: int, region: Region, inventory: Inventory) -> FitResult:
        """영역에 inventory를 최대한 채운 결과

        Args:
            depth: 재귀 깊이 (0 = 페이지 전체)
            region: 대상 영역 (로컬 좌표)
            inventory: 이 호출이 사용할 수 있는 사각형들

        Returns:
            가장 넓게 덮은 FitResult. 후보가 없으면 빈 결과 (leftover = inventory)
        """
        self.stats.fit_calls += 1
        self._report_search(depth)

        best = FitResult((), inventory, 0, ())
        if not region.is_feasible or not inventory:
            return best

        rects = inventory.sorted_by(self.sort_key(depth))
        candidates = select_candidates(rects, self.max_candidates(depth), region, self.allow_rotation)

        target = None
        if self.enough < 1.0:
            target = int(self.enough * region.width * region.height)

        for candidate in candidates:
            self.stats.candidates_evaluated += 1

            working = inventory.without(candidate.id)
            placed = PlacedRect(candidate.id, 0, 0, candidate.width, candidate.height, candidate.rotated)

            for decomposition, order in self.exploration_orders(region, candidate):
                result = self._fit_sequence(depth, placed, decomposition, order, working)
                if result.covered_area > best.covered_area:
                    best = result

            # 모두 배치했으면 종료
            if not best.leftover:
                break
            if target is not None and best.covered_area > target:
                break

        return best

    def _fit_sequence(self, depth: int, placed: PlacedRect, decomposition: Decomposition,
                      order: tuple[SubRegion, SubRegion], inventory: Inventory) -> FitResult:
        """하위 영역 두 개를 order 순서대로 채움"""
        placements = [placed]
        inner_cuts: list[Cut] = []
        covered = placed.area
        remaining = inventory
        used: list[SubRegion] = []

        for sub in order:
            inner = self.fit(depth + 1, sub.region, remaining)
            if inner.covered_area <= 0:
                continue

            covered += inner.covered_area
            placements.extend(p.translated(sub.dx, sub.dy) for p in inner.placements)
            inner_cuts.extend(c.translated(sub.dx, sub.dy) for c in inner.cuts)
            remaining = inner.leftover
            used.append(sub)

            if not remaining:
                break

        return FitResult(tuple(placements), remaining, covered,
                         tuple(self._decomposition_cuts(decomposition, used) + inner_cuts))

    @staticmethod
    def _decomposition_cuts(decomposition: Decomposition, used: list[SubRegion]) -> list[Cut]:
        """실제로 채워진 하위 영역을 분리하는 절단선만"""
        if not used:
            return []

        cuts = []
        # 후보가 영역 끝까지 닿으면 첫 절단은 경계선과 같음
        if decomposition.primary_inside:
            cuts.append(decomposition.primary)
        if any(sub is decomposition.partial for sub in used):
            cuts.append(decomposition.secondary)
        return cuts

    def _notify(self, kind: str, depth: int = 0, placed: int = 0) -> None:
        if self.progress is None:
            return
        self.progress(ProgressEvent(
            kind=kind,
            page=self._page,
            remaining=self._page_remaining,
            depth=depth,
            placed=placed,
            elapsed=time.monotonic() - self._page_started,
        ))

    def _report_search(self, depth: int) -> None:
        """탐색 중 알림은 progress_interval 초에 한 번만"""
        if self.progress is None:
            return
        now = time.monotonic()
        if self._last_report is not None and now - self._last_report < self.progress_interval:
            return
        self._last_report = now
        self._notify('search', depth=depth)
