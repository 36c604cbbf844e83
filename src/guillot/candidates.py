"""배치 후보 선택 - 크기 필터 + 중복 footprint 제거"""

from __future__ import annotations
from collections.abc import Iterable

from .packing import Candidate, Rectangle, Region


def select_candidates(rects: Iterable[Rectangle], max_candidates: int,
                      region: Region, allow_rotation: bool) -> list[Candidate]:
    """영역에 들어가는 후보를 우선순위 순서대로 최대 max_candidates개 선택

    Args:
        rects: 호출자가 우선순위대로 정렬한 사각형들
        max_candidates: 최대 후보 수
        region: 대상 영역
        allow_rotation: 전체 회전 허용 (False여도 사각형별 rotatable이면 회전 후보 포함)

    Returns:
        후보 리스트. 비어 있으면 이 영역에는 아무것도 놓을 수 없음
    """
    if not region.is_feasible or max_candidates <= 0:
        return []

    candidates: list[Candidate] = []
    footprints: set[tuple[int, int]] = set()

    def consider(candidate: Candidate) -> None:
        if candidate.footprint in footprints:
            return
        if not region.fits(candidate.width, candidate.height):
            return
        candidates.append(candidate)
        footprints.add(candidate.footprint)

    for rect in rects:
        consider(Candidate(rect.id, rect.width, rect.height, rotated=False))
        if len(candidates) >= max_candidates:
            break

        if allow_rotation or rect.rotatable:
            consider(Candidate(rect.id, rect.height, rect.width, rotated=True))
            if len(candidates) >= max_candidates:
                break

    return candidates
