"""
YAML 입출력 모듈
- 입력: 이미지 파일에서 만든 아이템 크기 목록 (read_image_sizes)
- 출력: 페이지별 배치 + 절단선 (guillot draw 입력)
"""

from __future__ import annotations
from pathlib import Path
from typing import IO, Any

import yaml
from PIL import Image

from .packing import Cut, GuillotError, Item, Page, PlacedRect


class LayoutFormatError(GuillotError, ValueError):
    """YAML 구조가 올바르지 않음"""


def _as_int(value: Any, what: str) -> int:
    # bool은 int의 하위 클래스라서 따로 거른다
    if isinstance(value, bool):
        raise LayoutFormatError(f"{what}: 정수가 아닙니다 ({value!r})")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise LayoutFormatError(f"{what}: 정수가 아닙니다 ({value!r})") from None


def parse_items(data: Any) -> list[Item]:
    """items 매핑을 Item 리스트로 변환

    items:
        "a.png":
            width: 100
            height: 50
            can_rotate: true   # 선택
    """
    if not isinstance(data, dict) or 'items' not in data:
        raise LayoutFormatError("'items' 항목이 없습니다")

    entries = data['items']
    if not isinstance(entries, dict):
        raise LayoutFormatError("'items'는 파일명 -> 크기 매핑이어야 합니다")

    items: list[Item] = []
    for name, details in entries.items():
        if not isinstance(details, dict):
            raise LayoutFormatError(f"{name}: width/height 매핑이 필요합니다")
        if 'width' not in details or 'height' not in details:
            raise LayoutFormatError(f"{name}: width/height 가 필요합니다")

        can_rotate = details.get('can_rotate')
        items.append(Item(
            id=name,
            width=_as_int(details['width'], f"{name}.width"),
            height=_as_int(details['height'], f"{name}.height"),
            rotatable=None if can_rotate is None else bool(can_rotate),
        ))
    return items


def load_items(source: str | Path | IO[str]) -> list[Item]:
    """YAML 파일(또는 스트림)에서 아이템 읽기"""
    try:
        if hasattr(source, 'read'):
            data = yaml.safe_load(source)
        else:
            with open(source, encoding='utf-8') as f:
                data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LayoutFormatError(f"YAML 파싱 실패: {e}") from e
    return parse_items(data)


def placement_to_dict(rect: PlacedRect) -> dict:
    return {
        'file': rect.id,
        'x': rect.x,
        'y': rect.y,
        'w': rect.width,
        'h': rect.height,
        'r': rect.rotated,
    }


def cut_to_dict(cut: Cut) -> dict:
    return {
        'direction': cut.direction,
        'position': cut.position,
        'start': cut.start,
        'end': cut.end,
    }


def layout_to_dict(pages: list[Page]) -> dict:
    """{'pages': [[rect, ...], ...], 'cuts': [[cut, ...], ...]}"""
    return {
        'pages': [[placement_to_dict(p) for p in page.placements] for page in pages],
        'cuts': [[cut_to_dict(c) for c in page.cuts] for page in pages],
    }


def dump_layout(pages: list[Page], stream: IO[str] | None = None) -> str | None:
    """레이아웃을 YAML로 출력 (stream이 없으면 문자열 반환)"""
    return yaml.safe_dump(layout_to_dict(pages), stream, sort_keys=False,
                          default_flow_style=False, allow_unicode=True)


def parse_layout(data: Any) -> list[Page]:
    """dump_layout 결과를 Page 리스트로 복원 (cuts는 없어도 됨)"""
    if not isinstance(data, dict) or not isinstance(data.get('pages'), list):
        raise LayoutFormatError("'pages' 목록이 없습니다")

    cut_lists = data.get('cuts') or []
    pages: list[Page] = []
    for index, rects in enumerate(data['pages']):
        if not isinstance(rects, list):
            raise LayoutFormatError(f"페이지 {index + 1}: 사각형 목록이 아닙니다")
        try:
            placements = [
                PlacedRect(r['file'], _as_int(r['x'], 'x'), _as_int(r['y'], 'y'),
                           _as_int(r['w'], 'w'), _as_int(r['h'], 'h'), bool(r.get('r', False)))
                for r in rects
            ]
            cuts = []
            if index < len(cut_lists):
                cuts = [
                    Cut(c['direction'], _as_int(c['position'], 'position'),
                        _as_int(c['start'], 'start'), _as_int(c['end'], 'end'))
                    for c in cut_lists[index]
                ]
        except LayoutFormatError:
            raise
        except (KeyError, TypeError) as e:
            raise LayoutFormatError(f"페이지 {index + 1}: 항목이 올바르지 않습니다 ({e})") from e
        except ValueError as e:
            raise LayoutFormatError(f"페이지 {index + 1}: {e}") from e
        pages.append(Page(placements, cuts))
    return pages


def read_layout(path: str | Path) -> list[Page]:
    """레이아웃 YAML 파일 읽기"""
    try:
        with open(path, encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LayoutFormatError(f"YAML 파싱 실패: {e}") from e
    return parse_layout(data)


def read_image_sizes(paths) -> dict[str, tuple[int, int]]:
    """이미지 파일명 -> (width, height)

    키는 디렉터리를 뺀 파일명 (gm identify 의 %f 와 같음)
    """
    sizes: dict[str, tuple[int, int]] = {}
    for path in paths:
        with Image.open(path) as img:
            sizes[Path(path).name] = img.size
    return sizes


def items_to_dict(sizes: dict[str, tuple[int, int]]) -> dict:
    return {'items': {name: {'width': w, 'height': h} for name, (w, h) in sizes.items()}}


def dump_items(sizes: dict[str, tuple[int, int]], stream: IO[str] | None = None) -> str | None:
    """아이템 크기 목록을 YAML로 출력 (load_items 입력 형식)"""
    return yaml.safe_dump(items_to_dict(sizes), stream, sort_keys=False,
                          default_flow_style=False, allow_unicode=True)
