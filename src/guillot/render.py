"""
렌더링 명령 생성 모듈

레이아웃을 GraphicsMagick(gm convert) 명령으로 변환한다.
한 줄이 한 페이지이므로 `guillot draw ... | parallel -j <CORES>` 로 실행
"""

from __future__ import annotations

from .packing import Page, PlacedRect


def rotated_filename(name) -> str:
    """회전 이미지 임시 파일명"""
    return f"r_{name}"


def page_filename(index: int, page_count: int) -> str:
    """page_00.png 형식 (자릿수는 페이지 수에 맞춤)"""
    digits = len(str(page_count))
    return f"page_{index:0{digits}d}.png"


def _source_file(rect: PlacedRect) -> str:
    return rotated_filename(rect.id) if rect.rotated else str(rect.id)


def render_page_command(page: Page, index: int, page_count: int, template: str, *,
                        image: bool = True, border: int = 0, filename: bool = False,
                        fontsize: int = 120) -> str:
    """페이지 하나를 그리는 셸 명령"""
    parts: list[str] = []

    # 회전 이미지는 임시 파일로 먼저 만든다
    remove: list[str] = []
    for rect in page.placements:
        if rect.rotated:
            tmp = rotated_filename(rect.id)
            parts.append(f"gm convert {rect.id} -rotate 90 {tmp} ; ")
            remove.append(tmp)

    parts.append(f"gm convert {template} -stroke black -linewidth {border}")

    # 테두리 사각형은 반투명 흰색으로 이미지 위에 그려짐
    if border:
        parts.append(" -fill '#FFF3'")

    for rect in page.placements:
        if image:
            parts.append(f" -draw 'image over {rect.x},{rect.y} 0,0 {_source_file(rect)}'")
        if border:
            parts.append(f" -draw 'rectangle {rect.x},{rect.y} "
                         f"{rect.x + rect.width},{rect.y + rect.height}'")

    if filename:
        parts.append(" -fill black -linewidth 0")
        for rect in page.placements:
            parts.append(f" -draw \"font-size {fontsize};text {rect.x + 12},{rect.y + fontsize} "
                         f"'{rect.id}'\"")

    parts.append(" " + page_filename(index, page_count))

    if remove:
        parts.append(" ; rm " + " ".join(remove))

    return "".join(parts)


def render_commands(pages: list[Page], template: str, *, image: bool = True, border: int = 0,
                    filename: bool = False, fontsize: int = 120) -> list[str]:
    """페이지별 렌더링 명령 리스트"""
    return [
        render_page_command(page, index, len(pages), template, image=image, border=border,
                            filename=filename, fontsize=fontsize)
        for index, page in enumerate(pages)
    ]
