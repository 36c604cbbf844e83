#!/usr/bin/env python3
"""대화형 페이지 배치 CLI"""

from .layout_io import load_items
from .packing import Item
from .strategies import GuillotineSearchPacker

DEFAULT_PREVIEW = 'guillot_layout.png'

SAMPLE_ITEMS = [
    Item('a.png', 1200, 800),
    Item('b.png', 1200, 800),
    Item('c.png', 800, 600),
    Item('d.png', 600, 900),
]


def get_int_input(prompt: str, default: int | None = None, allow_zero: bool = False) -> int | None:
    """정수 입력을 받는 헬퍼 함수

    Args:
        prompt: 사용자에게 보여줄 프롬프트 메시지
        default: 기본값 (None이면 필수 입력)
        allow_zero: 0 허용 여부 (간격, 여백)

    Returns:
        입력받은 정수, 또는 에러 시 None
    """
    user_input = input(prompt).strip()

    # 빈 입력 처리
    if user_input == "":
        if default is not None:
            return default
        print("❌ 오류: 값을 입력해주세요.")
        return None

    # 정수 변환 시도
    try:
        value = int(user_input)
    except ValueError:
        print("❌ 오류: 숫자를 입력해주세요.")
        return None

    if value < 0 or (value == 0 and not allow_zero):
        print("❌ 오류: 양수를 입력해주세요." if not allow_zero else "❌ 오류: 0 이상을 입력해주세요.")
        return None
    return value


def run_interactive():
    """대화형 CLI 실행"""
    print("="*60)
    print("이미지 페이지 배치 - Guillotine Cut")
    print("="*60)

    # 아이템 목록
    path = input("아이템 YAML 파일 (빈 값이면 예제 사용): ").strip()
    items = load_items(path) if path else SAMPLE_ITEMS
    print(f"✓ 이미지 {len(items)}개")

    # 페이지 크기 입력
    page_width = get_int_input("페이지 너비 (px, 기본값 2480): ", default=2480)
    if page_width is None:
        return

    page_height = get_int_input("페이지 높이 (px, 기본값 3508): ", default=3508)
    if page_height is None:
        return

    print(f"✓ 페이지 크기: {page_width}×{page_height}px")

    spacing = get_int_input("이미지 간격 (px, 기본값 0): ", default=0, allow_zero=True)
    if spacing is None:
        return

    margin = get_int_input("페이지 여백 (px, 기본값 0): ", default=0, allow_zero=True)
    if margin is None:
        return
    print(f"✓ 간격: {spacing}px, 여백: {margin}px")

    # 회전 허용 여부
    rotation_input = input("이미지 회전 허용? (y/n, 기본값 n): ").strip().lower() or "n"
    allow_rotation = rotation_input in ("y", "yes", "예")

    if allow_rotation:
        print("✓ 회전 허용")
    else:
        print("✓ 회전 금지 (can_rotate 지정 이미지만 회전)")

    packer = GuillotineSearchPacker(page_width, page_height, spacing, margin, allow_rotation)

    # 패킹 실행
    pages = packer.pack(items)
    print(f"\n탐색 호출 {packer.stats.fit_calls}회, 후보 평가 {packer.stats.candidates_evaluated}회")

    output = input(f"미리보기 PNG 파일 (기본값 {DEFAULT_PREVIEW}): ").strip() or DEFAULT_PREVIEW
    print(f"✓ 미리보기 저장 위치: {output}")

    # 시각화 (matplotlib은 필요할 때만 불러옴)
    from .visualizer import visualize_solution
    visualize_solution(pages, page_width, page_height, margin, output=output)
