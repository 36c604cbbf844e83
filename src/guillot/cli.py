#!/usr/bin/env python3
"""CLI 진입점 - 서브커맨드 라우팅

- calc: YAML 아이템 목록 -> YAML 레이아웃
- prep: 이미지 파일 -> YAML 아이템 목록
- draw: YAML 레이아웃 -> gm 렌더링 명령
- web: 웹 서버 시작
- (없음): 대화형 배치
"""

from __future__ import annotations
import argparse
import os
import sys

from .layout_io import (
    LayoutFormatError,
    dump_items,
    dump_layout,
    load_items,
    read_image_sizes,
    read_layout,
)
from .packing import GuillotError
from .render import render_commands
from .strategies import DEFAULT_CANDIDATES_BY_DEPTH, GuillotineSearchPacker, ProgressEvent


def parse_geometry(value: str) -> tuple[int, int]:
    """'WxH' -> (W, H)"""
    try:
        width, height = value.lower().split('x')
        width, height = int(width), int(height)
    except ValueError:
        raise argparse.ArgumentTypeError(f"페이지 크기는 WxH 형식이어야 합니다: {value!r}") from None
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"페이지 크기는 양수여야 합니다: {value!r}")
    return width, height


def parse_candidates(value: str) -> tuple[int, ...]:
    """'1,3,2,1' -> (1, 3, 2, 1)"""
    try:
        counts = tuple(int(v) for v in value.split(','))
    except ValueError:
        raise argparse.ArgumentTypeError(f"쉼표로 구분한 정수여야 합니다: {value!r}") from None
    if not counts or any(n <= 0 for n in counts):
        raise argparse.ArgumentTypeError(f"후보 수는 양수여야 합니다: {value!r}")
    return counts


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"정수가 아닙니다: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"0 이상이어야 합니다: {value!r}")
    return number


def enough_fraction(value: str) -> float:
    try:
        fraction = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"숫자가 아닙니다: {value!r}") from None
    if not 0.5 <= fraction <= 1.0:
        raise argparse.ArgumentTypeError(f"enough는 0.5 ~ 1.0 사이여야 합니다: {value!r}")
    return fraction


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='guillot',
        description="Guillotine Cut 이미지 페이지 배치",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    sub = parser.add_subparsers(dest='command')

    calc = sub.add_parser('calc', help="아이템 YAML -> 레이아웃 YAML",
                          formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    calc.add_argument('-i', '--input', required=True, help="아이템 크기 YAML 파일")
    calc.add_argument('-g', '--geometry', required=True, type=parse_geometry,
                      help="페이지 크기 (px), 예: 2480x3508")
    calc.add_argument('-v', '--verbose', action='store_true', help="진행 상황을 stderr에 출력")
    calc.add_argument('-r', '--rotate', action='store_true', help="모든 이미지의 90' 회전도 시도")
    calc.add_argument('-s', '--spacing', type=non_negative_int, default=0, help="이미지 간격 (px)")
    calc.add_argument('-m', '--margin', type=non_negative_int, default=0, help="페이지 여백 (px)")
    calc.add_argument('-e', '--enough', type=enough_fraction, default=1.0,
                      help="(0.5 ~ 1.0) 영역의 이 비율을 덮으면 탐색 중단")
    calc.add_argument('--candidates', type=parse_candidates,
                      default=DEFAULT_CANDIDATES_BY_DEPTH,
                      help="깊이별 후보 수, 예: 1,3,2,1")
    calc.add_argument('-o', '--output', help="레이아웃 YAML 출력 파일 (기본: stdout)")

    draw = sub.add_parser('draw', help="레이아웃 YAML -> gm 명령 (| parallel -j <CORES>)",
                          formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    draw.add_argument('-l', '--layout', help="[필수] 레이아웃 YAML 파일")
    draw.add_argument('-t', '--template', help="[필수] 페이지 템플릿 이미지 또는 gm 표현식 (xc:white 등)")
    draw.add_argument('-i', '--image', action=argparse.BooleanOptionalAction, default=True,
                      help="이미지 그리기")
    draw.add_argument('-b', '--border', type=non_negative_int, default=0, help="이미지 테두리 두께 (px)")
    draw.add_argument('-n', '--filename', action='store_true', help="이미지 위에 파일명 표시")
    draw.add_argument('-f', '--fontsize', type=non_negative_int, default=None,
                      help="파일명 글자 크기 (px, 기본 120); -n 포함")

    prep = sub.add_parser('prep', help="이미지 파일 -> 아이템 YAML",
                          formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    prep.add_argument('images', nargs='+', metavar='IMAGE', help="이미지 파일")
    prep.add_argument('-o', '--output', help="아이템 YAML 출력 파일 (기본: stdout)")

    sub.add_parser('web', help="웹 서버 시작")
    return parser


def print_progress(event: ProgressEvent) -> None:
    """--verbose 진행 상황 출력 (stderr)"""
    if event.kind == 'page_start':
        print(f"페이지 {event.page} 배치 시작, 남은 이미지 {event.remaining}개", file=sys.stderr)
    elif event.kind == 'search':
        print(f"\r깊이: {event.depth:2d}", end='', file=sys.stderr, flush=True)
    else:
        print(f"\n페이지 {event.page}: 이미지 {event.placed}개, {event.elapsed:.0f}초",
              file=sys.stderr)


def run_calc(args: argparse.Namespace) -> int:
    width, height = args.geometry
    try:
        packer = GuillotineSearchPacker(
            width, height,
            spacing=args.spacing,
            margin=args.margin,
            allow_rotation=args.rotate,
            enough=args.enough,
            candidates_by_depth=args.candidates,
            progress=print_progress if args.verbose else None,
        )
        items = load_items(args.input)
        pages = packer.pack(items)
    except OSError as e:
        print(f"오류: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # InputValidationError는 아이템마다 한 줄
        for line in str(e).splitlines():
            print(f"오류: {line}", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            dump_layout(pages, f)
    else:
        dump_layout(pages, sys.stdout)
    return 0


def run_prep(args: argparse.Namespace) -> int:
    try:
        sizes = read_image_sizes(args.images)
    except OSError as e:
        print(f"오류: {e}", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            dump_items(sizes, f)
    else:
        dump_items(sizes, sys.stdout)
    return 0


def run_draw(args: argparse.Namespace) -> int:
    if args.layout is None or args.template is None:
        print("오류: --layout 과 --template 을 모두 지정해야 합니다", file=sys.stderr)
        return 1

    template_ok = 'xc:' in args.template or os.path.exists(args.template)
    if not os.path.exists(args.layout) or not template_ok:
        print(f"오류: 파일이 없습니다: {args.layout}, {args.template}", file=sys.stderr)
        return 2

    try:
        pages = read_layout(args.layout)
    except LayoutFormatError as e:
        print(f"오류: {e}", file=sys.stderr)
        return 1

    filename = args.filename or args.fontsize is not None
    fontsize = 120 if args.fontsize is None else args.fontsize

    for line in render_commands(pages, args.template, image=args.image, border=args.border,
                                filename=filename, fontsize=fontsize):
        print(line)
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI 진입점"""
    args = build_parser().parse_args(argv)

    if args.command == 'calc':
        return run_calc(args)
    if args.command == 'draw':
        return run_draw(args)
    if args.command == 'prep':
        return run_prep(args)
    if args.command == 'web':
        from .web import run_server
        run_server()
        return 0

    from .interactive import run_interactive
    try:
        run_interactive()
    except (GuillotError, ValueError, OSError) as e:
        print(f"❌ 오류: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
