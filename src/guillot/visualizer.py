"""시각화 모듈"""

import matplotlib.pyplot as plt
import matplotlib.patches as patches
from matplotlib.patches import Rectangle as MPLRect
from matplotlib import font_manager
import platform


def setup_korean_font():
    """한글 폰트 설정"""
    system = platform.system()
    if system == 'Darwin':
        fonts = ['AppleGothic', 'AppleSDGothicNeo', 'Nanum Gothic']
    elif system == 'Windows':
        fonts = ['Malgun Gothic', 'NanumGothic', 'Gulim']
    else:
        fonts = ['NanumGothic', 'Noto Sans CJK KR', 'UnDotum']

    available_fonts = [f.name for f in font_manager.fontManager.ttflist]
    for font in fonts:
        if font in available_fonts:
            plt.rcParams['font.family'] = font
            return font
    return None


def footprint_colors(pages):
    """크기(footprint)별 색상"""
    footprints = sorted({(p.width, p.height) for page in pages for p in page.placements})
    return {fp: plt.cm.Set3(i / max(len(footprints), 1)) for i, fp in enumerate(footprints)}


def draw_page(ax, page, page_width, page_height, margin, colors, title):
    """페이지 하나를 축에 그림

    Returns:
        사용률 (%)
    """
    ax.add_patch(MPLRect((0, 0), page_width, page_height,
                         fill=False, edgecolor='black', linewidth=2))
    if margin:
        ax.add_patch(MPLRect((margin, margin), page_width - 2 * margin, page_height - 2 * margin,
                             fill=False, edgecolor='gray', linestyle='--', linewidth=1))

    for rect in page.placements:
        ax.add_patch(MPLRect((rect.x, rect.y), rect.width, rect.height,
                             linewidth=1, edgecolor='black',
                             facecolor=colors[(rect.width, rect.height)], alpha=0.7))

        label = f"{rect.id}\n{rect.width}×{rect.height}"
        if rect.rotated:
            label += "\n(회전)"
        ax.text(rect.x + rect.width / 2, rect.y + rect.height / 2, label,
                ha='center', va='center', fontsize=8, fontweight='bold')

    # 절단선 - 영역 내에서만
    for order, cut in enumerate(page.cuts, start=1):
        if cut.direction == 'H':
            ax.plot([cut.start, cut.end], [cut.position, cut.position],
                    'r-', linewidth=2.5, alpha=0.8)
            ax.text((cut.start + cut.end) / 2, cut.position, str(order),
                    ha='center', va='bottom', fontsize=11,
                    fontweight='bold', color='red',
                    bbox=dict(boxstyle='circle,pad=0.3', facecolor='white',
                              edgecolor='red', linewidth=2))
        else:
            ax.plot([cut.position, cut.position], [cut.start, cut.end],
                    'b-', linewidth=2.5, alpha=0.8)
            ax.text(cut.position, (cut.start + cut.end) / 2, str(order),
                    ha='left', va='center', fontsize=11,
                    fontweight='bold', color='blue',
                    bbox=dict(boxstyle='circle,pad=0.3', facecolor='white',
                              edgecolor='blue', linewidth=2))

    usage = page.covered_area / (page_width * page_height) * 100

    ax.set_xlim(0, page_width)
    # 이미지 좌표계: y축이 아래로
    ax.set_ylim(page_height, 0)
    ax.set_aspect('equal')
    ax.set_xlabel('가로 (px)')
    ax.set_ylabel('세로 (px)')
    ax.set_title(f'{title} ({page_width}×{page_height})\n사용률: {usage:.1f}% | 절단: {len(page.cuts)}회',
                 fontsize=12, fontweight='bold')
    ax.grid(True, alpha=0.3)
    return usage


def visualize_solution(pages, page_width, page_height, margin=0,
                       output='guillot_layout.png', show=True):
    """시각화 함수

    Args:
        pages: 패킹 결과 (Page 리스트)
        page_width: 페이지 너비 (px)
        page_height: 페이지 높이 (px)
        margin: 페이지 여백 (px)
        output: 저장할 PNG 경로 (None이면 저장 안 함)
        show: 창 띄우기 여부

    Returns:
        matplotlib Figure
    """
    if not pages:
        raise ValueError("그릴 페이지가 없습니다")

    colors = footprint_colors(pages)

    fig, axes = plt.subplots(1, len(pages), figsize=(8 * len(pages), 8), squeeze=False)

    for index, page in enumerate(pages):
        usage = draw_page(axes[0][index], page, page_width, page_height, margin, colors,
                          f'페이지 {index + 1}')
        print(f"페이지 {index + 1}: 이미지 {len(page.placements)}개, "
              f"절단 {len(page.cuts)}회, 사용률 {usage:.1f}%")

    print(f"총 페이지: {len(pages)}장")

    legend_elements = [patches.Patch(facecolor=color, alpha=0.7,
                                     edgecolor='black', label=f"{w}x{h}")
                       for (w, h), color in colors.items()]
    fig.legend(handles=legend_elements, loc='upper center',
               bbox_to_anchor=(0.5, 0.98), ncol=min(len(legend_elements), 8))

    plt.tight_layout()
    if output:
        plt.savefig(output, dpi=150, bbox_inches='tight')
        print(f"시각화 파일 저장: {output}")
    if show:
        plt.show()
    return fig


# 폰트 설정 초기화
setup_korean_font()
plt.rcParams['axes.unicode_minus'] = False
