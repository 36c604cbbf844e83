import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from guillot.packing import Cut, Page, PlacedRect  # noqa: E402
from guillot.visualizer import footprint_colors, visualize_solution  # noqa: E402


def test_visualize_solution_saves_png(tmp_path, capsys):
    pages = [
        Page([PlacedRect('a', 10, 10, 100, 60), PlacedRect('b', 10, 70, 100, 40, True)],
             [Cut('H', 70, 10, 110)]),
        Page([PlacedRect('c', 10, 10, 50, 50)], []),
    ]
    output = tmp_path / "layout.png"

    fig = visualize_solution(pages, 120, 120, margin=10, output=str(output), show=False)

    assert output.exists()
    assert len(fig.axes) == 2
    assert "총 페이지: 2장" in capsys.readouterr().out


def test_footprint_colors_one_per_size():
    pages = [Page([PlacedRect('a', 0, 0, 5, 5), PlacedRect('b', 5, 0, 5, 5), PlacedRect('c', 0, 5, 3, 4)])]
    assert set(footprint_colors(pages)) == {(5, 5), (3, 4)}


def test_visualize_solution_needs_pages():
    with pytest.raises(ValueError):
        visualize_solution([], 100, 100, show=False)
