import pytest
import yaml
from PIL import Image

from guillot.cli import main, parse_candidates, parse_geometry


ITEMS_YAML = """\
items:
    "a.png":
        width: 100
        height: 60
    "b.png":
        width: 100
        height: 40
"""


@pytest.fixture
def items_file(tmp_path):
    path = tmp_path / "items.yaml"
    path.write_text(ITEMS_YAML, encoding="utf-8")
    return path


def test_parse_geometry():
    assert parse_geometry("2480x3508") == (2480, 3508)


def test_parse_candidates():
    assert parse_candidates("1,3,2,1") == (1, 3, 2, 1)


def test_calc_prints_layout(items_file, capsys):
    assert main(['calc', '-i', str(items_file), '-g', '100x100']) == 0

    data = yaml.safe_load(capsys.readouterr().out)
    assert len(data['pages']) == 1
    assert [r['file'] for r in data['pages'][0]] == ['a.png', 'b.png']
    assert data['pages'][0][1]['y'] == 60


def test_calc_writes_output_file(items_file, tmp_path):
    out = tmp_path / "layout.yaml"
    assert main(['calc', '-i', str(items_file), '-g', '120x120', '-m', '10', '-o', str(out)]) == 0

    data = yaml.safe_load(out.read_text(encoding="utf-8"))
    assert data['pages'][0][0] == {'file': 'a.png', 'x': 10, 'y': 10, 'w': 100, 'h': 60, 'r': False}


def test_calc_verbose_reports_on_stderr(items_file, capsys):
    assert main(['calc', '-i', str(items_file), '-g', '100x100', '-v']) == 0

    captured = capsys.readouterr()
    assert "페이지 1" in captured.err
    assert yaml.safe_load(captured.out)['pages']


def test_calc_reports_each_item_that_does_not_fit(items_file, capsys):
    assert main(['calc', '-i', str(items_file), '-g', '50x50']) == 1

    err = capsys.readouterr().err
    assert "a.png" in err
    assert "b.png" in err


def test_calc_missing_input_file(tmp_path, capsys):
    assert main(['calc', '-i', str(tmp_path / "missing.yaml"), '-g', '100x100']) == 1
    assert capsys.readouterr().err


@pytest.mark.parametrize("argv", [
    ['calc', '-i', 'x.yaml'],
    ['calc', '-i', 'x.yaml', '-g', '100'],
    ['calc', '-i', 'x.yaml', '-g', '100x100', '-e', '0.3'],
    ['calc', '-i', 'x.yaml', '-g', '100x100', '-s', '-1'],
    ['calc', '-i', 'x.yaml', '-g', '100x100', '--candidates', '1,0'],
    ['prep'],
])
def test_bad_arguments_exit_with_usage_error(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2


def test_draw_prints_one_line_per_page(items_file, tmp_path, capsys):
    layout = tmp_path / "layout.yaml"
    main(['calc', '-i', str(items_file), '-g', '100x70', '-o', str(layout)])

    assert main(['draw', '-l', str(layout), '-t', 'xc:white', '-b', '3']) == 0

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("gm convert xc:white -stroke black -linewidth 3")
    assert lines[0].endswith(" page_0.png")
    assert "a.png" in lines[0]
    assert "b.png" in lines[1]


def test_draw_fontsize_implies_filename(items_file, tmp_path, capsys):
    layout = tmp_path / "layout.yaml"
    main(['calc', '-i', str(items_file), '-g', '100x100', '-o', str(layout)])

    assert main(['draw', '-l', str(layout), '-t', 'xc:white', '-f', '40']) == 0
    assert "font-size 40;text 12,40 'a.png'" in capsys.readouterr().out


def test_draw_missing_files(tmp_path, capsys):
    assert main(['draw', '-l', str(tmp_path / "none.yaml"), '-t', 'xc:white']) == 2
    assert main(['draw', '-l', str(tmp_path / "none.yaml"), '-t', str(tmp_path / "t.png")]) == 2


@pytest.mark.parametrize("argv", [
    ['draw', '-l', 'layout.yaml'],
    ['draw', '-t', 'xc:white'],
])
def test_draw_without_layout_or_template(argv, capsys):
    assert main(argv) == 1
    assert "--layout" in capsys.readouterr().err


def test_prep_then_calc(tmp_path, capsys):
    Image.new('RGB', (100, 60)).save(tmp_path / "a.png")
    Image.new('RGB', (100, 40)).save(tmp_path / "b.png")
    items = tmp_path / "items.yaml"

    assert main(['prep', str(tmp_path / "a.png"), str(tmp_path / "b.png"), '-o', str(items)]) == 0
    assert yaml.safe_load(items.read_text(encoding="utf-8")) == {
        'items': {
            'a.png': {'width': 100, 'height': 60},
            'b.png': {'width': 100, 'height': 40},
        },
    }

    assert main(['calc', '-i', str(items), '-g', '100x100']) == 0
    data = yaml.safe_load(capsys.readouterr().out)
    assert [(r['file'], r['y']) for r in data['pages'][0]] == [('a.png', 0), ('b.png', 60)]


def test_prep_prints_to_stdout(tmp_path, capsys):
    Image.new('RGB', (7, 5)).save(tmp_path / "x.png")

    assert main(['prep', str(tmp_path / "x.png")]) == 0
    assert yaml.safe_load(capsys.readouterr().out) == {'items': {'x.png': {'width': 7, 'height': 5}}}


def test_prep_unreadable_image(tmp_path, capsys):
    (tmp_path / "broken.png").write_text("not an image", encoding="utf-8")

    assert main(['prep', str(tmp_path / "broken.png")]) == 1
    assert main(['prep', str(tmp_path / "missing.png")]) == 1
    assert capsys.readouterr().err
