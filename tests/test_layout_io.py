import io

import pytest
import yaml

from guillot.layout_io import (
    LayoutFormatError,
    dump_layout,
    load_items,
    parse_items,
    parse_layout,
    read_layout,
)
from guillot.packing import Cut, Item, Page, PlacedRect


ITEMS_YAML = """\
---
items:
    "a.png":
        width: 100
        height: 50
    "b.png":
        width: 30
        height: 60
        can_rotate: true
    "c.png":
        width: 10
        height: 10
        can_rotate: false
"""


def test_load_items_from_file(tmp_path):
    path = tmp_path / "items.yaml"
    path.write_text(ITEMS_YAML, encoding="utf-8")

    items = load_items(path)

    assert items == [
        Item('a.png', 100, 50, None),
        Item('b.png', 30, 60, True),
        Item('c.png', 10, 10, False),
    ]


def test_load_items_from_stream():
    items = load_items(io.StringIO(ITEMS_YAML))
    assert [i.id for i in items] == ['a.png', 'b.png', 'c.png']


@pytest.mark.parametrize("data", [
    None,
    {},
    {'items': ['a.png']},
    {'items': {'a.png': 5}},
    {'items': {'a.png': {'width': 5}}},
    {'items': {'a.png': {'width': 'wide', 'height': 5}}},
    {'items': {'a.png': {'width': True, 'height': 5}}},
])
def test_parse_items_rejects_malformed_input(data):
    with pytest.raises(LayoutFormatError):
        parse_items(data)


def test_load_items_rejects_invalid_yaml():
    with pytest.raises(LayoutFormatError):
        load_items(io.StringIO("items: [unclosed"))


def sample_pages():
    return [
        Page([PlacedRect('a.png', 0, 0, 100, 60), PlacedRect('b.png', 0, 60, 60, 30, True)],
             [Cut('H', 60, 0, 100)]),
        Page([PlacedRect('c.png', 5, 5, 10, 10)], []),
    ]


def test_dump_layout_shape():
    data = yaml.safe_load(dump_layout(sample_pages()))

    assert list(data) == ['pages', 'cuts']
    assert data['pages'][0][1] == {'file': 'b.png', 'x': 0, 'y': 60, 'w': 60, 'h': 30, 'r': True}
    assert data['cuts'][0] == [{'direction': 'H', 'position': 60, 'start': 0, 'end': 100}]
    assert data['cuts'][1] == []


def test_read_layout_restores_pages(tmp_path):
    path = tmp_path / "layout.yaml"
    with open(path, 'w', encoding='utf-8') as f:
        dump_layout(sample_pages(), f)

    assert read_layout(path) == sample_pages()


def test_parse_layout_without_cuts():
    pages = parse_layout({'pages': [[{'file': 'a', 'x': 1, 'y': 2, 'w': 3, 'h': 4, 'r': False}]]})
    assert pages == [Page([PlacedRect('a', 1, 2, 3, 4)], [])]


@pytest.mark.parametrize("data", [
    {},
    {'pages': 'nope'},
    {'pages': [{'file': 'a'}]},
    {'pages': [[{'file': 'a', 'x': 0}]]},
    {'pages': [[{'file': 'a', 'x': 0, 'y': 0, 'w': 0, 'h': 1}]]},
])
def test_parse_layout_rejects_malformed_layout(data):
    with pytest.raises(LayoutFormatError):
        parse_layout(data)
