import logging

import pytest

from cavecrawl.app import configure_logging, tile_colour
from cavecrawl.level import Tile


def test_every_tile_has_a_distinct_colour():
    colours = [tile_colour(tile) for tile in Tile]
    assert len(set(colours)) == len(Tile)


@pytest.mark.parametrize("tile", list(Tile))
def test_colours_are_valid_rgb(tile):
    colour = tile_colour(tile)
    assert len(colour) == 3
    assert all(0 <= part <= 255 for part in colour)


def test_plain_int_accepted():
    assert tile_colour(0) == tile_colour(Tile.WALL)


def test_unknown_tile_rejected():
    with pytest.raises(ValueError):
        tile_colour(42)


def test_configure_logging_truncates_and_writes(tmp_path):
    path = tmp_path / "log.txt"
    path.write_text("old content\n", encoding="utf-8")
    handler = configure_logging(path)
    try:
        logging.getLogger("cavecrawl.test").info("hello")
    finally:
        logging.getLogger("cavecrawl").removeHandler(handler)
        handler.close()
    assert path.read_text(encoding="utf-8") == "hello\n"


def test_configure_logging_writes_each_message_on_its_own_line(tmp_path):
    path = tmp_path / "log.txt"
    handler = configure_logging(path)
    try:
        log = logging.getLogger("cavecrawl.other")
        log.info("first")
        log.warning("second")
    finally:
        logging.getLogger("cavecrawl").removeHandler(handler)
        handler.close()
    assert path.read_text(encoding="utf-8").splitlines() == ["first", "second"]