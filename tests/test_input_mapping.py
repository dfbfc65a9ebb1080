from types import SimpleNamespace

from recall.events.bus import EVENT_MOUSE_PRESS, EVENT_TILE_CLICK, EventBus
from recall.systems.input import InputSystem
from recall.systems.tile_board import TileBoardSystem
from recall.ui.layout import compute_board_geometry, tile_index_at
from recall.world import create_world

from helpers import capture

WIDTH, HEIGHT = 640, 760


def _center_of(row: int, col: int, rows: int = 6, cols: int = 6):
    tile_size, start_x, start_y = compute_board_geometry(WIDTH, HEIGHT, cols, rows)
    x = start_x + col * tile_size + tile_size / 2
    y = start_y + (rows - 1 - row) * tile_size + tile_size / 2
    return x, y


def test_tile_index_counts_rows_from_top():
    assert tile_index_at(*_center_of(0, 0), WIDTH, HEIGHT) == 0
    assert tile_index_at(*_center_of(0, 5), WIDTH, HEIGHT) == 5
    assert tile_index_at(*_center_of(5, 0), WIDTH, HEIGHT) == 30
    assert tile_index_at(*_center_of(2, 3), WIDTH, HEIGHT) == 15


def test_points_off_board_map_to_none():
    tile_size, start_x, start_y = compute_board_geometry(WIDTH, HEIGHT)
    assert tile_index_at(start_x - 1, start_y + 1, WIDTH, HEIGHT) is None
    assert tile_index_at(start_x + 1, start_y + 6 * tile_size + 1, WIDTH, HEIGHT) is None


def test_board_fits_window():
    tile_size, start_x, start_y = compute_board_geometry(WIDTH, HEIGHT)
    assert start_x >= 0
    assert start_x + 6 * tile_size <= WIDTH
    assert start_y + 6 * tile_size <= HEIGHT


def test_input_system_emits_tile_click_for_left_button():
    bus = EventBus()
    world = create_world()
    TileBoardSystem(world, bus)
    InputSystem(bus, SimpleNamespace(width=WIDTH, height=HEIGHT), world)
    clicks = capture(bus, EVENT_TILE_CLICK)

    x, y = _center_of(1, 2)
    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=1)
    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=4)
    bus.emit(EVENT_MOUSE_PRESS, x=1, y=1, button=1)
    bus.emit(EVENT_MOUSE_PRESS, y=y, button=1)

    assert clicks == [{"index": 8}]
