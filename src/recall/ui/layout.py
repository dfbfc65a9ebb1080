from recall.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    GRID_COLS,
    GRID_ROWS,
    HUD_HEIGHT,
)


def compute_board_geometry(window_width: int, window_height: int, cols: int = GRID_COLS, rows: int = GRID_ROWS):
    """Return (tile_size, start_x, start_y) for a board centred horizontally below the HUD.

    Shared by rendering and input mapping so clicks land on the drawn tile.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / cols, max_board_h / rows))
    if tile_size < 20:
        tile_size = 20
    start_x = (window_width - cols * tile_size) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def tile_index_at(x: float, y: float, window_width: int, window_height: int, cols: int = GRID_COLS, rows: int = GRID_ROWS) -> int | None:
    """Map a window point to a tile index (row 0 at the top), or None when off the board."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, cols, rows)
    if x < start_x or x >= start_x + cols * tile_size:
        return None
    if y < start_y or y >= start_y + rows * tile_size:
        return None
    col = int((x - start_x) // tile_size)
    row_from_bottom = int((y - start_y) // tile_size)
    row = rows - 1 - row_from_bottom
    return row * cols + col
