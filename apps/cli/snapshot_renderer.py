from __future__ import annotations

from types_sudoku import ViewNode

"""Draw the grid of a board view tree to a PNG: digits, thin cell lines, thick lines where the view places separators, the selected cell highlighted and the banner under the grid when present."""


# snapshot_renderer.py
from PIL import Image, ImageDraw, ImageFont

FONT_PATH = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"
SELECTED_FILL = (144, 238, 144)
GIVEN_INK = (0, 0, 0)
LINE = (96, 96, 96)


def load_font(size):
    try:
        return ImageFont.truetype(FONT_PATH, size)
    except OSError:
        return ImageFont.load_default(size)


def grid_layout(grid: ViewNode):
    """Map each cell node to (row, col) and collect the column/row indices
    that are followed by a separator."""
    cells = []
    col_breaks: set[int] = set()
    row_breaks: set[int] = set()
    r = 0
    for row in grid.children:
        if row.kind == "separator-row":
            row_breaks.add(r - 1)
            continue
        c = 0
        for node in row.children:
            if node.kind == "separator":
                col_breaks.add(c - 1)
                continue
            cells.append((r, c, node))
            c += 1
        r += 1
    return cells, col_breaks, row_breaks


def draw_view(view: ViewNode, out_path: str, cell_px: int = 60) -> str:
    grids = view.find("grid")
    if not grids:
        raise ValueError("view has no grid to draw")
    cells, col_breaks, row_breaks = grid_layout(grids[0])
    n = 1 + max(max(r, c) for r, c, _ in cells)
    status = view.find("status")

    side = n * cell_px
    banner_h = cell_px if status else 0
    im = Image.new("RGB", (side, side + banner_h), "white")
    d = ImageDraw.Draw(im)
    font = load_font(int(cell_px * 0.6))

    for r, c, node in cells:
        x0, y0 = c * cell_px, r * cell_px
        box = (x0, y0, x0 + cell_px, y0 + cell_px)
        if node.selected:
            d.rectangle(box, fill=SELECTED_FILL)
        d.rectangle(box, outline=LINE, width=1)
        if node.text.isdigit():
            d.text((x0 + cell_px // 2, y0 + cell_px // 2), node.text, fill=GIVEN_INK, font=font, anchor="mm")

    for c in col_breaks:
        x = (c + 1) * cell_px
        d.line((x, 0, x, side), fill=GIVEN_INK, width=3)
    for r in row_breaks:
        y = (r + 1) * cell_px
        d.line((0, y, side, y), fill=GIVEN_INK, width=3)
    d.rectangle((0, 0, side - 1, side - 1), outline=GIVEN_INK, width=3)

    if status:
        f = load_font(int(cell_px * 0.35))
        d.text((side // 2, side + banner_h // 2), status[0].text, fill=(0, 128, 0), font=f, anchor="mm")

    im.save(out_path)
    return out_path
