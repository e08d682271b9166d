"""Check-in codes and their cosmetic QR-style grid.

The grid only looks like a QR symbol; it is derived from the code's
characters and cannot be scanned.
"""

MODULES = 21
SVG_SIZE = 200


def check_in_code(timestamp_ms: int) -> str:
    """``QR`` followed by the last six digits of the timestamp."""
    return f"QR{str(timestamp_ms)[-6:]}"


def qr_pattern(data: str, modules: int = MODULES) -> list[list[bool]]:
    """Square grid of filled cells derived from data."""
    if not data:
        raise ValueError("Cannot build a pattern from empty data")
    cells = [(ord(data[i % len(data)]) + i) % 2 == 0 for i in range(modules * modules)]
    return [cells[row * modules:(row + 1) * modules] for row in range(modules)]


def qr_svg(data: str, dark: bool = False, size: int = SVG_SIZE) -> str:
    """Render the grid for data as an SVG document."""
    grid = qr_pattern(data)
    cell = size / len(grid)
    fill = "#ffffff" if dark else "#000000"
    rects = [
        f'<rect x="{col * cell:g}" y="{row * cell:g}" width="{cell:g}" height="{cell:g}" fill="{fill}"/>'
        for row, cells in enumerate(grid)
        for col, filled in enumerate(cells)
        if filled
    ]
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
        f'viewBox="0 0 {size} {size}">' + "".join(rects) + "</svg>"
    )
