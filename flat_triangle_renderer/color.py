#
# PROJECT: flat-triangle-renderer
# MODULE: flat_triangle_renderer/color.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#


def parse_hex_color(hex_str):
    """
    Parse a hex color string to an (r, g, b) tuple.
    Accepts: '#RRGGBB' or 'RRGGBB' (case-insensitive).
    Returns: (r, g, b) tuple with values 0-255, or None on failure.
    """
    if hex_str is None:
        return None
    val = str(hex_str).strip().lstrip('#')
    if len(val) != 6:
        return None
    try:
        r = int(val[0:2], 16)
        g = int(val[2:4], 16)
        b = int(val[4:6], 16)
        return (r, g, b)
    except ValueError:
        return None


def parse_color(value):
    """
    Parse '#RRGGBB' or 'r,g,b' (decimal, 0-255 each).
    Returns an (r, g, b) tuple or None on failure.
    """
    if value is None:
        return None
    text = str(value).strip()
    if ',' not in text:
        return parse_hex_color(text)
    parts = text.split(',')
    if len(parts) != 3:
        return None
    try:
        rgb = tuple(int(p) for p in parts)
    except ValueError:
        return None
    if any(c < 0 or c > 255 for c in rgb):
        return None
    return rgb
