from cob.render.tables import (
    display_ratio,
    format_ratio,
    ratio_style,
    render_measurements,
    render_ratios,
)

__all__ = [
    "display_ratio",
    "format_ratio",
    "ratio_style",
    "render_measurements",
    "render_ratios",
]
