"""Portable terminal UI: styled output, tables, spinners and live step groups."""

__version__ = "0.1.0"
__all__ = [
    "basic",
    "display",
    "document",
    "glint",
    "glint_status",
    "glint_step_group",
    "glint_term",
    "noninteractive",
    "status",
    "step",
    "table",
    "ui",
    "vterm",
]