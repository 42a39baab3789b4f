"""
Presentation layer.

``render`` turns an AppState into a ViewTree; display surfaces receive the
tree. Flows never touch a surface directly.
"""
from .view import (
    ResultBox,
    UploadSection,
    ResultsSection,
    ViewTree,
    render,
    DisplaySurface,
    MemorySurface,
    HtmlSurface,
)

__all__ = [
    "ResultBox",
    "UploadSection",
    "ResultsSection",
    "ViewTree",
    "render",
    "DisplaySurface",
    "MemorySurface",
    "HtmlSurface",
]
