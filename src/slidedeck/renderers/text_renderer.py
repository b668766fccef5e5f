"""
Text Renderer

Prints the presentation to a terminal: one block per resting slide,
listing the fully revealed fragments. Frames mid-transition are skipped.
"""

import sys
from typing import Optional, TextIO, Tuple

from slidedeck.models.render import RenderTree


class TextRenderer:
    def __init__(self, total_slides: int, stream: Optional[TextIO] = None):
        self.total_slides = total_slides
        self.stream = stream or sys.stdout
        self._last: Optional[Tuple] = None

    def render(self, tree: RenderTree) -> None:
        if tree.is_moving or not tree.slides:
            return

        slide = tree.slides[0]
        shown = tuple(f.content for f in slide.fragments if f.completion >= 1.0)
        key = (slide.index, shown)
        if key == self._last:
            return
        self._last = key

        header = f"── slide {slide.index + 1}/{max(1, self.total_slides)} "
        self.stream.write("\n" + header.ljust(60, "─") + "\n")
        for content in shown:
            self.stream.write(f"  {content}\n")
        hidden = len(slide.fragments) - len(shown)
        if hidden > 0:
            self.stream.write(f"  … ({hidden} more)\n")
        self.stream.flush()
