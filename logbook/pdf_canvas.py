"""
reportlab canvas that draws layout Cells onto A4 landscape pages.

Layout coordinates are millimetres from the top-left corner; reportlab
works in points from the bottom-left, so every cell is flipped here.
"""

import os

from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from .errors import RenderFailure
from .layout import FONT_BOLD, FONT_REGULAR

PAGE_SIZE = landscape(A4)
LINE_WIDTH = 0.2 * mm
CELL_PADDING = 1 * mm

# Liberation Sans Narrow is the face used on printed EASA logbooks
TTF_FONTS = {
    FONT_REGULAR: ('LiberationSansNarrow-Regular',
                   'LiberationSansNarrow-Regular.ttf'),
    FONT_BOLD: ('LiberationSansNarrow-Bold', 'LiberationSansNarrow-Bold.ttf'),
}
BUILTIN_FONTS = {
    FONT_REGULAR: 'Helvetica',
    FONT_BOLD: 'Helvetica-Bold',
}


def load_fonts(font_dir=None):
    """Register the logbook fonts.

    Args:
        font_dir: Directory holding the Liberation Sans Narrow TTF files.
            When empty, reportlab's built-in Helvetica faces are used.

    Returns:
        Dict of layout font key -> registered reportlab font name.

    Raises:
        RenderFailure: If font_dir is set but a font file cannot be loaded.
    """
    if not font_dir:
        return dict(BUILTIN_FONTS)

    fonts = {}
    for key, (name, filename) in TTF_FONTS.items():
        path = os.path.join(font_dir, filename)
        try:
            pdfmetrics.registerFont(TTFont(name, path))
        except (OSError, TTFError) as e:
            raise RenderFailure(f"Cannot load font {path}: {e}") from e
        fonts[key] = name
    return fonts


def _rgb(color):
    r, g, b = color
    return r / 255, g / 255, b / 255


class LogbookCanvas:
    """PDF sink for layout cells."""

    def __init__(self, output_file, fonts=None, title="Pilot Logbook"):
        self.output_file = output_file
        self.fonts = fonts or dict(BUILTIN_FONTS)
        self.page_count = 0
        self._c = canvas.Canvas(output_file, pagesize=PAGE_SIZE)
        self._c.setTitle(title)
        self._c.setLineWidth(LINE_WIDTH)
        self._open = False

    def add_page(self):
        """Start a new page. The first call only marks the first page open."""
        if self._open:
            self._c.showPage()
            self._c.setLineWidth(LINE_WIDTH)
        self._open = True
        self.page_count += 1

    def draw_cells(self, cells):
        for cell in cells:
            self.draw_cell(cell)

    def draw_cell(self, cell):
        c = self._c
        page_h = PAGE_SIZE[1]
        x = cell.x * mm
        w = cell.width * mm
        h = cell.height * mm
        top = page_h - cell.y * mm
        bottom = top - h

        if cell.fill is not None:
            c.setFillColorRGB(*_rgb(cell.fill))
            c.rect(x, bottom, w, h, stroke=0, fill=1)

        edges = cell.edges
        c.setStrokeColorRGB(0, 0, 0)
        if 'L' in edges:
            c.line(x, bottom, x, top)
        if 'R' in edges:
            c.line(x + w, bottom, x + w, top)
        if 'T' in edges:
            c.line(x, top, x + w, top)
        if 'B' in edges:
            c.line(x, bottom, x + w, bottom)

        if cell.text:
            self._draw_text(cell, x, bottom, w, h)

    def _draw_text(self, cell, x, bottom, w, h):
        c = self._c
        font = self.fonts[cell.font]
        size = cell.size
        c.setFillColorRGB(0, 0, 0)
        c.setFont(font, size)

        avail = max(w - 2 * CELL_PADDING, 1)
        if cell.wrap:
            lines = simpleSplit(cell.text, font, size, avail)
        else:
            lines = [self._fit(cell.text, font, size, avail)]

        leading = size * 1.1
        block = leading * len(lines)
        if cell.valign == 'top':
            baseline = bottom + h - CELL_PADDING - size * 0.8
        else:
            baseline = bottom + (h + block) / 2 - size * 0.85

        for line in lines:
            if cell.align == 'L':
                c.drawString(x + CELL_PADDING, baseline, line)
            elif cell.align == 'R':
                c.drawRightString(x + w - CELL_PADDING, baseline, line)
            else:
                c.drawCentredString(x + w / 2, baseline, line)
            baseline -= leading

    @staticmethod
    def _fit(text, font, size, width):
        """Trim text until it fits in width."""
        while text and pdfmetrics.stringWidth(text, font, size) > width:
            text = text[:-1]
        return text

    def save(self):
        """Write the PDF to output_file.

        Raises:
            RenderFailure: If the file cannot be written.
        """
        try:
            self._c.save()
        except OSError as e:
            raise RenderFailure(
                f"Cannot write PDF {self.output_file}: {e}"
            ) from e
