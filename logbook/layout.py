"""
EASA logbook page layout.

Turns pages into Cell drawing commands in millimetres, origin at the top
left of an A4 landscape sheet. Nothing here touches a canvas: pdf_canvas
executes the commands.

Border codes follow the usual PDF cell convention: "1" draws all four
edges, otherwise any combination of L, T, R and B; "" draws none.
"""

from dataclasses import dataclass

from .pagination import LOGBOOK_ROWS, is_shaded

LEFT_MARGIN = 10.0
TOP_MARGIN = 30.0
BODY_ROW_HEIGHT = 5.0
FOOTER_ROW_HEIGHT = 6.0

HEADER1_TOP = TOP_MARGIN - 1
HEADER1_HEIGHT = 5.0
HEADER2_TOP = HEADER1_TOP + HEADER1_HEIGHT
HEADER2_HEIGHT = 12.0
HEADER3_HEIGHT = 4.0
HEADER3_TOP = HEADER2_TOP + HEADER2_HEIGHT - HEADER3_HEIGHT
BODY_TOP = HEADER2_TOP + HEADER2_HEIGHT + 1

HEADER_FILL = (217, 217, 217)
BODY_FILL = (228, 228, 228)

FONT_REGULAR = 'regular'
FONT_BOLD = 'bold'

HEADER1 = ["1", "2", "3", "4", "5", "6", "7", "8", "9", "10", "11", "12"]
HEADER2 = [
    "DATE", "DEPARTURE", "ARRIVAL", "AIRCRAFT", "SINGLE PILOT TIME",
    "MULTI PILOT TIME", "TOTAL TIME", "PIC NAME", "LANDINGS",
    "OPERATIONAL CONDITION TIME", "PILOT FUNCTION TIME", "FSTD SESSION",
    "REMARKS AND ENDORSEMENTS",
]
HEADER3 = [
    "", "Place", "Time", "Place", "Time", "Type", "Reg", "SE", "ME", "", "",
    "", "Day", "Night", "Night", "IFR", "PIC", "COP", "DUAL", "INSTR",
    "Type", "Time", "",
]

HEADER1_WIDTHS = [12.2, 16.5, 16.5, 22.9, 33.6, 11.2, 22.86, 16.76, 22.4,
                  44.8, 22.4, 33.8]
HEADER2_WIDTHS = [12.2, 16.5, 16.5, 22.9, 22.4, 11.2, 11.2, 22.86, 16.76,
                  22.4, 44.8, 22.4, 33.8]
BODY_WIDTHS = [12.2, 8.25, 8.25, 8.25, 8.25, 10, 12.9, 11.2, 11.2, 11.2,
               11.2, 22.86, 8.38, 8.38, 11.2, 11.2, 11.2, 11.2, 11.2, 11.2,
               11.2, 11.2, 33.8]
FOOTER_WIDTHS = [20.45, 47.65, 11.2, 11.2, 11.2, 11.2, 22.86, 8.38, 8.38,
                 11.2, 11.2, 11.2, 11.2, 11.2, 11.2, 11.2, 11.2, 33.8]

PAGE_WIDTH = sum(BODY_WIDTHS)

# Body columns printed left-aligned: PIC name and remarks
LEFT_ALIGNED_BODY = {11, 22}

FOOTER_LABELS = (
    "TOTAL THIS PAGE",
    "TOTAL FROM PREVIOUS PAGES",
    "TOTAL TIME",
)
# Outer footer cells of the three rows join into one bracket
FOOTER_EDGE_BORDERS = ("LTR", "LR", "LBR")
CERTIFICATION = "I certify that the entries in this log are true."


@dataclass(frozen=True)
class Cell:
    x: float
    y: float
    width: float
    height: float
    text: str = ''
    border: str = '1'
    align: str = 'C'
    fill: tuple = None
    font: str = FONT_REGULAR
    size: float = 8
    wrap: bool = False
    valign: str = 'middle'

    @property
    def edges(self):
        """Set of edges to stroke, from the border code."""
        if self.border == '1':
            return {'L', 'T', 'R', 'B'}
        return set(self.border)


def _row(widths, texts, top, height, **style):
    cells = []
    x = LEFT_MARGIN
    for width, text in zip(widths, texts):
        cells.append(Cell(x, top, width, height, text, **style))
        x += width
    return cells


def header_cells():
    """The three header rows, drawn filled and bordered."""
    style = dict(fill=HEADER_FILL, font=FONT_BOLD, size=8, wrap=True)
    cells = _row(HEADER1_WIDTHS, HEADER1, HEADER1_TOP, HEADER1_HEIGHT, **style)
    cells += _row(HEADER2_WIDTHS, HEADER2, HEADER2_TOP, HEADER2_HEIGHT,
                  valign='top', **style)
    # Sub-headers sit inside the bottom of the second row
    cells += [
        cell for cell in _row(BODY_WIDTHS, HEADER3, HEADER3_TOP,
                              HEADER3_HEIGHT, **style)
        if cell.text
    ]
    return cells


def _landings(count):
    return str(count) if count else ''


def body_values(record):
    """The 23 body cell texts for a record; None gives a blank row."""
    if record is None:
        return [''] * len(BODY_WIDTHS)
    t = record.times
    return [
        record.date,
        record.departure.place,
        record.departure.time,
        record.arrival.place,
        record.arrival.time,
        record.aircraft.model,
        record.aircraft.registration,
        t.single_pilot.render_for_body(),
        t.multi_pilot.render_for_body(),
        t.multi_crew.render_for_body(),
        t.total.render_for_body(),
        record.pic_name,
        _landings(record.landings.day),
        _landings(record.landings.night),
        t.night.render_for_body(),
        t.instrument.render_for_body(),
        t.pic.render_for_body(),
        t.copilot.render_for_body(),
        t.dual.render_for_body(),
        t.instructor.render_for_body(),
        record.simulator.name,
        record.simulator.duration.render_for_body(),
        record.remarks,
    ]


def body_cells(record, shaded, top):
    """One logbook row at vertical position top."""
    fill = BODY_FILL if shaded else None
    cells = []
    x = LEFT_MARGIN
    for col, (width, text) in enumerate(zip(BODY_WIDTHS, body_values(record))):
        align = 'L' if col in LEFT_ALIGNED_BODY else 'C'
        cells.append(Cell(x, top, width, BODY_ROW_HEIGHT, text,
                          align=align, fill=fill))
        x += width
    return cells


def footer_values(totals):
    """Footer texts between the label and the certification column."""
    t = totals.times
    return [
        t.single_pilot.render_for_totals(),
        t.multi_pilot.render_for_totals(),
        t.multi_crew.render_for_totals(),
        t.total.render_for_totals(),
        '',
        str(totals.landings.day),
        str(totals.landings.night),
        t.night.render_for_totals(),
        t.instrument.render_for_totals(),
        t.pic.render_for_totals(),
        t.copilot.render_for_totals(),
        t.dual.render_for_totals(),
        t.instructor.render_for_totals(),
        '',
        totals.simulator.render_for_totals(),
    ]


def footer_cells(line, totals, owner, top):
    """One of the three footer rows.

    Args:
        line: 0 for this page, 1 for previous pages, 2 for the grand total.
        totals: TotalsRecord to print.
        owner: Logbook owner, printed under the certification.
        top: Vertical position of the row.
    """
    edge = FOOTER_EDGE_BORDERS[line]
    style = dict(fill=HEADER_FILL, font=FONT_BOLD, size=8)
    widths = FOOTER_WIDTHS
    h = FOOTER_ROW_HEIGHT

    x = LEFT_MARGIN
    cells = [Cell(x, top, widths[0], h, '', border=edge, **style)]
    x += widths[0]
    texts = [FOOTER_LABELS[line]] + footer_values(totals)
    for width, text in zip(widths[1:-1], texts):
        cells.append(Cell(x, top, width, h, text, **style))
        x += width

    signature = {0: CERTIFICATION, 2: owner}.get(line, '')
    cells.append(Cell(x, top, widths[-1], h, signature, border=edge,
                      fill=HEADER_FILL, font=FONT_REGULAR, size=6))
    return cells


def footer_top(page_rows=LOGBOOK_ROWS):
    return BODY_TOP + page_rows * BODY_ROW_HEIGHT


def page_number_cell(number, top):
    return Cell(LEFT_MARGIN, top, PAGE_WIDTH, 10, f"page {number}",
                border='', align='L')


def page_layout(page, owner):
    """All drawing commands for one Page."""
    cells = header_cells()

    for position, record in enumerate(page.rows, 1):
        top = BODY_TOP + (position - 1) * BODY_ROW_HEIGHT
        cells += body_cells(record, is_shaded(position), top)

    top = footer_top(len(page.rows))
    totals = (page.page_total, page.previous_total, page.grand_total)
    for line, total in enumerate(totals):
        cells += footer_cells(line, total, owner, top)
        top += FOOTER_ROW_HEIGHT

    cells.append(page_number_cell(page.number, top - 1))
    return cells
