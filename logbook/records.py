"""
Flight record model and the row decoder.

A logbook sheet has 23 columns (A..W):

    A  Date              M  Night landings
    B  Departure place   N  Night time
    C  Departure time    O  IFR time
    D  Arrival place     P  PIC time
    E  Arrival time      Q  Co-pilot time
    F  Aircraft type     R  Dual time
    G  Registration      S  Instructor time
    H  Single pilot time T  FSTD type
    I  Multi pilot time  U  FSTD time
    J  Multi crew time   V  PIC name
    K  Total time        W  Remarks (optional)
    L  Day landings
"""

from dataclasses import dataclass, field

from .durations import Duration
from .errors import MalformedRow

COL_DATE = 0
COL_DEPARTURE_PLACE = 1
COL_DEPARTURE_TIME = 2
COL_ARRIVAL_PLACE = 3
COL_ARRIVAL_TIME = 4
COL_AIRCRAFT_MODEL = 5
COL_REGISTRATION = 6
COL_SINGLE_PILOT = 7
COL_MULTI_PILOT = 8
COL_MULTI_CREW = 9
COL_TOTAL_TIME = 10
COL_DAY_LANDINGS = 11
COL_NIGHT_LANDINGS = 12
COL_NIGHT = 13
COL_INSTRUMENT = 14
COL_PIC = 15
COL_COPILOT = 16
COL_DUAL = 17
COL_INSTRUCTOR = 18
COL_SIM_NAME = 19
COL_SIM_TIME = 20
COL_PIC_NAME = 21
COL_REMARKS = 22

TOTAL_COLUMNS = COL_REMARKS + 1

COLUMN_NAMES = [
    "Date", "Departure place", "Departure time", "Arrival place",
    "Arrival time", "Aircraft type", "Registration", "Single pilot time",
    "Multi pilot time", "Multi crew time", "Total time", "Day landings",
    "Night landings", "Night time", "IFR time", "PIC time", "Co-pilot time",
    "Dual time", "Instructor time", "FSTD type", "FSTD time", "PIC name",
    "Remarks",
]


@dataclass(frozen=True)
class Place:
    place: str = ''
    time: str = ''


@dataclass(frozen=True)
class Aircraft:
    model: str = ''
    registration: str = ''


@dataclass(frozen=True)
class Times:
    single_pilot: Duration = field(default_factory=Duration)
    multi_pilot: Duration = field(default_factory=Duration)
    multi_crew: Duration = field(default_factory=Duration)
    night: Duration = field(default_factory=Duration)
    instrument: Duration = field(default_factory=Duration)
    pic: Duration = field(default_factory=Duration)
    copilot: Duration = field(default_factory=Duration)
    dual: Duration = field(default_factory=Duration)
    instructor: Duration = field(default_factory=Duration)
    total: Duration = field(default_factory=Duration)

    def __add__(self, other):
        return Times(
            single_pilot=self.single_pilot + other.single_pilot,
            multi_pilot=self.multi_pilot + other.multi_pilot,
            multi_crew=self.multi_crew + other.multi_crew,
            night=self.night + other.night,
            instrument=self.instrument + other.instrument,
            pic=self.pic + other.pic,
            copilot=self.copilot + other.copilot,
            dual=self.dual + other.dual,
            instructor=self.instructor + other.instructor,
            total=self.total + other.total,
        )


@dataclass(frozen=True)
class Landings:
    day: int = 0
    night: int = 0

    def __add__(self, other):
        return Landings(self.day + other.day, self.night + other.night)


@dataclass(frozen=True)
class SimulatorSession:
    name: str = ''
    duration: Duration = field(default_factory=Duration)


@dataclass(frozen=True)
class FlightRecord:
    date: str = ''
    departure: Place = field(default_factory=Place)
    arrival: Place = field(default_factory=Place)
    aircraft: Aircraft = field(default_factory=Aircraft)
    times: Times = field(default_factory=Times)
    landings: Landings = field(default_factory=Landings)
    simulator: SimulatorSession = field(default_factory=SimulatorSession)
    pic_name: str = ''
    remarks: str = ''


def _text(row, col):
    """Return the string cell at col, or raise MalformedRow."""
    if col >= len(row) or row[col] is None:
        raise MalformedRow(col, COLUMN_NAMES[col], 'a text cell')
    value = row[col]
    if not isinstance(value, str):
        raise MalformedRow(col, COLUMN_NAMES[col], 'a text cell', value)
    return value


def _duration_text(row, col):
    s = _text(row, col).strip()
    # Sheets export "0:45" as ":45"
    if s.startswith(':'):
        s = '0' + s
    return s


def _duration(row, col):
    return Duration.parse_lenient(_duration_text(row, col))


def _count(row, col):
    s = _text(row, col).strip()
    if not s:
        return 0
    try:
        return int(s)
    except ValueError:
        raise MalformedRow(col, COLUMN_NAMES[col], 'a whole number',
                           row[col]) from None


def parse_record(row):
    """Decode one sheet row into a FlightRecord.

    Args:
        row: Sequence of cell strings, at least 22 long; the remarks
            column is optional.

    Returns:
        FlightRecord.

    Raises:
        MalformedRow: If a required cell is missing or has the wrong type.
    """
    # Multi pilot time only counts when no multi crew time is logged
    multi_pilot_text = _duration_text(row, COL_MULTI_PILOT)
    multi_crew_text = _duration_text(row, COL_MULTI_CREW)
    if multi_crew_text == '' and multi_pilot_text != '':
        multi_pilot = Duration.parse_lenient(multi_pilot_text)
    else:
        multi_pilot = Duration.zero()

    times = Times(
        single_pilot=_duration(row, COL_SINGLE_PILOT),
        multi_pilot=multi_pilot,
        multi_crew=Duration.parse_lenient(multi_crew_text),
        night=_duration(row, COL_NIGHT),
        instrument=_duration(row, COL_INSTRUMENT),
        pic=_duration(row, COL_PIC),
        copilot=_duration(row, COL_COPILOT),
        dual=_duration(row, COL_DUAL),
        instructor=_duration(row, COL_INSTRUCTOR),
        total=_duration(row, COL_TOTAL_TIME),
    )

    remarks = ''
    if len(row) > COL_REMARKS and row[COL_REMARKS] is not None:
        remarks = _text(row, COL_REMARKS)

    return FlightRecord(
        date=_text(row, COL_DATE),
        departure=Place(_text(row, COL_DEPARTURE_PLACE),
                        _text(row, COL_DEPARTURE_TIME)),
        arrival=Place(_text(row, COL_ARRIVAL_PLACE),
                      _text(row, COL_ARRIVAL_TIME)),
        aircraft=Aircraft(_text(row, COL_AIRCRAFT_MODEL),
                          _text(row, COL_REGISTRATION)),
        times=times,
        landings=Landings(_count(row, COL_DAY_LANDINGS),
                          _count(row, COL_NIGHT_LANDINGS)),
        simulator=SimulatorSession(_text(row, COL_SIM_NAME),
                                   _duration(row, COL_SIM_TIME)),
        pic_name=_text(row, COL_PIC_NAME),
        remarks=remarks,
    )


def parse_rows(rows, start_row=1):
    """Decode all rows, in order.

    Args:
        rows: Sequence of raw rows as returned by sources.fetch_rows.
        start_row: Sheet row number of the first row, for error messages.

    Returns:
        List of FlightRecord.

    Raises:
        MalformedRow: On the first row that fails to decode, tagged with
            its sheet row number.
    """
    records = []
    for offset, row in enumerate(rows):
        try:
            records.append(parse_record(row))
        except MalformedRow as e:
            raise e.at_row(start_row + offset) from e
    return records
