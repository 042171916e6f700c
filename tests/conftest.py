from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from logbook.durations import Duration  # noqa: E402
from logbook.records import (  # noqa: E402
    Aircraft,
    FlightRecord,
    Landings,
    Place,
    SimulatorSession,
    Times,
)


def _row(**overrides):
    row = [
        "2023-05-01",  # date
        "EGLL", "08:00",  # departure
        "LFPG", "09:15",  # arrival
        "C172", "G-ABCD",
        "1:15", "", "",  # single pilot, multi pilot, multi crew
        "1:15",  # total
        "1", "",  # landings
        "", "", "1:15", "", "", "",  # night, IFR, PIC, COP, dual, instr
        "", "",  # FSTD
        "SELF",
        "",  # remarks
    ]
    columns = {
        "date": 0, "dep": 1, "dep_time": 2, "arr": 3, "arr_time": 4,
        "model": 5, "reg": 6, "single_pilot": 7, "multi_pilot": 8,
        "multi_crew": 9, "total": 10, "day_landings": 11,
        "night_landings": 12, "night": 13, "ifr": 14, "pic": 15,
        "copilot": 16, "dual": 17, "instructor": 18, "sim_name": 19,
        "sim_time": 20, "pic_name": 21, "remarks": 22,
    }
    for key, value in overrides.items():
        row[columns[key]] = value
    return row


def _record(date="2023-05-01", dep="EGLL", arr="LFPG", total=60,
            day_landings=1, night_landings=0, sim=0):
    duration = Duration.from_minutes(total)
    return FlightRecord(
        date=date,
        departure=Place(dep, "08:00"),
        arrival=Place(arr, "09:00"),
        aircraft=Aircraft("C172", "G-ABCD"),
        times=Times(single_pilot=duration, pic=duration, total=duration),
        landings=Landings(day_landings, night_landings),
        simulator=SimulatorSession("", Duration.from_minutes(sim)),
        pic_name="SELF",
    )


@pytest.fixture
def make_row():
    """Factory for a 23-cell sheet row; keyword overrides by column."""
    return _row


@pytest.fixture
def make_record():
    """Factory for a FlightRecord with the given total minutes."""
    return _record
