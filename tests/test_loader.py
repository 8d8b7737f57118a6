import bz2
from datetime import date

import pytest

from stormrank.loader import ParseError, load_storm_csv
from conftest import HEADER


def test_load_sample(write_csv, sample_lines):
    records = load_storm_csv(write_csv(sample_lines))
    assert len(records) == 7
    first = records[0]
    assert first.row_id == 0
    assert first.event_type == "TORNADO"
    assert first.begin_date == date(1950, 4, 18)
    assert first.fatalities == 4
    assert first.injuries == 15
    assert first.prop_dmg == 25.0
    assert first.prop_dmg_exp == "K"
    assert first.crop_dmg == 0.0
    assert first.crop_dmg_exp == ""


def test_event_type_keeps_case(write_csv, sample_lines):
    records = load_storm_csv(write_csv(sample_lines))
    assert records[2].event_type == "Thunderstorm Wind"


def test_header_matching_ignores_case(write_csv):
    lines = [" bgn_date ,evtype,Fatalities,injuries,propdmg,propdmgexp,cropdmg,cropdmgexp",
             "1/2/2004 0:00:00,HAIL,0,0,1,K,0,K"]
    records = load_storm_csv(write_csv(lines))
    assert records[0].event_type == "HAIL"


def test_blank_counts_load_as_none(write_csv):
    lines = [HEADER, "1.00,1/2/2004 0:00:00,HAIL,,,,K,,,1"]
    r = load_storm_csv(write_csv(lines))[0]
    assert r.fatalities is None
    assert r.injuries is None
    assert r.prop_dmg is None


def test_bz2_input(tmp_path, sample_lines):
    path = tmp_path / "storm.csv.bz2"
    path.write_bytes(bz2.compress(("\n".join(sample_lines) + "\n").encode("utf-8")))
    assert len(load_storm_csv(str(path))) == 7


def test_missing_file(tmp_path):
    with pytest.raises(ParseError, match="not found"):
        load_storm_csv(str(tmp_path / "nope.csv"))


def test_empty_file(write_csv):
    with pytest.raises(ParseError):
        load_storm_csv(write_csv([""]))


def test_missing_column(write_csv):
    lines = ["BGN_DATE,EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG",
             "1/2/2004 0:00:00,HAIL,0,0,1,K,0"]
    with pytest.raises(ParseError, match="CROPDMGEXP"):
        load_storm_csv(write_csv(lines))


@pytest.mark.parametrize("row", [
    "1.00,2004-01-02,HAIL,0,0,1,K,0,K,1",
    "1.00,1/2/2004 0:00:00,HAIL,two,0,1,K,0,K,1",
    "1.00,1/2/2004 0:00:00,HAIL,-1,0,1,K,0,K,1",
    "1.00,1/2/2004 0:00:00,HAIL,0,0,lots,K,0,K,1",
])
def test_malformed_row(write_csv, row):
    with pytest.raises(ParseError, match="line 2"):
        load_storm_csv(write_csv([HEADER, row]))


def test_parse_error_is_value_error():
    assert issubclass(ParseError, ValueError)


def test_duplicate_header_after_normalizing(write_csv):
    lines = ["BGN_DATE,EVTYPE,evtype,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP",
             "1/2/2004 0:00:00,HAIL,hail,0,0,1,K,0,K"]
    with pytest.raises(ParseError, match="Duplicate column"):
        load_storm_csv(write_csv(lines))
