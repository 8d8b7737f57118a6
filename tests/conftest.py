from datetime import date

import pytest

from stormrank.models import EventRecord

HEADER = "STATE__,BGN_DATE,EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP,REFNUM"


def make_record(event_type="tstm wind", begin=date(2005, 6, 1), fatalities=0, injuries=0,
                prop=0.0, prop_exp="K", crop=0.0, crop_exp="K", row_id=0):
    return EventRecord(
        row_id=row_id,
        event_type=event_type,
        begin_date=begin,
        fatalities=fatalities,
        injuries=injuries,
        prop_dmg=prop,
        prop_dmg_exp=prop_exp,
        crop_dmg=crop,
        crop_dmg_exp=crop_exp,
    )


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV lines (header included) and return the path as str."""
    def _write(lines, name="storm.csv"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def sample_lines():
    return [
        HEADER,
        '1.00,4/18/1950 0:00:00,TORNADO,4,15,25.0,K,0,,1',
        '1.00,1/2/2004 0:00:00,TSTM WIND,2,5,10,K,1,K,2',
        '1.00,3/4/2006 0:00:00,  Thunderstorm Wind ,4,1,2,M,0,K,3',
        '1.00,8/29/2005 0:00:00,HURRICANE/TYPHOON,10,100,5,B,1,M,4',
        '1.00,5/5/2007 0:00:00,Landslide,1,0,1,K,0,K,5',
        '1.00,7/7/2008 0:00:00,HEAT,3,20,0,,0,,6',
        '1.00,12/31/2003 0:00:00,HEAT,50,50,0,,0,,7',
    ]
