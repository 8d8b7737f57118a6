import pytest

from stormrank.decoder import MULTIPLIERS, decode_amount, decode_records, has_recognized_suffix
from conftest import make_record


def test_decode_known_suffixes():
    assert decode_amount(2.5, "K") == 2500
    assert decode_amount(3, "m") == 3000000
    assert decode_amount(1, "B") == 1e9
    assert decode_amount(4, " k ") == 4000


@pytest.mark.parametrize("suffix", ["X", "", "0", "5", "h", "+", "?", "-", None])
def test_unrecognized_suffix_is_excluded(suffix):
    assert decode_amount(1, suffix) is None


def test_missing_amount_is_excluded():
    assert decode_amount(None, "K") is None


def test_multiplier_table():
    assert MULTIPLIERS == {"K": 1e3, "M": 1e6, "B": 1e9}


def test_both_suffixes_required():
    assert has_recognized_suffix(make_record(prop_exp="K", crop_exp="m"))
    assert not has_recognized_suffix(make_record(prop_exp="K", crop_exp=""))
    assert not has_recognized_suffix(make_record(prop_exp="5", crop_exp="M"))


def test_decode_records_filters_then_multiplies():
    records = [
        make_record(event_type="a", prop=2, prop_exp="M", crop=3, crop_exp="k", row_id=1),
        make_record(event_type="b", prop=7, prop_exp="M", crop=0, crop_exp="", row_id=2),
        make_record(event_type="c", prop=7, prop_exp="1", crop=1, crop_exp="K", row_id=3),
    ]
    out = decode_records(records)
    assert [e.row_id for e in out] == [1]
    assert out[0].prop_damage_usd == 2e6
    assert out[0].crop_damage_usd == 3000


def test_decode_records_keeps_blank_amount_as_none():
    out = decode_records([make_record(prop=None, prop_exp="K", crop=5, crop_exp="K")])
    assert len(out) == 1
    assert out[0].prop_damage_usd is None
    assert out[0].crop_damage_usd == 5000
    assert out[0].total_damage_usd is None
