import pytest
from datetime import date
from crewledger.core.exceptions import InvalidAmountError, InvalidTipSplitError
from crewledger.engine import tips
from crewledger.models.season import Season, TipSplitType


def make_season(split_type=TipSplitType.EQUAL, config=None):
    return Season(
        id="season-1",
        boat_name="Bura",
        name="Summer 2026",
        start_date=date(2026, 5, 1),
        end_date=date(2026, 10, 31),
        tip_split_type=split_type,
        tip_split_config=config,
        created_by="captain-1",
    )


def test_equal_split():
    shares = tips.tip_shares(make_season(), ["u1", "u2", "u3", "u4"], 1000)
    assert shares == {"u1": 250, "u2": 250, "u3": 250, "u4": 250}


def test_custom_split():
    season = make_season(TipSplitType.CUSTOM, {"u1": 40, "u2": 30, "u3": 30})

    shares = tips.tip_shares(season, ["u1", "u2", "u3"], 1000)

    assert shares["u1"] == pytest.approx(400)
    assert shares["u2"] == pytest.approx(300)
    assert sum(shares.values()) == pytest.approx(1000)


def test_custom_split_must_cover_whole_tip():
    season = make_season(TipSplitType.CUSTOM, {"u1": 50, "u2": 30})

    with pytest.raises(InvalidTipSplitError):
        tips.tip_shares(season, ["u1", "u2"], 1000)


def test_custom_type_without_config_falls_back_to_equal():
    shares = tips.tip_shares(make_season(TipSplitType.CUSTOM), ["u1", "u2"], 300)
    assert shares == {"u1": 150, "u2": 150}


def test_negative_tip_is_rejected():
    with pytest.raises(InvalidAmountError):
        tips.tip_shares(make_season(), ["u1"], -5)


def test_no_crew_no_shares():
    assert tips.tip_shares(make_season(), [], 500) == {}


def test_is_valid_split():
    assert tips.is_valid_split({"a": 33.33, "b": 33.33, "c": 33.34})
    assert not tips.is_valid_split({"a": 120, "b": -20})
    assert not tips.is_valid_split({"a": 99})
