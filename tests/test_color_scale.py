import pytest

from gdpglobe.model.records import CountryRecord
from gdpglobe.render.color_scale import SequentialColorScale

INFERNO_LOW = "#000004"
INFERNO_HIGH = "#fcffa4"


def _record(code, gdp, rank=1):
    return CountryRecord(rank, code, code, gdp, 0.0)


def test_domain_is_80_percent_of_max(records):
    scale = SequentialColorScale.from_records(records)
    assert scale.domain_max == pytest.approx(28.78 * 0.8)


def test_small_max_uses_minimum_ceiling():
    scale = SequentialColorScale.from_records([_record("AAA", 3.0)])
    assert scale.domain_max == pytest.approx(8.0)


def test_empty_records_still_give_a_valid_scale():
    assert SequentialColorScale.from_records([]).domain_max == pytest.approx(8.0)


def test_values_are_clamped():
    scale = SequentialColorScale(10.0)
    assert scale(0.0) == INFERNO_LOW
    assert scale(-5.0) == INFERNO_LOW
    assert scale(10.0) == INFERNO_HIGH
    assert scale(50.0) == INFERNO_HIGH


def test_top_country_saturates(records):
    scale = SequentialColorScale.from_records(records)
    assert scale(28.78) == INFERNO_HIGH
    assert scale(2.24) != INFERNO_HIGH


def test_normalize_is_monotonic():
    scale = SequentialColorScale(20.0)
    values = [scale.normalize(v) for v in (0.0, 1.0, 5.0, 10.0, 20.0)]
    assert values == sorted(values)
    assert values[0] == 0.0 and values[-1] == 1.0


def test_non_positive_domain_is_rejected():
    with pytest.raises(ValueError):
        SequentialColorScale(0.0)


def test_gradient_stops():
    stops = SequentialColorScale(1.0).gradient_stops(5)
    assert [pos for pos, _ in stops] == [0.0, 0.25, 0.5, 0.75, 1.0]
    assert stops[0][1] == INFERNO_LOW
    assert stops[-1][1] == INFERNO_HIGH


def test_all_zero_gdp_still_gives_a_valid_scale():
    scale = SequentialColorScale.from_records([_record("AAA", 0.0), _record("BBB", 0.0, rank=2)])
    assert scale.domain_max == pytest.approx(8.0)
    assert scale(0.0) == INFERNO_LOW
