"""Unit tests for PlotSpans defaults, derivation and serialization."""

from dataclasses import FrozenInstanceError

import pytest

from nicestats.plot_layout.plot_spans import PlotSpans


def test_with_defaults_derived_values():
    """Default base spans derive the documented plot origin and extent."""
    spans = PlotSpans.with_defaults()
    assert spans.first_bin_x_start_pct == pytest.approx(2.5)
    assert spans.plot_width_pct == pytest.approx(95.0)
    assert spans.plot_base_y_pct == pytest.approx(97.8)
    assert spans.plot_height_pct == pytest.approx(94.3)
    assert spans.max_marker_diameter_pct == 10.0


def test_with_defaults_matches_field_defaults():
    derived = PlotSpans.with_defaults().to_dict()
    literal = PlotSpans().to_dict()
    assert derived.keys() == literal.keys()
    for key, value in literal.items():
        assert derived[key] == pytest.approx(value), key


def test_from_base_recomputes_derived():
    """Changing pad_x shifts the first bin and shrinks the width."""
    spans = PlotSpans.from_base(pad_x_pct=2.0)
    assert spans.first_bin_x_start_pct == pytest.approx(3.5)
    assert spans.plot_width_pct == pytest.approx(93.0)


def test_axis_y_pct_is_line_center():
    spans = PlotSpans.with_defaults()
    assert spans.axis_y_pct == pytest.approx(97.9)


def test_to_dict_from_dict_round_trip():
    spans = PlotSpans.from_base(max_marker_diameter_pct=4.0, pad_y_pct=3.0)
    restored = PlotSpans.from_dict(spans.to_dict())
    assert restored == spans


def test_from_dict_partial_base_uses_defaults():
    """Missing base spans take defaults; derived spans are recomputed."""
    restored = PlotSpans.from_dict({"pad_x_pct": 2.0})
    assert restored.pad_y_pct == 2.0
    assert restored.first_bin_x_start_pct == pytest.approx(3.5)
    assert restored.plot_width_pct == pytest.approx(93.0)


def test_from_dict_partial_derived_is_recomputed(caplog):
    """A subset of derived spans is ignored with a warning."""
    with caplog.at_level("WARNING", logger="nicestats"):
        restored = PlotSpans.from_dict({"plot_width_pct": 50.0})
    assert restored.plot_width_pct == pytest.approx(95.0)
    assert "Partial derived spans" in caplog.text


def test_from_dict_ignores_unknown_keys(caplog):
    with caplog.at_level("WARNING", logger="nicestats"):
        restored = PlotSpans.from_dict({"pad_x_pct": 1.0, "bogus": 3})
    assert restored == PlotSpans.with_defaults()
    assert "bogus" in caplog.text


def test_from_dict_non_numeric_raises():
    with pytest.raises(ValueError) as exc_info:
        PlotSpans.from_dict({"pad_x_pct": "wide"})
    assert "numeric" in str(exc_info.value)


@pytest.mark.parametrize(
    "field_name",
    ["plot_width_pct", "plot_height_pct", "max_marker_diameter_pct"],
)
def test_non_positive_extent_raises(field_name):
    with pytest.raises(ValueError):
        PlotSpans(**{field_name: 0.0})


def test_frozen():
    spans = PlotSpans.with_defaults()
    with pytest.raises(FrozenInstanceError):
        spans.pad_x_pct = 5.0  # type: ignore[misc]
