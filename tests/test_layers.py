from __future__ import annotations

from load_planner.packing.layers import LayerFit, calculate_layer, slots_per_layer


def test_layer_without_rotation() -> None:
    fit = calculate_layer(120, 80, 30, 20, allow_rotation=False)

    assert fit == LayerFit(count=16, swapped=False, along_length=4, along_width=4)


def test_layer_prefers_turned_footprint_when_it_fits_more() -> None:
    """20x15 on a 120x80 base: 6x5=30 as given, 8x4=32 turned."""
    fit = calculate_layer(120, 80, 20, 15, allow_rotation=True)

    assert fit.swapped is True
    assert fit.count == 32
    assert (fit.along_length, fit.along_width) == (8, 4)


def test_layer_tie_keeps_given_layout() -> None:
    fit = calculate_layer(100, 100, 50, 25, allow_rotation=True)

    assert fit.count == 8
    assert fit.swapped is False


def test_layer_does_not_fit() -> None:
    """A count of 0 signals the footprint does not fit the base."""
    assert calculate_layer(100, 50, 120, 80, allow_rotation=False).count == 0
    assert calculate_layer(100, 50, 0, 10, allow_rotation=True).count == 0


def test_slots_per_layer_interlock_efficiency() -> None:
    fit = LayerFit(count=16, swapped=False, along_length=4, along_width=4)

    assert slots_per_layer(fit, "column") == 16
    # floor(16 * 0.9)
    assert slots_per_layer(fit, "interlock") == 14
