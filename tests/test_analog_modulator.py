"""
Tests for analog-to-analog modulation (AM, FM, PM).
"""

import numpy as np
import pytest

from signal_scope import (
    AnalogModulation,
    AnalogModulator,
    InvalidParameter,
    SimulationConfig,
    UnsupportedScheme,
    analog_modulate,
    points_to_arrays,
)


def arrays(result):
    t, message = points_to_arrays(result.input)
    _, modulated = points_to_arrays(result.transmitted)
    return t, message, modulated


class TestAnalogModulation:

    @pytest.mark.parametrize("scheme", list(AnalogModulation))
    def test_shape(self, scheme):
        result = analog_modulate(1.0, 1.0, scheme)
        assert len(result.input) == 400
        assert len(result.transmitted) == 400
        assert result.output == result.input
        assert result.transmitted[-1].x == pytest.approx(1.995)

    def test_am_envelope(self):
        t, message, modulated = arrays(analog_modulate(1.0, 2.0, "AM"))
        m = message / 2.0
        np.testing.assert_allclose(modulated, (1 + 0.8 * m) * np.sin(2 * np.pi * 5.0 * t))
        assert np.abs(modulated).max() <= 1.8 + 1e-12

    def test_pm(self):
        t, message, modulated = arrays(analog_modulate(2.0, 0.5, "PM"))
        m = message / 0.5
        np.testing.assert_allclose(modulated, np.sin(2 * np.pi * 10.0 * t + np.pi / 2 * m))

    def test_fm_uses_linear_in_time_phase_term(self):
        f_m, amplitude = 1.0, 1.0
        t, message, modulated = arrays(analog_modulate(f_m, amplitude, "FM"))
        f_c = 5.0 * f_m
        m = message / amplitude
        expected = np.sin(2 * np.pi * f_c * t + 2 * np.pi * (0.5 * f_c) * m * t / f_m)
        np.testing.assert_allclose(modulated, expected, atol=1e-9)

    def test_fm_is_not_the_integral_form(self):
        # Textbook FM integrates the message; the rendered chart does not
        f_m = 1.0
        t, _, modulated = arrays(analog_modulate(f_m, 1.0, "FM"))
        f_c, deviation = 5.0, 2.5
        textbook = np.sin(2 * np.pi * f_c * t
                          + deviation / f_m * (1 - np.cos(2 * np.pi * f_m * t)))
        assert not np.allclose(modulated, textbook)

    def test_carrier_follows_ratio(self):
        settings = SimulationConfig(carrier_ratio=3.0, am_modulation_index=0.0)
        t, _, modulated = arrays(analog_modulate(2.0, 1.0, "AM", settings=settings))
        np.testing.assert_allclose(modulated, np.sin(2 * np.pi * 6.0 * t))

    def test_modulator_returns_shared_time_axis(self):
        (t_msg, _), (t_mod, _) = AnalogModulator().modulate(1.0, 1.0, AnalogModulation.PM)
        np.testing.assert_array_equal(t_msg, t_mod)

    @pytest.mark.parametrize("frequency, amplitude", [(0, 1), (-1, 1), (1, 0)])
    def test_invalid_message(self, frequency, amplitude):
        with pytest.raises(InvalidParameter):
            analog_modulate(frequency, amplitude, "AM")

    def test_unknown_scheme(self):
        with pytest.raises(UnsupportedScheme):
            analog_modulate(1.0, 1.0, "SSB")
