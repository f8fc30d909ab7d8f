"""
Analog Modulation Module / 模拟调制模块

AM, FM and PM of a sine message onto a carrier at carrier_ratio times the
message frequency. 将正弦消息以AM、FM、PM方式调制到载波上。
"""

import numpy as np

from .signals import DEFAULT_CONFIG, AnalogModulation, parse_scheme
from .waveform import analog_sine


class AnalogModulator:
    """
    Analog-to-analog modulator / 模拟-模拟调制器

    With m the message sample normalized by its amplitude and f_c the carrier:
    AM : s(t) = (1 + 0.8 m) sin(2π f_c t)
    FM : s(t) = sin(2π f_c t + 2π Δf m t / f_m), Δf = 0.5 f_c
    PM : s(t) = sin(2π f_c t + (π/2) m)

    The FM phase term is the classroom approximation behind the existing
    charts, not the integral of the message.
    FM相位项沿用教学图表中的近似公式，并非消息信号的积分。
    """

    def __init__(self, config=DEFAULT_CONFIG):
        self.duration = config.duration
        self.samples_per_second = config.analog_samples_per_second
        self.carrier_ratio = config.carrier_ratio
        self.modulation_index = config.am_modulation_index
        self.deviation_ratio = config.fm_deviation_ratio
        self.phase_deviation = config.pm_phase_deviation

    def modulate(self, message_frequency, message_amplitude, scheme):
        """
        Modulate the carrier with a sine message / 用正弦消息调制载波

        Returns / 返回:
        -------------
        (t, message), (t, modulated) : tuple of np.ndarray pairs
            Message and transmitted waveforms on the same time grid
            同一时间轴上的消息与已调信号
        """
        scheme = parse_scheme(AnalogModulation, scheme)
        t, message = analog_sine(message_frequency, message_amplitude,
                                 self.samples_per_second, self.duration)

        carrier_frequency = self.carrier_ratio * message_frequency
        m = message / message_amplitude
        carrier_phase = 2 * np.pi * carrier_frequency * t

        if scheme is AnalogModulation.AM:
            modulated = (1 + self.modulation_index * m) * np.sin(carrier_phase)
        elif scheme is AnalogModulation.FM:
            deviation = self.deviation_ratio * carrier_frequency
            modulated = np.sin(carrier_phase + 2 * np.pi * deviation * m * t / message_frequency)
        else:
            modulated = np.sin(carrier_phase + self.phase_deviation * m)

        return (t, message), (t, modulated)
