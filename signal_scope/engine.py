"""
Signal Transformation Entry Points / 信号变换入口

The four calls a transport layer (in-process or remote) builds on.
Each validates its arguments, routes to the matching engine, measures the
elapsed time and packages a SignalResult.
供任意传输层调用的四个入口：校验参数、分派到对应引擎、计时并封装结果。
"""

import logging
import math
import time

import numpy as np

from .analog_modulator import AnalogModulator
from .converter import ADConverter
from .errors import InvalidParameter, SignalError
from .line_coding import LineEncoder
from .modulator import DigitalModulator
from .signals import (
    DEFAULT_CONFIG,
    DigitalModulation,
    LineCoding,
    SignalResult,
    parse_scheme,
)
from .waveform import digital_steps, parse_bits, to_points

logger = logging.getLogger(__name__)


def _settings(settings):
    return (settings or DEFAULT_CONFIG).validate()


def _run(label, strict, build) -> SignalResult:
    start = time.perf_counter()
    try:
        input_signal, transmitted, output = build()
    except SignalError as exc:
        if strict:
            raise
        logger.warning("%s rejected, returning empty result: %s", label, exc)
        return SignalResult.empty()

    result = SignalResult(
        input=to_points(*input_signal),
        transmitted=to_points(*transmitted),
        output=to_points(*output),
    )
    result.calculation_time = (time.perf_counter() - start) * 1000.0
    logger.debug("%s: %d input / %d transmitted / %d output points in %.3f ms",
                 label, len(result.input), len(result.transmitted),
                 len(result.output), result.calculation_time)
    return result


def line_code(bits, scheme, *, settings=None, strict=True) -> SignalResult:
    """
    Digital → digital line coding / 数字-数字线路编码

    Parameters / 参数:
    ----------------
    bits : str
        '0'/'1' string / 比特串
    scheme : LineCoding or str
        NRZ-L, NRZ-I, Manchester, Differential Manchester, AMI,
        Pseudoternary, B8ZS or HDB3
    settings : SimulationConfig, optional
        Engine constants / 引擎常量
    strict : bool, default=True
        Raise SignalError on bad input; False returns an empty result
        为False时出错返回空结果而非抛出异常

    Returns / 返回:
    -------------
    result : SignalResult
        input = bit steps, transmitted = line signal, output = input
    """
    def build():
        config = _settings(settings)
        selected = parse_scheme(LineCoding, scheme)
        values = parse_bits(bits, config.max_bits)
        steps = digital_steps(values, config.bit_duration)
        return steps, LineEncoder(config).encode(values, selected), steps

    return _run(f"line_code[{scheme}]", strict, build)


def _window(n_bits, start_bit, end_bit, bits_per_symbol, buffer):
    # Bits [lo, hi) to render, widened by the buffer and snapped to symbols
    if start_bit is None and end_bit is None:
        return 0, n_bits
    if start_bit is None or end_bit is None:
        raise InvalidParameter("start_bit and end_bit must be given together")
    if start_bit < 0 or end_bit <= start_bit:
        raise InvalidParameter(f"invalid bit window [{start_bit}, {end_bit})")
    if start_bit >= n_bits:
        raise InvalidParameter(f"window starts at bit {start_bit} but input has {n_bits} bits")

    lo = max(0, start_bit - buffer)
    lo -= lo % bits_per_symbol
    hi = min(n_bits, end_bit + buffer)
    hi = min(n_bits, -(-hi // bits_per_symbol) * bits_per_symbol)
    return lo, hi


def digital_modulate(bits, scheme, start_bit=None, end_bit=None, *,
                     settings=None, strict=True) -> SignalResult:
    """
    Digital → analog modulation / 数字-模拟调制

    With start_bit and end_bit only the bits in that window (plus
    viewport_buffer bits either side) are rendered, at their true times.
    指定start_bit与end_bit时，仅渲染该窗口（两侧各加缓冲比特）内的比特。

    Parameters / 参数:
    ----------------
    bits : str
        '0'/'1' string / 比特串
    scheme : DigitalModulation or str
        ASK, FSK, PSK, BFSK, MFSK, BPSK, DPSK, QPSK, OQPSK, MPSK or QAM
    start_bit, end_bit : int, optional
        Viewport window [start_bit, end_bit) / 视窗范围
    settings : SimulationConfig, optional
    strict : bool, default=True

    Returns / 返回:
    -------------
    result : SignalResult
        input = bit steps, transmitted = carrier, output = input
    """
    def build():
        config = _settings(settings)
        selected = parse_scheme(DigitalModulation, scheme)
        values = parse_bits(bits, config.max_bits)
        lo, hi = _window(len(values), start_bit, end_bit,
                         selected.bits_per_symbol, config.viewport_buffer)

        visible = values[lo:hi]
        # DPSK phase accumulated by the bits left of the window
        initial_phase = math.pi * np.count_nonzero(values[:lo] == 0)
        steps = digital_steps(visible, config.bit_duration, offset=lo)
        carrier = DigitalModulator(config).modulate(visible, selected, offset=lo,
                                                    initial_phase=initial_phase,
                                                    before=values[:lo], after=values[hi:])
        return steps, carrier, steps

    return _run(f"digital_modulate[{scheme}]", strict, build)


def analog_to_digital(frequency, amplitude, config, *, settings=None, strict=True) -> SignalResult:
    """
    Analog → digital conversion / 模拟-数字转换

    Parameters / 参数:
    ----------------
    frequency : float
        Message frequency in Hz (> 0) / 消息频率
    amplitude : float
        Message amplitude (> 0) / 消息幅度
    config : PCMConfig or DeltaModulationConfig
        Selects the scheme and its parameters / 选择方案及其参数
    settings : SimulationConfig, optional
    strict : bool, default=True

    Returns / 返回:
    -------------
    result : SignalResult
        input = sampled sine, transmitted = level indices or DM bits,
        output = reconstruction / 输出为重建信号
    """
    def build():
        return ADConverter(_settings(settings)).convert(frequency, amplitude, config)

    label = getattr(config, 'algorithm', type(config).__name__)
    return _run(f"analog_to_digital[{label}]", strict, build)


def analog_modulate(message_frequency, message_amplitude, scheme, *,
                    settings=None, strict=True) -> SignalResult:
    """
    Analog → analog modulation / 模拟-模拟调制

    Returns / 返回:
    -------------
    result : SignalResult
        input = message, transmitted = modulated carrier, output = input
    """
    def build():
        config = _settings(settings)
        message, modulated = AnalogModulator(config).modulate(
            message_frequency, message_amplitude, scheme)
        return message, modulated, message

    return _run(f"analog_modulate[{scheme}]", strict, build)
