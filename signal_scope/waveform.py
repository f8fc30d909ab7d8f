"""
Waveform Sampler / 波形采样器

Canonical inputs shared by every engine (sine message, bit step function),
bit-string validation, and time-domain interpolation of sampled waveforms.
所有引擎共享的标准输入（正弦消息、比特阶跃函数）、比特串校验以及采样波形的时域插值。
"""

import numpy as np
from typing import List, Tuple

from .errors import InvalidInput, require_positive
from .signals import Point


def parse_bits(binary, max_bits=None) -> np.ndarray:
    """
    Validate a bit string and convert it to an array / 校验比特串并转换为数组

    Parameters / 参数:
    ----------------
    binary : str
        Sequence of '0'/'1' characters / 由'0'/'1'组成的字符串
    max_bits : int, optional
        Length ceiling; longer inputs are rejected / 长度上限

    Returns / 返回:
    -------------
    bits : np.ndarray (int8, 0/1)
        Read-only bit array / 只读比特数组
    """
    if not isinstance(binary, str):
        raise InvalidInput(f"bit sequence must be a string of '0'/'1', got {type(binary).__name__}")
    if len(binary) == 0:
        raise InvalidInput("bit sequence cannot be empty")
    if max_bits is not None and len(binary) > max_bits:
        raise InvalidInput(f"bit sequence longer than {max_bits} bits ({len(binary)})")

    raw = np.frombuffer(binary.encode('ascii', errors='replace'), dtype=np.uint8)
    bits = raw.astype(np.int8) - ord('0')
    if np.any((bits != 0) & (bits != 1)):
        raise InvalidInput("bit sequence must contain only '0' and '1'")

    bits.setflags(write=False)
    return bits


def analog_sine(frequency, amplitude, samples_per_second, duration) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sample ``amplitude * sin(2*pi*frequency*t)`` / 采样正弦消息信号

    Sample i sits at t = i / samples_per_second for i in [0, duration*sps).
    """
    require_positive('frequency', frequency)
    require_positive('amplitude', amplitude)

    total_samples = int(duration * samples_per_second)
    t = np.arange(total_samples) / samples_per_second
    y = amplitude * np.sin(2 * np.pi * frequency * t)
    return t, y


def digital_steps(bits, bit_duration, offset=0) -> Tuple[np.ndarray, np.ndarray]:
    """
    Render bits as a step function, two points per bit / 将比特渲染为阶跃函数

    Bit i contributes ((i+offset)*Tb, b) and ((i+offset+1)*Tb, b).
    """
    index = np.arange(len(bits)) + offset
    x = np.column_stack([index * bit_duration, (index + 1) * bit_duration]).ravel()
    y = np.repeat(np.asarray(bits, dtype=np.float64), 2)
    return x, y


def interpolate_at(xs, ys, times):
    """
    Linear interpolation of a sampled waveform / 采样波形的线性插值

    Queries outside [xs[0], xs[-1]] return the boundary value. Inside, the
    bracketing pair is found by binary search (np.searchsorted) and the
    value is interpolated linearly. A repeated x returns the left value.
    区间外返回边界值；区间内通过二分查找定位相邻点后线性插值。

    Parameters / 参数:
    ----------------
    xs : np.ndarray
        Sample times, ascending / 升序采样时刻
    ys : np.ndarray
        Sample values / 采样值
    times : float or np.ndarray
        Query time(s) / 查询时刻

    Returns / 返回:
    -------------
    values : float or np.ndarray
        Interpolated value(s), same shape as ``times`` / 插值结果
    """
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    query = np.asarray(times, dtype=np.float64)
    scalar = query.ndim == 0
    query = np.atleast_1d(query)

    if len(xs) < 2:
        fill = ys[0] if len(xs) else 0.0
        values = np.full_like(query, fill)
        return float(values[0]) if scalar else values

    # First index with xs[idx] >= t, kept inside [1, n-1]
    upper = np.clip(np.searchsorted(xs, query, side='left'), 1, len(xs) - 1)
    lower = upper - 1

    x1, x2 = xs[lower], xs[upper]
    y1, y2 = ys[lower], ys[upper]
    span = x2 - x1
    with np.errstate(divide='ignore', invalid='ignore'):
        ratio = np.where(span > 0, (query - x1) / np.where(span > 0, span, 1.0), 0.0)
    values = y1 + ratio * (y2 - y1)
    values = np.where(query == x2, y2, values)

    values = np.where(query <= xs[0], ys[0], values)
    values = np.where(query >= xs[-1], ys[-1], values)
    return float(values[0]) if scalar else values


def round_half_up(values):
    """Round to nearest integer, ties away from -inf / 四舍五入"""
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def snap_times(times, resolution):
    """Round sample instants to ``resolution`` seconds to stop float drift."""
    scale = 1.0 / resolution
    return round_half_up(np.asarray(times, dtype=np.float64) * scale) / scale


def to_points(x, y) -> List[Point]:
    """Pair two arrays into a list of Points / 将两个数组组合为Point列表"""
    return [Point(a, b) for a, b in zip(np.asarray(x, dtype=np.float64).tolist(),
                                        np.asarray(y, dtype=np.float64).tolist())]
