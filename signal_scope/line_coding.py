"""
Line Coding Module / 线路编码模块

Maps a bit sequence directly onto voltage levels (no carrier).
将比特序列直接映射为电压电平（无载波）。
"""

import numpy as np
from typing import Tuple

from .signals import DEFAULT_CONFIG, LineCoding, parse_scheme


class LineEncoder:
    """
    Digital-to-digital line encoder / 数字-数字线路编码器

    Every scheme is one left-to-right pass over the bits. State lives only
    inside a single encode() call, so one encoder may serve many callers.
    每种方案对比特进行一次从左到右的扫描，状态只存在于单次调用内部。

    Voltage mapping / 电压映射:
    NRZ-L          : 0 → +1, 1 → -1
    NRZ-I          : level inverts on every 1 / 遇1翻转
    Manchester     : 0 → high-to-low at mid-bit, 1 → low-to-high
    Diff Manchester: always inverts at mid-bit, also at bit start iff bit = 0
    AMI            : 0 → 0 V, 1 → alternating +1/-1
    Pseudoternary  : 1 → 0 V, 0 → alternating +1/-1
    B8ZS           : AMI, eight zeros → 000VB0VB
    HDB3           : AMI, four zeros → 000V or B00V
    """

    def __init__(self, config=DEFAULT_CONFIG):
        """
        Parameters / 参数:
        ----------------
        config : SimulationConfig
            Supplies bit_duration (seconds per bit) / 提供比特时长
        """
        self.bit_duration = config.bit_duration
        self._schemes = {
            LineCoding.NRZ_L: self.nrz_l,
            LineCoding.NRZ_I: self.nrz_i,
            LineCoding.MANCHESTER: self.manchester,
            LineCoding.DIFF_MANCHESTER: self.differential_manchester,
            LineCoding.AMI: self.ami,
            LineCoding.PSEUDOTERNARY: self.pseudoternary,
            LineCoding.B8ZS: self.b8zs,
            LineCoding.HDB3: self.hdb3,
        }

    def encode(self, bits, scheme) -> Tuple[np.ndarray, np.ndarray]:
        """
        Encode bits with the selected scheme / 按所选方案编码

        Parameters / 参数:
        ----------------
        bits : np.ndarray (int, 0/1)
            Validated bit sequence / 已校验的比特序列
        scheme : LineCoding or str
            Line code selector / 线路编码选择器

        Returns / 返回:
        -------------
        x, y : np.ndarray
            Time (s) and voltage of the line signal / 线路信号的时间与电压
        """
        scheme = parse_scheme(LineCoding, scheme)
        return self._schemes[scheme](np.asarray(bits))

    # ── Segment rendering ────────────────────────────────────────────────────

    def _flat(self, voltages):
        # One flat segment (start, end) per bit
        index = np.arange(len(voltages))
        x = np.column_stack([index, index + 1]).ravel() * self.bit_duration
        y = np.repeat(np.asarray(voltages, dtype=np.float64), 2)
        return x, y

    def _split(self, first_half, second_half):
        # Four points per bit: start, mid, mid, end
        index = np.arange(len(first_half))
        x = np.column_stack([index, index + 0.5, index + 0.5, index + 1]).ravel() * self.bit_duration
        y = np.column_stack([first_half, first_half, second_half, second_half]).ravel()
        return x, y.astype(np.float64)

    @staticmethod
    def _alternate(marks):
        # Marks take +1, -1, +1, ... in order; everything else sits at 0 V
        count = np.cumsum(marks)
        return np.where(marks, np.where(count % 2 == 1, 1.0, -1.0), 0.0)

    # ── Unipolar / polar codes ───────────────────────────────────────────────

    def nrz_l(self, bits):
        return self._flat(np.where(bits == 0, 1.0, -1.0))

    def nrz_i(self, bits):
        # Level starts at +1 and has flipped once per 1 seen so far
        return self._flat(np.where(np.cumsum(bits) % 2 == 1, -1.0, 1.0))

    def manchester(self, bits):
        first = np.where(bits == 0, 1.0, -1.0)
        return self._split(first, -first)

    def differential_manchester(self, bits):
        # Flips before the first half of bit i: every 0 up to and including
        # bit i, plus one mid-bit flip for each earlier bit.
        flips = np.cumsum(bits == 0) + np.arange(len(bits))
        first = np.where(flips % 2 == 1, -1.0, 1.0)
        return self._split(first, -first)

    # ── Bipolar codes ────────────────────────────────────────────────────────

    def ami(self, bits):
        return self._flat(self._alternate(bits == 1))

    def pseudoternary(self, bits):
        return self._flat(self._alternate(bits == 0))

    def b8zs(self, bits):
        """
        Bipolar with 8-zero substitution / 八零替换双极性码

        Eight zeros starting at i become [0, 0, 0, V, B, 0, V, B] where V
        repeats the last mark's polarity and B = -V. The run check reads the
        original bits, and the scan resumes after the substituted group.
        """
        n = len(bits)
        voltages = np.zeros(n)
        last_polarity = -1.0
        i = 0
        while i < n:
            if i + 8 <= n and not bits[i:i + 8].any():
                violation, bipolar = last_polarity, -last_polarity
                voltages[i:i + 8] = [0, 0, 0, violation, bipolar, 0, violation, bipolar]
                last_polarity = bipolar
                i += 8
                continue
            if bits[i] == 1:
                last_polarity = -last_polarity
                voltages[i] = last_polarity
            i += 1
        return self._flat(voltages)

    def hdb3(self, bits):
        """
        High density bipolar 3 / 三阶高密度双极性码

        Four zeros become 000V when the marks since the last substitution are
        even, otherwise B00V with B = -(last polarity) and V = B.
        """
        n = len(bits)
        voltages = np.zeros(n)
        last_polarity = -1.0
        marks = 0
        i = 0
        while i < n:
            if i + 4 <= n and not bits[i:i + 4].any():
                if marks % 2 == 0:
                    voltages[i + 3] = last_polarity
                else:
                    last_polarity = -last_polarity
                    voltages[i] = voltages[i + 3] = last_polarity
                marks = 0
                i += 4
                continue
            if bits[i] == 1:
                last_polarity = -last_polarity
                voltages[i] = last_polarity
                marks += 1
            i += 1
        return self._flat(voltages)
