"""
Digital Modulation Module / 数字调制模块

Implements carrier keying of digital data: ASK, FSK, PSK, DPSK and the
multi-bit symbol schemes QPSK, OQPSK, 8-PSK, 16-QAM and 4-FSK.
实现数字数据的载波键控：ASK、FSK、PSK、DPSK 以及多比特符号方案
QPSK、OQPSK、8-PSK、16-QAM 和 4-FSK。
"""

import numpy as np
from typing import Tuple

from .errors import UnsupportedScheme
from .signals import DEFAULT_CONFIG, DigitalModulation, parse_scheme

# QPSK phase per 2-bit symbol (Gray order) / QPSK相位表（格雷码顺序）
# 00 → π/4, 01 → 3π/4, 10 → 7π/4, 11 → 5π/4
QPSK_PHASES = np.array([np.pi / 4, 3 * np.pi / 4, 7 * np.pi / 4, 5 * np.pi / 4])

# 16-QAM amplitude levels per 2-bit rail, normalized by 3 / 16-QAM每路电平
QAM_LEVELS = np.array([-3.0, -1.0, 1.0, 3.0]) / 3.0

MPSK_ORDER = 8


class DigitalModulator:
    """
    Digital-to-analog modulator / 数字-模拟调制器

    Binary schemes render one block of samples_per_bit + 1 points per bit.
    Symbol schemes zero-pad the bits to a whole number of symbols and render
    one block per symbol spanning bits_per_symbol * bit_duration seconds.
    二进制方案每比特一个波形块；符号方案补零后每符号一个波形块。

    Constellation mapping / 星座映射:
    ASK   : 1 → amplitude 1.0, 0 → 0.2 at 5 Hz
    FSK   : 1 → 7 Hz, 0 → 3 Hz
    PSK   : 1 → phase 0, 0 → phase π
    DPSK  : 0 adds π to the running phase, 1 keeps it
    MFSK  : 00/01/10/11 → 2/4/6/8 Hz
    QPSK  : see QPSK_PHASES
    OQPSK : I = first bit, Q = second bit (±1), Q delayed by half a symbol
    MPSK  : 3-bit value k → phase 2πk/8
    QAM   : bits 1-2 pick I level, bits 3-4 pick Q level
    """

    def __init__(self, config=DEFAULT_CONFIG):
        """
        Initialize modulator / 初始化调制器

        Parameters / 参数:
        ----------------
        config : SimulationConfig
            Bit timing, sampling density and carrier parameters
            比特时长、采样密度与载波参数
        """
        self.bit_duration = config.bit_duration
        self.samples_per_bit = config.samples_per_bit
        self.carrier_frequency = config.carrier_frequency
        self.ask_amplitudes = np.asarray(config.ask_amplitudes, dtype=np.float64)
        self.fsk_frequencies = np.asarray(config.fsk_frequencies, dtype=np.float64)
        self.mfsk_frequencies = np.asarray(config.mfsk_frequencies, dtype=np.float64)

        self._schemes = {
            DigitalModulation.ASK: self.ask,
            DigitalModulation.FSK: self.fsk,
            DigitalModulation.BFSK: self.fsk,
            DigitalModulation.PSK: self.psk,
            DigitalModulation.BPSK: self.psk,
            DigitalModulation.DPSK: self.dpsk,
            DigitalModulation.MFSK: self.mfsk,
            DigitalModulation.QPSK: self.qpsk,
            DigitalModulation.OQPSK: self.oqpsk,
            DigitalModulation.MPSK: self.mpsk,
            DigitalModulation.QAM: self.qam,
        }

    def modulate(self, bits, scheme, offset=0, initial_phase=0.0,
                 before=None, after=None) -> Tuple[np.ndarray, np.ndarray]:
        """
        Modulate bit stream onto the carrier / 将比特流调制到载波上

        Parameters / 参数:
        ----------------
        bits : np.ndarray (int, 0/1)
            Validated bit sequence / 已校验的比特序列
        scheme : DigitalModulation or str
            Keying scheme / 调制方案
        offset : int, default=0
            Index of bits[0] in the full stream; shifts the time axis
            bits[0]在完整比特流中的位置，用于平移时间轴
        initial_phase : float, default=0.0
            Running DPSK phase before bits[0] / bits[0]之前的DPSK累积相位
        before, after : np.ndarray, optional
            Stream bits outside ``bits``; OQPSK uses the adjacent symbols
            窗口外的比特，OQPSK用于衔接相邻符号

        Returns / 返回:
        -------------
        x, y : np.ndarray
            Time (s) and carrier amplitude / 时间与载波幅度
        """
        scheme = parse_scheme(DigitalModulation, scheme)
        bits = np.asarray(bits)
        if scheme is DigitalModulation.DPSK:
            t, y = self.dpsk(bits, offset, initial_phase)
        elif scheme is DigitalModulation.OQPSK:
            t, y = self.oqpsk(bits, offset, before, after)
        else:
            t, y = self._schemes[scheme](bits, offset)
        return t.ravel(), y.ravel()

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _grid(self, n_symbols, bits_per_symbol, offset):
        # (n_symbols, samples_per_symbol + 1) sample instants, endpoints shared
        symbol_duration = bits_per_symbol * self.bit_duration
        samples_per_symbol = bits_per_symbol * self.samples_per_bit
        base = offset * self.bit_duration + np.arange(n_symbols) * symbol_duration
        step = symbol_duration / samples_per_symbol
        return base[:, None] + np.arange(samples_per_symbol + 1)[None, :] * step

    @staticmethod
    def _symbols(bits, bits_per_symbol):
        """Zero-pad and pack bits MSB-first into symbol values / 补零并按高位在前打包为符号"""
        remainder = len(bits) % bits_per_symbol
        if remainder:
            bits = np.concatenate([bits, np.zeros(bits_per_symbol - remainder, dtype=bits.dtype)])
        weights = 1 << np.arange(bits_per_symbol - 1, -1, -1)
        return bits.reshape(-1, bits_per_symbol).astype(int) @ weights

    def _carrier(self, t, phase=0.0):
        return np.sin(2 * np.pi * self.carrier_frequency * t + phase)

    # ── Binary keying ────────────────────────────────────────────────────────

    def ask(self, bits, offset=0):
        t = self._grid(len(bits), 1, offset)
        amplitude = self.ask_amplitudes[bits.astype(int)][:, None]
        return t, amplitude * self._carrier(t)

    def fsk(self, bits, offset=0):
        t = self._grid(len(bits), 1, offset)
        frequency = self.fsk_frequencies[bits.astype(int)][:, None]
        return t, np.sin(2 * np.pi * frequency * t)

    def psk(self, bits, offset=0):
        t = self._grid(len(bits), 1, offset)
        phase = np.where(bits == 1, 0.0, np.pi)[:, None]
        return t, self._carrier(t, phase)

    def dpsk(self, bits, offset=0, initial_phase=0.0):
        t = self._grid(len(bits), 1, offset)
        # Phase state persists across bits: every 0 adds π
        phase = initial_phase + np.pi * np.cumsum(bits == 0)
        return t, self._carrier(t, phase[:, None])

    # ── Multi-bit symbols ────────────────────────────────────────────────────

    def mfsk(self, bits, offset=0):
        symbols = self._symbols(bits, 2)
        t = self._grid(len(symbols), 2, offset)
        frequency = self.mfsk_frequencies[symbols][:, None]
        return t, np.sin(2 * np.pi * frequency * t)

    def qpsk(self, bits, offset=0):
        symbols = self._symbols(bits, 2)
        t = self._grid(len(symbols), 2, offset)
        return t, self._carrier(t, QPSK_PHASES[symbols][:, None])

    def mpsk(self, bits, offset=0):
        symbols = self._symbols(bits, 3)
        t = self._grid(len(symbols), 3, offset)
        phase = 2 * np.pi * symbols / MPSK_ORDER
        return t, self._carrier(t, phase[:, None])

    def qam(self, bits, offset=0):
        symbols = self._symbols(bits, 4)
        t = self._grid(len(symbols), 4, offset)
        in_phase = QAM_LEVELS[symbols >> 2][:, None]
        quadrature = QAM_LEVELS[symbols & 0b11][:, None]
        omega_t = 2 * np.pi * self.carrier_frequency * t
        return t, in_phase * np.cos(omega_t) + quadrature * np.sin(omega_t)

    def _rails(self, bits):
        # (I, Q) = (±1, ±1) per 2-bit symbol, first bit on I
        symbols = self._symbols(bits, 2)
        return np.where(np.column_stack([symbols >> 1, symbols & 1]) == 1, 1.0, -1.0)

    def oqpsk(self, bits, offset=0, before=None, after=None):
        """
        Offset QPSK / 偏移QPSK

        The Q rail is delayed by half a symbol, so I and Q never switch at the
        same instant and phase jumps stay within 90°. The sample loop tracks
        the I and Q symbol indices separately; a rail outside the stream
        contributes 0.
        Q路延迟半个符号，I、Q不会同时跳变，相位跳变不超过90°。

        Parameters / 参数:
        ----------------
        bits : np.ndarray (int, 0/1)
            Bits to render, starting on a symbol boundary / 待渲染比特
        offset : int, default=0
            Index of bits[0] in the full stream / bits[0]在完整比特流中的位置
        before, after : np.ndarray, optional
            Stream bits left and right of ``bits``. The symbol before still
            drives Q for the first half symbol; with bits after, the half
            symbol tail is left to the next window and only the shared
            endpoint is drawn. 窗口两侧的比特，用于衔接完整波形。
        """
        rails = self._rails(bits)
        n_symbols = len(rails)
        edge = np.zeros((1, 2))
        lead = self._rails(before[-2:]) if before is not None and len(before) else edge
        trail = self._rails(after[:2]) if after is not None and len(after) else None
        # Rows -1 and n of the rail table hold the neighbouring symbols
        table = np.vstack([lead, rails, edge if trail is None else trail])

        samples_per_symbol = 2 * self.samples_per_bit
        half_symbol = self.samples_per_bit
        symbol_duration = 2 * self.bit_duration
        tail = half_symbol if trail is None else 0

        sample = np.arange(n_symbols * samples_per_symbol + tail + 1)
        t = (offset * self.bit_duration
             + (sample // samples_per_symbol) * symbol_duration
             + (sample % samples_per_symbol) * (symbol_duration / samples_per_symbol))

        i_index = sample // samples_per_symbol
        q_index = (sample - half_symbol) // samples_per_symbol

        omega_t = 2 * np.pi * self.carrier_frequency * t
        y = table[i_index + 1, 0] * np.cos(omega_t) + table[q_index + 1, 1] * np.sin(omega_t)
        return t, y

    # ── Constellations ───────────────────────────────────────────────────────

    def get_constellation(self, scheme) -> Tuple[np.ndarray, np.ndarray]:
        """
        Return ideal constellation points / 返回理想星座图点

        Point k belongs to symbol value k. Frequency keying has no
        constellation.

        Returns / 返回:
        -------------
        constellation : tuple (i_points, q_points)
            I and Q coordinates / 星座点的I、Q坐标
        """
        scheme = parse_scheme(DigitalModulation, scheme)
        if scheme is DigitalModulation.ASK:
            return self.ask_amplitudes.copy(), np.zeros(2)
        if scheme in (DigitalModulation.PSK, DigitalModulation.BPSK, DigitalModulation.DPSK):
            # Symbol 0 carries phase π, symbol 1 phase 0
            phases = np.array([np.pi, 0.0])
        elif scheme is DigitalModulation.QPSK:
            phases = QPSK_PHASES
        elif scheme is DigitalModulation.MPSK:
            phases = 2 * np.pi * np.arange(MPSK_ORDER) / MPSK_ORDER
        elif scheme is DigitalModulation.OQPSK:
            values = np.arange(4)
            return np.where(values >> 1, 1.0, -1.0), np.where(values & 1, 1.0, -1.0)
        elif scheme is DigitalModulation.QAM:
            values = np.arange(16)
            return QAM_LEVELS[values >> 2], QAM_LEVELS[values & 0b11]
        else:
            raise UnsupportedScheme(f"{scheme.value} has no phase/amplitude constellation")
        return np.cos(phases), np.sin(phases)
