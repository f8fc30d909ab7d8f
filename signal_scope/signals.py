"""
Signal Data Model / 信号数据模型

Points, results, scheme selectors and configuration shared by every engine.
所有引擎共享的采样点、结果、方案选择器与配置。
"""

import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, NamedTuple, Tuple, Type, TypeVar

from .errors import InvalidParameter, UnsupportedScheme, require_positive


class Point(NamedTuple):
    """One time-indexed sample: x in seconds, y level/voltage/symbol code."""
    x: float
    y: float


@dataclass
class SignalResult:
    """
    Result of one transformation / 一次变换的结果

    input       : waveform before the transformation / 变换前波形
    transmitted : encoded or modulated line signal / 编码或调制后的线路信号
    output      : receiver-side reconstruction / 接收端重建信号
    calculation_time : wall time of the call in milliseconds / 计算耗时(毫秒)
    """
    input: List[Point] = field(default_factory=list)
    transmitted: List[Point] = field(default_factory=list)
    output: List[Point] = field(default_factory=list)
    calculation_time: float = 0.0

    @classmethod
    def empty(cls) -> "SignalResult":
        return cls()

    @property
    def is_empty(self) -> bool:
        # Legacy failure marker: nothing in input and transmitted
        return not self.input and not self.transmitted

    def to_dict(self) -> Dict:
        return {
            'input': [{'x': p.x, 'y': p.y} for p in self.input],
            'transmitted': [{'x': p.x, 'y': p.y} for p in self.transmitted],
            'output': [{'x': p.x, 'y': p.y} for p in self.output],
            'calculation_time_ms': self.calculation_time,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "SignalResult":
        def points(key):
            return [Point(float(p['x']), float(p['y'])) for p in data.get(key, [])]

        return cls(
            input=points('input'),
            transmitted=points('transmitted'),
            output=points('output'),
            calculation_time=float(data.get('calculation_time_ms', 0.0)),
        )


# ==========================================
# Scheme selectors / 方案选择器
# ==========================================

class LineCoding(Enum):
    """Digital → digital line codes / 线路编码"""
    NRZ_L = "NRZ-L"
    NRZ_I = "NRZ-I"
    MANCHESTER = "Manchester"
    DIFF_MANCHESTER = "Differential Manchester"
    AMI = "AMI"
    PSEUDOTERNARY = "Pseudoternary"
    B8ZS = "B8ZS"
    HDB3 = "HDB3"


class DigitalModulation(Enum):
    """Digital → analog keying schemes / 数字调制方案"""
    ASK = "ASK"
    FSK = "FSK"
    PSK = "PSK"
    BFSK = "BFSK"
    MFSK = "MFSK"
    BPSK = "BPSK"
    DPSK = "DPSK"
    QPSK = "QPSK"
    OQPSK = "OQPSK"
    MPSK = "MPSK"
    QAM = "QAM"

    @property
    def bits_per_symbol(self) -> int:
        return _BITS_PER_SYMBOL.get(self, 1)


_BITS_PER_SYMBOL = {
    DigitalModulation.MFSK: 2,
    DigitalModulation.QPSK: 2,
    DigitalModulation.OQPSK: 2,
    DigitalModulation.MPSK: 3,
    DigitalModulation.QAM: 4,
}


class AnalogModulation(Enum):
    """Analog → analog carrier modulation / 模拟调制方案"""
    AM = "AM"
    FM = "FM"
    PM = "PM"


_ALIASES = {
    '4FSK': DigitalModulation.MFSK,
    '4_FSK': DigitalModulation.MFSK,
    '8PSK': DigitalModulation.MPSK,
    '8_PSK': DigitalModulation.MPSK,
    '16QAM': DigitalModulation.QAM,
    '16_QAM': DigitalModulation.QAM,
}

E = TypeVar('E', bound=Enum)


def _normalize(label: str) -> str:
    return label.strip().upper().replace('-', '_').replace(' ', '_')


def parse_scheme(enum_cls: Type[E], value) -> E:
    """
    Resolve a scheme selector / 解析方案选择器

    Accepts an enum member, its name ("NRZ_L") or its display label
    ("NRZ-L"), case-insensitively.

    Raises
    ------
    UnsupportedScheme
        If the value names no member of ``enum_cls``.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = _normalize(value)
        for member in enum_cls:
            if key == member.name or key == _normalize(member.value):
                return member
        alias = _ALIASES.get(key)
        if isinstance(alias, enum_cls):
            return alias
    raise UnsupportedScheme(f"{enum_cls.__name__} does not implement {value!r}")


# ==========================================
# Configuration / 配置
# ==========================================

@dataclass(frozen=True)
class PCMConfig:
    """Pulse code modulation parameters / 脉冲编码调制参数"""
    sampling_rate: float
    quantization_levels: int

    algorithm = "PCM"

    def validate(self) -> None:
        require_positive('sampling_rate', self.sampling_rate)
        levels = self.quantization_levels
        # Integral floats such as 16.0 are accepted; NaN and inf are not
        if (isinstance(levels, bool) or not isinstance(levels, numbers.Real)
                or not float(levels).is_integer() or levels < 2):
            raise InvalidParameter(f"quantization_levels must be an integer >= 2, got {levels!r}")


@dataclass(frozen=True)
class DeltaModulationConfig:
    """Delta modulation parameters / 增量调制参数"""
    sampling_rate: float
    delta_step_ratio: float

    algorithm = "Delta Modulation"

    def validate(self) -> None:
        require_positive('sampling_rate', self.sampling_rate)
        ratio = self.delta_step_ratio
        if isinstance(ratio, bool) or not isinstance(ratio, numbers.Real) or not 0 < ratio <= 1:
            raise InvalidParameter(
                f"delta_step_ratio must be in (0, 1], got {self.delta_step_ratio}")


@dataclass(frozen=True)
class SimulationConfig:
    """
    Engine-wide constants / 引擎常量

    Defaults reproduce the classroom visuals: 1 s bits drawn with 100 samples,
    a 5 Hz carrier, and a 2 s analog message.
    默认值对应教学演示：1秒比特、每比特100个采样点、5Hz载波、2秒模拟消息。
    """
    # Digital input / 数字输入
    bit_duration: float = 1.0
    samples_per_bit: int = 100
    max_bits: int = 100_000
    viewport_buffer: int = 10

    # Digital modulation / 数字调制
    carrier_frequency: float = 5.0
    ask_amplitudes: Tuple[float, float] = (0.2, 1.0)
    fsk_frequencies: Tuple[float, float] = (3.0, 7.0)
    mfsk_frequencies: Tuple[float, ...] = (2.0, 4.0, 6.0, 8.0)

    # Analog input / 模拟输入
    duration: float = 2.0
    analog_samples_per_second: int = 200
    adc_samples_per_second: int = 100

    # Analog modulation / 模拟调制
    carrier_ratio: float = 5.0
    am_modulation_index: float = 0.8
    fm_deviation_ratio: float = 0.5
    pm_phase_deviation: float = math.pi / 2

    # A/D conversion / 模数转换
    dm_clamp_ratio: float = 1.5
    dm_hold_offset: float = 0.001
    time_resolution: float = 1e-6

    def validate(self) -> "SimulationConfig":
        positive = {
            'bit_duration': self.bit_duration,
            'samples_per_bit': self.samples_per_bit,
            'max_bits': self.max_bits,
            'carrier_frequency': self.carrier_frequency,
            'duration': self.duration,
            'analog_samples_per_second': self.analog_samples_per_second,
            'adc_samples_per_second': self.adc_samples_per_second,
            'carrier_ratio': self.carrier_ratio,
            'time_resolution': self.time_resolution,
        }
        for name, value in positive.items():
            require_positive(name, value)
        if self.viewport_buffer < 0:
            raise InvalidParameter(f"viewport_buffer must be >= 0, got {self.viewport_buffer}")
        if len(self.mfsk_frequencies) != 4:
            raise InvalidParameter("mfsk_frequencies needs one frequency per 2-bit symbol (4)")
        return self


DEFAULT_CONFIG = SimulationConfig()
