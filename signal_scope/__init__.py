"""
Signal Conversion Blocks / 信号转换模块集

This package contains the four classical data-transmission transformations
used in teaching computer communications: line coding, digital modulation,
analog-to-digital conversion and analog modulation. Every call produces the
original, transmitted and reconstructed waveforms.

本包包含计算机通信教学中的四类经典数据传输变换：线路编码、数字调制、
模数转换和模拟调制。每次调用都会生成原始、发送和重建三路波形。
"""

from .analog_modulator import AnalogModulator
from .converter import ADConverter
from .engine import analog_modulate, analog_to_digital, digital_modulate, line_code
from .errors import InvalidInput, InvalidParameter, SignalError, UnsupportedScheme
from .line_coding import LineEncoder
from .modulator import DigitalModulator
from .quantizer import UniformQuantizer
from .signals import (
    DEFAULT_CONFIG,
    AnalogModulation,
    DeltaModulationConfig,
    DigitalModulation,
    LineCoding,
    PCMConfig,
    Point,
    SignalResult,
    SimulationConfig,
)
from .utils import *

__all__ = [
    'line_code',
    'digital_modulate',
    'analog_to_digital',
    'analog_modulate',
    'LineEncoder',
    'DigitalModulator',
    'ADConverter',
    'UniformQuantizer',
    'AnalogModulator',
    'Point',
    'SignalResult',
    'LineCoding',
    'DigitalModulation',
    'AnalogModulation',
    'PCMConfig',
    'DeltaModulationConfig',
    'SimulationConfig',
    'DEFAULT_CONFIG',
    'SignalError',
    'InvalidParameter',
    'InvalidInput',
    'UnsupportedScheme',
    'points_to_arrays',
    'calculate_signal_power',
    'calculate_uniform_quantization_snr',
    'calculate_practical_snr',
    'reconstruction_error',
    'estimate_memory_usage',
]
