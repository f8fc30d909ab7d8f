"""
Uniform Quantization Module / 均匀量化模块

Implements the mid-tread uniform quantizer used by PCM.
实现PCM所用的中平型(mid-tread)均匀量化器。
"""

import numpy as np

from .errors import InvalidParameter, require_positive
from .waveform import round_half_up


class UniformQuantizer:
    """
    Uniform Quantizer / 均匀量化器

    Maps amplitudes in [-v_max, v_max] onto num_levels evenly spaced levels
    that include both endpoints. The input is normalized to [0, 1] and
    rounded to the nearest level index in [0, num_levels - 1].

    将[-v_max, v_max]内的幅度映射到包含两个端点的num_levels个等间距电平。
    输入先归一化到[0, 1]，再四舍五入到最近的电平索引。
    """

    def __init__(self, num_levels, v_max):
        """
        Initialize uniform quantizer / 初始化均匀量化器

        Parameters / 参数:
        ----------------
        num_levels : int
            Number of quantization levels L (>= 2) / 量化电平数L
        v_max : float
            Peak amplitude (> 0) / 信号峰值幅度
        """
        if num_levels < 2:
            raise InvalidParameter(f"quantization_levels must be >= 2, got {num_levels}")
        require_positive('amplitude', v_max)

        self.num_levels = int(num_levels)
        self.v_max = float(v_max)
        # Step size / 量化步长
        self.delta = (2 * self.v_max) / (self.num_levels - 1)

    def quantize(self, signal):
        """
        Quantize input signal / 对输入信号进行量化

        Parameters / 参数:
        ----------------
        signal : np.ndarray
            Input analog samples / 输入模拟采样值

        Returns / 返回:
        -------------
        quantized_signal : np.ndarray
            Reconstruction levels / 重建电平
        level_indices : np.ndarray
            Integer level indices [0, L-1] / 量化电平索引
        """
        signal = np.asarray(signal, dtype=np.float64)

        normalized = (signal / self.v_max + 1) * 0.5
        level_indices = round_half_up(normalized * (self.num_levels - 1)).astype(int)
        level_indices = np.clip(level_indices, 0, self.num_levels - 1)

        return self.dequantize(level_indices), level_indices

    def dequantize(self, level_indices):
        """
        Reconstruct signal from level indices / 从电平索引重建信号

        Level k maps back to (k / (L-1) * 2 - 1) * v_max.
        """
        level_indices = np.asarray(level_indices, dtype=np.float64)
        return (level_indices / (self.num_levels - 1) * 2 - 1) * self.v_max
