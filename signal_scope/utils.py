"""
Utility Functions for Signal Simulation / 信号仿真工具函数

Signal power and SNR metrics, point/array conversion and result sizing.
信号功率与信噪比指标、采样点与数组转换以及结果大小估算。
"""

import json

import numpy as np

from .waveform import interpolate_at


def points_to_arrays(points):
    """
    Split a Point sequence into x and y arrays / 将Point序列拆分为x、y数组

    Returns / 返回:
    -------------
    x, y : np.ndarray (float64)
    """
    if len(points) == 0:
        return np.array([]), np.array([])
    data = np.asarray(points, dtype=np.float64)
    return data[:, 0], data[:, 1]


def calculate_signal_power(signal):
    """
    Calculate average signal power / 计算信号平均功率

    Formula: P = E[|x|²] = (1/N) * Σ|x[n]|²
    公式：功率 = 信号模值平方的均值
    """
    return float(np.mean(np.abs(np.asarray(signal)) ** 2))


def calculate_uniform_quantization_snr(num_levels, signal_power, v_max):
    """
    Calculate theoretical SNR for uniform quantization / 计算均匀量化的理论信噪比

    SNR = 6.02*R + 1.76 + 10*log10(σ_x²/V_max²) (dB), R = log2(L)
    对于电平数充足的均匀量化器，R为每采样等效比特数。

    Parameters / 参数:
    ----------------
    num_levels : int
        Number of quantization levels L / 量化电平数
    signal_power : float
        Signal power σ_x² / 信号功率
    v_max : float
        Peak signal amplitude / 信号峰值幅度

    Returns / 返回:
    -------------
    snr_db : float
        Signal-to-quantization-noise ratio in dB / 量化信噪比（分贝）
    """
    if signal_power <= 0:
        return -np.inf
    bit_depth = np.log2(num_levels)
    return float(6.02 * bit_depth + 1.76 + 10 * np.log10(signal_power / (v_max ** 2)))


def calculate_practical_snr(original_signal, noise_signal):
    """
    Calculate practical SNR from signals / 从信号计算实际信噪比

    SNR = 10 * log10(P_signal / P_noise)
    """
    signal_power = calculate_signal_power(original_signal)
    noise_power = calculate_signal_power(noise_signal)

    if noise_power <= 0:
        return np.inf
    return float(10 * np.log10(signal_power / noise_power))


def reconstruction_error(result):
    """
    Reconstruction error of an analog-to-digital result / 模数转换重建误差

    Compares every output point with the input waveform interpolated at the
    same instant. 将每个输出点与同一时刻插值得到的输入值比较。

    Returns / 返回:
    -------------
    error : np.ndarray
        output - input at each output instant / 各输出时刻的误差
    """
    in_x, in_y = points_to_arrays(result.input)
    out_x, out_y = points_to_arrays(result.output)
    return out_y - interpolate_at(in_x, in_y, out_x)


def estimate_memory_usage(result):
    """Size in bytes of the result's JSON wire form / 结果JSON序列化后的字节数"""
    return len(json.dumps(result.to_dict()).encode('utf-8'))
