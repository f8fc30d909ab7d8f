"""
Analog-to-Digital Converter / 模数转换器

Samples the analog message at a configured rate and encodes it with PCM or
delta modulation, then rebuilds the receiver-side approximation.
按设定速率对模拟消息采样，使用PCM或增量调制编码，并重建接收端近似信号。
"""

import numpy as np

from .errors import UnsupportedScheme
from .quantizer import UniformQuantizer
from .signals import DEFAULT_CONFIG, DeltaModulationConfig, PCMConfig
from .waveform import analog_sine, interpolate_at, snap_times


class ADConverter:
    """
    ADC with PCM and delta modulation back ends / 支持PCM与增量调制的模数转换器

    Both schemes share one skeleton: generate the sine message, pick sample
    instants every 1/sampling_rate seconds from 0 through the message's last
    timestamp, interpolate the message there, encode, reconstruct.
    两种方案共用同一流程：生成正弦消息、按采样间隔取样、插值、编码、重建。

    Each method returns three (x, y) array pairs: input, transmitted, output.
    """

    def __init__(self, config=DEFAULT_CONFIG):
        """
        Parameters / 参数:
        ----------------
        config : SimulationConfig
            Message duration, message sampling density, time rounding and
            delta-modulation clamp / 消息时长、采样密度、时间取整与增量调制限幅
        """
        self.duration = config.duration
        self.samples_per_second = config.adc_samples_per_second
        self.time_resolution = config.time_resolution
        self.clamp_ratio = config.dm_clamp_ratio
        self.hold_offset = config.dm_hold_offset

    def convert(self, frequency, amplitude, config):
        """Dispatch on the config type / 按配置类型分派"""
        if isinstance(config, PCMConfig):
            return self.pcm(frequency, amplitude, config)
        if isinstance(config, DeltaModulationConfig):
            return self.delta_modulation(frequency, amplitude, config)
        raise UnsupportedScheme(f"no analog-to-digital scheme for {type(config).__name__}")

    def message(self, frequency, amplitude):
        return analog_sine(frequency, amplitude, self.samples_per_second, self.duration)

    def sample_times(self, end_time, sampling_rate):
        """
        Sample instants i / sampling_rate for every i with t <= end_time,
        rounded to the time resolution / 采样时刻（按时间分辨率取整）
        """
        interval = 1.0 / sampling_rate
        raw = np.arange(int(end_time // interval) + 2) * interval
        return snap_times(raw[raw <= end_time], self.time_resolution)

    def pcm(self, frequency, amplitude, config):
        """
        Pulse code modulation / 脉冲编码调制

        transmitted carries the quantization index, output the value rebuilt
        from it. 发送信号为量化索引，输出为由索引重建的幅度。
        """
        config.validate()
        t_in, y_in = self.message(frequency, amplitude)
        quantizer = UniformQuantizer(config.quantization_levels, amplitude)

        times = self.sample_times(t_in[-1], config.sampling_rate)
        samples = interpolate_at(t_in, y_in, times)
        reconstructed, indices = quantizer.quantize(samples)

        return (t_in, y_in), (times, indices.astype(np.float64)), (times, reconstructed)

    def delta_modulation(self, frequency, amplitude, config):
        """
        Delta modulation / 增量调制

        One bit per sample: 1 if the message exceeds the running
        approximation, else 0. The approximation then moves by ±delta and is
        clamped to ±clamp_ratio * amplitude. The output is a staircase that
        holds the previous level until hold_offset before each step.
        每个采样输出1比特；近似值随后增减delta并限幅，输出为阶梯波形。
        """
        config.validate()
        t_in, y_in = self.message(frequency, amplitude)
        delta = amplitude * config.delta_step_ratio
        ceiling = self.clamp_ratio * amplitude

        times = self.sample_times(t_in[-1], config.sampling_rate)
        samples = interpolate_at(t_in, y_in, times)

        bits = np.zeros(len(times))
        out_x, out_y = [0.0], [0.0]
        approximation = 0.0
        for k, (t, value) in enumerate(zip(times.tolist(), samples.tolist())):
            bit = 1.0 if value > approximation else 0.0
            bits[k] = bit
            approximation += delta if bit else -delta
            approximation = max(-ceiling, min(ceiling, approximation))

            # Hold the previous level up to just before the step
            out_x.append(max(t - self.hold_offset, out_x[-1]))
            out_y.append(out_y[-1])
            out_x.append(t)
            out_y.append(approximation)

        out_x.append(float(t_in[-1]))
        out_y.append(out_y[-1])

        return (t_in, y_in), (times, bits), (np.array(out_x), np.array(out_y))
