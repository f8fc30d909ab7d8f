"""
Performance Benchmark / 性能基准测试

Times every transformation over growing inputs and reports elapsed time,
wire size and point count. 在不同输入规模下对每种变换计时，并报告耗时、序列化大小与点数。
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

import numpy as np

from .engine import analog_modulate, analog_to_digital, digital_modulate, line_code
from .signals import (
    AnalogModulation,
    DeltaModulationConfig,
    DigitalModulation,
    LineCoding,
    PCMConfig,
)
from .utils import estimate_memory_usage

logger = logging.getLogger(__name__)

INPUT_SIZES = (100, 500, 1000, 5000, 10000)

# Fixed parameters for the analog families; input size is nominal there
ANALOG_FREQUENCY = 5.0
ANALOG_AMPLITUDE = 1.0
ADC_CONFIGS = (
    PCMConfig(sampling_rate=50.0, quantization_levels=16),
    DeltaModulationConfig(sampling_rate=50.0, delta_step_ratio=0.1),
)


@dataclass
class BenchmarkResult:
    """One timed run / 单次计时结果"""
    algorithm: str
    category: str
    input_size: int
    time_ms: float
    memory_used_bytes: int
    data_points_count: int


def random_bits(size, seed=None):
    """Random '0'/'1' string of the given length / 生成指定长度的随机比特串"""
    rng = np.random.default_rng(seed)
    return ''.join(rng.integers(0, 2, size=size).astype(str))


def _measure(algorithm, category, size, run) -> BenchmarkResult:
    result = run()
    return BenchmarkResult(
        algorithm=algorithm,
        category=category,
        input_size=size,
        time_ms=result.calculation_time,
        memory_used_bytes=estimate_memory_usage(result),
        data_points_count=len(result.transmitted),
    )


def run_benchmarks(sizes: Sequence[int] = INPUT_SIZES,
                   seed: Optional[int] = 0,
                   on_result: Optional[Callable[[BenchmarkResult], None]] = None,
                   on_progress: Optional[Callable[[str], None]] = None) -> List[BenchmarkResult]:
    """
    Run the full benchmark suite / 运行完整基准测试

    Parameters / 参数:
    ----------------
    sizes : sequence of int
        Bit counts for the digital families / 数字类方案的比特数
    seed : int, optional
        Seed for the random bit strings / 随机比特串种子
    on_result : callable, optional
        Called with each BenchmarkResult as it completes / 每完成一项时回调
    on_progress : callable, optional
        Called with a progress message before each run / 每项运行前回调进度信息

    Returns / 返回:
    -------------
    results : list of BenchmarkResult
    """
    results = []

    def record(item):
        results.append(item)
        if on_result is not None:
            on_result(item)

    def progress(message):
        logger.info(message)
        if on_progress is not None:
            on_progress(message)

    rng_seeds = np.random.SeedSequence(seed).spawn(len(sizes))
    for size, size_seed in zip(sizes, rng_seeds):
        bits = random_bits(size, size_seed)

        for scheme in LineCoding:
            progress(f"Testing {scheme.value} with {size} bits...")
            record(_measure(scheme.value, 'Digital-to-Digital', size,
                            lambda: line_code(bits, scheme)))

        for scheme in DigitalModulation:
            progress(f"Testing {scheme.value} with {size} bits...")
            record(_measure(scheme.value, 'Digital-to-Analog', size,
                            lambda: digital_modulate(bits, scheme)))

        for config in ADC_CONFIGS:
            progress(f"Testing {config.algorithm} with {size} factor...")
            record(_measure(config.algorithm, 'Analog-to-Digital', size,
                            lambda: analog_to_digital(ANALOG_FREQUENCY, ANALOG_AMPLITUDE, config)))

        for scheme in AnalogModulation:
            progress(f"Testing {scheme.value} with {size} factor...")
            record(_measure(scheme.value, 'Analog-to-Analog', size,
                            lambda: analog_modulate(ANALOG_FREQUENCY, ANALOG_AMPLITUDE, scheme)))

    progress("Benchmark Complete")
    return results


def format_report(results: Sequence[BenchmarkResult]) -> str:
    """Fixed-width table of benchmark results / 基准测试结果表"""
    header = (f"  {'Algorithm':<25} {'Category':<20} {'Size':>8} "
              f"{'Time (ms)':>12} {'Memory (B)':>12} {'Points':>10}")
    lines = [header, f"  {'-'*25} {'-'*20} {'-'*8} {'-'*12} {'-'*12} {'-'*10}"]
    for r in results:
        lines.append(f"  {r.algorithm:<25} {r.category:<20} {r.input_size:>8} "
                     f"{r.time_ms:>12.3f} {r.memory_used_bytes:>12} {r.data_points_count:>10}")
    return "\n".join(lines)
