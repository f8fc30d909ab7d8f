"""
Signal Conversion Simulation / 信号转换仿真

Runs one transformation (line coding, digital modulation, analog-to-digital,
analog modulation) and renders its input, transmitted and output waveforms,
or runs the performance benchmark.
运行一种变换（线路编码、数字调制、模数转换、模拟调制）并绘制输入、发送和输出波形，
或运行性能基准测试。

Usage / 用法:
    python simulate.py line-code 0110000000011 --scheme B8ZS
    python simulate.py modulate 10110010 --scheme QPSK
    python simulate.py a2d --frequency 2 --amplitude 1 --pcm 10 16
    python simulate.py a2d --frequency 2 --amplitude 1 --delta 20 0.2
    python simulate.py a2a --frequency 1 --amplitude 1 --scheme FM
    python simulate.py benchmark --sizes 100 500
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

import matplotlib.pyplot as plt

from signal_scope import (
    DeltaModulationConfig,
    PCMConfig,
    SignalError,
    SignalResult,
    analog_modulate,
    analog_to_digital,
    calculate_practical_snr,
    digital_modulate,
    line_code,
    points_to_arrays,
    reconstruction_error,
)
from signal_scope.benchmark import INPUT_SIZES, format_report, run_benchmarks

plt.rcParams['font.sans-serif'] = ['SimHei', 'DejaVu Sans']
plt.rcParams['axes.unicode_minus'] = False

logger = logging.getLogger(__name__)

OUTPUT_DIR = "generated"


# ==========================================
# Rendering / 绘图
# ==========================================

def plot_signal_result(result: SignalResult, title: str, filename: str,
                       output_dir: str = OUTPUT_DIR,
                       step_transmitted: bool = False) -> str:
    """
    Render input / transmitted / output as three stacked panels.
    将输入、发送、输出绘制为三个上下排列的子图。

    Returns / 返回:
    -------------
    path : str
        Path of the saved PNG / 保存的PNG路径
    """
    fig, axes = plt.subplots(3, 1, figsize=(12, 8), sharex=True)
    fig.suptitle(title, fontsize=14, fontweight='bold')

    panels = [
        (result.input, "Input / 输入", 'tab:blue'),
        (result.transmitted, "Transmitted / 发送", 'tab:red'),
        (result.output, "Output / 输出", 'tab:green'),
    ]
    for ax, (points, label, color) in zip(axes, panels):
        x, y = points_to_arrays(points)
        if step_transmitted and points is result.transmitted:
            ax.step(x, y, where='post', color=color)
        else:
            ax.plot(x, y, color=color)
        ax.set_ylabel(label)
        ax.grid(True, alpha=0.3)
    axes[-1].set_xlabel("Time (s) / 时间(秒)")

    plt.tight_layout()
    path = os.path.join(output_dir, filename)
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path


def print_summary(result: SignalResult, title: str) -> None:
    print(f"\n{'='*60}")
    print(title)
    print(f"{'='*60}")
    print(f"  {'Input points':<30} {len(result.input):>12}")
    print(f"  {'Transmitted points':<30} {len(result.transmitted):>12}")
    print(f"  {'Output points':<30} {len(result.output):>12}")
    print(f"  {'Calculation time (ms)':<30} {result.calculation_time:>12.3f}")


# ==========================================
# Commands / 命令
# ==========================================

def run_line_code(args) -> str:
    result = line_code(args.bits, args.scheme)
    title = f"Line Coding: {args.scheme}  bits={args.bits}"
    print_summary(result, title)
    return plot_signal_result(result, title, f"line_code_{_slug(args.scheme)}.png",
                              args.output_dir)


def run_modulate(args) -> str:
    result = digital_modulate(args.bits, args.scheme, args.start_bit, args.end_bit)
    title = f"Digital Modulation: {args.scheme}  bits={args.bits}"
    print_summary(result, title)
    return plot_signal_result(result, title, f"modulate_{_slug(args.scheme)}.png",
                              args.output_dir)


def run_a2d(args) -> str:
    if args.pcm:
        config = PCMConfig(sampling_rate=float(args.pcm[0]), quantization_levels=int(args.pcm[1]))
    else:
        config = DeltaModulationConfig(sampling_rate=float(args.delta[0]),
                                       delta_step_ratio=float(args.delta[1]))
    result = analog_to_digital(args.frequency, args.amplitude, config)
    title = f"Analog to Digital: {config.algorithm}  f={args.frequency}Hz A={args.amplitude}"
    print_summary(result, title)

    # Original message at the output instants = output - error
    error = reconstruction_error(result)
    _, reconstructed = points_to_arrays(result.output)
    snr = calculate_practical_snr(reconstructed - error, error)
    print(f"  {'Max reconstruction error':<30} {abs(error).max():>12.4f}")
    print(f"  {'Reconstruction SNR (dB)':<30} {snr:>12.2f}")
    return plot_signal_result(result, title, f"a2d_{_slug(config.algorithm)}.png", args.output_dir,
                              step_transmitted=True)


def run_a2a(args) -> str:
    result = analog_modulate(args.frequency, args.amplitude, args.scheme)
    title = f"Analog Modulation: {args.scheme}  f={args.frequency}Hz A={args.amplitude}"
    print_summary(result, title)
    return plot_signal_result(result, title, f"a2a_{_slug(args.scheme)}.png",
                              args.output_dir)


def run_benchmark(args) -> None:
    results = run_benchmarks(sizes=args.sizes, seed=args.seed)
    print("\nBenchmark Results / 基准测试结果:")
    print(format_report(results))


def _slug(label: str) -> str:
    return label.lower().replace(' ', '_').replace('-', '_')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Signal conversion simulation / 信号转换仿真")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--output-dir", default=OUTPUT_DIR, help="directory for PNG output")
    commands = parser.add_subparsers(dest="command", required=True)

    p = commands.add_parser("line-code", help="digital → digital line coding")
    p.add_argument("bits")
    p.add_argument("--scheme", default="NRZ-L")
    p.set_defaults(func=run_line_code)

    p = commands.add_parser("modulate", help="digital → analog modulation")
    p.add_argument("bits")
    p.add_argument("--scheme", default="ASK")
    p.add_argument("--start-bit", type=int, default=None)
    p.add_argument("--end-bit", type=int, default=None)
    p.set_defaults(func=run_modulate)

    p = commands.add_parser("a2d", help="analog → digital conversion")
    p.add_argument("--frequency", type=float, default=2.0)
    p.add_argument("--amplitude", type=float, default=1.0)
    scheme = p.add_mutually_exclusive_group(required=True)
    scheme.add_argument("--pcm", nargs=2, type=float, metavar=("RATE", "LEVELS"))
    scheme.add_argument("--delta", nargs=2, type=float, metavar=("RATE", "STEP_RATIO"))
    p.set_defaults(func=run_a2d)

    p = commands.add_parser("a2a", help="analog → analog modulation")
    p.add_argument("--frequency", type=float, default=1.0)
    p.add_argument("--amplitude", type=float, default=1.0)
    p.add_argument("--scheme", default="AM")
    p.set_defaults(func=run_a2a)

    p = commands.add_parser("benchmark", help="time every transformation")
    p.add_argument("--sizes", type=int, nargs="+", default=list(INPUT_SIZES))
    p.add_argument("--seed", type=int, default=0)
    p.set_defaults(func=run_benchmark)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    os.makedirs(args.output_dir, exist_ok=True)

    logger.debug("Running %s", args.command)
    try:
        path = args.func(args)
    except SignalError as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"Error / 错误: {e}", file=sys.stderr)
        return 2

    if path:
        print(f"  Saved / 已保存: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
