"""
Tests for the simulate.py command-line driver.
"""

import matplotlib

matplotlib.use("Agg")

import pytest

import simulate


def run(tmp_path, *argv):
    return simulate.main(["--output-dir", str(tmp_path), *argv])


class TestCommands:

    def test_line_code(self, tmp_path, capsys):
        assert run(tmp_path, "line-code", "0110000000011", "--scheme", "B8ZS") == 0
        assert (tmp_path / "line_code_b8zs.png").exists()
        out = capsys.readouterr().out
        assert "Line Coding: B8ZS" in out
        assert "Saved" in out

    def test_modulate_window(self, tmp_path):
        bits = "1011001110" * 5
        assert run(tmp_path, "modulate", bits, "--scheme", "QPSK",
                   "--start-bit", "20", "--end-bit", "24") == 0
        assert (tmp_path / "modulate_qpsk.png").exists()

    def test_a2d_pcm(self, tmp_path, capsys):
        assert run(tmp_path, "a2d", "--frequency", "2", "--pcm", "10", "16") == 0
        assert (tmp_path / "a2d_pcm.png").exists()
        assert "Reconstruction SNR" in capsys.readouterr().out

    def test_a2d_delta(self, tmp_path):
        assert run(tmp_path, "a2d", "--delta", "20", "0.2") == 0
        assert (tmp_path / "a2d_delta_modulation.png").exists()

    def test_a2a(self, tmp_path):
        assert run(tmp_path, "a2a", "--scheme", "FM") == 0
        assert (tmp_path / "a2a_fm.png").exists()

    def test_benchmark(self, tmp_path, capsys):
        assert run(tmp_path, "benchmark", "--sizes", "4") == 0
        out = capsys.readouterr().out
        assert "Benchmark Results" in out
        assert "Differential Manchester" in out


class TestFailures:

    def test_bad_bits_exit_code(self, tmp_path, capsys):
        assert run(tmp_path, "line-code", "10x1") == 2
        assert "InvalidInput" in capsys.readouterr().err

    def test_bad_parameter_exit_code(self, tmp_path, capsys):
        assert run(tmp_path, "a2d", "--pcm", "10", "1") == 2
        assert "InvalidParameter" in capsys.readouterr().err

    def test_pcm_and_delta_are_exclusive(self, tmp_path):
        with pytest.raises(SystemExit):
            run(tmp_path, "a2d", "--pcm", "10", "16", "--delta", "10", "0.1")
