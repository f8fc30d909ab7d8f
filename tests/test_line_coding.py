"""
Tests for digital-to-digital line coding.
"""

import numpy as np
import pytest

from signal_scope import LineCoding, LineEncoder, SimulationConfig, line_code
from signal_scope.waveform import parse_bits

FLAT_SCHEMES = [
    LineCoding.NRZ_L,
    LineCoding.NRZ_I,
    LineCoding.AMI,
    LineCoding.PSEUDOTERNARY,
    LineCoding.B8ZS,
    LineCoding.HDB3,
]
SPLIT_SCHEMES = [LineCoding.MANCHESTER, LineCoding.DIFF_MANCHESTER]


def levels(result):
    """One voltage per bit for the two-points-per-bit codes."""
    return [p.y for p in result.transmitted[::2]]


def halves(result):
    """(first half, second half) voltages per bit for the Manchester family."""
    y = [p.y for p in result.transmitted]
    return list(zip(y[0::4], y[2::4]))


@pytest.fixture
def random_bits():
    rng = np.random.default_rng(7)
    return ''.join(rng.integers(0, 2, size=64).astype(str))


class TestShape:
    """Point counts and time coverage shared by every line code."""

    @pytest.mark.parametrize("scheme", FLAT_SCHEMES)
    def test_two_points_per_bit(self, scheme, random_bits):
        result = line_code(random_bits, scheme)
        assert len(result.transmitted) == 2 * len(random_bits)

    @pytest.mark.parametrize("scheme", SPLIT_SCHEMES)
    def test_four_points_per_bit(self, scheme, random_bits):
        result = line_code(random_bits, scheme)
        assert len(result.transmitted) == 4 * len(random_bits)

    @pytest.mark.parametrize("scheme", list(LineCoding))
    def test_duration_matches_input(self, scheme, random_bits):
        result = line_code(random_bits, scheme)
        assert result.transmitted[0].x == 0.0
        assert result.transmitted[-1].x == pytest.approx(len(random_bits))
        xs = [p.x for p in result.transmitted]
        assert all(a <= b for a, b in zip(xs, xs[1:]))

    @pytest.mark.parametrize("scheme", list(LineCoding))
    def test_output_equals_input(self, scheme):
        result = line_code("0110100", scheme)
        assert result.output == result.input
        assert len(result.input) == 14
        assert result.input[2] == (1.0, 1.0)

    def test_levels_are_bounded(self, random_bits):
        for scheme in LineCoding:
            result = line_code(random_bits, scheme)
            assert {p.y for p in result.transmitted} <= {-1.0, 0.0, 1.0}


class TestPolarCodes:

    def test_nrz_l(self):
        assert levels(line_code("0110", "NRZ-L")) == [1.0, -1.0, -1.0, 1.0]

    def test_nrz_i_inverts_on_ones(self):
        assert levels(line_code("1101", "NRZ-I")) == [-1.0, 1.0, 1.0, -1.0]

    def test_nrz_i_starts_high(self):
        assert levels(line_code("000", "NRZ-I")) == [1.0, 1.0, 1.0]

    def test_manchester_points(self):
        result = line_code("01", LineCoding.MANCHESTER)
        assert result.transmitted == [
            (0.0, 1.0), (0.5, 1.0), (0.5, -1.0), (1.0, -1.0),
            (1.0, -1.0), (1.5, -1.0), (1.5, 1.0), (2.0, 1.0),
        ]

    def test_differential_manchester(self):
        result = line_code("10", "Differential Manchester")
        assert halves(result) == [(1.0, -1.0), (1.0, -1.0)]

    def test_differential_manchester_zero_flips_at_start(self):
        assert halves(line_code("0", LineCoding.DIFF_MANCHESTER)) == [(-1.0, 1.0)]
        assert halves(line_code("00", LineCoding.DIFF_MANCHESTER)) == [(-1.0, 1.0), (-1.0, 1.0)]

    def test_differential_manchester_matches_stateful_walk(self, random_bits):
        level = 1.0
        expected = []
        for bit in random_bits:
            if bit == '0':
                level = -level
            expected.append((level, -level))
            level = -level
        assert halves(line_code(random_bits, LineCoding.DIFF_MANCHESTER)) == expected

    def test_manchester_always_transitions_mid_bit(self, random_bits):
        for scheme in SPLIT_SCHEMES:
            for first, second in halves(line_code(random_bits, scheme)):
                assert first == -second


class TestBipolarCodes:

    def test_ami(self):
        assert levels(line_code("10110", "AMI")) == [1.0, 0.0, -1.0, 1.0, 0.0]

    def test_pseudoternary(self):
        assert levels(line_code("01001", "Pseudoternary")) == [1.0, 0.0, -1.0, 1.0, 0.0]

    def test_ami_is_pseudoternary_of_complement(self, random_bits):
        complement = random_bits.translate(str.maketrans("01", "10"))
        ami = line_code(random_bits, LineCoding.AMI)
        pseudo = line_code(complement, LineCoding.PSEUDOTERNARY)
        assert ami.transmitted == pseudo.transmitted

    def test_ami_marks_alternate(self, random_bits):
        marks = [v for v in levels(line_code(random_bits, LineCoding.AMI)) if v != 0]
        assert all(a == -b for a, b in zip(marks, marks[1:]))


class TestB8ZS:

    def test_without_long_zero_run_equals_ami(self):
        assert (line_code("10110", LineCoding.B8ZS).transmitted
                == line_code("10110", LineCoding.AMI).transmitted)

    def test_eight_zeros_from_start(self):
        assert levels(line_code("00000000", "B8ZS")) == [0, 0, 0, -1, 1, 0, -1, 1]

    def test_eight_zeros_after_positive_mark(self):
        assert levels(line_code("100000000", "B8ZS")) == [1, 0, 0, 0, 1, -1, 0, 1, -1]

    def test_seven_zeros_are_not_substituted(self):
        assert levels(line_code("10000000", "B8ZS")) == [1, 0, 0, 0, 0, 0, 0, 0]

    def test_leftover_zero_after_substitution(self):
        assert levels(line_code("000000000", "B8ZS")) == [0, 0, 0, -1, 1, 0, -1, 1, 0]

    def test_consecutive_runs(self):
        assert levels(line_code("0" * 16, "B8ZS")) == [
            0, 0, 0, -1, 1, 0, -1, 1,
            0, 0, 0, 1, -1, 0, 1, -1,
        ]

    def test_mark_after_substitution_continues_alternation(self):
        # Last pulse of the group is B = +1, so the next mark is -1
        assert levels(line_code("000000001", "B8ZS"))[-1] == -1


class TestHDB3:

    def test_four_zeros_even_marks(self):
        assert levels(line_code("0000", "HDB3")) == [0, 0, 0, -1]

    def test_four_zeros_odd_marks(self):
        assert levels(line_code("10000", "HDB3")) == [1, -1, 0, 0, -1]

    def test_four_zeros_after_two_marks(self):
        assert levels(line_code("110000", "HDB3")) == [1, -1, 0, 0, 0, -1]

    def test_mark_count_resets_after_substitution(self):
        assert levels(line_code("00000000", "HDB3")) == [0, 0, 0, -1, 0, 0, 0, -1]

    def test_three_zeros_unchanged(self):
        assert levels(line_code("1000", "HDB3")) == [1, 0, 0, 0]

    def test_no_run_of_four_zero_volts(self, random_bits):
        stream = random_bits + "0" * 12 + random_bits
        volts = levels(line_code(stream, "HDB3"))
        run = 0
        for v in volts:
            run = run + 1 if v == 0 else 0
            assert run < 4


def test_encoder_accepts_custom_bit_duration():
    encoder = LineEncoder(SimulationConfig(bit_duration=0.5))
    x, y = encoder.encode(parse_bits("10"), LineCoding.MANCHESTER)
    assert x.tolist() == [0.0, 0.25, 0.25, 0.5, 0.5, 0.75, 0.75, 1.0]
    assert y.tolist() == [-1.0, -1.0, 1.0, 1.0, 1.0, 1.0, -1.0, -1.0]
