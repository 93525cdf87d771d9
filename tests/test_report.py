import io

from mrconee import read_mrconee, print_mrconee_data
from mrconee.enum import IntegerWidth


def render(data):
    out = io.StringIO()
    print_mrconee_data(data, out=out)

    return out.getvalue().splitlines()


def test_report_summary(builder):
    lines = render(read_mrconee(builder.build()))

    assert lines[0] == ''
    assert lines[1].split() == ['size', 'of', 'integers', 'in', 'DIRAC', '4', 'bytes']
    assert lines[2].split()[-1] == '4'
    assert lines[3].split()[-2:] == ['9.250000000000', 'a.u.']
    assert lines[4].split()[-2:] == ['-108.500000000000', 'a.u.']
    assert lines[5].split()[-1] == 'complex'
    assert lines[6].split()[-1] == 'yes'
    assert lines[7].split()[-1] == 'C1'
    assert lines[8].split()[-1] == 'n/a'
    assert lines[9].split()[-1] == '2'


def test_report_spinors(builder):
    lines = render(read_mrconee(builder.build()))

    start = lines.index(' spinors info:')
    rows = lines[start + 4:start + 8]

    assert [_.split() for _ in rows] == [
        ['1', 'A_a', '1', '-1.00000000'],
        ['2', 'A_b', '1', '-0.50000000'],
        ['3', 'A_a', '0', '0.25000000'],
        ['4', 'A_b', '0', '0.75000000'],
    ]
    assert lines[start + 8].startswith(' ----')


def test_report_columns(builder):
    """Every spinor row has the same width: index, irrep, occupation, energy."""
    lines = render(read_mrconee(builder.build()))

    start = lines.index(' spinors info:')
    for row in lines[start + 4:start + 8]:
        assert len(row) == 1 + 4 + 12 + 8 + 25


def test_report_8_byte_integers(make_builder):
    builder = make_builder(IntegerWidth.EIGHT)
    builder.spinfree = 0
    builder.inversion_symmetry = 2
    builder.fermion_irrep_names = ['E1g', 'E1u']
    builder.num_active = [1, 1]
    builder.abelian_irrep_names = ['  AG', '  AU', '  ag', '  au']
    builder.multiplication_table = [[i ^ j for j in range(4)] for i in range(4)]
    builder.spinors = [(1, 1, -1.0), (2, 2, -0.7), (1, 1, -0.3), (2, 2, 0.1)]

    lines = render(read_mrconee(builder.build()))

    assert lines[1].split()[-2:] == ['8', 'bytes']
    assert lines[6].split()[-1] == 'no'
    assert lines[7].split()[-1] == 'Ci'
    assert lines[8].split()[-1] == 'ag'
    assert lines[9].split()[-1] == '4'
