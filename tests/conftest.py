import struct

import pytest

from mrconee.enum import IntegerWidth
from mrconee.meta import Endianess


class MrconeeBuilder(object):
    '''Writes synthetic MRCONEE files, record by record.

    The defaults describe a spin-free C1 molecule with 2 electrons in 4 spinors.'''

    def __init__(self, width=IntegerWidth.FOUR, endianess=Endianess.LITTLE_ENDIAN):
        self.width = width
        self.endianess = endianess

        self.num_spinors = 4
        self.breit = 0
        self.core_energy = 9.25
        self.inversion_symmetry = 1
        self.arithmetic = 2
        self.spinfree = 1
        self.num_orbitals_total = 6
        self.scf_energy = -108.5
        self.fermion_irrep_names = ['E1']
        self.num_active = [2]
        self.abelian_irrep_names = ['A  a', 'A  b']
        self.multiplication_table = [[0, 1], [1, 0]]
        self.spinors = [(1, 1, -1.0), (1, 2, -0.5), (1, 1, 0.25), (1, 2, 0.75)]
        self.fock = None

    def integers(self, values) -> bytes:
        return struct.pack('%s%d%s' % (self.endianess.prefix, len(values), self.width.format), *values)

    def reals(self, values) -> bytes:
        return struct.pack('%s%dd' % (self.endianess.prefix, len(values)), *values)

    def record(self, payload: bytes) -> bytes:
        marker = struct.pack('%si' % self.endianess.prefix, len(payload))
        return marker + payload + marker

    def header_payload(self) -> bytes:
        return (
            self.integers([self.num_spinors, self.breit]) +
            self.reals([self.core_energy]) +
            self.integers([self.inversion_symmetry, self.arithmetic, self.spinfree, self.num_orbitals_total]) +
            self.reals([self.scf_energy])
        )

    def fermion_irreps_payload(self) -> bytes:
        invsym = self.inversion_symmetry
        return (
            self.integers([len(self.fermion_irrep_names)]) +
            b''.join(_.ljust(14).encode('latin1') for _ in self.fermion_irrep_names) +
            self.integers(self.num_active) +
            self.integers([self.num_orbitals_total // invsym] * invsym) +
            self.integers([0] * invsym) +
            self.integers([0] * invsym) +
            self.integers([0] * invsym) +
            self.integers([0] * invsym)
        )

    def abelian_irreps_payload(self) -> bytes:
        return (
            self.integers([len(self.abelian_irrep_names) // 2]) +
            b''.join(_.encode('latin1') for _ in self.abelian_irrep_names)
        )

    def multiplication_table_payload(self) -> bytes:
        n = len(self.multiplication_table)
        # the entry [i][j] is the element j * n + i
        return self.integers([self.multiplication_table[i][j] for j in range(n) for i in range(n)])

    def spinors_payload(self) -> bytes:
        return b''.join(
            self.integers([fermion_irrep, abelian_irrep]) + self.reals([energy])
            for fermion_irrep, abelian_irrep, energy in self.spinors
        )

    def get_fock(self):
        if self.fock is not None:
            return self.fock

        n = self.num_spinors
        return [complex(self.spinors[i][2], 0.0) if i == j else 0j for i in range(n) for j in range(n)]

    def fock_payload(self) -> bytes:
        values = []
        for element in self.get_fock():
            values.extend([element.real, element.imag])

        return self.reals(values)

    def payloads(self):
        return [
            self.header_payload(),
            self.fermion_irreps_payload(),
            self.abelian_irreps_payload(),
            self.multiplication_table_payload(),
            self.spinors_payload(),
            self.fock_payload(),
        ]

    def build(self, payloads=None) -> bytes:
        return b''.join(self.record(_) for _ in (payloads if payloads is not None else self.payloads()))


@pytest.fixture
def builder():
    return MrconeeBuilder()


@pytest.fixture
def make_builder():
    return MrconeeBuilder
