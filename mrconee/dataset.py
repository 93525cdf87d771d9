from typing import NamedTuple, Optional, Tuple

from .enum import ArithmeticKind


class MrconeeData(NamedTuple):
    '''Content of a MRCONEE file, built only when all the records are decoded.

    The Fock matrix is kept in the order of the file, i.e. num_spinors ** 2
    complex values, without any reinterpretation of rows and columns.
    '''
    integer_width: int
    num_spinors: int
    nuc_rep_energy: float
    scf_energy: float
    arithmetic_kind: ArithmeticKind
    spinfree: bool
    breit: bool
    inversion_symmetry: int
    num_orbitals_total: int
    fermion_irrep_names: Tuple[str, ...]
    num_irreps: int
    irrep_names: Tuple[str, ...]
    point_group: str
    totally_symmetric_marker: int
    multiplication_table: Tuple[Tuple[int, ...], ...]
    spinor_irreps: Tuple[int, ...]
    occ_numbers: Tuple[int, ...]
    spinor_energies: Tuple[float, ...]
    fock_matrix: Tuple[complex, ...]

    def totally_symmetric_irrep_name(self) -> Optional[str]:
        '''The marker is an index in the catalog's table of names that can be beyond
        the irreps actually present in the file: in that case there is no name.'''
        if 0 <= self.totally_symmetric_marker < self.num_irreps:
            return self.irrep_names[self.totally_symmetric_marker]

        return None

    @property
    def num_electrons(self) -> int:
        return sum(self.occ_numbers)
