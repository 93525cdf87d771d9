"""
Decoding of a whole MRCONEE file.

The file is read in a single forward pass over its records, the only exception
is record 3 that is read twice since the length of its array of names is written
at its beginning. The result is built only at the end so that on failure nothing
partially decoded escapes.
"""
import logging
from typing import Dict, List, Sequence

from .enum import IntegerWidth, ArithmeticKind
from .meta import Endianess
from .dataset import MrconeeData
from .streams import RecordStream, RecordCursor
from .symmetry import classify_point_group, rename_irreps
from .exceptions import (
    MrconeeException,
    RecordReadException,
    UnknownIntegerWidthException,
)
from .records import (
    HeaderRecord,
    FermionIrrepRecord,
    AbelianIrrepCountRecord,
    AbelianIrrepRecord,
    MultiplicationTableRecord,
    SpinorEntry,
    SpinorInfoRecord,
    FockMatrixRecord,
)


logger = logging.getLogger(__name__)

REAL_SIZE = 8


def get_header_size(integer_width: IntegerWidth) -> int:
    '''The header is made of 6 integers and 2 reals.'''
    return 6 * integer_width.value + 2 * REAL_SIZE


def probe_integer_width(path, endianess=Endianess.LITTLE_ENDIAN) -> IntegerWidth:
    '''Determines if the program that wrote the file used 4-byte or 8-byte integers.

    Nothing in the file says it, so the size of the first record is compared with the
    size the header would have in the two cases. The file is opened on its own
    and closed before returning.
    '''
    with RecordStream(path, endianess=endianess) as stream:
        try:
            record_size = stream.next_record_size()
        except RecordReadException as e:
            raise UnknownIntegerWidthException(chain=['header'], message=f'no first record: {e}') from e

    for integer_width in IntegerWidth:
        if record_size == get_header_size(integer_width):
            logger.debug('header of %d bytes: %d-byte integers' % (record_size, integer_width.value))
            return integer_width

    raise UnknownIntegerWidthException(chain=['header'], record_size=record_size)


def assign_occupation_numbers(fermion_irreps: Sequence[int], quota: Dict[int, int]) -> List[int]:
    '''Occupy the spinors in the order of the file until the number of electrons
    of their fermion irrep runs out.

    The spinors are not sorted: this gives the lowest energy spinors only because
    DIRAC writes the spinors of each irrep in order of increasing energy.
    '''
    remaining = dict(quota)
    occ_numbers = []

    for fermion_irrep in fermion_irreps:
        if fermion_irrep not in remaining:
            logger.warning(f'no number of electrons for the fermion irrep {fermion_irrep}')

        if remaining.get(fermion_irrep, 0) > 0:
            remaining[fermion_irrep] -= 1
            occ_numbers.append(1)
        else:
            occ_numbers.append(0)

    return occ_numbers


class MrconeeFile(object):
    '''Root of the records: it knows the size of the integers and gives access
    to the records already decoded, so that the records can refer to them.'''

    def __init__(self, integer_width: IntegerWidth, endianess=Endianess.LITTLE_ENDIAN):
        self.logger = logging.getLogger(f'{__name__}.{self.__class__.__name__}')
        self.father = None
        self.integer_width = integer_width
        self.endianess = endianess

        self.header = None
        self.fermion_irreps = None
        self.abelian_irrep_count = None
        self.abelian_irreps = None
        self.multiplication_table = None
        self.spinor_info = None
        self.fock = None

    def __repr__(self):
        return f'<{self.__class__.__name__}(integer_width={self.integer_width.value})>'

    def num_irreps(self) -> int:
        return 2 * self.abelian_irrep_count.nsymrpa.value

    def multiplication_table_size(self) -> int:
        return self.num_irreps() ** 2

    def spinor_blob_size(self) -> int:
        return self.header.num_spinors.value * SpinorEntry(father=self).size

    def fock_matrix_size(self) -> int:
        return self.header.num_spinors.value ** 2

    def read_record(self, stream: RecordStream, record_cls, name):
        self.logger.debug('reading record \'%s\' as %s' % (name, record_cls.__name__))
        try:
            payload = stream.read_record()
            record = record_cls(father=self)
            record.unpack(RecordCursor(payload, endianess=self.endianess))
        except MrconeeException as e:
            e.chain.append(name)
            raise

        return record

    def unpack(self, stream: RecordStream) -> MrconeeData:
        self.header = self.read_record(stream, HeaderRecord, 'header')
        if self.header.arithmetic.value == ArithmeticKind.UNKNOWN:
            self.logger.warning('unknown arithmetic of the double group')

        self.fermion_irreps = self.read_record(stream, FermionIrrepRecord, 'fermion_irreps')
        quota = self.fermion_irreps.occupancy_quota()

        # the number of names comes first in the record
        self.abelian_irrep_count = self.read_record(stream, AbelianIrrepCountRecord, 'abelian_irreps')
        stream.backspace()
        self.abelian_irreps = self.read_record(stream, AbelianIrrepRecord, 'abelian_irreps')

        raw_names = self.abelian_irreps.irrep_names.value
        point_group = classify_point_group(raw_names)
        try:
            irrep_names = rename_irreps(raw_names, point_group)
        except MrconeeException as e:
            e.chain.extend(['irrep_names', 'abelian_irreps'])
            raise

        num_irreps = self.num_irreps()

        self.multiplication_table = self.read_record(stream, MultiplicationTableRecord, 'multiplication_table')

        self.spinor_info = self.read_record(stream, SpinorInfoRecord, 'spinor_info')
        spinors = self.spinor_info.get_spinors()
        spinor_irreps = [spinor.abelian_irrep.value - 1 for spinor in spinors]
        for index, irrep in enumerate(spinor_irreps):
            if not 0 <= irrep < num_irreps:
                raise RecordReadException(
                    chain=['abelian_irrep', f'spinors[{index}]', 'spinor_info'],
                    message=f'irrep {irrep + 1} out of the {num_irreps} irreps of the abelian subgroup',
                )
        occ_numbers = assign_occupation_numbers([spinor.fermion_irrep.value for spinor in spinors], quota)

        self.fock = self.read_record(stream, FockMatrixRecord, 'fock')

        header = self.header

        return MrconeeData(
            integer_width=self.integer_width.value,
            num_spinors=header.num_spinors.value,
            nuc_rep_energy=header.core_energy.value,
            scf_energy=header.scf_energy.value,
            arithmetic_kind=header.arithmetic.value,
            spinfree=bool(header.spinfree.value),
            breit=bool(header.breit.value),
            inversion_symmetry=header.inversion_symmetry.value,
            num_orbitals_total=header.num_orbitals_total.value,
            fermion_irrep_names=tuple(_.strip() for _ in self.fermion_irreps.irrep_names.value),
            num_irreps=num_irreps,
            irrep_names=tuple(irrep_names),
            point_group=point_group.point_group,
            totally_symmetric_marker=point_group.totally_symmetric_irrep,
            multiplication_table=tuple(tuple(row) for row in self.multiplication_table.get_table(num_irreps)),
            spinor_irreps=tuple(spinor_irreps),
            occ_numbers=tuple(occ_numbers),
            spinor_energies=tuple(spinor.energy.value for spinor in spinors),
            fock_matrix=tuple(self.fock.matrix.value),
        )


def read_mrconee(path, endianess=Endianess.LITTLE_ENDIAN) -> MrconeeData:
    '''Decode the whole file: the result is returned only if every record is fine,
    otherwise the first error is raised.'''
    integer_width = probe_integer_width(path, endianess=endianess)

    with RecordStream(path, endianess=endianess) as stream:
        logger.debug('decoding %r with %d-byte integers' % (stream, integer_width.value))
        return MrconeeFile(integer_width, endianess=endianess).unpack(stream)
