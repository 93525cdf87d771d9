'''
# MRCONEE records

The file written by the MOLTRA module of DIRAC with the transformed one-electron
integrals is made of six unformatted sequential records, always in this order

 1. header: number of spinors, core and SCF energies, inversion symmetry,
    group arithmetic and spin-free flag
 2. fermion irreps of the parent group with the number of active spinors in each of them
 3. irreps of the abelian subgroup (the fermion ones followed by the boson ones)
 4. multiplication table of the abelian irreps
 5. for each spinor: fermion irrep, abelian irrep and orbital energy
 6. Fock matrix in the basis of the spinors

The integers have the size the program was compiled with (4 or 8 bytes) and
nothing in the file declares it: see decoder.probe_integer_width().
'''
from typing import Dict, List

from . import fields
from .core import Record
from .enum import ArithmeticKind
from .exceptions import RecordReadException
from .properties import Dependency, ScaledDependency
from .streams import RecordCursor


class HeaderRecord(Record):
    num_spinors        = fields.IntegerField()
    breit              = fields.IntegerField()  # Breit interaction active in SCF
    core_energy        = fields.RealField()     # inactive energy + nuclear repulsion
    inversion_symmetry = fields.IntegerField()  # 2 if present, 1 otherwise
    arithmetic         = fields.IntegerField(enum=ArithmeticKind, default=ArithmeticKind.UNKNOWN)
    spinfree           = fields.IntegerField()
    num_orbitals_total = fields.IntegerField()  # frozen and deleted included
    scf_energy         = fields.RealField()

    def validate(self):
        if self.num_spinors.value < 0:
            raise RecordReadException(chain=['num_spinors'], message=f'negative number of spinors {self.num_spinors.value}')

        if self.inversion_symmetry.value not in (1, 2):
            raise RecordReadException(
                chain=['inversion_symmetry'],
                message=f'inversion symmetry must be 1 or 2, found {self.inversion_symmetry.value}',
            )


class FermionIrrepRecord(Record):
    '''The lengths of the arrays are given by the number of fermion irreps
    of this same record and by the inversion symmetry of the header.'''
    MAX_IRREPS = 8

    nsymrp              = fields.IntegerField()
    irrep_names         = fields.ArrayField(fields.StringField(14), n=Dependency('.nsymrp'))
    num_active          = fields.ArrayField(fields.IntegerField(), n=Dependency('.nsymrp'))
    num_orbitals        = fields.ArrayField(fields.IntegerField(), n=Dependency('header.inversion_symmetry'))
    num_frozen_total    = fields.ArrayField(fields.IntegerField(), n=Dependency('header.inversion_symmetry'))
    num_frozen_positive = fields.ArrayField(fields.IntegerField(), n=Dependency('header.inversion_symmetry'))
    num_frozen_negative = fields.ArrayField(fields.IntegerField(), n=Dependency('header.inversion_symmetry'))
    num_deleted         = fields.ArrayField(fields.IntegerField(), n=Dependency('header.inversion_symmetry'))

    def validate_nsymrp(self):
        if not 0 <= self.nsymrp.value <= self.MAX_IRREPS:
            raise RecordReadException(
                chain=['nsymrp'],
                message=f'number of fermion irreps must be between 0 and {self.MAX_IRREPS}, found {self.nsymrp.value}',
            )

    def occupancy_quota(self) -> Dict[int, int]:
        '''Number of electrons to place in each fermion irrep, keyed by
        the 1-based index of the irrep (as it appears in the spinor records).'''
        return {irrep + 1: count for irrep, count in enumerate(self.num_active.value)}


class AbelianIrrepCountRecord(Record):
    '''Only the leading integer of record 3, needed to know how long is the rest.'''
    nsymrpa = fields.IntegerField()

    def shortfall(self, field_name, fields_read, cause):
        return RecordReadException(chain=[field_name], message=str(cause))

    def validate_nsymrpa(self):
        if self.nsymrpa.value < 0:
            raise RecordReadException(chain=['nsymrpa'], message=f'negative number of irreps {self.nsymrpa.value}')


class AbelianIrrepRecord(AbelianIrrepCountRecord):
    '''Record 3 read again once the number of names is known: there are
    2 * nsymrpa names (fermion and boson irreps) of 4 characters each.'''
    irrep_names = fields.ArrayField(fields.StringField(4), n=ScaledDependency(2, 'abelian_irrep_count.nsymrpa'))


class MultiplicationTableRecord(Record):
    table = fields.ArrayField(fields.IntegerField(), n=Dependency('multiplication_table_size'))

    def get_table(self, num_irreps) -> List[List[int]]:
        '''The element k = j * num_irreps + i of the record is the entry [i][j] of the table.'''
        flat = self.table.value
        return [[flat[j * num_irreps + i] for j in range(num_irreps)] for i in range(num_irreps)]


class SpinorEntry(Record):
    fermion_irrep = fields.IntegerField()  # 1-based, irrep of the parent group
    abelian_irrep = fields.IntegerField()  # 1-based, irrep of the abelian subgroup
    energy        = fields.RealField()


class SpinorInfoRecord(Record):
    '''The information about the spinors is written as a single block of raw bytes
    and it's decoded after, since its layout depends on the integer width.'''
    exact_length = True

    data = fields.BytesField(Dependency('spinor_blob_size'))

    def shortfall(self, field_name, fields_read, cause):
        return RecordReadException(chain=[field_name], message=str(cause))

    def get_spinors(self) -> List[SpinorEntry]:
        cursor = RecordCursor(self.data.value, endianess=self.get_endianess())
        spinors = fields.ArrayField(
            SpinorEntry(), n=Dependency('header.num_spinors'), name='spinors').create(father=self)
        spinors.unpack(cursor)

        return spinors.value


class FockMatrixRecord(Record):
    matrix = fields.ArrayField(fields.ComplexField(), n=Dependency('fock_matrix_size'))
