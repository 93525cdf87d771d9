'''
# Point group detection

DIRAC doesn't write the name of the point group: it has to be guessed from the
names of the first irreps of the abelian subgroup. The same names are then
translated into a more readable notation.

For the nonrelativistic (spin-free) groups each spatial irrep is combined with
the projection of the spin, using this translation (left: L. Visscher's notation,
right: A. Oleynichenko's one)

    a -> a
    b -> b
    3 -> -3/2
    3 -> +3/2
    0 -> 0
    4 -> 2
    2 -> +1
    2 -> -1

For the linear molecules (relativistic Cinfv and Dinfh) the irreps are labelled by
the projection of the total angular momentum; the nonrelativistic Cinfv and Dinfh
are treated as C2v and D2h.

The entries of the catalog are checked in order and the first one matching wins.
The "totally symmetric irrep" of an entry is the index, in its table of names, of
the totally symmetric boson irrep (e.g. 'A_0' for C1): it's meaningful only when
the file has as many irreps as the table.
'''
import logging
from typing import List, NamedTuple, Optional, Sequence, Tuple, Union

from .exceptions import IrrepTableOverflowException


logger = logging.getLogger(__name__)


NONREL_SPIN_SUFFIXES = ('a', 'b', '-3/2', '+3/2', '0', '2', '+1', '-1')


def nonrel_irrep_names(spatial_irreps: Sequence[str]) -> Tuple[str, ...]:
    return tuple(f'{irrep}_{suffix}' for suffix in NONREL_SPIN_SUFFIXES for irrep in spatial_irreps)


def linear_irrep_names(parity: str = '') -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    '''Irreps of Cinfv (no parity) or of the parity sector of Dinfh:
    16 half-integer projections (fermions) and 16 integer ones (bosons).'''
    fermions = [f'{2 * omega + 1}/2{parity}{sign}' for omega in range(16) for sign in '+-']
    bosons = [f'0{parity}'] + [f'{omega}{parity}{sign}' for omega in range(1, 16) for sign in '+-'] + [f'16{parity}+']

    return tuple(fermions), tuple(bosons)


def _cinfv_irrep_names() -> Tuple[str, ...]:
    fermions, bosons = linear_irrep_names()

    return fermions + bosons


def _dinfh_irrep_names() -> Tuple[str, ...]:
    # only the first 8 projections of each parity fit in the 64 irreps
    fermions_g, bosons_g = linear_irrep_names('g')
    fermions_u, bosons_u = linear_irrep_names('u')

    return fermions_g[:16] + fermions_u[:16] + bosons_g[:16] + bosons_u[:16]


class PointGroupSignature(NamedTuple):
    '''Entry of the catalog: the names of the first two irreps as written by DIRAC
    (the second one is None if it doesn't matter) and what they mean.'''
    point_group: str
    totally_symmetric_irrep: int
    first: str
    second: Optional[str]
    irrep_names: Tuple[str, ...]

    @property
    def detected(self) -> bool:
        return True

    def matches(self, names: Sequence[str]) -> bool:
        first, second = (tuple(names) + (None, None))[:2]

        return first == self.first and (self.second is None or second == self.second)

    def rename(self, names: Sequence[str]) -> List[str]:
        if len(names) > len(self.irrep_names):
            raise IrrepTableOverflowException(
                chain=[],
                message=f'{len(names)} irreps but point group {self.point_group} has only {len(self.irrep_names)} names',
            )

        return list(self.irrep_names[:len(names)])


class UndetectedPointGroup(NamedTuple):
    point_group: str = 'undetected'
    totally_symmetric_irrep: int = 0

    @property
    def detected(self) -> bool:
        return False

    def rename(self, names: Sequence[str]) -> List[str]:
        return list(names)


UNDETECTED = UndetectedPointGroup()

PointGroup = Union[PointGroupSignature, UndetectedPointGroup]


CATALOG: Tuple[PointGroupSignature, ...] = (
    # nonrelativistic groups
    PointGroupSignature('C1',  4,  'A  a', 'A  b', nonrel_irrep_names(('A',))),
    PointGroupSignature('Ci',  8,  'Ag a', 'Au a', nonrel_irrep_names(('Ag', 'Au'))),
    PointGroupSignature('C2',  8,  'A  a', 'B  a', nonrel_irrep_names(('A', 'B'))),
    PointGroupSignature('Cs',  8,  "A' a", 'A" a', nonrel_irrep_names(("A'", 'A"'))),
    PointGroupSignature('C2v', 16, 'A1 a', None,   nonrel_irrep_names(('A1', 'B2', 'B1', 'A2'))),
    PointGroupSignature('D2',  16, 'A  a', None,   nonrel_irrep_names(('A', 'B3', 'B1', 'B2'))),
    PointGroupSignature('C2h', 16, 'Ag a', 'Bg a', nonrel_irrep_names(('Ag', 'Bg', 'Bu', 'Au'))),
    PointGroupSignature('D2h', 32, 'Ag a', None,   nonrel_irrep_names(
        ('Ag', 'B1u', 'B2u', 'B3g', 'B3u', 'B2g', 'B1g', 'Au'))),
    # double groups
    PointGroupSignature('C1',                1,  '   A', '   a', ('A', 'a')),
    PointGroupSignature('Ci',                2,  '  AG', '  AU', ('AG', 'AU', 'ag', 'au')),
    PointGroupSignature('C2, Cs, C2v or D2', 2,  '  1E', '  2E', ('1E', '2E', 'a', 'b')),
    PointGroupSignature('C2h or D2h',        4,  ' 1Eg', ' 2Eg', (
        '1Eg', '2Eg', '1Eu', '2Eu', 'ag', 'bg', 'au', 'bu')),
    PointGroupSignature('Cinfv',             32, '   1', '  -1', _cinfv_irrep_names()),
    PointGroupSignature('Dinfh',             32, '  1g', ' -1g', _dinfh_irrep_names()),
)


def classify_point_group(names: Sequence[str]) -> PointGroup:
    '''Returns the first entry of the catalog matching the names, UNDETECTED otherwise.'''
    for signature in CATALOG:
        if signature.matches(names):
            logger.debug('irreps %r identify the point group %s' % (tuple(names[:2]), signature.point_group))
            return signature

    logger.warning('point group not detected from the irreps %r' % (tuple(names[:2]),))

    return UNDETECTED


def rename_irreps(names: Sequence[str], point_group: Optional[PointGroup] = None) -> List[str]:
    '''Translate the names of the irreps in the readable notation of the point group.

    Names not matching any signature are left unchanged, so renaming twice is the
    same as renaming once.'''
    if point_group is None:
        point_group = classify_point_group(names)

    return point_group.rename(names)
