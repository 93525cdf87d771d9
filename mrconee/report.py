import sys

from .dataset import MrconeeData


def print_mrconee_data(data: MrconeeData, out=sys.stdout):
    '''Human readable summary of the file followed by the table of the spinors.'''
    totally_symmetric_irrep = data.totally_symmetric_irrep_name()

    print('', file=out)
    print(f' size of integers in DIRAC                          {data.integer_width} bytes', file=out)
    print(f' number of spinors                                  {data.num_spinors}', file=out)
    print(f' core energy (inactive energy + nuclear repulsion)  {data.nuc_rep_energy:.12f} a.u.', file=out)
    print(f' total SCF energy                                   {data.scf_energy:.12f} a.u.', file=out)
    print(f' double group type                                  {data.arithmetic_kind.name.lower()}', file=out)
    print(f' spin-free                                          {"yes" if data.spinfree else "no"}', file=out)
    print(f' Abelian subgroup                                   {data.point_group}', file=out)
    print(f' totally symmetric irrep                            {totally_symmetric_irrep or "n/a"}', file=out)
    print(f' number of irreps in the Abelian subgroup           {data.num_irreps}', file=out)
    print('', file=out)

    print(' spinors info:', file=out)
    print(' -----------------------------------------------------', file=out)
    print('   no       irrep     occ      one-electron energy    ', file=out)
    print(' -----------------------------------------------------', file=out)
    for idx, (irrep, occ, energy) in enumerate(zip(data.spinor_irreps, data.occ_numbers, data.spinor_energies)):
        print(f' {idx + 1:4d}{data.irrep_names[irrep]:>12s}{occ:8d}{energy:25.8f}', file=out)
    print(' -----------------------------------------------------', file=out)
    print('', file=out)
