"""
# MRCONEE decoder.

The MRCONEE file is written by the relativistic quantum chemistry program DIRAC
(module MOLTRA) and contains the transformed one-electron integrals together with
the information about the spinors and the symmetry that the correlated methods
need downstream.

It's a sequence of unformatted records (see streams.RecordStream) and each record
is described declaratively as an ordered list of fields (see records), with
three peculiarities:

 1. the size of the integers (4 or 8 bytes) is not written anywhere and is
    inferred from the size of the first record before anything else;
 2. the length of many arrays is written before them, in the same record or in a
    previous one, and it's resolved via Dependency();
 3. the point group is not written, it's detected from the names of the irreps
    (see symmetry).

The main API is read_mrconee(), returning an immutable MrconeeData or raising
the first error found: no partially decoded data is ever returned.
"""
from .decoder import read_mrconee, probe_integer_width
from .dataset import MrconeeData
from .report import print_mrconee_data
