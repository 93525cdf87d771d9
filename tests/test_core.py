import struct

import pytest

from mrconee import fields
from mrconee.core import Record
from mrconee.enum import IntegerWidth
from mrconee.exceptions import (
    FieldCountMismatchException,
    RecordReadException,
)
from mrconee.meta import Endianess
from mrconee.properties import Dependency, ScaledDependency, RecordPhase
from mrconee.streams import RecordCursor


class Root(object):
    '''Plays the role of the decoder for records tested in isolation.'''
    father = None

    def __init__(self, integer_width=IntegerWidth.FOUR, endianess=Endianess.LITTLE_ENDIAN):
        self.integer_width = integer_width
        self.endianess = endianess

    def table_size(self):
        return 3


class Simple(Record):
    a = fields.IntegerField()
    b = fields.RealField()
    c = fields.IntegerField()


class WithLength(Record):
    n     = fields.IntegerField()
    names = fields.ArrayField(fields.StringField(4), n=ScaledDependency(2, '.n'))
    table = fields.ArrayField(fields.IntegerField(), n=Dependency('table_size'))


class Entry(Record):
    index  = fields.IntegerField()
    weight = fields.RealField()


class Entries(Record):
    count   = fields.IntegerField()
    entries = fields.ArrayField(Entry(), n=Dependency('.count'))


class Strict(Record):
    exact_length = True

    a = fields.IntegerField()


class Validated(Record):
    a = fields.IntegerField()

    def validate(self):
        if self.a.value < 0:
            raise RecordReadException(chain=['a'], message='negative')


def test_fields_order():
    assert Simple._meta.fields == ['a', 'b', 'c']
    assert WithLength._meta.fields == ['n', 'names', 'table']


def test_record():
    """Check that a record unpacks its fields in order."""
    root = Root()
    simple = Simple(father=root)

    assert simple.a.father == simple
    assert simple.root == root

    fields_read = simple.unpack(RecordCursor(struct.pack('<idi', 1, 2.5, 3)))

    assert fields_read == 3
    assert simple.a.value == 1
    assert simple.b.value == 2.5
    assert simple.c.value == 3
    assert simple.size == 16
    assert simple.layout == {
        'a': (0, 4),
        'b': (4, 8),
        'c': (12, 4),
    }
    assert simple._phase == RecordPhase.DONE


def test_record_8_byte_integers():
    simple = Simple(father=Root(IntegerWidth.EIGHT))

    simple.unpack(RecordCursor(struct.pack('<qdq', 1, 2.5, 3)))

    assert simple.c.value == 3
    assert simple.size == 24


def test_record_big_endian():
    simple = Simple(father=Root(endianess=Endianess.BIG_ENDIAN))

    simple.unpack(RecordCursor(struct.pack('>idi', 1, 2.5, 3)))

    assert simple.b.value == 2.5
    assert simple.c.value == 3


def test_record_ignores_trailing_bytes():
    simple = Simple(father=Root())

    assert simple.unpack(RecordCursor(struct.pack('<idii', 1, 2.5, 3, 4))) == 3


def test_record_missing_field():
    simple = Simple(father=Root())

    with pytest.raises(FieldCountMismatchException) as excinfo:
        simple.unpack(RecordCursor(struct.pack('<id', 1, 2.5)))

    assert excinfo.value.expected == 3
    assert excinfo.value.read == 2
    assert excinfo.value.chain == ['c']
    assert simple._phase == RecordPhase.ERROR


def test_record_with_dependencies():
    record = WithLength(father=Root())

    assert list(record.get_dependencies().keys()) == [
        'names._n',
        'table._n',
    ]

    record.unpack(RecordCursor(struct.pack('<i', 2) + b'A  aA  bB  aB  b' + struct.pack('<3i', 7, 8, 9)))

    assert record.names.value == ['A  a', 'A  b', 'B  a', 'B  b']
    assert record.table.value == [7, 8, 9]


def test_record_as_array_element():
    record = Entries(father=Root())

    record.unpack(RecordCursor(struct.pack('<iidid', 2, 1, -0.5, 2, 0.5)))

    assert len(record.entries) == 2
    assert [_.index.value for _ in record.entries] == [1, 2]
    assert [_.weight.value for _ in record.entries] == [-0.5, 0.5]
    assert record.entries[1].root == record.root
    assert record.entries.size == 2 * 12


def test_record_as_array_element_too_short():
    record = Entries(father=Root())

    with pytest.raises(FieldCountMismatchException) as excinfo:
        record.unpack(RecordCursor(struct.pack('<iid', 2, 1, -0.5)))

    # the error comes from the second entry, that has no field at all
    assert excinfo.value.chain == ['index', 'entries']
    assert excinfo.value.expected == 2
    assert excinfo.value.read == 0


def test_record_exact_length():
    strict = Strict(father=Root())

    assert strict.unpack(RecordCursor(struct.pack('<i', 1))) == 1

    strict = Strict(father=Root())

    with pytest.raises(RecordReadException):
        strict.unpack(RecordCursor(struct.pack('<ii', 1, 2)))


def test_record_validate():
    assert Validated(father=Root()).unpack(RecordCursor(struct.pack('<i', 1))) == 1

    with pytest.raises(RecordReadException) as excinfo:
        Validated(father=Root()).unpack(RecordCursor(struct.pack('<i', -1)))

    assert excinfo.value.chain == ['a']


class Counted(Record):
    n     = fields.IntegerField()
    items = fields.ArrayField(fields.IntegerField(), n=Dependency('.n'))

    def validate_n(self):
        if self.n.value < 0:
            raise RecordReadException(chain=['n'], message='negative')


def test_record_validate_field():
    """The check of a field runs before the fields that follow it are decoded."""
    record = Counted(father=Root())

    assert record.unpack(RecordCursor(struct.pack('<iii', 2, 5, 6))) == 2
    assert record.items.value == [5, 6]

    with pytest.raises(RecordReadException) as excinfo:
        Counted(father=Root()).unpack(RecordCursor(struct.pack('<iii', -1, 5, 6)))

    assert excinfo.value.chain == ['n']


@pytest.mark.parametrize('name', ['value', 'name', 'father', 'offset', 'default', 'endianess', 'logger', 'size', 'unpack'])
def test_record_reserved_field_name(name):
    with pytest.raises(AttributeError):
        type('Wrong', (Record,), {'__module__': __name__, name: fields.IntegerField()})
