"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from the payload of a record.

The integers have the size of the integers used by the program that wrote the file,
i.e. they resolve their width from the root of the hierarchy, everything else has a
fixed size.
"""
import logging
import struct
from enum import Enum
from typing import Dict, List

from .meta import FieldBase, Endianess
from .properties import Dependency, RecordPhase, get_root_from_field
from .exceptions import UnpackException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None, endianess=None):
        super().__init__()
        self._phase = RecordPhase.INIT
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = None
        self.endianess = endianess

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    @property
    def root(self):
        '''Obtain the final father of this field'''
        return get_root_from_field(self)

    def get_endianess(self) -> Endianess:
        if self.endianess is not None:
            return self.endianess

        root = self.root
        if root is self:
            return Endianess.LITTLE_ENDIAN

        return getattr(root, 'endianess', None) or Endianess.LITTLE_ENDIAN

    def get_dependencies(self) -> Dict[str, Dependency]:
        """Return the dictionary containing as key the attribute"""
        return {_k: _v for _k, _v in self.__dict__.items() if isinstance(_v, Dependency)}

    def resolve(self, value):
        return value.resolve(self) if isinstance(value, Dependency) else value

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def unpack(self, cursor):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Mimic the behaviour of the struct module unpacking a scalar from bytes.

    The same field can unpack a contiguous run of values of its type with
    unpack_many(), this is what ArrayField uses.

    It's possible to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the value of the field itself.
    """

    def __init__(self, format, default=0, enum=None, **kw):
        self._format = format
        self.enum = enum
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def value_from_default(self):
        if not self.enum:
            return super().value_from_default()

        return self.enum(self.default)

    def get_type(self) -> str:
        return self._format

    def get_format(self, count=1) -> str:
        return '%s%d%s' % (self.get_endianess().prefix, count, self.get_type())

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _convert(self, values) -> list:
        if not self.enum:
            return list(values)

        return [self._unpack_enum(_) for _ in values]

    def _unpack_enum(self, value) -> Enum:
        try:
            return self.enum(value)
        except ValueError:
            self.logger.warning(f'enum {self.enum!r} doesn\'t have element with value {value} in it')

            return value

    def unpack_many(self, cursor, count) -> list:
        raw = cursor.read(self.size * count)
        try:
            values = struct.unpack(self.get_format(count), raw)
        except struct.error as e:
            raise UnpackException(chain=[], message=str(e)) from e

        return self._convert(values)

    def unpack(self, cursor):
        self._phase = RecordPhase.UNPACKING
        self.offset = cursor.tell()
        self.value = self.unpack_many(cursor, 1)[0]
        self._phase = RecordPhase.DONE


class IntegerField(StructField):
    '''Signed integer with the width of the integers of the file (4 or 8 bytes).

    The width is taken from the root of the hierarchy (attribute "integer_width")
    unless it's explicitly passed.'''

    def __init__(self, width=None, **kw):
        self.width = width
        super().__init__(None, **kw)

    def get_integer_width(self):
        width = self.width or getattr(self.root, 'integer_width', None)
        if width is None:
            raise ValueError(f'integer width for field \'{self.name}\' is not defined')

        return width

    def get_type(self) -> str:
        return self.get_integer_width().format


class RealField(StructField):
    '''Double precision real, always 8 bytes.'''

    def __init__(self, default=0.0, **kw):
        super().__init__('d', default=default, **kw)


class ComplexField(StructField):
    '''Double precision complex, stored as the couple (real, imaginary).'''

    def __init__(self, default=0j, **kw):
        super().__init__('d', default=default, **kw)

    def get_format(self, count=1) -> str:
        return '%s%dd' % (self.get_endianess().prefix, 2 * count)

    def _convert(self, values) -> list:
        return [complex(real, imag) for real, imag in zip(values[0::2], values[1::2])]


class StringField(StructField):
    """Fixed length label, like a CHARACTER*n of Fortran."""

    def __init__(self, n, default='', **kw):
        self.length = n
        super().__init__('s', default=default, **kw)

    def __len__(self):
        return self.length

    def get_format(self, count=1) -> str:
        return self.get_endianess().prefix + ('%ds' % self.length) * count

    def _convert(self, values) -> list:
        return [_.decode('latin1') for _ in values]


class BytesField(Field):
    """Represent a contiguous chunk of bytes, to be decoded in a second moment."""

    def __init__(self, n, **kw):
        self.length = n
        kw.setdefault('default', b'')
        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%d bytes)>' % (self.__class__.__name__, len(self.value))

    def __len__(self):
        return len(self.value)

    def _get_size(self):
        return len(self.value)

    def unpack(self, cursor):
        self.offset = cursor.tell()
        self.value = cursor.read(self.resolve(self.length))
        self._phase = RecordPhase.DONE


class ArrayField(Field):
    '''Unpack an array of Fields.

    The number of elements is indicated via the parameter named "n",
    an integer or a Dependency.

    An array of StructField is unpacked in one go and its value is the list of
    the python values, an array of records has as value the list of the
    records themselves.
    '''

    def __init__(self, field, n=0, **kw):
        if not isinstance(n, (int, Dependency)):
            raise TypeError('n is \'%s\' must be of the right type' % n.__class__.__name__)

        self.field = field
        self._n = n

        kw.setdefault('default', [])
        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return list(self.default)

    @property
    def n(self) -> int:
        return self.resolve(self._n)

    def _get_size(self):
        if not self.value:
            return 0

        if isinstance(self.field, StructField):
            return len(self.value) * self.instance_element().size

        return sum(_.size for _ in self.value)

    def instance_element(self):
        return self.field.create(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack(self, cursor):
        n = self.n
        if n < 0:
            raise UnpackException(chain=[], message=f'array \'{self.name}\' has negative length {n}')

        self.logger.debug('unpacking %d elements for \'%s\'' % (n, self.name))
        self._phase = RecordPhase.UNPACKING
        self.offset = cursor.tell()

        element = self.instance_element()
        if isinstance(element, StructField):
            self.value = element.unpack_many(cursor, n)
        else:
            elements: List[Field] = []
            for _ in range(n):
                element = self.instance_element()
                element.unpack(cursor)
                elements.append(element)
            self.value = elements

        self._phase = RecordPhase.DONE
