"""
Core module for the abstraction of a record of the file

"""
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaRecord
from .properties import Dependency, RecordPhase
from .exceptions import (
    MrconeeException,
    UnpackException,
    FieldCountMismatchException,
    RecordReadException,
)


class Record(Field, metaclass=MetaRecord):
    """
    Together with Field is the main class that defines the format: a Record
    is the ordered list of the fields written with a single WRITE statement,
    i.e. it's the format descriptor of one record of the file.

    Like a Fortran READ, the fields are decoded in order and the decoding stops
    at the first field that doesn't fit in the payload; the trailing bytes of the
    payload are ignored unless "exact_length" is set.

    A Record can be used as element of an ArrayField.
    """
    exact_length = False

    def __init__(self, father=None, **kwargs):
        super().__init__(father=father, **kwargs)

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def get_dependencies(self) -> Dict[str, Dependency]:
        dep = super().get_dependencies()

        for field_name, field in self.get_fields():
            for key, value in field.get_dependencies().items():
                dep.update({f'{field_name}.{key}': value})

        return dep

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def _get_size(self):
        '''the size MUST be derived from the fields'''
        return sum(field.size for _, field in self.get_fields())

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def shortfall(self, field_name, fields_read, cause) -> MrconeeException:
        '''The exception to raise when the payload delivers fewer fields than the declared ones.'''
        return FieldCountMismatchException(
            chain=[field_name],
            expected=len(self.get_ordered_fields_name()),
            read=fields_read,
        )

    def unpack(self, cursor) -> int:
        '''Decode the fields in order from the cursor, it returns the number of fields read.

        All the fields must be read, otherwise the record is not valid. A method named
        validate_<field name>() is called right after that field is decoded, validate()
        after the whole record.
        '''
        self._phase = RecordPhase.UNPACKING
        self.offset = cursor.tell()

        fields_read = 0
        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset %d' % (self.__class__.__name__, field_name, cursor.tell()))

            try:
                field.unpack(cursor)
            except UnpackException as e:
                self._phase = RecordPhase.ERROR
                self.logger.debug('field %s.%s failed: %s' % (self.__class__.__name__, field_name, e))
                raise self.shortfall(field_name, fields_read, e) from e
            except MrconeeException as e:
                self._phase = RecordPhase.ERROR
                e.chain.append(field_name)
                raise

            fields_read += 1

            validator = getattr(self, f'validate_{field_name}', None)
            if validator is not None:
                validator()

        if self.exact_length and cursor.remaining:
            self._phase = RecordPhase.ERROR
            raise RecordReadException(
                chain=[],
                message=f'{self.__class__.__name__} has {cursor.remaining} unexpected trailing bytes',
            )

        if hasattr(self, 'validate'):
            self.validate()

        self._phase = RecordPhase.DONE

        return fields_read
