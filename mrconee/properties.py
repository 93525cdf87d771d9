import inspect
import logging
from enum import Enum, auto
from typing import List


class RecordPhase(Enum):
    '''Enum to state the actual phase of a record'''
    INIT      = 0
    UNPACKING = auto()
    DONE      = auto()
    ERROR     = auto()


def get_root_from_field(instance):
    return get_instance_from_field(instance, condition=lambda x: getattr(x, 'father', None) is None)


def get_instance_from_field(instance, condition):
    while not condition(instance):
        instance = instance.father

    return instance


class Dependency:
    '''This makes the relation between fields possible.

    The length of most of the arrays of the file is not fixed by the format
    but is written somewhere before, in the same record or in a previous one:

        class Example(Record):
            nsymrp = fields.IntegerField()
            names  = fields.ArrayField(fields.StringField(14), n=Dependency('.nsymrp'))

    The syntax of the expression is inspired from module resolution

     - '.' as first char indicates we refer to a field at the same level
     - otherwise the resolution starts from the root, i.e. the decoder
       driving the records, where the previous records are attributes

    If the last component is a method, it's called and its return value is used.
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        fields_path: List[str] = self.expression.split('.')
        # '.miao'.split(".") -> ['', 'miao']
        # 'miao'.split(".") -> ['miao']

        if fields_path[0] == '':
            field = instance.father
            fields_path = fields_path[1:]
            self.logger.debug(' resolve from father: \'%s\'' % field.__class__.__name__)
        else:
            field = get_root_from_field(instance)
            self.logger.debug(' resolve from root: \'%s\'' % field.__class__.__name__)

        for component_name in fields_path:
            field = getattr(field, component_name)

        return field

    def _do_resolve(self, field):
        if inspect.ismethod(field):
            return field()

        return field.value

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        value = self._do_resolve(self.resolve_field(instance))
        self.logger.debug(' %r resolved with value %s' % (self, value))

        return value


class ScaledDependency(Dependency):

    def __init__(self, factor, expression):
        super().__init__(expression)
        self._factor = factor

    def resolve(self, instance):
        return self._factor * super().resolve(instance)
