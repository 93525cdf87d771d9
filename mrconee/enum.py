from enum import Enum


class IntegerWidth(Enum):
    '''Size in bytes of the integers written by the program that produced the file.'''
    FOUR  = 4
    EIGHT = 8

    @property
    def format(self):
        return 'i' if self == IntegerWidth.FOUR else 'q'


class ArithmeticKind(Enum):
    '''Algebra of the double group, as stored in the header (NZ).'''
    UNKNOWN    = 0
    REAL       = 1
    COMPLEX    = 2
    QUATERNION = 4

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN
