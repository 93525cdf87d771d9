class MrconeeException(Exception):
    '''Base class to extend in order to throw exception in mrconee.

    It takes as first argument the chain of the layers that caused the
    exception (innermost first), i.e. the field and the record names.
    '''

    def __init__(self, chain, message=''):
        self.chain = chain
        self.message = message
        super().__init__(message)

    def __str__(self):
        location = '.'.join(reversed(self.chain))
        if not location:
            return self.message

        return f'{location}: {self.message}' if self.message else location


class IoException(MrconeeException):
    '''The file cannot be opened.'''
    pass


class UnknownIntegerWidthException(MrconeeException):
    '''The size of the first record matches neither the 4-byte nor the 8-byte layout.'''

    def __init__(self, chain, record_size=None, message=''):
        self.record_size = record_size
        super().__init__(chain, message or f'first record has unexpected size {record_size}')


class UnpackException(MrconeeException):
    '''A single field doesn't fit in what remains of the record.'''
    pass


class FieldCountMismatchException(MrconeeException):

    def __init__(self, chain, expected=None, read=None, message=''):
        self.expected = expected
        self.read = read
        super().__init__(chain, message or f'read {read} fields out of {expected}')


class RecordReadException(MrconeeException):
    '''The transport reported a truncated or corrupted record.'''
    pass


class IrrepTableOverflowException(MrconeeException):
    '''There are more irreps than names in the translation table of the point group.'''
    pass
