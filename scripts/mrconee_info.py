#!/usr/bin/env python3
import sys
import os
import logging

from mrconee import read_mrconee, print_mrconee_data
from mrconee.exceptions import MrconeeException

logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print('usage: %s <MRCONEE file>' % progname)
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    path = sys.argv[1]

    try:
        data = read_mrconee(path)
    except MrconeeException as e:
        logger.error(f'cannot decode \'{path}\': {e}')
        sys.exit(1)

    print_mrconee_data(data)
