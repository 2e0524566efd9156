#!/usr/bin/env python3
'''
Print the NBT files having a given value at a given path

 $ nbtgrep.py .Data.GameType=1 saves/*/level.dat
'''
import os
import sys
import logging

from nbtstruct import NBTFile, TagPath, Tag, NBTException


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'usage: {progname} [path=value] [files...]')
    sys.exit(1)


def get_value(filepath, path):
    try:
        victim = TagPath(path).resolve(NBTFile(filepath))
    except (NBTException, ValueError) as e:
        logger.debug(f'{filepath}: {e}')
        return None

    return victim.value if isinstance(victim, Tag) else victim


if __name__ == '__main__':
    if len(sys.argv) < 3 or '=' not in sys.argv[1]:
        usage(sys.argv[0])

    path, rhs = sys.argv[1].split('=', 1)
    paths = sys.argv[2:]

    for filepath in paths:
        value = get_value(filepath, path)
        if value is not None and str(value) == rhs:
            print(filepath)
