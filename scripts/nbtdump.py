#!/usr/bin/env python3
'''
Print the tree contained in an NBT file, optionally only the part at a given path

 $ nbtdump.py level.dat -p .Data.Player.Inventory[0]
'''
import os
import sys
import logging

from nbtstruct import NBTFile, TagPath, Tag, NBTException


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'''usage: {progname} <nbt file> [-p|--path PATH] [-r|--raw]

 -p, --path  print only the tag at PATH (like Data.Player.Inventory[2])
 -r, --raw   print only the data, without kind and name of the tags''')
    sys.exit(1)


def parse_args(argv):
    path = ''
    raw = False

    args = iter(argv)
    for arg in args:
        if arg in ('-p', '--path'):
            path = next(args, None)
            if path is None:
                usage(sys.argv[0])
        elif arg in ('-r', '--raw'):
            raw = True
        else:
            usage(sys.argv[0])

    return path, raw


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    filepath = sys.argv[1]
    path, raw = parse_args(sys.argv[2:])

    try:
        root = NBTFile(filepath)
        tag = TagPath(path).resolve(root)
    except (NBTException, ValueError) as e:
        logger.error(f'{filepath}: {e}')
        sys.exit(2)

    if isinstance(tag, Tag):
        print(tag.pretty(key=path or filepath, raw=raw))
    else:
        print(tag)
