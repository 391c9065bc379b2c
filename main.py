from rich.pretty import pprint

from argtable import *


def natural(raw):
    if not raw.isdigit():
        raise ValueError("expected a non-negative integer, got %r" % raw)
    return int(raw)


parser = Parser("description", shell=True)
parser.add_valued("add", "a", "add the given value", natural)
parser.add_flag("test", "t", "test flag", False)


if __name__ == '__main__':
    parser.print_help()
    pprint(parser.parse())
