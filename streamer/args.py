"""
streamer.args
~~~~~~~~~~~~~
"""

import argparse

from .escape import parse_detach_keys

def parse_args(args):
    parser = argparse.ArgumentParser(prog='streamer',
                                     description='Attach the terminal to a process')

    parser.add_argument('--detach-keys', metavar='keys', dest='detach_keys',
                        type=get_detach_keys,
                        help='detach key sequence, such as ctrl-p,ctrl-q')

    parser.add_argument('--debug', action='store_true', help='enable debug logging')

    parser.add_argument('command', help='process')
    parser.add_argument('command_args', nargs=argparse.REMAINDER,
                        help='process arguments')

    return parser.parse_args(args)

def get_detach_keys(keys):
    try:
        return parse_detach_keys(keys)
    except ValueError as error:
        raise argparse.ArgumentTypeError(str(error))
