from .core import *
from .gen import *
from .sim import *

import argparse
import logging
import sys

if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("-v", "--verbose", action="store_true")
    p_action = parser.add_subparsers(dest="action", required=True)

    s_args = p_action.add_parser("sim")
    s_args.add_argument("target", choices=["all", "serializer", "reset"])
    s_args.add_argument("--width", type=int, default=8)

    g_args = p_action.add_parser("gen")
    g_args.add_argument("yaml_file")

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.action == "sim":
        sim_funcs = {
            "serializer": sim_serializer,
            "reset": sim_reset
        }

        if args.target == "all":
            for sf in sim_funcs.values():
                sf(width=args.width)
        else:
            sim_funcs[args.target](width=args.width)
    elif args.action == "gen":
        # Pop the "gen" argument of the script because FuseSoC is hardcoded
        # to look at sys.argv[1].
        sys.argv[1:] = [args.yaml_file]
        pg = PisoGenerator()
        pg.run()
        pg.write()
