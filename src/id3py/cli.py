"""Command line entry point: load a record file, grow the tree, print it."""

from __future__ import annotations

import argparse
import logging
import sys

from .dataset import CAR_ATTRIBUTES, LABEL, load_dataset
from .exceptions import Id3Error
from .tree import ID3Classifier

logger = logging.getLogger(__name__)


def _parse_args(argv=None):
    ap = argparse.ArgumentParser(
        prog="id3py",
        description="Grow an ID3 decision tree from categorical records and print it.")
    ap.add_argument("path", help="headerless comma separated file, label in the last field")
    ap.add_argument("--attributes", default=",".join(CAR_ATTRIBUTES),
                    help="comma separated attribute names in file order (default: %(default)s)")
    ap.add_argument("--label-name", default=LABEL, help="name of the label field")
    ap.add_argument("--rules", action="store_true", help="also print one rule per leaf")
    ap.add_argument("-v", "--verbose", action="count", default=0,
                    help="-v for progress, -vv for every split decision")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("id3py").setLevel(level)

    attributes = [a.strip() for a in args.attributes.split(",") if a.strip()]
    try:
        dataset = load_dataset(args.path, attributes=attributes, label=args.label_name)
        clf = ID3Classifier(label_name=args.label_name,
                            verbose=args.verbose).fit_dataset(dataset)
    except Id3Error as exc:
        logger.error("%s", exc)
        return 1

    clf.print_tree()
    if args.rules:
        print()
        for rule in clf.export_rules():
            print(rule)
    return 0


if __name__ == "__main__":
    sys.exit(main())
