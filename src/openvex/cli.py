"""The openvex command line.

::

    openvex id vex.json             print the document ID
    openvex canonical vex.json      print the canonical representation
    openvex validate vex.json ...   check documents
    openvex hashes FILE ...         print the hashes of artifacts
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import stevedore.exception

import openvex.log
from openvex.canonical import canonical_representation, load_id_generator
from openvex.error import VexError
from openvex.main import Main
from openvex.vex import Document, Hashes, vex_config

if TYPE_CHECKING:
    from argparse import Namespace

logger = openvex.log.getLogger("cli")


def do_id(args: Namespace) -> None:
    document = Document.from_file(args.document)
    try:
        generator = load_id_generator(args.generator)
    except stevedore.exception.NoMatches as err:
        raise VexError(f"unknown ID generator {args.generator}", "id") from err
    print(generator(document))


def do_canonical(args: Namespace) -> None:
    print(canonical_representation(Document.from_file(args.document)))


def do_validate(args: Namespace) -> None:
    errors = 0
    for path in args.documents:
        try:
            Document.from_file(path).validate()
        except VexError as err:
            logger.error("%s: %s", path, err)
            errors += 1
        else:
            print(f"{path}: OK")
    if errors:
        raise VexError(f"{errors} invalid document(s)", "validate")


def do_hashes(args: Namespace) -> None:
    algorithms = args.algorithm or ["sha-256"]
    result = {
        str(path): Hashes.from_file(path, algorithms).as_dict() for path in args.files
    }
    print(json.dumps(result, indent=2))


def main(argv: list[str] | None = None) -> None:
    """Run the openvex command line.

    :param argv: the command line arguments, ``sys.argv[1:]`` by default
    """
    m = Main(name="openvex", default_level=logging.WARNING)
    subparsers = m.argument_parser.add_subparsers(
        title="action", description="valid actions", dest="action", required=True
    )

    id_parser = subparsers.add_parser("id", help="print the ID of a VEX document")
    id_parser.add_argument("document", type=Path, help="a VEX document")
    id_parser.add_argument(
        "--generator",
        default=vex_config.id_generator,
        help="name of the ID generator (default: %(default)s)",
    )
    id_parser.set_defaults(func=do_id)

    canonical_parser = subparsers.add_parser(
        "canonical", help="print the canonical representation of a VEX document"
    )
    canonical_parser.add_argument("document", type=Path, help="a VEX document")
    canonical_parser.set_defaults(func=do_canonical)

    validate_parser = subparsers.add_parser("validate", help="check VEX documents")
    validate_parser.add_argument(
        "documents", type=Path, nargs="+", metavar="document", help="a VEX document"
    )
    validate_parser.set_defaults(func=do_validate)

    hashes_parser = subparsers.add_parser(
        "hashes", help="print the hashes of artifacts, for use in products"
    )
    hashes_parser.add_argument("files", type=Path, nargs="+", metavar="file")
    hashes_parser.add_argument(
        "--algorithm",
        action="append",
        choices=Hashes.ALGORITHMS,
        help="hash algorithm, may be repeated (default: sha-256)",
    )
    hashes_parser.set_defaults(func=do_hashes)

    m.parse_args(argv)

    if TYPE_CHECKING:
        assert m.args is not None

    try:
        m.args.func(m.args)
    except (VexError, OSError) as err:
        logger.error(err)
        sys.exit(1)
