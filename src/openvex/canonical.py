"""Canonical identification of VEX documents.

The canonical representation of a document is a string that only depends on
the semantic content of the document: its ID, role, last update and tooling
are ignored, statements and products are sorted and timestamps are written
as seconds since epoch. Its SHA-256 digest gives the canonical document ID::

    https://openvex.dev/docs/public/vex-<sha256 hexadecimal digest>

The same logical document gets the same ID from all OpenVEX implementations.

Document IDs are produced by ID generators, which are callables taking a
document and returning its ID. Generators are looked up by name in the
``openvex.id_generator`` entry point namespace, see :func:`load_id_generator`.
"""  # noqa RST304

from __future__ import annotations

from typing import TYPE_CHECKING

import stevedore

import openvex.log
from openvex.date import epoch_seconds
from openvex.hash import sha256_hex

if TYPE_CHECKING:
    from datetime import datetime
    from typing import Callable

    from openvex.vex import Component, Document, Statement

    IdGenerator = Callable[[Document], str]

logger = openvex.log.getLogger("canonical")

CANONICAL_ID_PREFIX = "https://openvex.dev/docs/public/vex-"
ID_GENERATOR_NAMESPACE = "openvex.id_generator"


def component_string(component: Component) -> str:
    """Return the canonical string of a single component.

    Subcomponents are not part of the result, see :func:`product_string`.
    """  # noqa RST304
    result = f":{component._id}"
    if component.hashes is not None:
        for algorithm, digest in component.hashes.items():
            result += f":{algorithm}@{digest}"
    if component.identifiers is not None:
        result += f":purl@{component.identifiers.canonical()}"
    return result


def product_string(product: Component) -> str:
    """Return the canonical string of a product and of its subcomponents."""
    return "".join(
        component_string(component)
        for component in [product, *product.subcomponents]
    )


def sorted_statements(document: Document) -> list[Statement]:
    """Return the statements of *document* in canonical order.

    Statements are sorted by vulnerability name, then by timestamp. Statements
    without a timestamp are sorted as if they had the timestamp of the
    document. The sort is stable and the statements are left unchanged.
    """

    def sort_key(statement: Statement) -> tuple[str, datetime]:
        timestamp = statement.timestamp
        if timestamp is None:
            timestamp = document.timestamp
        return statement.vulnerability.name, timestamp

    return sorted(document.statements, key=sort_key)


def canonical_representation(document: Document) -> str:
    """Return the canonical representation of a document.

    :param document: the document to represent

    :raise: :class:`openvex.error.JustificationRequiredError` if a
        ``not_affected`` statement has no justification nor impact statement
    """  # noqa RST304
    doc_timestamp = epoch_seconds(document.timestamp)
    result = f"{doc_timestamp}:{document.version}:{document.author}"

    for statement in sorted_statements(document):
        vulnerability = statement.vulnerability
        if vulnerability._id is not None:
            result += f":{vulnerability._id}"
        result += f":{vulnerability.name}"
        # An empty alias list still yields its separator.
        if vulnerability.aliases is not None:
            result += ":" + ":".join(vulnerability.aliases)

        # A missing justification is written as "null".
        justification = statement.justification
        result += f":{statement.status}:{justification or 'null'}"

        if statement.timestamp is not None:
            result += f":{epoch_seconds(statement.timestamp)}"
        else:
            result += f":{doc_timestamp}"

        # Product strings start with a colon, so once joined they are
        # separated by two colons.
        result += ":".join(
            sorted(product_string(product) for product in statement.products)
        )

    return result


def canonical_hash(document: Document) -> str:
    """Return the SHA-256 hexadecimal digest of the canonical representation."""
    return sha256_hex(canonical_representation(document))


class CanonicalDocumentIdGenerator:
    """Generate IDs from the canonical representation of documents."""

    def __call__(self, document: Document) -> str:
        doc_id = CANONICAL_ID_PREFIX + canonical_hash(document)
        logger.debug("canonical ID computed", vex_id=doc_id)
        return doc_id


def load_id_generator(name: str) -> IdGenerator:
    """Load an ID generator by name.

    ``canonical`` is always available. Other generators are provided by
    plugins, declaring an entry point in the ``openvex.id_generator``
    namespace which refers to a callable returning the generator (usually a
    class)::

        entry_points={
            "openvex.id_generator": [
                "uuid = my_package.ids:UuidGenerator",
            ],
        }

    :param name: the name of the generator
    :return: a callable taking a document and returning its ID

    :raise: :exc:`stevedore.exception.NoMatches` if no plugin provides
        *name*
    """  # noqa RST304
    if name == "canonical":
        return CanonicalDocumentIdGenerator()
    logger.debug("loading ID generator %s", name)
    return stevedore.DriverManager(
        namespace=ID_GENERATOR_NAMESPACE, name=name, invoke_on_load=True
    ).driver
