"""OpenVEX documents.

This module implements the data model of the OpenVEX specification
https://github.com/openvex/spec/blob/main/OPENVEX-SPEC.md.

A VEX document groups statements. Each statement asserts the *status* of a
set of products with respect to one vulnerability.

Documents are validated when they are emitted (see :meth:`Document.as_dict`),
not when they are modified. A document that does not validate cannot be
converted to its external representation.
"""  # noqa RST304

from __future__ import annotations

import json
import yaml

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from packageurl import PackageURL

import openvex
import openvex.log
from openvex.canonical import load_id_generator
from openvex.config import ConfigSection
from openvex.date import now, parse_timestamp, timestamp_as_string
from openvex.error import (
    ActionStatementRequiredError,
    DocumentRoleError,
    JustificationRequiredError,
    NoStatementsError,
    VexFormatError,
    VexStateError,
)
from openvex.hash import ALGORITHMS, file_digests
from openvex.json import JsonData

if TYPE_CHECKING:
    from typing import Any, Iterable, Mapping, TypeVar

    from openvex.canonical import IdGenerator

    VexEnumSelf = TypeVar("VexEnumSelf", bound="VexEnum")

logger = openvex.log.getLogger("vex")

DEFAULT_CONTEXT: str = "https://openvex.dev/ns/v0.2.0"
DEFAULT_TOOLING: str = f"openvex/{openvex.__version__}"


@dataclass
class VexConfig(ConfigSection):
    title: ClassVar[str] = "vex"

    context: str = DEFAULT_CONTEXT
    tooling: str = DEFAULT_TOOLING
    id_generator: str = "canonical"


vex_config = VexConfig.load()


def _optional_timestamp(value: str | datetime | None) -> datetime | None:
    return None if value is None else parse_timestamp(value)


class VexEnum(Enum):
    """Base class of the OpenVEX labels.

    The value of each enumerate is the label used in VEX documents.
    """

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_value(cls: type[VexEnumSelf], value: str | VexEnumSelf) -> VexEnumSelf:
        """Create an enumerate from a given *value*.

        :return: An enumerate set according to *value*.

        :raise: :exc:`python:ValueError` If *value* is not one of the possible
            values of this enumerate.
        """  # noqa RST304
        if isinstance(value, cls):
            return value
        elif isinstance(value, str) and value:
            return cls(value)
        raise ValueError(f"Invalid {cls.__name__} {value!r}")


class Status(VexEnum):
    """Impact of a vulnerability on the products of a statement.

    :cvar NOT_AFFECTED: No remediation is required regarding this vulnerability.
    :cvar AFFECTED: Actions are recommended to remediate or address this
        vulnerability.
    :cvar FIXED: These product versions contain a fix for the vulnerability.
    :cvar UNDER_INVESTIGATION: It is not yet known whether these product
        versions are affected by the vulnerability. An update will be provided
        in a later release.
    """

    NOT_AFFECTED = "not_affected"
    AFFECTED = "affected"
    FIXED = "fixed"
    UNDER_INVESTIGATION = "under_investigation"


class Justification(VexEnum):
    """Justification for a :attr:`Status.NOT_AFFECTED` status.

    :cvar COMPONENT_NOT_PRESENT: The product is not affected by the
        vulnerability because the component is not included.
    :cvar VULNERABLE_CODE_NOT_PRESENT: The vulnerable component is included in
        artifact, but the vulnerable code is not present.
    :cvar VULNERABLE_CODE_NOT_IN_EXECUTE_PATH: The vulnerable code (likely in
        subcomponents) can not be executed as it is used by the product.
    :cvar VULNERABLE_CODE_CANNOT_BE_CONTROLLED_BY_ADVERSARY: The vulnerable
        code cannot be controlled by an attacker to exploit the vulnerability.
    :cvar INLINE_MITIGATIONS_ALREADY_EXIST: The product includes built-in
        protections or features that prevent exploitation of the
        vulnerability.
    """  # noqa RST304

    COMPONENT_NOT_PRESENT = "component_not_present"
    VULNERABLE_CODE_NOT_PRESENT = "vulnerable_code_not_present"
    VULNERABLE_CODE_NOT_IN_EXECUTE_PATH = "vulnerable_code_not_in_execute_path"
    VULNERABLE_CODE_CANNOT_BE_CONTROLLED_BY_ADVERSARY = (
        "vulnerable_code_cannot_be_controlled_by_adversary"
    )
    INLINE_MITIGATIONS_ALREADY_EXIST = "inline_mitigations_already_exist"


class Vulnerability(JsonData):
    """Vulnerability of a statement.

    :ivar str name: The main identifier of the vulnerability, e.g. a CVE ID.
    :ivar str | None _id: An IRI identifying the vulnerability.
    :ivar str | None description: Free form text describing the
        vulnerability.
    :ivar list[str] | None aliases: Other names under which the vulnerability
        is known.
    """  # noqa RST304

    def __init__(
        self,
        name: str,
        _id: str | None = None,
        description: str | None = None,
        aliases: Iterable[str] | None = None,
    ):
        if name is None:
            raise ValueError("Vulnerability name cannot be None")
        self.name: str = name
        self._id: str | None = _id
        self.description: str | None = description
        self.aliases: list[str] | None = list(aliases) if aliases is not None else None

    def as_dict(self) -> dict[str, Any]:
        dict_repr: dict = {"name": self.name}
        if self._id is not None:
            dict_repr["@id"] = self._id
        if self.description is not None:
            dict_repr["description"] = self.description
        if self.aliases is not None:
            dict_repr["aliases"] = list(self.aliases)
        return dict_repr

    @classmethod
    def from_dict(cls, obj: dict) -> Vulnerability:
        return cls(
            name=obj["name"],
            _id=obj.get("@id"),
            description=obj.get("description"),
            aliases=obj.get("aliases"),
        )


class Hashes(JsonData):
    """Cryptographic hashes of a component.

    Digests are indexed by algorithm name (``sha-256``, ``blake2b-512`` ...).
    When given as keyword arguments, dashes in algorithm names are replaced
    by underscores::

        Hashes(sha_256="e3b0c442...")

    Whatever the order in which digests are set, they are always listed in
    the order of :attr:`ALGORITHMS`.
    """  # noqa RST304

    ALGORITHMS: tuple[str, ...] = tuple(ALGORITHMS)

    def __init__(self, digests: Mapping[str, str] | None = None, **kwargs: str):
        """Initialize a set of hashes.

        :param digests: A dict associating algorithm names to hexadecimal
            digests.
        :param kwargs: Digests given by algorithm name.

        :raise: :exc:`python:ValueError` If an algorithm is not supported.
        """  # noqa RST304
        self.__digests: dict[str, str] = {}
        if digests is not None:
            for algorithm, digest in digests.items():
                self[algorithm] = digest
        for name, digest in kwargs.items():
            self[name.replace("_", "-")] = digest

    def __getitem__(self, algorithm: str) -> str:
        return self.__digests[algorithm]

    def __setitem__(self, algorithm: str, digest: str | None) -> None:
        if algorithm not in self.ALGORITHMS:
            raise ValueError(f"Unsupported hash algorithm {algorithm!r}")
        if digest is None:
            self.__digests.pop(algorithm, None)
        else:
            self.__digests[algorithm] = digest

    def get(self, algorithm: str) -> str | None:
        return self.__digests.get(algorithm)

    def items(self) -> list[tuple[str, str]]:
        """Return the present (algorithm, digest) pairs.

        The pairs are sorted according to :attr:`ALGORITHMS`.
        """  # noqa RST304
        return [
            (algorithm, self.__digests[algorithm])
            for algorithm in self.ALGORITHMS
            if algorithm in self.__digests
        ]

    def as_dict(self) -> dict[str, Any]:
        return dict(self.items())

    @classmethod
    def from_dict(cls, obj: dict) -> Hashes:
        return cls(obj)

    @classmethod
    def from_file(cls, path: Path | str, algorithms: Iterable[str] = ("sha-256",)) -> Hashes:
        """Compute the hashes of a file.

        :param path: The file to hash.
        :param algorithms: The algorithms to use.
        """
        return cls(file_digests(str(path), tuple(algorithms)))


class Identifiers(JsonData):
    """Software identifiers of a component.

    Only package URLs are supported. Other kinds of identifiers found in VEX
    documents (CPEs) are ignored.

    :ivar PackageURL purl: The package URL of the component.
    """

    def __init__(self, purl: PackageURL | str):
        """Initialize software identifiers.

        :param purl: The package URL, either parsed or as a string.

        :raise: :exc:`python:ValueError` If *purl* is not a valid package
            URL.
        """  # noqa RST304
        if isinstance(purl, str):
            purl = PackageURL.from_string(purl)
        elif not isinstance(purl, PackageURL):
            raise ValueError(f"Invalid package URL {purl!r}")
        self.purl: PackageURL = purl

    def canonical(self) -> str:
        """Return the canonical form of the package URL.

        Percent-encoded colons are decoded, so that the result only depends on
        the package URL, not on the way it is encoded.
        """
        return self.purl.to_string().replace("%3A", ":")

    def as_dict(self) -> dict[str, Any]:
        return {"purl": self.purl.to_string()}

    @classmethod
    def from_dict(cls, obj: dict) -> Identifiers:
        return cls(purl=obj["purl"])


class Component(JsonData):
    """A piece of software, identified by an IRI.

    Products, the components a statement applies to, may list the
    subcomponents they include (nested or vendored code). Subcomponents are
    components without subcomponents themselves.

    :ivar str _id: The IRI identifying the component.
    :ivar Identifiers | None identifiers: Software identifiers.
    :ivar Hashes | None hashes: Cryptographic hashes of the component.
    :ivar list[Component] subcomponents: The subcomponents of a product.
    """  # noqa RST304

    def __init__(
        self,
        _id: str,
        identifiers: Identifiers | None = None,
        hashes: Hashes | None = None,
        subcomponents: Iterable[Component] | None = None,
    ):
        if _id is None:
            raise ValueError("Component ID cannot be None")
        self._id: str = _id
        self.identifiers: Identifiers | None = identifiers
        self.hashes: Hashes | None = hashes
        self.subcomponents: list[Component] = (
            list(subcomponents) if subcomponents is not None else []
        )

    def as_dict(self) -> dict[str, Any]:
        dict_repr: dict = {"@id": self._id}
        if self.identifiers is not None:
            dict_repr["identifiers"] = self.identifiers.as_dict()
        if self.hashes is not None:
            dict_repr["hashes"] = self.hashes.as_dict()
        if self.subcomponents:
            dict_repr["subcomponents"] = [sc.as_dict() for sc in self.subcomponents]
        return dict_repr

    @classmethod
    def from_dict(cls, obj: dict) -> Component:
        return cls(
            _id=obj["@id"],
            identifiers=(
                Identifiers.from_dict(obj["identifiers"])
                if obj.get("identifiers") is not None
                else None
            ),
            hashes=(
                Hashes.from_dict(obj["hashes"])
                if obj.get("hashes") is not None
                else None
            ),
            subcomponents=[Component.from_dict(sc) for sc in obj.get("subcomponents", [])],
        )


# A product is a component which may carry subcomponents.
Product = Component


class Statement(JsonData):
    """An assertion about the impact of a vulnerability on products.

    The vulnerability, the products and the status are set once and for all
    when the statement is created.

    Some fields are required depending on the *status*. They are checked
    when they are read, and thus when the statement is emitted:

    - for :attr:`Status.NOT_AFFECTED`, a *justification* or an
      *impact_statement* **MUST** be provided;
    - for :attr:`Status.AFFECTED`, an *action_statement* **MUST** be
      provided.

    :ivar str | None _id: An IRI identifying the statement.
    :ivar int | None version: The statement version.
    :ivar datetime | None timestamp: The time at which the information
        expressed in the statement was known to be true. When not set, the
        timestamp of the document is inherited.
    :ivar datetime | None last_updated: The time the statement was last
        updated.
    :ivar str | None supplier: Supplier of the products.
    :ivar str | None status_notes: How the status was determined.
    :ivar str | None impact_statement: Why the vulnerability cannot be
        exploited.
    """  # noqa RST304

    def __init__(
        self,
        vulnerability: Vulnerability,
        products: Iterable[Component],
        status: Status | str,
        _id: str | None = None,
        version: int | None = None,
        timestamp: datetime | None = None,
        last_updated: datetime | None = None,
        supplier: str | None = None,
        status_notes: str | None = None,
        justification: Justification | str | None = None,
        impact_statement: str | None = None,
        action_statement: str | None = None,
    ):
        """Initialize a statement.

        :param vulnerability: The vulnerability this statement is about.
        :param products: The products this statement applies to. At least one
            product is required.
        :param status: The impact of the vulnerability on the products.
        :param action_statement: Actions to remediate or mitigate the
            vulnerability. Setting it also sets the action statement
            timestamp to the current time.

        :raise: :exc:`python:ValueError` If *vulnerability* or *status* are
            missing, or if there are no *products*.
        """  # noqa RST304
        if vulnerability is None:
            raise ValueError("Statement vulnerability cannot be None")
        products = list(products) if products is not None else []
        if not products:
            raise ValueError("A statement must apply to at least one product")
        self.__vulnerability: Vulnerability = vulnerability
        self.__products: list[Component] = products
        self.__status: Status = Status.from_value(status)

        self._id: str | None = _id
        self.version: int | None = version
        self.timestamp: datetime | None = timestamp
        self.last_updated: datetime | None = last_updated
        self.supplier: str | None = supplier
        self.status_notes: str | None = status_notes
        self.impact_statement: str | None = impact_statement

        self.__justification: Justification | None = None
        self.justification = justification

        self.__action_statement: str | None = None
        self.__action_statement_timestamp: datetime | None = None
        if action_statement is not None:
            self.action_statement = action_statement

    @property
    def vulnerability(self) -> Vulnerability:
        return self.__vulnerability

    @property
    def products(self) -> list[Component]:
        return self.__products

    @property
    def status(self) -> Status:
        return self.__status

    @property
    def justification(self) -> Justification | None:
        """Justification of a :attr:`Status.NOT_AFFECTED` status.

        :raise: :class:`JustificationRequiredError` If the status is
            :attr:`Status.NOT_AFFECTED` and neither a justification nor an
            impact statement is set.
        """  # noqa RST304
        if (
            self.status == Status.NOT_AFFECTED
            and self.__justification is None
            and self.impact_statement is None
        ):
            raise JustificationRequiredError(
                "For statements conveying a not_affected status, a VEX statement "
                "MUST include either a status justification or an "
                "impact_statement informing why the product is not affected by "
                f"{self.vulnerability.name}"
            )
        return self.__justification

    @justification.setter
    def justification(self, value: Justification | str | None) -> None:
        self.__justification = (
            None if value is None else Justification.from_value(value)
        )

    @property
    def action_statement(self) -> str | None:
        """Actions to remediate or mitigate the vulnerability.

        Setting the action statement sets :attr:`action_statement_timestamp`
        to the current time.

        :raise: :class:`ActionStatementRequiredError` If the status is
            :attr:`Status.AFFECTED` and no action statement is set.
        """  # noqa RST304
        if self.status == Status.AFFECTED and self.__action_statement is None:
            raise ActionStatementRequiredError(
                'For a statement with "affected" status, a VEX statement MUST '
                "include a statement that SHOULD describe actions to remediate "
                f"or mitigate {self.vulnerability.name}"
            )
        return self.__action_statement

    @action_statement.setter
    def action_statement(self, value: str | None) -> None:
        self.__action_statement = value
        self.__action_statement_timestamp = now()

    @property
    def action_statement_timestamp(self) -> datetime | None:
        return self.__action_statement_timestamp

    def validate(self) -> None:
        """Check that the fields required by the status are set.

        :raise: :class:`VexStateError` If a required field is missing.
        """  # noqa RST304
        self.justification
        self.action_statement

    def __values(self) -> tuple:
        return (
            self.vulnerability,
            self.products,
            self.status,
            self._id,
            self.version,
            self.timestamp,
            self.last_updated,
            self.supplier,
            self.status_notes,
            self.__justification,
            self.impact_statement,
            self.__action_statement,
            self.__action_statement_timestamp,
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Statement):
            return self.__values() == other.__values()
        return False

    def as_dict(self) -> dict[str, Any]:
        dict_repr: dict = {
            "vulnerability": self.vulnerability.as_dict(),
            "products": [product.as_dict() for product in self.products],
            "status": self.status.value,
        }
        optional_fields = (
            ("@id", self._id),
            ("version", self.version),
            ("timestamp", timestamp_as_string(self.timestamp)),
            ("last_updated", timestamp_as_string(self.last_updated)),
            ("supplier", self.supplier),
            ("status_notes", self.status_notes),
            ("justification", self.justification),
            ("impact_statement", self.impact_statement),
            ("action_statement", self.action_statement),
            (
                "action_statement_timestamp",
                timestamp_as_string(self.action_statement_timestamp),
            ),
        )
        for key, value in optional_fields:
            if value is not None:
                dict_repr[key] = value.value if isinstance(value, Enum) else value
        return dict_repr

    @classmethod
    def from_dict(cls, obj: dict) -> Statement:
        products = obj["products"]
        if not isinstance(products, list):
            raise ValueError("Statement products must be a list")
        statement = cls(
            vulnerability=Vulnerability.from_dict(obj["vulnerability"]),
            products=[Component.from_dict(product) for product in products],
            status=obj["status"],
            _id=obj.get("@id"),
            version=obj.get("version"),
            timestamp=_optional_timestamp(obj.get("timestamp")),
            last_updated=_optional_timestamp(obj.get("last_updated")),
            supplier=obj.get("supplier"),
            status_notes=obj.get("status_notes"),
            justification=obj.get("justification"),
            impact_statement=obj.get("impact_statement"),
        )
        # Restore the action statement as is, with its original timestamp.
        statement.__action_statement = obj.get("action_statement")
        statement.__action_statement_timestamp = _optional_timestamp(
            obj.get("action_statement_timestamp")
        )
        return statement


class StatementList(list):
    """The statements of a document.

    Statements are added one at a time with :meth:`append`, which implements
    the OpenVEX data inheritance rule: existing statements without a
    timestamp inherit the current timestamp of the document, then the
    document timestamp is set to the current time.

    See https://github.com/openvex/spec/blob/main/OPENVEX-SPEC.md#data-inheritance
    """

    def __init__(self, document: Document, statements: Iterable[Statement] = ()):
        super().__init__(statements)
        self.document = document

    def append(self, statement: Statement) -> None:
        for existing in self:
            if existing.timestamp is None:
                existing.timestamp = self.document.timestamp
        self.document.timestamp = now()
        super().append(statement)

    def extend(self, statements: Iterable[Statement]) -> None:
        raise VexStateError("Statements must be added one at a time with append()")

    def insert(self, index: Any, statement: Statement) -> None:
        raise VexStateError("Statements must be added one at a time with append()")

    def __iadd__(self, statements: Iterable[Statement]) -> StatementList:  # type: ignore[override]
        raise VexStateError("Statements must be added one at a time with append()")

    def __imul__(self, count: Any) -> StatementList:  # type: ignore[override]
        raise VexStateError("Statements must be added one at a time with append()")

    def __setitem__(self, index: Any, value: Any) -> None:
        # Slice assignment may insert statements.
        if isinstance(index, slice):
            raise VexStateError("Statements must be added one at a time with append()")
        super().__setitem__(index, value)


class Document(JsonData):
    """OpenVEX document.

    A document is either authored from scratch::

        doc = Document("Jane Doe <jane@example.com>")
        doc.statements.append(statement)
        doc.save(Path("vex.json"))

    or loaded from its external representation with :meth:`from_dict`,
    :meth:`from_json` or :meth:`from_file`. The *role* of the author can only
    be set on documents authored from scratch.

    :ivar str | None _id: The IRI identifying the document. When emitting a
        document without ID, the ID is generated, see :meth:`generate_id`.
    :ivar datetime timestamp: The time at which the document was issued.
    :ivar int version: The document version, see :meth:`increment_version`.
    :ivar datetime | None last_updated: The time the document was last
        updated.
    :ivar str | None tooling: How the document was generated.
    """  # noqa RST304

    FORMAT_JSON: str = "json"
    FORMAT_YAML: str = "yaml"
    FORMATS: tuple = (FORMAT_JSON, FORMAT_YAML)

    def __init__(
        self,
        author: str,
        context: str = vex_config.context,
        _id: str | None = None,
    ):
        """Initialize a new VEX document.

        The document timestamp is set to the current time, its version to 1
        and its tooling to the configured default.

        :param author: The author of the document.
        :param context: The URL of the OpenVEX context definition.
        :param _id: The IRI identifying the document.

        :raise: :exc:`python:ValueError` If *context* or *author* is
            :const:`None`.
        """  # noqa RST304
        if context is None:
            raise ValueError("Context cannot be None")
        if author is None:
            raise ValueError("Author cannot be None")
        self.__context: str = context
        self.__author: str = author
        self._id: str | None = _id
        self.timestamp: datetime = now()
        self.version: int = 1
        self.__role: str | None = None
        self.last_updated: datetime | None = None
        self.tooling: str | None = vex_config.tooling
        self.__statements: StatementList = StatementList(self)
        self.__deserialized: bool = False

    @property
    def context(self) -> str:
        return self.__context

    @property
    def author(self) -> str:
        return self.__author

    @property
    def deserialized(self) -> bool:
        """Whether this document was loaded from an external representation."""
        return self.__deserialized

    @property
    def role(self) -> str | None:
        return self.__role

    @role.setter
    def role(self, value: str | None) -> None:
        if self.__deserialized:
            raise DocumentRoleError("Cannot set author role on existing documents")
        self.__role = value

    @property
    def statements(self) -> StatementList:
        return self.__statements

    @statements.setter
    def statements(self, statements: Iterable[Statement]) -> None:
        """Replace all the statements of this document.

        Unlike :meth:`StatementList.append`, no timestamp is inherited.
        """  # noqa RST304
        self.__statements = StatementList(self, statements)

    def increment_version(self) -> None:
        self.version += 1

    def statement(self, name: str) -> Statement | None:
        """Get the first statement about a given vulnerability.

        :param name: The name, or one of the aliases, of the vulnerability.

        :return: A matching statement, or :const:`None` if there is no
            statement about *name* in this document.
        """  # noqa RST304
        for statement in self.statements:
            vulnerability = statement.vulnerability
            if vulnerability.name == name or name in (vulnerability.aliases or ()):
                return statement
        return None

    def validate(self) -> None:
        """Check that this document can be emitted.

        :raise: :class:`NoStatementsError` If the document has no statement.
        :raise: :class:`JustificationRequiredError`,
            :class:`ActionStatementRequiredError` If a statement lacks a field
            required by its status.
        """  # noqa RST304
        if not self.statements:
            raise NoStatementsError("A VEX document must contain at least one statement")
        for statement in self.statements:
            statement.validate()

    def generate_id(self, generator: IdGenerator | None = None) -> str:
        """Generate and set the ID of this document.

        :param generator: A callable returning the ID of a document. If
            :const:`None`, the generator configured in the ``vex`` section of
            the configuration is used (canonical IDs by default).

        :return: The new document ID.
        """  # noqa RST304
        if generator is None:
            generator = load_id_generator(vex_config.id_generator)
        self._id = generator(self)
        logger.debug("document ID generated", vex_id=self._id)
        return self._id

    def __values(self) -> tuple:
        return (
            self.context,
            self._id,
            self.author,
            self.timestamp,
            self.version,
            self.role,
            self.last_updated,
            self.tooling,
            list(self.statements),
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Document):
            return self.__values() == other.__values()
        return False

    def as_dict(self) -> dict[str, Any]:
        """Return the dict representation of this document.

        The document is validated first, then its ID is generated if not
        set yet.

        :raise: :class:`VexStateError` If the document does not validate.
        """  # noqa RST304
        self.validate()
        if self._id is None:
            self.generate_id()
        dict_repr: dict = {
            "@context": self.context,
            "@id": self._id,
            "author": self.author,
            "timestamp": timestamp_as_string(self.timestamp),
            "version": self.version,
        }
        if self.role is not None:
            dict_repr["role"] = self.role
        if self.last_updated is not None:
            dict_repr["last_updated"] = timestamp_as_string(self.last_updated)
        if self.tooling is not None:
            dict_repr["tooling"] = self.tooling
        dict_repr["statements"] = [st.as_dict() for st in self.statements]
        return dict_repr

    @classmethod
    def from_dict(cls, obj: dict) -> Document:
        """Load a document from its dict representation.

        :raise: :class:`VexFormatError` If a required field is missing or if
            a field has an invalid value.
        """  # noqa RST304
        try:
            document = cls(author=obj["author"], context=obj["@context"], _id=obj.get("@id"))
            document.timestamp = parse_timestamp(obj["timestamp"])
            version = obj["version"]
            if not isinstance(version, int) or isinstance(version, bool) or version < 1:
                raise ValueError(f"Invalid document version {version!r}")
            document.version = version
            document.__role = obj.get("role")
            document.last_updated = _optional_timestamp(obj.get("last_updated"))
            document.tooling = obj.get("tooling")
            statements = obj.get("statements")
            if not statements or not isinstance(statements, list):
                raise ValueError("A VEX document must contain at least one statement")
            document.statements = [Statement.from_dict(st) for st in statements]
        except KeyError as err:
            raise VexFormatError(f"Missing required field {err}") from err
        except (AttributeError, TypeError, ValueError) as err:
            raise VexFormatError(f"Invalid VEX document: {err}") from err

        document.__deserialized = True
        return document

    @classmethod
    def from_file(cls, path: Path) -> Document:
        """Create a VEX document from a file content.

        Files with a ``.yaml`` or ``.yml`` extension are read with
        :func:`yaml.safe_load()`, other files are read as JSON.

        :param path: The path of a VEX document.

        :raise: :class:`VexFormatError` If the file content is not a valid
            VEX document.
        """  # noqa RST304
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            try:
                if path.suffix in (".yaml", ".yml"):
                    vex_dict = yaml.safe_load(f)
                else:
                    vex_dict = json.load(f)
            except (json.JSONDecodeError, yaml.YAMLError) as err:
                raise VexFormatError(f"Cannot parse {path}: {err}") from err

        if not isinstance(vex_dict, dict):
            raise VexFormatError(f"{path} does not contain a VEX document")
        document = cls.from_dict(vex_dict)
        logger.debug("loaded %s", path, vex_id=document._id)
        return document

    def save(self, path: Path, output_format: str = FORMAT_JSON) -> None:
        """Save this document to a file with the given format.

        The file is not written if the document does not validate.

        :param path: The path of the saved file.
        :param output_format: The file format. May be any of :attr:`FORMATS`.

        :raise: :exc:`python:ValueError` If *output_format* is not one of the
            possible :attr:`FORMATS`.
        :raise: :class:`VexStateError` If the document does not validate.
        """  # noqa RST304
        if output_format not in self.FORMATS:
            raise ValueError(
                f"Invalid output format {output_format}. Accepted output "
                f"formats are: {', '.join(self.FORMATS)}"
            )

        dict_repr = self.as_dict()
        if output_format == self.FORMAT_JSON:
            content = json.dumps(dict_repr, indent=2)
        else:
            content = yaml.dump(dict_repr, default_flow_style=False, sort_keys=False)

        path = Path(path)
        path.parent.mkdir(exist_ok=True, parents=True)
        with path.open("w", encoding="utf-8") as f:
            f.write(content)
        logger.debug("saved %s", path, vex_id=self._id)
