"""Canonical representation and canonical document ID tests."""

from __future__ import annotations

import pytest
import stevedore.exception

from dateutil.parser import parse as date_parse
from pathlib import Path

from openvex.canonical import (
    CANONICAL_ID_PREFIX,
    CanonicalDocumentIdGenerator,
    canonical_hash,
    canonical_representation,
    component_string,
    load_id_generator,
    product_string,
    sorted_statements,
)
from openvex.error import JustificationRequiredError
from openvex.vex import (
    Component,
    Document,
    Hashes,
    Identifiers,
    Justification,
    Product,
    Statement,
    Status,
    Vulnerability,
)

DATA_DIR = Path(__file__).parent.parent / "vex" / "data"

SPRING_AUTHOR = "Spring Builds <spring-builds@users.noreply.github.com>"
LOG4J_ID = "https://nvd.nist.gov/vuln/detail/CVE-2021-44228"
EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
GIT_PURL = (
    "pkg:oci/git@sha256:23a264e6e429852221a963e9f17338ba3f5796dc7086e46439a6f4482cf6e0cb"
)

SPRING_BUILDS_CANONICAL = (
    f"1673917636:1:{SPRING_AUTHOR}:{LOG4J_ID}:CVE-2021-44228:GHSA-jfh8-c2jp-5v3q"
    ":not_affected:vulnerable_code_not_in_execute_path:1673917636"
    f":{GIT_PURL}:sha-256@{EMPTY_SHA256}:purl@{GIT_PURL}"
)
SPRING_BUILDS_HASH = "481c546e3d4cf906332bc73d9e78fbd999f84a2ef0e0105e82841bd8b02ebc20"
SPRING_BOOT_HASH = "63fa798bc2a5522386a09b87ebaf2586e40cada9627cba5ea207b4e4159893b0"


def log4j_document(
    purl: str = GIT_PURL,
    timestamp: str = "2023-01-16T19:07:16.853479631-06:00",
) -> Document:
    document = Document(SPRING_AUTHOR)
    document.timestamp = date_parse(timestamp)
    document.statements = [
        Statement(
            Vulnerability(
                "CVE-2021-44228", _id=LOG4J_ID, aliases=["GHSA-jfh8-c2jp-5v3q"]
            ),
            [
                Product(
                    purl,
                    identifiers=Identifiers(purl),
                    hashes=Hashes(sha_256=EMPTY_SHA256),
                )
            ],
            Status.NOT_AFFECTED,
            justification=Justification.VULNERABLE_CODE_NOT_IN_EXECUTE_PATH,
        )
    ]
    return document


def simple_statement(
    name: str,
    product_id: str = "pkg:generic/curl@8.3.0",
    status: Status = Status.FIXED,
    timestamp: str | None = None,
) -> Statement:
    return Statement(
        Vulnerability(name),
        [Product(product_id)],
        status,
        timestamp=date_parse(timestamp) if timestamp is not None else None,
    )


def test_concrete_scenario():
    document = log4j_document()
    assert canonical_representation(document) == SPRING_BUILDS_CANONICAL
    assert canonical_hash(document) == SPRING_BUILDS_HASH
    assert (
        CanonicalDocumentIdGenerator()(document)
        == f"https://openvex.dev/docs/public/vex-{SPRING_BUILDS_HASH}"
    )


@pytest.mark.parametrize(
    "filename,expected_hash",
    [
        ("spring-builds.json", SPRING_BUILDS_HASH),
        ("spring-boot.json", SPRING_BOOT_HASH),
    ],
)
def test_loaded_documents(filename, expected_hash):
    document = Document.from_file(DATA_DIR / filename)
    assert CanonicalDocumentIdGenerator()(document) == CANONICAL_ID_PREFIX + expected_hash


def test_spring_boot_document():
    document = log4j_document(
        purl="pkg:maven/org.springframework.boot/spring-boot@2.6.0-M3",
        timestamp="2023-01-17T01:07:16.85347963Z",
    )
    assert canonical_hash(document) == SPRING_BOOT_HASH


def test_determinism():
    document = log4j_document()
    other = log4j_document()
    # Incidental fields are not part of the canonical representation
    other._id = "https://example.com/vex/1"
    other.role = "Project Release Bot"
    other.last_updated = date_parse("2024-01-01T00:00:00Z")
    other.tooling = "another-tool/2.0"
    # Only seconds matter
    other.timestamp = date_parse("2023-01-17T01:07:16Z")
    other.statements[0].status_notes = "not part of the canonical representation"

    assert canonical_representation(document) == canonical_representation(other)
    assert canonical_hash(document) == canonical_hash(other)
    # The representation is stable
    assert canonical_representation(document) == canonical_representation(document)


@pytest.mark.parametrize(
    "modify",
    [
        lambda d: d.increment_version(),
        lambda d: setattr(d, "timestamp", date_parse("2023-01-17T01:07:17Z")),
        lambda d: setattr(
            d.statements[0], "justification", Justification.COMPONENT_NOT_PRESENT
        ),
        lambda d: setattr(
            d.statements[0], "timestamp", date_parse("2023-01-18T00:00:00Z")
        ),
        lambda d: d.statements[0].vulnerability.aliases.append("CVE-2021-45046"),
        lambda d: setattr(d.statements[0].vulnerability, "_id", None),
        lambda d: d.statements[0].products[0].hashes.__setitem__(
            "sha-512", "cf83e135"
        ),
        lambda d: setattr(d.statements[0].products[0], "identifiers", None),
        lambda d: d.statements[0].products[0].subcomponents.append(
            Component("pkg:generic/zlib@1.3")
        ),
        lambda d: d.statements.append(simple_statement("CVE-2023-38545")),
    ],
)
def test_sensitivity(modify):
    document = log4j_document()
    modified = log4j_document()
    modify(modified)
    assert canonical_representation(document) != canonical_representation(modified)
    assert canonical_hash(document) != canonical_hash(modified)


def test_author_sensitivity():
    document = log4j_document()
    other = Document("Jane Doe <jane@example.com>")
    other.timestamp = document.timestamp
    other.statements = list(document.statements)
    assert canonical_hash(document) != canonical_hash(other)


def test_statement_order_independence():
    statements = [
        simple_statement("CVE-2023-38545"),
        simple_statement("CVE-2021-44228", timestamp="2023-01-01T00:00:00Z"),
        simple_statement("CVE-2021-44228", timestamp="2022-01-01T00:00:00Z"),
        simple_statement("CVE-2022-0001", status=Status.UNDER_INVESTIGATION),
    ]
    document = Document("Jane Doe")
    document.statements = statements
    reversed_document = Document("Jane Doe")
    reversed_document.timestamp = document.timestamp
    reversed_document.statements = list(reversed(statements))

    assert canonical_representation(document) == canonical_representation(
        reversed_document
    )
    assert [
        (st.vulnerability.name, st.timestamp) for st in sorted_statements(document)
    ] == [
        ("CVE-2021-44228", date_parse("2022-01-01T00:00:00Z")),
        ("CVE-2021-44228", date_parse("2023-01-01T00:00:00Z")),
        ("CVE-2022-0001", None),
        ("CVE-2023-38545", None),
    ]


def test_sort_does_not_modify_statements():
    document = Document("Jane Doe")
    document.statements = [
        simple_statement("CVE-2023-38545", timestamp="2020-01-01T00:00:00Z"),
        simple_statement("CVE-2023-38545"),
    ]
    # The statement without timestamp is sorted with the document timestamp
    assert sorted_statements(document) == [
        document.statements[0],
        document.statements[1],
    ]
    assert document.statements[1].timestamp is None


def test_inherited_timestamp():
    document = Document("Jane Doe")
    document.timestamp = date_parse("2023-01-17T01:07:16Z")
    document.statements = [simple_statement("CVE-2023-38545")]
    assert canonical_representation(document) == (
        "1673917636:1:Jane Doe:CVE-2023-38545:fixed:null:1673917636"
        ":pkg:generic/curl@8.3.0"
    )

    # Setting the statement timestamp explicitly to the same instant does not
    # change the representation.
    dated = Document("Jane Doe")
    dated.timestamp = document.timestamp
    dated.statements = [
        simple_statement("CVE-2023-38545", timestamp="2023-01-17T01:07:16Z")
    ]
    assert canonical_representation(document) == canonical_representation(dated)


def test_products_sorted_and_separated():
    statement = Statement(
        Vulnerability("CVE-2023-38545"),
        [Product("pkg:generic/wget@1.0"), Product("pkg:generic/curl@8.3.0")],
        Status.FIXED,
    )
    document = Document("Jane Doe")
    document.timestamp = date_parse("2023-01-17T01:07:16Z")
    document.statements = [statement]
    # Product strings start with a colon, they end up separated by two colons
    assert canonical_representation(document).endswith(
        ":1673917636:pkg:generic/curl@8.3.0::pkg:generic/wget@1.0"
    )


def test_component_string():
    component = Component(
        "https://example.com/curl",
        identifiers=Identifiers("pkg:generic/curl@8.3.0"),
        hashes=Hashes(
            {"blake2b-512": "bb", "md5": "aa", "sha-256": EMPTY_SHA256, "sha1": "cc"}
        ),
    )
    assert component_string(component) == (
        ":https://example.com/curl:md5@aa:sha1@cc"
        f":sha-256@{EMPTY_SHA256}:blake2b-512@bb"
        ":purl@pkg:generic/curl@8.3.0"
    )


def test_product_string():
    product = Product(
        "pkg:generic/curl@8.3.0",
        subcomponents=[
            Component("pkg:generic/libcurl@8.3.0"),
            Component("pkg:generic/zlib@1.3", hashes=Hashes(sha1="cc")),
        ],
    )
    assert product_string(product) == (
        ":pkg:generic/curl@8.3.0:pkg:generic/libcurl@8.3.0"
        ":pkg:generic/zlib@1.3:sha1@cc"
    )


def test_impact_statement_only():
    document = Document("Jane Doe")
    document.timestamp = date_parse("2023-01-17T01:07:16Z")
    document.statements = [
        Statement(
            Vulnerability("CVE-2023-38545"),
            [Product("pkg:generic/curl@8.3.0")],
            Status.NOT_AFFECTED,
            impact_statement="The vulnerable code is never called",
        )
    ]
    assert ":not_affected:null:1673917636:" in canonical_representation(document)


def test_missing_justification():
    document = Document("Jane Doe")
    document.statements = [simple_statement("CVE-2023-38545", status=Status.NOT_AFFECTED)]
    with pytest.raises(JustificationRequiredError):
        canonical_representation(document)


def test_load_id_generator():
    generator = load_id_generator("canonical")
    assert isinstance(generator, CanonicalDocumentIdGenerator)
    assert generator(log4j_document()) == CANONICAL_ID_PREFIX + SPRING_BUILDS_HASH

    with pytest.raises(stevedore.exception.NoMatches):
        load_id_generator("does-not-exist")


@pytest.mark.parametrize(
    "aliases,expected",
    [
        (None, "1673917636:1:A:CVE-1:fixed:null:1673917636:pkg:generic/x@1"),
        ([], "1673917636:1:A:CVE-1::fixed:null:1673917636:pkg:generic/x@1"),
        (
            ["GHSA-1", "GHSA-2"],
            "1673917636:1:A:CVE-1:GHSA-1:GHSA-2:fixed:null:1673917636:pkg:generic/x@1",
        ),
    ],
)
def test_aliases_and_absent_justification(aliases, expected):
    document = Document("A")
    document.timestamp = date_parse("2023-01-17T01:07:16Z")
    document.statements = [
        Statement(
            Vulnerability("CVE-1", aliases=aliases),
            [Product("pkg:generic/x@1")],
            Status.FIXED,
        )
    ]
    assert canonical_representation(document) == expected
