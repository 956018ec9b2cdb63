"""Digests of strings and files.

Algorithm names are the ones used by OpenVEX in the ``hashes`` map of
components.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import hashlib
import os

import openvex.error

if TYPE_CHECKING:
    from typing import Callable

ALGORITHMS: dict[str, Callable[[], hashlib._Hash]] = {
    "md5": hashlib.md5,
    "sha1": hashlib.sha1,
    "sha-256": hashlib.sha256,
    "sha-384": hashlib.sha384,
    "sha-512": hashlib.sha512,
    "sha3-224": hashlib.sha3_224,
    "sha3-256": hashlib.sha3_256,
    "sha3-384": hashlib.sha3_384,
    "sha3-512": hashlib.sha3_512,
    "blake2s-256": lambda: hashlib.blake2s(digest_size=32),
    "blake2b-256": lambda: hashlib.blake2b(digest_size=32),
    "blake2b-512": lambda: hashlib.blake2b(digest_size=64),
}


class HashError(openvex.error.VexError):
    pass


def __new_hash(kind: str) -> hashlib._Hash:
    if kind not in ALGORITHMS:
        raise HashError(f"unknown hash algorithm {kind}", "hash")
    return ALGORITHMS[kind]()


def sha256_hex(content: str) -> str:
    """Compute the sha256 hexadecimal digest of a string.

    :param content: the string to hash, encoded in UTF-8
    :return: the lower-case hexadecimal digest
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def file_digests(path: str, kinds: tuple[str, ...] = ("sha-256",)) -> dict[str, str]:
    """Compute several hexadecimal digests of a file in one read.

    :param path: path to a file
    :param kinds: the algorithms to use, see :data:`ALGORITHMS`
    :return: a dict associating each algorithm of *kinds* to the digest
    :raise HashError: in case of error
    """  # noqa RST304
    if not os.path.isfile(path):
        raise HashError(f"cannot find {path}", "hash")

    results = {kind: __new_hash(kind) for kind in kinds}
    with open(path, "rb") as f:
        while True:
            data = f.read(1024 * 1024)
            if not data:
                break
            for result in results.values():
                result.update(data)
    return {kind: result.hexdigest() for kind, result in results.items()}


def file_digest(path: str, kind: str) -> str:
    """Compute the hexadecimal digest of a file.

    :param path: path to a file
    :param kind: the algorithm name, see :data:`ALGORITHMS`
    :return: the hash of the file content
    :raise HashError: in case of error
    """  # noqa RST304
    return file_digests(path, (kind,))[kind]
