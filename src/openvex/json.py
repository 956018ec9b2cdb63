"""Utility functions related to json."""

from __future__ import annotations

import json

import openvex.error

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import TypeVar

    JsonDataSelf = TypeVar("JsonDataSelf", bound="JsonData")


class JsonDataInvalidJsonError(openvex.error.VexFormatError):
    """An error thrown when input data string does not represent a dictionary."""

    pass


class JsonData(ABC):
    """An object to represent JSON data content.

    Optional values are left out of the dict representation instead of
    being set to :const:`None`.
    """  # noqa RST304

    @abstractmethod
    def as_dict(self) -> dict[str, object]:
        """Return the dict representation of this JSON data object."""
        ...

    def __eq__(self, other: object) -> bool:
        """Check if this JSON data is identical to *other*.

        :param other: The object to compare this JSON data with.

        :return: A :class:`bool` set to **True** if both JSON data are
            identical, **False** if they are not, or if *other* is not a
            :class:`JsonData` object.
        """  # noqa RST304
        if isinstance(other, self.__class__):
            return self.as_json() == other.as_json()
        return False

    def as_json(self, indent: int | None = None) -> str:
        """Return a JSON string representing this JSON data.

        :param indent: see :func:`python:json.dumps`. Keys are sorted when
            no indentation is requested.

        .. seealso:: :func:`python:json.dumps`
        """  # noqa RST304
        if indent is None:
            return json.dumps(self.as_dict(), sort_keys=True)
        return json.dumps(self.as_dict(), indent=indent)

    @classmethod
    def from_dict(cls: type[JsonDataSelf], obj: dict) -> JsonDataSelf:
        """Load a dictionary as a JSON data object.

        :param obj: The dictionary to initialize the JSON data object with.

        :return: A new :class:`JsonData` object initialized with
            values from the input dictionary.
        """  # noqa RST304
        return cls(**obj)

    @classmethod
    def from_json(cls: type[JsonDataSelf], content: str) -> JsonDataSelf:
        """Load a JSON string as a JSON data object.

        As this method calls for :meth:`from_dict`,  the input *content* string
        **MUST** represent a dictionary. If that's not the case, a
        :class:`JsonDataInvalidJsonError` is thrown.

        :param content: The JSON string to initialize the JSON data object with.

        :return: A new :class:`JsonData` object initialized with
            values from the input dictionary.

        :raise: :class:`JsonDataInvalidJsonError` when *content* string does not
            represent a dictionary, or is not a valid JSON string.

        .. seealso:: :meth:`as_json`, :meth:`from_dict`
        """  # noqa RST304
        try:
            dict_repr: dict = json.loads(content)
        except json.JSONDecodeError as err:
            raise JsonDataInvalidJsonError(f"Invalid JSON string: {err}") from err
        if not isinstance(dict_repr, dict):
            raise JsonDataInvalidJsonError("Invalid JSON string initializer")
        return cls.from_dict(dict_repr)

