"""Read openvex configuration files."""

from __future__ import annotations
from dataclasses import fields, dataclass

from typing import TYPE_CHECKING, get_type_hints, ClassVar

import logging
import os

from tomlkit import parse
from tomlkit.exceptions import TOMLKitError
from typeguard import check_type, TypeCheckError

if TYPE_CHECKING:
    from typing import Type, TypeVar

    T = TypeVar("T", bound="ConfigSection")


def known_config_files() -> list[str]:
    """Return the configuration files to load, in loading order."""
    if "OPENVEX_CONFIG" in os.environ:
        return [os.environ["OPENVEX_CONFIG"]]
    return [
        os.path.join(
            os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config")),
            "openvex.toml",
        ),
        os.path.expanduser("~/openvex.toml"),
    ]


@dataclass
class ConfigSection:
    title: ClassVar[str]

    @classmethod
    def load(cls: Type[T]) -> T:
        """Load a section of the configuration file.

        To load a new section, subclass ConfigSection and document the
        fields that you expect to parse, e.g.::

            @dataclass
            class MyConfig(ConfigSection):
                title = "my_config_subsection"
                option : str = "default value"

        my_config = MyConfig.load()

        Values which do not match the type declared in the dataclass are
        reported and ignored, the default value is used instead.
        """
        schema = get_type_hints(cls)
        cls_fields = {f.name: schema[f.name] for f in fields(cls) if f.name != "title"}
        kwargs = {}

        for k, v in Config.load_section(cls.title).items():
            if k in cls_fields:
                try:
                    check_type(v, cls_fields[k])
                except TypeCheckError as err:
                    logging.error(f"{cls.title}.{k}: {err}")
                else:
                    kwargs[k] = v

        return cls(**kwargs)  # type: ignore


class Config:
    """Load openvex configuration file and validate each section.

    This class expose the .load_section(<section>) method that can be used
    by ConfigSection instance corresponding to the loaded configuration
    section after validation.
    """

    data: ClassVar[dict] = {}

    @classmethod
    def load_section(cls, section: str) -> dict:
        """Load a configuration section content.

        :param section: if contains "." nested subsection will be found. For
            instance "log.fmt" will return the section:

            [log]
              [log.fmt]
        :return: the configuration dict
        """
        if not cls.data:
            cls.load()

        subsections = section.split(".")
        result = cls.data
        for subsection in subsections:
            result = result.get(subsection, {})

        return result

    @classmethod
    def load_file(cls, filename: str) -> None:
        """Load a configuration file.

        Note that the default configuration files are automatically loaded
        the first time .load_section() is called.

        :param filename: configuration file to load
        """
        with open(filename) as f:
            try:
                cls.data.update(parse(f.read()).unwrap())
            except TOMLKitError as e:
                logging.error(f"{filename}: {e}")

    @classmethod
    def load(cls) -> None:
        """Load the default configuration file(s)."""
        for config_file in known_config_files():
            if os.path.isfile(config_file):
                cls.load_file(config_file)
