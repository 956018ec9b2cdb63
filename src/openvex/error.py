from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import List, Optional


class VexError(Exception):
    """Exception raised by functions defined in openvex."""

    def __init__(self, message: str | List[str], origin: Optional[str] = None):
        """Initialize a VexError.

        VexError can store several messages and thus be used to propagate them.

        :param message: the exception message
        :param origin: the name of the function, class, or module having raised
            the exception
        """
        super().__init__(message, origin)
        self.origin = origin
        self.messages = []
        if message is not None:
            if isinstance(message, str):
                self.messages.append(message)
            else:
                self.messages.extend(message)

    def __iadd__(self, other: str | List[str] | VexError) -> VexError:
        """Add messages to the current instance.

        :param other: a message or a VexError instance
        """
        if isinstance(other, VexError):
            self.messages.extend(other.messages)
        elif isinstance(other, str):
            self.messages.append(other)
        else:
            self.messages.extend(other)
        return self

    def __str__(self) -> str:
        if self.messages:
            error_msg = self.messages[-1]
        else:
            error_msg = self.__class__.__name__
        if self.origin:
            return f"{self.origin}: {error_msg}\n"
        else:
            return error_msg


class VexStateError(VexError):
    """An operation is not allowed in the current state of an object."""

    pass


class VexFormatError(VexError):
    """An external representation of a VEX document cannot be processed."""

    pass


class NoStatementsError(VexStateError):
    pass


class JustificationRequiredError(VexStateError):
    pass


class ActionStatementRequiredError(VexStateError):
    pass


class DocumentRoleError(VexStateError):
    pass
