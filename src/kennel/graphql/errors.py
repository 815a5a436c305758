"""
Errors raised while resolving an operation
"""

from dataclasses import dataclass
from typing import Any


class KennelError(Exception):
    """Base exception for operation resolution."""

    pass


class UnknownField(KennelError):
    """A root or nested field is not declared where it was selected."""

    def __init__(self, type_name: str, field_name: str):
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(f"Cannot query field '{field_name}' on type '{type_name}'")


class ArgumentError(KennelError):
    """Base exception for argument problems, raised before any resolver runs."""

    def __init__(self, field_name: str, argument_name: str, message: str):
        self.field_name = field_name
        self.argument_name = argument_name
        super().__init__(message)


class MissingArgument(ArgumentError):
    """A required argument was absent or null."""

    def __init__(self, field_name: str, argument_name: str, type_name: str):
        super().__init__(
            field_name,
            argument_name,
            f"Field '{field_name}' argument '{argument_name}' of type '{type_name}' "
            "is required, but it was not provided",
        )


class TypeMismatch(ArgumentError):
    """An argument value is not of the declared scalar kind."""

    def __init__(self, field_name: str, argument_name: str, type_name: str, value: Any):
        super().__init__(
            field_name,
            argument_name,
            f"Field '{field_name}' argument '{argument_name}' expects type '{type_name}', "
            f"got {value!r}",
        )


class UnknownArgument(TypeMismatch):
    """An argument is not declared on the field."""

    def __init__(self, field_name: str, argument_name: str):
        ArgumentError.__init__(
            self,
            field_name,
            argument_name,
            f"Unknown argument '{argument_name}' on field '{field_name}'",
        )


@dataclass(frozen=True)
class FieldError:
    """A failure confined to one field of the result."""

    path: tuple[str | int, ...]
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "path": list(self.path)}
