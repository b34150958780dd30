"""
Error types for the GraphQL schema marshaller.

This module defines all exception types raised while marshalling or
un-marshalling a schema:
- MarshallerError: Base exception
- FormatError: Malformed document (missing tag, bad bucket cardinality,
  unresolvable reference path)
- UnknownTypeError: Type tag or named member that cannot be found
- IdentityError: Reference to a node that was never registered

Invariants:
    - All errors inherit from MarshallerError
    - Errors carry the offending address or tag in ``details``
    - Every error aborts the marshal/unmarshal call in progress
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class MarshallerError(Exception):
    """Base exception for all schema marshaller errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "MARSHALLER_ERROR"
        self.details = details or {}


class FormatError(MarshallerError):
    """The serialized document does not have the expected shape.

    Raised when:
    - A node has no type tag and is not a schema document
    - The document has zero or several ``__schemas`` entries
    - A ``$ref`` path segment does not resolve inside the document
    """

    def __init__(
        self,
        message: str,
        reference: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="FORMAT_ERROR",
            details={"reference": reference, "tag": tag},
        )
        self.reference = reference
        self.tag = tag


class UnknownTypeError(MarshallerError):
    """A type tag or a named schema member is unknown.

    Raised when:
    - A type tag has no registered constructor
    - A live object is not one of the supported schema classes
    - A field, argument, enum value or type looked up by name is missing
    """

    def __init__(
        self,
        message: str,
        tag: Optional[str] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="UNKNOWN_TYPE",
            details={"tag": tag, "name": name},
        )
        self.tag = tag
        self.name = name


class IdentityError(MarshallerError):
    """A node was referenced that the current context never registered.

    Attributes:
        reference: The address of the foreign node, if it has one
    """

    def __init__(
        self,
        message: str,
        reference: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="IDENTITY_ERROR",
            details={"reference": reference},
        )
        self.reference = reference
