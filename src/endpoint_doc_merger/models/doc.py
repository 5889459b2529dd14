"""
Documentation record models.

Models for the per-controller, per-endpoint and per-parameter
documentation records that the merger enriches.
"""

from enum import Enum
from typing import Any, Callable, Iterable, Optional

from pydantic import BaseModel, Field, field_validator

from endpoint_doc_merger.models.type_descriptor import JSONDocType


class UnsupportedVerbError(ValueError):
    """A declared HTTP verb has no documentation counterpart."""
    pass


class ApiVerb(str, Enum):
    """HTTP verbs that can be documented."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"

    @classmethod
    def parse(cls, token: str) -> "ApiVerb":
        """
        Convert a declared verb token to an ApiVerb.

        Args:
            token: The verb as declared, in any letter case.

        Returns:
            The matching ApiVerb.

        Raises:
            UnsupportedVerbError: If the token is not a known verb.
        """
        try:
            return cls(token.strip().upper())
        except (ValueError, AttributeError) as e:
            raise UnsupportedVerbError(
                f"Unsupported HTTP verb in route mapping: {token!r}"
            ) from e


class ApiHeaderDoc(BaseModel):
    """A header required by an endpoint."""

    name: str = Field(description="Header name")
    description: Optional[str] = Field(default=None, description="Documented value")

    class Config:
        frozen = True


class ApiParamDoc(BaseModel):
    """Documentation of one path or query parameter."""

    name: str = Field(description="Parameter name")
    description: Optional[str] = Field(default=None)
    jsondoc_type: Optional[JSONDocType] = Field(default=None)
    required: str = Field(default="true", description='"true" or "false"')
    default_value: Optional[str] = Field(default=None)

    @field_validator("required", mode="before")
    @classmethod
    def _stringify_required(cls, value: object) -> object:
        if isinstance(value, bool):
            return str(value).lower()
        return value


class ApiResponseObjectDoc(BaseModel):
    """Documentation of the object an endpoint returns."""

    jsondoc_type: JSONDocType = Field(default_factory=JSONDocType)


def _union(
    existing: list,
    values: Iterable,
    key: Callable[[Any], Any] = lambda value: value,
) -> list:
    merged = list(existing)
    seen = [key(value) for value in merged]
    for value in values:
        if key(value) not in seen:
            merged.append(value)
            seen.append(key(value))
    return merged


class ApiMethodDoc(BaseModel):
    """Documentation of a single endpoint."""

    path: str = Field(default="", description="URL path of the endpoint")
    verb: ApiVerb = Field(default=ApiVerb.GET)
    description: Optional[str] = Field(default=None)
    produces: list[str] = Field(default_factory=list)
    consumes: list[str] = Field(default_factory=list)
    headers: list[ApiHeaderDoc] = Field(default_factory=list)
    path_parameters: list[ApiParamDoc] = Field(default_factory=list)
    query_parameters: list[ApiParamDoc] = Field(default_factory=list)
    response: Optional[ApiResponseObjectDoc] = Field(default=None)

    def add_produces(self, media_types: Iterable[str]) -> None:
        """Add media types, keeping order and skipping duplicates."""
        self.produces = _union(self.produces, media_types)

    def add_consumes(self, media_types: Iterable[str]) -> None:
        """Add media types, keeping order and skipping duplicates."""
        self.consumes = _union(self.consumes, media_types)

    def add_headers(self, headers: Iterable[ApiHeaderDoc]) -> None:
        """
        Add headers, keeping order and skipping names already listed.

        A header already listed keeps its existing record, description
        included.
        """
        self.headers = _union(self.headers, headers, key=lambda header: header.name)

    @property
    def identifier(self) -> str:
        """Identifier of the endpoint, e.g. ``GET /users``."""
        return f"{self.verb.value} {self.path}"


class ApiDoc(BaseModel):
    """Documentation of a controller and its endpoints."""

    name: str = Field(description="Controller name")
    description: Optional[str] = Field(default=None)
    methods: list[ApiMethodDoc] = Field(default_factory=list)
