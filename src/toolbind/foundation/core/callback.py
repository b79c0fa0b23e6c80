"""Callback abstractions: CallbackDescriptor and FunctionCallback.

A callback is a named, described, schema-documented callable that a
model-driven orchestration layer can invoke with JSON input.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from toolbind.foundation.errors import CallbackException, JsonDict
from toolbind.io import codec

if TYPE_CHECKING:
    from .context import ToolContext


class CallbackDescriptor(BaseModel):
    """Externally visible identity of a callback.

    Attributes:
        name: The resolved method's name
        description: What the callback does (shown to the model); never blank
        input_schema: JSON Schema document describing the input, as text
    """

    model_config = ConfigDict(frozen=True)

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    description: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    input_schema: str = Field(..., min_length=2)

    @property
    def parameters(self) -> JsonDict:
        """The input schema parsed into a dict."""
        return codec.decode(self.input_schema)  # type: ignore[return-value]


class FunctionCallback(ABC):
    """Uniform contract for model-callable functions.

    Subclasses provide ``describe()`` and ``call()``. ``execute()`` is the
    non-raising variant for orchestration layers that report failures back
    to the model instead of propagating them.
    """

    __slots__ = ()

    @abstractmethod
    def describe(self) -> CallbackDescriptor:
        """Name, description and input schema."""

    @abstractmethod
    def call(self, function_input: str, tool_context: ToolContext | Mapping[str, object] | None = None) -> str:
        """Invoke with a JSON object string; return a JSON-compatible string."""

    @property
    def name(self) -> str:
        return self.describe().name

    @property
    def description(self) -> str:
        return self.describe().description

    @property
    def input_type_schema(self) -> str:
        return self.describe().input_schema

    def execute(self, function_input: str, tool_context: ToolContext | Mapping[str, object] | None = None) -> str:
        """Like ``call`` but renders CallbackException failures as text for the model."""
        try:
            return self.call(function_input, tool_context)
        except CallbackException as e:
            return e.render()

    def __call__(self, function_input: str, tool_context: ToolContext | Mapping[str, object] | None = None) -> str:
        return self.call(function_input, tool_context)
