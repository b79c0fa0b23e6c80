"""Core callback abstractions.

- FunctionCallback / CallbackDescriptor: the uniform callback contract
- MethodCallback: a method exposed through signature introspection
- @callback: build a MethodCallback from a function
- resolve / locate: find a target object and method, proxy-aware
- ToolContext: caller-supplied data injected into methods that declare it
"""

from .callback import CallbackDescriptor, FunctionCallback
from .coercion import canonical_text, coerce
from .context import ToolContext
from .decorator import callback
from .method import MethodCallback, MethodCallbackBuilder
from .params import MISSING, ParameterSpec, TypeKind, classify, extract_parameters
from .resolver import find_method, locate, resolve
from .schema import SchemaResult, generate_schema
from .target import CallableTarget, MethodKind

__all__ = [
    # Contract
    "FunctionCallback",
    "CallbackDescriptor",
    "ToolContext",
    # Method callbacks
    "MethodCallback",
    "MethodCallbackBuilder",
    "callback",
    # Resolution
    "CallableTarget",
    "MethodKind",
    "resolve",
    "locate",
    "find_method",
    # Introspection
    "ParameterSpec",
    "TypeKind",
    "MISSING",
    "classify",
    "extract_parameters",
    "SchemaResult",
    "generate_schema",
    "coerce",
    "canonical_text",
]
