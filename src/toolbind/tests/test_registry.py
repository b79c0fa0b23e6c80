"""Tests for ObjectRegistry and CallbackRegistry.

Validates:
- Registration rules and registration-order lookups
- Type assignability for plain objects, protocols and proxies
- Function-tool export and non-raising execution by name
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import pytest

from toolbind import CallbackRegistry, InvalidArgumentError, MethodCallback, ObjectRegistry, callback, proxy
from toolbind.foundation.registry import Registry


class Speaker(Protocol):
    def speak(self) -> str: ...


@runtime_checkable
class Named(Protocol):
    name: str


class Dog:
    name = "rex"

    def speak(self) -> str:
        return "woof"


class Robot(Speaker):
    def speak(self) -> str:
        return "beep"


@callback(description="Add two integers")
def add(a: int, b: int) -> int:
    return a + b


@callback(description="Echo a message back")
def echo(message: str) -> str:
    return message


# ═════════════════════════════════════════════════════════════════════════════
# ObjectRegistry
# ═════════════════════════════════════════════════════════════════════════════


def test_object_registry_satisfies_protocol() -> None:
    assert isinstance(ObjectRegistry(), Registry)


def test_register_and_lookup() -> None:
    registry = ObjectRegistry()
    dog = registry.register("dog", Dog())
    assert registry.lookup_by_name("dog") is dog
    assert registry.lookup_by_name("cat") is None
    assert "dog" in registry
    assert len(registry) == 1
    assert registry.names() == ["dog"]


def test_register_rejects_duplicates_and_blanks() -> None:
    registry = ObjectRegistry()
    registry.register("dog", Dog())
    with pytest.raises(InvalidArgumentError, match="already registered"):
        registry.register("dog", Dog())
    with pytest.raises(InvalidArgumentError):
        registry.register("  ", Dog())
    with pytest.raises(InvalidArgumentError):
        registry.register("none", None)


def test_unregister() -> None:
    registry = ObjectRegistry()
    registry.register("dog", Dog())
    assert registry.unregister("dog")
    assert not registry.unregister("dog")
    assert len(registry) == 0


def test_lookup_by_type_keeps_registration_order() -> None:
    registry = ObjectRegistry()
    registry.register("b", Dog())
    registry.register("robot", Robot())
    registry.register("a", Dog())
    assert [n for n, _ in registry.lookup_all_by_type(Dog)] == ["b", "a"]


def test_protocol_assignability() -> None:
    registry = ObjectRegistry()
    registry.register("dog", Dog())
    registry.register("robot", Robot())
    # structural match only for runtime-checkable protocols
    assert [n for n, _ in registry.lookup_all_by_type(Speaker)] == ["robot"]
    assert [n for n, _ in registry.lookup_all_by_type(Named)] == ["dog"]


def test_proxy_assignable_to_its_interfaces() -> None:
    registry = ObjectRegistry()
    wrapped = registry.register("robot", proxy(Robot(), Speaker))
    assert registry.lookup_all_by_type(Speaker) == [("robot", wrapped)]
    assert registry.lookup_all_by_type(Robot) == []
    assert registry.is_intercepted(wrapped)
    assert registry.intercepted_interfaces(wrapped) == (Speaker,)
    assert isinstance(registry.unwrap(wrapped), Robot)


def test_lookup_by_type_requires_a_class() -> None:
    with pytest.raises(InvalidArgumentError):
        ObjectRegistry().lookup_all_by_type("Dog")  # type: ignore[arg-type]


# ═════════════════════════════════════════════════════════════════════════════
# CallbackRegistry
# ═════════════════════════════════════════════════════════════════════════════


def test_callback_registry_basics() -> None:
    callbacks = CallbackRegistry()
    callbacks.register_all(add, echo)
    assert len(callbacks) == 2
    assert "add" in callbacks
    assert callbacks.get("add") is add
    assert callbacks["echo"] is echo
    assert [cb.name for cb in callbacks] == ["add", "echo"]


def test_callback_registry_rejects_duplicate_names() -> None:
    callbacks = CallbackRegistry()
    callbacks.register(add)
    with pytest.raises(InvalidArgumentError, match="add"):
        callbacks.register(add)


def test_to_openai() -> None:
    callbacks = CallbackRegistry()
    callbacks.register(add)
    [definition] = callbacks.to_openai()
    assert definition["type"] == "function"
    function = definition["function"]
    assert function["name"] == "add"
    assert function["description"] == "Add two integers"
    assert function["parameters"]["type"] == "object"
    assert function["parameters"]["required"] == ["a", "b"]


def test_describe_all_and_markdown() -> None:
    callbacks = CallbackRegistry()
    callbacks.register_all(add, echo)
    assert [d.name for d in callbacks.describe_all()] == ["add", "echo"]
    assert "- **echo**: Echo a message back" in callbacks.describe()


def test_execute_by_name() -> None:
    callbacks = CallbackRegistry()
    callbacks.register(add)
    assert callbacks.execute("add", '{"a": 1, "b": 2}') == "3"


def test_execute_renders_call_errors() -> None:
    callbacks = CallbackRegistry()
    callbacks.register(add)
    rendered = callbacks.execute("add", '{"a": "one", "b": 2}')
    assert rendered.startswith("**Callback Error (add):**")


def test_execute_unknown_callback() -> None:
    callbacks = CallbackRegistry()
    callbacks.register(add)
    rendered = callbacks.execute("subtract", "{}")
    assert rendered.startswith("**Callback Error (subtract):**")
    assert "not found" in rendered
    assert "add" in rendered


def test_from_registry_into_callback_registry() -> None:
    objects = ObjectRegistry()
    objects.register("dog", Dog())
    callbacks = CallbackRegistry()
    callbacks.register(MethodCallback.from_registry(objects, Dog, "speak", "Make the dog speak"))
    assert callbacks.execute("speak", "{}") == "woof"
