"""Tests for MethodCallback construction and calls.

Validates:
- Schema inferred from the signature (enums by name, models via $defs)
- Call-time coercion of loosely-typed JSON fields
- ToolContext injection and rejection
- Result encoding by return type
- Error taxonomy for construction and call failures
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import pytest
from pydantic import BaseModel

from toolbind import (
    CallableTarget,
    CoercionError,
    DecodeError,
    ErrorCode,
    InvalidArgumentError,
    InvocationError,
    MethodCallback,
    NotFoundError,
    SchemaGenerationError,
    ToolContext,
    callback,
)
from toolbind.foundation.config import DRAFT_2020_12, InvocationSettings, SchemaSettings, ToolbindSettings
from toolbind.io import codec


class Unit(Enum):
    CELSIUS = "C"
    FAHRENHEIT = "F"


class WeatherService:
    def getWeather(self, city: str, unit: Unit) -> str:
        return f"Weather in {city}: 23°{unit.name}"


class Notifier:
    def __init__(self) -> None:
        self.sent: list[str] = []

    def notify(self, message: str) -> None:
        self.sent.append(message)


@dataclass
class Booking:
    id: str
    seats: int


class BookingService:
    def list_bookings(self, customer: str) -> list[Booking]:
        return [Booking(f"{customer}-1", 2), Booking(f"{customer}-2", 4)]


class Address(BaseModel):
    street: str
    city: str


class Shipping:
    def ship(self, address: Address, items: list[int]) -> dict[str, object]:
        return {"city": address.city, "count": sum(items)}


class AccountService:
    def balance(self, account: str, ctx: ToolContext) -> str:
        return f"{account}:{ctx['user']}"

    def whoami(self, ctx: ToolContext | None = None) -> str:
        return "anonymous" if ctx is None else str(ctx["user"])


class Search:
    def search(self, query: str, limit: int = 5, *, exact: bool = False) -> str:
        return f"{query}|{limit}|{exact}"


class Tally:
    def add(self, _base: int, x: int) -> int:
        return _base + x


class MathTools:
    factor = 10

    @staticmethod
    def add(a: int, b: int) -> int:
        return a + b

    @classmethod
    def scale(cls, value: float) -> float:
        return value * cls.factor


class Loose:
    def anything(self, kind: str):
        if kind == "map":
            return {"kind": kind}
        if kind == "none":
            return None
        return kind


class Thermostat:
    def current_unit(self) -> Unit:
        return Unit.FAHRENHEIT


class Flaky:
    def fail(self, reason: str) -> str:
        raise RuntimeError(reason)

    def timeout(self) -> str:
        raise TimeoutError("upstream timed out")


class Opaque:
    pass


class Unmodelable:
    def take(self, thing: Opaque) -> str:
        return "never"

    def many(self, *names: str) -> str:
        return ",".join(names)


def build(owner: object, method: str, description: str = "Test callback") -> MethodCallback:
    return MethodCallback.builder().owner(owner).method(method).description(description).build()


# ═════════════════════════════════════════════════════════════════════════════
# Weather Scenario
# ═════════════════════════════════════════════════════════════════════════════


def test_weather_call() -> None:
    cb = build(WeatherService(), "getWeather", "Get weather information for a city")
    assert cb.call('{"city": "Barcelona", "unit": "CELSIUS"}') == "Weather in Barcelona: 23°CELSIUS"


def test_weather_descriptor() -> None:
    cb = build(WeatherService(), "getWeather", "Get weather information for a city")
    assert cb.name == "getWeather"
    assert cb.description == "Get weather information for a city"

    schema = codec.decode(cb.input_type_schema)
    assert schema["$schema"] == DRAFT_2020_12
    assert schema["type"] == "object"
    assert schema["properties"]["city"]["type"] == "string"
    assert schema["properties"]["unit"]["enum"] == ["CELSIUS", "FAHRENHEIT"]
    assert schema["required"] == ["city", "unit"]


def test_enum_rejects_unknown_member() -> None:
    cb = build(WeatherService(), "getWeather")
    with pytest.raises(CoercionError) as exc_info:
        cb.call('{"city": "Barcelona", "unit": "KELVIN"}')
    assert exc_info.value.error.code == ErrorCode.COERCION
    assert exc_info.value.parameter == "unit"
    assert "KELVIN" in exc_info.value.message


def test_enum_lookup_is_case_sensitive() -> None:
    cb = build(WeatherService(), "getWeather")
    with pytest.raises(CoercionError):
        cb.call('{"city": "Barcelona", "unit": "celsius"}')


def test_failed_call_leaves_callback_usable() -> None:
    cb = build(WeatherService(), "getWeather")
    with pytest.raises(CoercionError):
        cb.call('{"city": "Oslo", "unit": "KELVIN"}')
    assert cb.call('{"city": "Oslo", "unit": "FAHRENHEIT"}') == "Weather in Oslo: 23°FAHRENHEIT"


def test_calls_are_idempotent() -> None:
    cb = build(WeatherService(), "getWeather")
    payload = '{"city": "Lisbon", "unit": "CELSIUS"}'
    schema = cb.input_type_schema
    assert cb.call(payload) == cb.call(payload)
    assert cb.input_type_schema is schema
    assert cb.describe() == cb.describe()


def test_execute_renders_errors() -> None:
    cb = build(WeatherService(), "getWeather")
    rendered = cb.execute('{"city": "Oslo", "unit": "KELVIN"}')
    assert rendered.startswith("**Callback Error (getWeather):**")
    assert "KELVIN" in rendered


# ═════════════════════════════════════════════════════════════════════════════
# Result Encoding
# ═════════════════════════════════════════════════════════════════════════════


def test_void_method_returns_done() -> None:
    notifier = Notifier()
    cb = build(notifier, "notify")
    assert cb.call('{"message": "hello"}') == "Done"
    assert notifier.sent == ["hello"]


def test_void_result_from_settings() -> None:
    settings = ToolbindSettings(invocation=InvocationSettings(void_result="OK"))
    target = CallableTarget.of(Notifier(), "notify")
    cb = MethodCallback(target, "Send a notification", settings=settings)
    assert cb.call('{"message": "hello"}') == "OK"


def test_list_of_records_is_json() -> None:
    cb = build(BookingService(), "list_bookings")
    result = cb.call('{"customer": "acme"}')
    assert codec.decode(result) == [{"id": "acme-1", "seats": 2}, {"id": "acme-2", "seats": 4}]


def test_mapping_result_is_json() -> None:
    cb = build(Shipping(), "ship")
    result = cb.call('{"address": {"street": "Main", "city": "Oslo"}, "items": [1, "2", 3]}')
    assert codec.decode(result) == {"city": "Oslo", "count": 6}


def test_scalar_result_uses_str() -> None:
    cb = MethodCallback.builder().method(MathTools.add).description("Add integers").build()
    assert cb.call('{"a": 2, "b": "3"}') == "5"


def test_enum_result_uses_member_name() -> None:
    cb = build(Thermostat(), "current_unit")
    assert cb.call("{}") == "FAHRENHEIT"


def test_undeclared_return_type_uses_runtime_value() -> None:
    cb = build(Loose(), "anything")
    assert codec.decode(cb.call('{"kind": "map"}')) == {"kind": "map"}
    assert cb.call('{"kind": "none"}') == "Done"
    assert cb.call('{"kind": "text"}') == "text"


# ═════════════════════════════════════════════════════════════════════════════
# Structured Parameters
# ═════════════════════════════════════════════════════════════════════════════


def test_model_parameter_described_through_defs() -> None:
    cb = build(Shipping(), "ship")
    schema = cb.describe().parameters
    assert schema["properties"]["address"] == {"$ref": "#/$defs/Address"}
    assert "Address" in schema["$defs"]
    assert schema["properties"]["items"]["type"] == "array"
    assert schema["properties"]["items"]["items"] == {"type": "integer"}


def test_invalid_structured_value_is_coercion_error() -> None:
    cb = build(Shipping(), "ship")
    with pytest.raises(CoercionError) as exc_info:
        cb.call('{"address": {"street": "Main"}, "items": [1]}')
    assert exc_info.value.parameter == "address"
    assert isinstance(exc_info.value.__cause__, Exception)


# ═════════════════════════════════════════════════════════════════════════════
# ToolContext
# ═════════════════════════════════════════════════════════════════════════════


def test_context_parameter_excluded_from_schema() -> None:
    cb = build(AccountService(), "balance")
    schema = cb.describe().parameters
    assert list(schema["properties"]) == ["account"]
    assert schema["required"] == ["account"]
    assert cb.accepts_context


def test_context_injected_into_its_slot() -> None:
    cb = build(AccountService(), "balance")
    assert cb.call('{"account": "acc-1"}', {"user": "ada"}) == "acc-1:ada"
    assert cb.call('{"account": "acc-2"}', ToolContext(user="bob")) == "acc-2:bob"


def test_optional_context_receives_none() -> None:
    cb = build(AccountService(), "whoami")
    assert cb.call("{}") == "anonymous"
    assert cb.call("{}", {"user": "ada"}) == "ada"


def test_context_ignored_in_payload() -> None:
    cb = build(AccountService(), "balance")
    assert cb.call('{"account": "acc-1", "ctx": {"user": "mallory"}}', {"user": "ada"}) == "acc-1:ada"


def test_non_empty_context_rejected_without_parameter() -> None:
    cb = build(WeatherService(), "getWeather")
    assert not cb.accepts_context
    with pytest.raises(InvalidArgumentError, match="does not accept ToolContext"):
        cb.call('{"city": "Oslo", "unit": "CELSIUS"}', {"tenant": "t-1"})


def test_empty_context_allowed_without_parameter() -> None:
    cb = build(WeatherService(), "getWeather")
    assert cb.call('{"city": "Oslo", "unit": "CELSIUS"}', {}) == "Weather in Oslo: 23°CELSIUS"
    assert cb.call('{"city": "Oslo", "unit": "CELSIUS"}', ToolContext()) == "Weather in Oslo: 23°CELSIUS"


def test_context_must_be_a_mapping() -> None:
    cb = build(AccountService(), "balance")
    with pytest.raises(InvalidArgumentError, match="must be a mapping, got list") as exc_info:
        cb.call('{"account": "acc-1"}', ["not", "a", "mapping"])  # type: ignore[arg-type]
    assert exc_info.value.error.callback == "balance"


def test_non_mapping_context_rendered_by_execute() -> None:
    cb = build(AccountService(), "balance")
    rendered = cb.execute('{"account": "acc-1"}', ["not", "a", "mapping"])  # type: ignore[arg-type]
    assert rendered.startswith("**Callback Error (balance):**")
    assert "must be a mapping" in rendered


# ═════════════════════════════════════════════════════════════════════════════
# Defaults, Keyword-Only and Primitive Coercion
# ═════════════════════════════════════════════════════════════════════════════


def test_missing_fields_use_defaults() -> None:
    cb = build(Search(), "search")
    assert cb.call('{"query": "python"}') == "python|5|False"


def test_missing_field_without_default_is_none() -> None:
    cb = build(Search(), "search")
    assert cb.call("{}") == "None|5|False"


def test_keyword_only_and_textual_values() -> None:
    cb = build(Search(), "search")
    assert cb.call('{"query": "python", "limit": "7", "exact": "TRUE"}') == "python|7|True"


def test_leading_underscore_parameter() -> None:
    cb = build(Tally(), "add")
    assert cb.describe().parameters["required"] == ["_base", "x"]
    assert cb.call('{"_base": 40, "x": "2"}') == "42"


def test_boolean_coercion_is_strict() -> None:
    cb = build(Search(), "search")
    with pytest.raises(CoercionError):
        cb.call('{"query": "python", "exact": "yes"}')


def test_integer_coercion_failure() -> None:
    cb = build(Search(), "search")
    with pytest.raises(CoercionError, match="limit"):
        cb.call('{"query": "python", "limit": "many"}')


def test_defaults_in_schema() -> None:
    cb = build(Search(), "search")
    schema = cb.describe().parameters
    assert schema["required"] == ["query"]
    assert schema["properties"]["limit"]["default"] == 5
    assert schema["properties"]["exact"]["type"] == "boolean"


# ═════════════════════════════════════════════════════════════════════════════
# Static, Class and Module-Level Targets
# ═════════════════════════════════════════════════════════════════════════════


def test_static_method_by_name_on_instance() -> None:
    cb = build(MathTools(), "add")
    assert cb.target.is_static
    assert cb.call('{"a": 40, "b": 2}') == "42"


def test_static_method_without_owner() -> None:
    cb = MethodCallback.builder().method(MathTools.add).description("Add integers").build()
    assert cb.target.owner is None
    assert list(cb.describe().parameters["properties"]) == ["a", "b"]


def test_classmethod_target() -> None:
    cb = MethodCallback.builder().method(MathTools.scale).description("Scale a value").build()
    assert cb.call('{"value": 2.5}') == "25.0"
    assert list(cb.describe().parameters["properties"]) == ["value"]


def test_bound_method_supplies_owner() -> None:
    notifier = Notifier()
    cb = MethodCallback.builder().method(notifier.notify).description("Send a notification").build()
    cb.call('{"message": "bound"}')
    assert notifier.sent == ["bound"]


def test_decorated_function() -> None:
    @callback(description="Greet someone by name")
    def greet(name: str, excited: bool = False) -> str:
        return f"Hello, {name}{'!' if excited else ''}"

    assert greet.name == "greet"
    assert greet.call('{"name": "Ada", "excited": true}') == "Hello, Ada!"


def test_decorator_uses_docstring() -> None:
    @callback
    def shout(text: str) -> str:
        """Upper-case some text."""
        return text.upper()

    assert shout.description == "Upper-case some text."
    assert shout.call('{"text": "hi"}') == "HI"


def test_decorator_name_is_function_name() -> None:
    @callback(description="Whisper some text")
    def whisper(text: str) -> str:
        return text.lower()

    assert whisper.name == "whisper"
    assert whisper.describe().name == "whisper"
    with pytest.raises(TypeError):
        callback(name="quiet", description="Whisper some text")  # type: ignore[call-overload]


# ═════════════════════════════════════════════════════════════════════════════
# Errors
# ═════════════════════════════════════════════════════════════════════════════


def test_malformed_input_is_decode_error() -> None:
    cb = build(WeatherService(), "getWeather")
    with pytest.raises(DecodeError):
        cb.call("{city: Barcelona")


def test_non_object_input_is_decode_error() -> None:
    cb = build(WeatherService(), "getWeather")
    with pytest.raises(DecodeError, match="JSON object"):
        cb.call('["Barcelona", "CELSIUS"]')


def test_method_exception_wrapped_with_cause() -> None:
    cb = build(Flaky(), "fail")
    with pytest.raises(InvocationError) as exc_info:
        cb.call('{"reason": "boom"}')
    err = exc_info.value
    assert isinstance(err.cause, RuntimeError)
    assert err.__cause__ is err.cause
    assert err.message == "RuntimeError: boom"
    assert not err.error.recoverable


def test_timeout_cause_is_retryable() -> None:
    cb = build(Flaky(), "timeout")
    with pytest.raises(InvocationError) as exc_info:
        cb.call("{}")
    assert exc_info.value.cause_code == ErrorCode.TIMEOUT
    assert exc_info.value.error.recoverable


def test_unmodelable_parameter_fails_construction() -> None:
    with pytest.raises(SchemaGenerationError) as exc_info:
        build(Unmodelable(), "take")
    assert exc_info.value.__cause__ is not None


def test_variadic_parameters_fail_construction() -> None:
    with pytest.raises(SchemaGenerationError, match="names"):
        build(Unmodelable(), "many")


def test_blank_description_rejected() -> None:
    target = CallableTarget.of(WeatherService(), "getWeather")
    with pytest.raises(InvalidArgumentError):
        MethodCallback(target, "   ")
    with pytest.raises(InvalidArgumentError):
        MethodCallback.builder().description("")


def test_missing_owner_for_instance_method() -> None:
    target = CallableTarget(None, WeatherService.getWeather, "getWeather")
    with pytest.raises(InvalidArgumentError, match="Function object must be provided"):
        MethodCallback(target, "Get weather")


def test_builder_requires_method() -> None:
    with pytest.raises(InvalidArgumentError):
        MethodCallback.builder().owner(WeatherService()).description("Get weather").build()


def test_builder_unknown_method_name() -> None:
    with pytest.raises(NotFoundError, match="forecast"):
        build(WeatherService(), "forecast")


def test_compact_schema_from_settings() -> None:
    settings = ToolbindSettings(json_schema=SchemaSettings(pretty=False))
    cb = MethodCallback(CallableTarget.of(WeatherService(), "getWeather"), "Get weather", settings=settings)
    assert "\n" not in cb.input_type_schema
    assert codec.decode(cb.input_type_schema)["type"] == "object"
