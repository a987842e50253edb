"""JSON request decoding and response encoding."""

from functools import lru_cache
from typing import Any

import orjson
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import SchemaValidator, from_json
from robyn import Response, status_codes

from toolbox.core.errors import (
    EmptyBodyError,
    MalformedSyntaxError,
    MultipleValuesError,
    PayloadTooLargeError,
    SerializationError,
    TruncatedInputError,
    TypeMismatchError,
    UnknownFieldError,
)
from toolbox.core.logger import LogIcon, logger
from toolbox.models.core import JSONEnvelope, ToolConfiguration

JSON_CONTENT_TYPE = "application/json"


# -----------------------------------------------------------------------------
# Encoding
# -----------------------------------------------------------------------------


def _default(obj: Any) -> Any:
    match obj:
        case BaseModel():
            return obj.model_dump(mode="json")
        case set() | frozenset():
            return list(obj)
        case _:
            raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def dumps(data: Any) -> bytes:
    """Serialize ``data`` with orjson, understanding pydantic models."""
    try:
        return orjson.dumps(data, default=_default)
    except orjson.JSONEncodeError as err:
        raise SerializationError(f"error encoding JSON: {err}") from err


def write_json(status_code: int, data: Any, headers: dict[str, str] | None = None) -> Response:
    """Build a JSON response. Caller headers are applied first, so the JSON content type always wins."""
    body = dumps(data)

    merged = {key: value for key, value in (headers or {}).items() if key.lower() != "content-type"}
    merged["content-type"] = JSON_CONTENT_TYPE

    return Response(status_code=status_code, headers=merged, description=body.decode())


def error_json(err: Exception, status_code: int = status_codes.HTTP_400_BAD_REQUEST) -> Response:
    """Wrap ``err`` in an error envelope."""
    return write_json(status_code, JSONEnvelope(error=True, message=str(err)))


# -----------------------------------------------------------------------------
# Decoding
# -----------------------------------------------------------------------------


def request_body(request: Any) -> bytes:
    """Raw body of a Robyn request as bytes."""
    body = getattr(request, "body", b"")
    match body:
        case bytes():
            return body
        case bytearray() | memoryview():
            return bytes(body)
        case str():
            return body.encode()
        case None:
            return b""
        case _:
            raise TypeError(f"unsupported request body type: {type(body).__name__}")


def _is_truncated(text: str) -> bool:
    try:
        from_json(text, allow_inf_nan=False, allow_partial=True)
    except ValueError:
        return False
    return True


def decode_first_value(text: str) -> tuple[Any, bool]:
    """
    Decode the first JSON value of ``text``.

    Returns the value and whether anything other than whitespace follows it.
    orjson reports the character where decoding stopped; when the text up to
    that point is a complete document, the remainder is a second value. Only
    otherwise is input that parses in partial mode treated as cut off mid-value.
    """
    try:
        return orjson.loads(text), False
    except orjson.JSONDecodeError as err:
        pos = err.pos
        head = text[:pos]
        if head.strip():
            try:
                return orjson.loads(head), True
            except orjson.JSONDecodeError:
                pass

        if _is_truncated(text):
            raise TruncatedInputError() from err
        raise MalformedSyntaxError(pos) from err


_EXTRA_AWARE_SCHEMAS = frozenset({"model", "model-fields", "typed-dict", "dataclass-args"})


def _apply_extra_policy(schema: Any, allow_unknown_fields: bool) -> Any:
    """Copy of a core schema with the unknown-field policy set at every depth."""
    match schema:
        case dict():
            rebuilt = {key: _apply_extra_policy(value, allow_unknown_fields) for key, value in schema.items()}
            if allow_unknown_fields:
                for key in ("extra_behavior", "extra_fields_behavior"):
                    if rebuilt.get(key) == "forbid":
                        rebuilt[key] = "ignore"
            else:
                if "extra_fields_behavior" in rebuilt:
                    rebuilt["extra_fields_behavior"] = "forbid"
                if rebuilt.get("type") in _EXTRA_AWARE_SCHEMAS:
                    rebuilt["extra_behavior"] = "forbid"
            return rebuilt
        case list():
            return [_apply_extra_policy(item, allow_unknown_fields) for item in schema]
        case _:
            return schema


@lru_cache(maxsize=256)
def _validator_for(target: Any, allow_unknown_fields: bool) -> SchemaValidator:
    """Validator for ``target`` with the unknown-field policy applied to every nested model, dataclass and TypedDict."""
    schema = TypeAdapter(target).core_schema
    return SchemaValidator(_apply_extra_policy(schema, allow_unknown_fields))


def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc)


def validate(value: Any, target: Any, allow_unknown_fields: bool = False) -> Any:
    try:
        return _validator_for(target, allow_unknown_fields).validate_python(value)
    except ValidationError as err:
        errors = err.errors()
        unknown = next((error for error in errors if error["type"] == "extra_forbidden"), None)
        if unknown:
            raise UnknownFieldError(_field_name(unknown["loc"])) from err
        raise TypeMismatchError(field=_field_name(errors[0]["loc"]) or None) from err


def read_json(request: Any, target: Any = None, config: ToolConfiguration | None = None) -> Any:
    """
    Decode exactly one JSON document from a request body.

    Args:
        request: Robyn request (anything exposing ``body``).
        target: Shape to validate into: a pydantic model, dataclass or any type
            ``TypeAdapter`` accepts. ``None`` returns the decoded value as is.
        config: Size limit and unknown-field policy.

    Returns:
        The validated value.

    Raises:
        PayloadTooLargeError: The body exceeds ``max_json_size``.
        EmptyBodyError: The body is empty.
        MalformedSyntaxError: The body is not valid JSON.
        TruncatedInputError: The body ends in the middle of a value.
        TypeMismatchError: A value does not fit the target shape.
        UnknownFieldError: An object key is not part of the target shape.
        MultipleValuesError: More than one JSON value was sent.
    """
    config = config or ToolConfiguration()
    limit = config.effective_max_json_size

    body = request_body(request)
    if len(body) > limit:
        raise PayloadTooLargeError(f"body must not be larger than {limit} bytes", limit)

    # Invalid UTF-8 becomes U+FFFD instead of failing the request.
    text = body.decode(errors="replace")

    if not text.strip():
        raise EmptyBodyError()

    value, trailing = decode_first_value(text)
    if target is not None:
        value = validate(value, target, config.allow_unknown_fields)

    if trailing:
        raise MultipleValuesError()

    logger.debug("JSON body decoded", icon=LogIcon.JSON, size=len(body))
    return value
