"""
Document base — pydantic models for Composer's JSON documents.

Composer keys are kebab-case (``require-dev``, ``process-timeout``); every
field gets its JSON key as alias. `Document.from_dict` and `Document.to_dict`
are the entry points the rest of the package uses: validation failures come
out as DocumentParseError with a JSON path, and rendering keeps the order the
keys were read in.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    StrictInt,
    ValidationError,
    model_serializer,
    model_validator,
)

from composer_modifier.core.errors import DocumentParseError

NonNegativeInt = Annotated[StrictInt, Field(ge=0)]


def json_key(name: str) -> str:
    return name.replace("_", "-")


def error_path(loc: tuple, data: Any, prefix: str = "") -> str:
    """
    Render a pydantic error location as a JSON path (``authors[0].name``).

    Location parts that do not address a value of `data` are union member
    tags added by pydantic and are left out.
    """
    path = prefix
    current = data
    for part in loc:
        if isinstance(current, dict) and part in current:
            path = f"{path}.{part}" if path else str(part)
            current = current[part]
        elif isinstance(current, list) and isinstance(part, int) and 0 <= part < len(current):
            path = f"{path}[{part}]"
            current = current[part]
    return path


def describe_validation_error(error: ValidationError, data: Any, prefix: str = "") -> str:
    """One line per distinct failure, ``path: reason``, joined with ``; ``."""
    messages: list[str] = []
    for item in error.errors():
        loc = item["loc"]
        match item["type"]:
            case "missing":
                parent = error_path(loc[:-1], data, prefix) or "<root>"
                message = f"{parent}: missing required field {loc[-1]!r}"
            case "extra_forbidden":
                parent = error_path(loc[:-1], data, prefix) or "<root>"
                message = f"{parent}: unknown field {loc[-1]!r}"
            case _:
                message = f"{error_path(loc, data, prefix) or '<root>'}: {item['msg']}"
        if message not in messages:
            messages.append(message)
    return "; ".join(messages)


class Document(BaseModel):
    """
    Base for Composer documents and their nested objects.

    Keys a model does not declare are kept (``model_extra``) and rendered
    back; subclasses set ``extra="forbid"`` to reject them instead. A null
    value reads as an absent field and is left out on render.
    """

    model_config = ConfigDict(alias_generator=json_key, populate_by_name=True, extra="allow")

    _key_order: tuple[str, ...] = PrivateAttr(default=())

    @classmethod
    def from_dict(cls, data: Any, path: str = ""):
        """Validate a parsed JSON object."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise DocumentParseError(describe_validation_error(e, data, path)) from e

    def to_dict(self) -> dict:
        """Render to a JSON-compatible dict keyed by the JSON names."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def _json_keys(cls) -> dict[str, str]:
        return {name: field.alias or name for name, field in cls.model_fields.items()}

    @model_validator(mode="wrap")
    @classmethod
    def remember_key_order(cls, data: Any, handler):
        document = handler(data)
        if isinstance(data, dict):
            keys = cls._json_keys()
            declared = set(keys.values())
            document._key_order = tuple(
                keys.get(k, k) for k, v in data.items() if v is not None or keys.get(k, k) not in declared
            )
        return document

    @model_serializer(mode="wrap")
    def render_in_key_order(self, handler) -> dict[str, Any]:
        keys = self._json_keys()
        declared = set(keys) | set(keys.values())
        out = {k: v for k, v in handler(self).items() if v is not None or k not in declared}

        ordered = {k: out[k] for k in self._key_order if k in out}
        ordered.update((k, v) for k, v in out.items() if k not in ordered)
        return ordered
