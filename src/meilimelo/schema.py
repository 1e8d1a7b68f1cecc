"""Mapping between document models and MeiliSearch JSON documents.

Any type pydantic can validate works as a document schema (BaseModel
subclasses, dataclasses, TypedDicts, plain ``dict``). Models decorated with
:func:`schema` additionally receive a ``formatted`` shadow filled from the
``_formatted`` object MeiliSearch returns when highlighting or cropping.
"""
import functools
import types
from typing import Any, Optional, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, create_model

from meilimelo.errors import SchemaMismatch

FORMATTED_FIELD = "formatted"
FORMATTED_ALIAS = "_formatted"

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)

# schema model -> generated Formatted<Name> model
_formatted_models: dict[type, type[BaseModel]] = {}


class FormattedFields(BaseModel):
    """Base for generated ``Formatted<Name>`` models."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


def _is_displayable(annotation: Any) -> bool:
    """True for str, list[str] and their Optional variants."""
    if annotation is str:
        return True
    origin = get_origin(annotation)
    args = get_args(annotation)
    if origin in (Union, types.UnionType):
        non_none = [a for a in args if a is not type(None)]
        return len(non_none) == 1 and _is_displayable(non_none[0])
    return origin is list and args == (str,)


def displayable_fields(model: type[BaseModel]) -> list[str]:
    """Names of the string-like fields of a model, in declaration order."""
    return [
        name
        for name, field in model.model_fields.items()
        if name != FORMATTED_FIELD and _is_displayable(field.annotation)
    ]


def formatted_model(model: type) -> type[BaseModel] | None:
    """Return the generated formatted model for a schema, if it opted in."""
    for klass in getattr(model, "__mro__", (model,)):
        if klass in _formatted_models:
            return _formatted_models[klass]
    return None


def schema(cls: type[ModelT]) -> type[ModelT]:
    """Mark a model as a MeiliSearch schema with a ``_formatted`` shadow.

    Example::

        @schema
        class Employee(BaseModel):
            firstname: str
            lastname: str
            age: int

    produces ``FormattedEmployee(firstname: str | None, lastname: str | None)``
    and an ``Employee`` with an extra ``formatted: FormattedEmployee | None``
    field read from ``_formatted``.
    """
    if not (isinstance(cls, type) and issubclass(cls, BaseModel)):
        raise TypeError("@schema can only decorate pydantic BaseModel subclasses")
    if FORMATTED_FIELD in cls.model_fields:
        raise TypeError(f"{cls.__name__} already declares a '{FORMATTED_FIELD}' field")

    shadow_fields: dict[str, Any] = {}
    for name in displayable_fields(cls):
        field = cls.model_fields[name]
        shadow_fields[name] = (Optional[field.annotation], Field(default=None, alias=field.alias))

    formatted = create_model(
        f"Formatted{cls.__name__}",
        __base__=FormattedFields,
        __module__=cls.__module__,
        **shadow_fields,
    )

    namespace = {
        "__module__": cls.__module__,
        "__qualname__": cls.__qualname__,
        "__doc__": cls.__doc__,
        "__annotations__": {FORMATTED_FIELD: Optional[formatted]},
        FORMATTED_FIELD: Field(default=None, alias=FORMATTED_ALIAS),
        "model_config": ConfigDict(populate_by_name=True),
    }
    model = type(cls)(cls.__name__, (cls,), namespace)
    _formatted_models[model] = formatted
    return model


@functools.lru_cache(maxsize=None)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


def validate_payload(tp: Any, data: Any) -> Any:
    """Validate decoded JSON against ``tp``, raising SchemaMismatch on failure."""
    try:
        return _adapter(tp).validate_python(data)
    except ValidationError as e:
        name = getattr(tp, "__name__", repr(tp))
        raise SchemaMismatch(f"response does not match {name}: {e}", data) from e


def load_document(model: type[T], data: Any) -> T:
    return validate_payload(model, data)


def load_documents(model: type[T], data: Any) -> list[T]:
    return validate_payload(list[model], data)  # type: ignore[valid-type]


def dump_document(document: Any) -> Any:
    """Serialize a document for insertion, leaving out the formatted shadow."""
    exclude = {FORMATTED_FIELD} if formatted_model(type(document)) else None
    return _adapter(type(document)).dump_python(
        document, mode="json", by_alias=True, exclude=exclude
    )
