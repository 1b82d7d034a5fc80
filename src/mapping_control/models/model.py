"""Typed record views over validated mappings.

:func:`define_model` builds a dataclass whose fields correspond one-to-one to
the declared required and permitted keys. Constructing an instance runs the
default validation pass (``require`` the required keys, then ``permit`` the
permitted keys and ``only``) followed by the class's :meth:`Model.validate`
hook.

Examples
--------
>>> Comment = define_model("Comment", require=("author", "body"), permit=("image",))
>>> comment = Comment.from_mapping({"author": "me", "body": "hi"})
>>> comment.author, comment.image
('me', None)
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass, field, make_dataclass
from enum import Enum
import json
import keyword
from pathlib import Path
from typing import Any, ClassVar, Final, TypeVar
import warnings

from mapping_control.core.config_loading import load_config_mapping, parse_json_mapping
from mapping_control.core.keys import ALL_KEYS, PermittedKeys, normalize_key, ordered_unique
from mapping_control.validation import Validator

ModelT = TypeVar("ModelT", bound="Model")


class _Unset(Enum):
    UNSET = "unset"

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset.UNSET
"""Default of every generated field; marks a key that was not given."""


@dataclass(frozen=True, slots=True)
class ModelSchema:
    """Declared keys of one model class.

    Parameters
    ----------
    required_keys : tuple[str, ...]
        Keys that must be present.
    permitted_keys : tuple[str, ...] | PermittedKeys
        Additional allowed keys, or ``ALL_KEYS`` to accept any key.
    field_names : tuple[str, ...]
        Declared keys exposed as dataclass fields.
    writable : bool
        Whether instances accept assignment.
    term : str
        Noun used in validation messages.
    error_type : type[Exception] | None
        Exception class raised on violations.
    """

    required_keys: tuple[str, ...] = ()
    permitted_keys: tuple[str, ...] | PermittedKeys = ()
    field_names: tuple[str, ...] = ()
    writable: bool = False
    term: str = "param"
    error_type: type[Exception] | None = None

    @property
    def permits_all(self) -> bool:
        return self.permitted_keys is ALL_KEYS


class Model:
    """Base class of generated model records.

    Subclasses are produced by :func:`define_model`; hand-written subclasses of
    a generated class may override :meth:`validate` to add rules.
    """

    __schema__: ClassVar[ModelSchema] = ModelSchema()
    _data: dict[str, Any]

    def __post_init__(self) -> None:
        schema = type(self).__schema__
        data = {normalize_key(key): value for key, value in self._data.items()}
        for name in schema.field_names:
            value = getattr(self, name)
            if value is UNSET:
                object.__setattr__(self, name, None)
            else:
                data[name] = value
        object.__setattr__(self, "_data", data)

        validator = Validator(data, error_type=schema.error_type, term=schema.term)
        validator.require(*schema.required_keys)
        if not schema.permits_all:
            validator.permit(*schema.permitted_keys).only()
        self.validate(validator)

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        data = self.__dict__.get("_data")
        if data is not None and name in type(self).__schema__.field_names:
            data[name] = value

    def validate(self, validator: Validator) -> None:
        """Hook for rules beyond the declared keys; the default adds none."""

    @classmethod
    def from_mapping(cls: type[ModelT], data: Mapping[Hashable, Any]) -> ModelT:
        """Build and validate an instance from a mapping.

        Parameters
        ----------
        data : Mapping[Hashable, Any]
            Source mapping. Keys are normalized, so ``"author"`` and
            ``b"author"`` address the same field.

        Returns
        -------
        Model
            Validated instance.

        Raises
        ------
        MappingValidationError
            If the mapping misses required keys or carries undeclared keys.
        """

        if not isinstance(data, Mapping):
            raise TypeError(f"data must be a mapping, got {type(data).__name__}")
        normalized = {normalize_key(key): value for key, value in data.items()}
        kwargs = {name: normalized[name] for name in cls.__schema__.field_names if name in normalized}
        return cls(**kwargs, _data=normalized)

    @classmethod
    def from_json(cls: type[ModelT], text: str | bytes) -> ModelT:
        """Build an instance from a JSON object document."""

        return cls.from_mapping(parse_json_mapping(text))

    @classmethod
    def from_file(cls: type[ModelT], path: str | Path) -> ModelT:
        """Build an instance from a JSON or YAML file."""

        return cls.from_mapping(load_config_mapping(path))

    @classmethod
    def json_create(cls: type[ModelT], text: str | bytes) -> ModelT:
        """Deprecated alias for :meth:`from_json`."""

        warnings.warn(
            "json_create is deprecated and will be removed in v0.3.0. Use from_json instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        return cls.from_json(text)

    def __getitem__(self, key: Hashable) -> Any:
        return self._data.get(normalize_key(key))

    def __setitem__(self, key: Hashable, value: Any) -> None:
        if not type(self).__schema__.writable:
            raise TypeError(f"{type(self).__name__} is read-only")
        name = normalize_key(key)
        if name in type(self).__schema__.field_names:
            setattr(self, name, value)
        else:
            self._data[name] = value

    def __contains__(self, key: Hashable) -> bool:
        return normalize_key(key) in self._data

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the value under ``key``, or ``default`` when absent."""

        return self._data.get(normalize_key(key), default)

    def keys(self) -> tuple[str, ...]:
        """Return present keys in insertion order."""

        return tuple(self._data)

    def slice(self, *keys: Hashable) -> dict[str, Any]:
        """Return the present entries among ``keys``."""

        wanted = {normalize_key(key) for key in keys}
        return {key: value for key, value in self._data.items() if key in wanted}

    def to_dict(self) -> dict[str, Any]:
        """Return a copy of every present entry, declared or not."""

        return dict(self._data)

    def as_json(self) -> dict[str, Any]:
        """Return the JSON-ready mapping."""

        return self.to_dict()

    def to_json(self, **kwargs: Any) -> str:
        """Serialize present entries as one JSON object.

        Values without a JSON form (dates, for example) are written as
        ``str(value)`` unless ``default`` is given.
        """

        kwargs.setdefault("default", str)
        return json.dumps(self.to_dict(), **kwargs)


def define_model(
    name: str,
    *,
    require: Iterable[Hashable] = (),
    permit: Iterable[Hashable] = (),
    permit_all: bool = False,
    writable: bool = False,
    term: str = "param",
    error_type: type[Exception] | None = None,
    base: type[Model] = Model,
    namespace: Mapping[str, Any] | None = None,
) -> type[Model]:
    """Generate a model record class.

    Parameters
    ----------
    name : str
        Class name.
    require : Iterable[Hashable], optional
        Keys every instance must carry.
    permit : Iterable[Hashable], optional
        Further keys instances may carry.
    permit_all : bool, optional
        Accept undeclared keys; they stay reachable through ``[]`` only.
    writable : bool, optional
        Generate a mutable class supporting attribute and item assignment.
    term : str, optional
        Noun used in validation messages.
    error_type : type[Exception] | None, optional
        Exception class raised on violations.
    base : type[Model], optional
        Base class; must be :class:`Model` or a plain subclass of it.
    namespace : Mapping[str, Any] | None, optional
        Extra class attributes, e.g. a ``validate`` hook.

    Returns
    -------
    type[Model]
        Generated dataclass. Declared keys that are not identifiers, start
        with an underscore, or clash with :class:`Model` attributes get no
        field and are read through ``[]``.
    """

    required = tuple(ordered_unique(normalize_key(key) for key in require))
    permitted = tuple(ordered_unique(normalize_key(key) for key in permit))
    field_names = tuple(
        key for key in ordered_unique((*required, *permitted)) if _is_field_name(key, base)
    )

    schema = ModelSchema(
        required_keys=required,
        permitted_keys=ALL_KEYS if permit_all else permitted,
        field_names=field_names,
        writable=writable,
        term=term,
        error_type=error_type,
    )

    fields: list[tuple[str, Any, Any]] = [
        (field_name, Any, field(default=UNSET)) for field_name in field_names
    ]
    fields.append(("_data", dict[str, Any], field(default_factory=dict, repr=False, hash=False)))

    class_namespace = dict(namespace or {})
    class_namespace["__schema__"] = schema
    return make_dataclass(
        name,
        fields,
        bases=(base,),
        namespace=class_namespace,
        frozen=not writable,
    )


def _is_field_name(key: str, base: type[Model]) -> bool:
    return (
        key.isidentifier()
        and not keyword.iskeyword(key)
        and not key.startswith("_")
        and not hasattr(base, key)
    )


__all__ = ["UNSET", "Model", "ModelSchema", "define_model"]
