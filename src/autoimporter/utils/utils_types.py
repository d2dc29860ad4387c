# src/autoimporter/utils/utils_types.py

import importlib
from collections.abc import Callable
from typing import Any, TypeVar, cast


T = TypeVar("T")


def cast_hint(typ: type[T], value: Any) -> T:  # noqa: ARG001
    """Explicit cast that documents intent but is purely for type hinting.

    Performs *no runtime checks*; stick to cast() for unions.
    """
    return cast("T", value)


def resolve_callable(
    value: Callable[..., Any] | str | None,
    *,
    key: str,
) -> Callable[..., Any] | None:
    """Return a callable from a config value.

    Python configs pass functions directly. JSON and TOML configs can only
    name them, using ``package.module:attribute``.
    """
    if value is None or callable(value):
        return value

    if not isinstance(value, str):  # pyright: ignore[reportUnnecessaryIsInstance]
        xmsg = (
            f"{key} must be a callable or a 'module:attr' string"
            f", not {type(value).__name__}"
        )
        raise TypeError(xmsg)

    module_name, sep, attr = value.partition(":")
    if not sep or not module_name or not attr:
        xmsg = f"{key} reference {value!r} must look like 'package.module:function'"
        raise ValueError(xmsg)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        xmsg = f"{key} reference {value!r}: cannot import {module_name!r} ({e})"
        raise ValueError(xmsg) from e

    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            xmsg = f"{key} reference {value!r}: {module_name!r} has no {attr!r}"
            raise ValueError(xmsg) from e

    if not callable(target):
        xmsg = f"{key} reference {value!r} is not callable"
        raise TypeError(xmsg)
    return cast("Callable[..., Any]", target)
