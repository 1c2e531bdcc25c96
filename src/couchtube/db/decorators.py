"""Database operation decorators for consistent error handling."""

from collections.abc import Awaitable, Callable
from functools import wraps
import inspect
from types import NoneType, UnionType
from typing import (
    Any,
    ParamSpec,
    TypeVar,
    Union,
    cast,
    get_args,
    get_origin,
    get_type_hints,
)

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..exceptions import ConstraintViolationError, DatabaseOperationError

P = ParamSpec("P")
T = TypeVar("T")


def _unwrap_optional(annotation: Any, path: str) -> Any:
    """Return T for an ``T | None`` annotation, the annotation itself otherwise."""
    if get_origin(annotation) not in (Union, UnionType):
        return annotation
    non_none_types = [arg for arg in get_args(annotation) if arg is not NoneType]
    if len(non_none_types) != 1:
        raise TypeError(
            f"Path '{path}' contains an unsupported Union type: {annotation}"
        )
    return non_none_types[0]


def _validate_id_path(
    func_name: str,
    sig: inspect.Signature,
    resolved_hints: dict[str, Any],
    path: str,
) -> None:
    """Validate a dotted attribute path against a function's type hints.

    Called at decoration time so that a typo in a path fails on import
    instead of while handling an error.

    Args:
        func_name: The name of the function being decorated (for error messages).
        sig: The signature of the function.
        resolved_hints: The resolved type hints for the function.
        path: The dotted attribute path to validate (e.g., "video.id").

    Raises:
        TypeError: If the path is invalid or does not end in a ``str`` attribute.
    """
    base_param_name, *attr_path = path.split(".")

    if base_param_name not in sig.parameters:
        raise TypeError(
            f"Decorator on '{func_name}' specifies path '{path}', "
            f"but the function has no parameter named '{base_param_name}'."
        )

    current_type = resolved_hints.get(base_param_name)
    for attr_name in attr_path:
        if current_type is None:
            raise TypeError(
                f"In path '{path}', '{attr_name}' is reached through an "
                f"unannotated value on '{func_name}'."
            )
        current_type = _unwrap_optional(current_type, path)
        try:
            current_type = get_type_hints(current_type).get(attr_name)
        except (NameError, TypeError) as e:
            raise TypeError(
                f"In path '{path}', cannot resolve attribute '{attr_name}' on "
                f"'{getattr(current_type, '__name__', current_type)}'."
            ) from e

    if _unwrap_optional(current_type, path) is not str:
        raise TypeError(
            f"The final attribute in path '{path}' must be typed as 'str' or "
            f"'str | None', but found '{current_type}' in '{func_name}'."
        )


def _extract_value_from_path(
    bound_args: inspect.BoundArguments, path: str
) -> str | None:
    """Follow a dotted path through the bound arguments of a call.

    Args:
        bound_args: The bound arguments from the decorated function call.
        path: The dotted attribute path to extract (e.g., "video.id").

    Returns:
        The extracted string value, or None if any hop is missing.
    """
    base_param_name, *attr_path = path.split(".")
    current_value = bound_args.arguments.get(base_param_name)
    for attr in attr_path:
        if current_value is None:
            break
        current_value = getattr(current_value, attr, None)
    return cast(str | None, current_value)


def _base_db_error_handler(
    operation: str,
    id_paths: dict[str, str] | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Translate SQLAlchemy errors raised by a coroutine into store errors.

    ``IntegrityError`` becomes :class:`ConstraintViolationError`; any other
    ``SQLAlchemyError`` becomes :class:`DatabaseOperationError`. Identifiers
    named in ``id_paths`` are extracted from the call's arguments and attached
    to the raised error.

    Args:
        operation: Description of the operation for error messages.
        id_paths: Maps the keyword of the raised error (e.g., "video_id") to
            its extraction path (e.g., "video.id").

    Returns:
        A decorator for async functions.
    """
    id_paths = id_paths or {}

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        try:
            sig = inspect.signature(func)
            resolved_hints = get_type_hints(func)
        except (NameError, TypeError, ValueError) as e:
            raise TypeError(
                f"Could not inspect the signature of {func.__name__}."
            ) from e

        for path in id_paths.values():
            _validate_id_path(func.__name__, sig, resolved_hints, path)

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                extracted_ids: dict[str, str | None] = {}
                if id_paths:
                    bound_args = sig.bind(*args, **kwargs)
                    bound_args.apply_defaults()
                    extracted_ids = {
                        id_name: _extract_value_from_path(bound_args, path)
                        for id_name, path in id_paths.items()
                    }
                if isinstance(e, IntegrityError):
                    raise ConstraintViolationError(
                        f"Constraint violated while trying to {operation}",
                        **extracted_ids,
                    ) from e
                raise DatabaseOperationError(
                    f"Failed to {operation}", **extracted_ids
                ) from e

        return wrapper

    return decorator


def handle_db_errors(
    operation: str,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorator for generic database operations without specific context."""
    return _base_db_error_handler(operation=operation)


def handle_channel_db_errors(
    operation: str,
    channel_name_from: str = "name",
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorator for database operations involving a channel.

    Extracts the channel name for error reporting.
    """
    return _base_db_error_handler(
        operation=operation, id_paths={"channel_name": channel_name_from}
    )


def handle_video_db_errors(
    operation: str,
    video_id_from: str = "video_id",
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorator for database operations involving a video.

    Extracts the video id for error reporting.
    """
    return _base_db_error_handler(
        operation=operation, id_paths={"video_id": video_id_from}
    )
