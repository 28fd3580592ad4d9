"""Cache-aside and invalidation decorators.

These decorators wrap async data-access functions (database queries,
HTTP fetches) with an explicit ``CacheService`` instance.
"""

import functools
import inspect
import re
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar

from suppcache.core.interfaces.invalidator import IInvalidator
from suppcache.core.services.cache_service import CacheService
from suppcache.infrastructure.key_builders.default import DefaultKeyBuilder

F = TypeVar("F", bound=Callable[..., Any])

_fallback_key_builder = DefaultKeyBuilder()


def cached(
    service: CacheService[Any],
    ttl: timedelta | None = None,
    tags: list[str] | None = None,
    key: str | Callable[..., str] | None = None,
) -> Callable[[F], F]:
    """Decorator for caching async function results.

    Caches the result of an async function based on its arguments,
    through ``service.load_or_compute``. Failures of the wrapped function
    propagate and are not cached.

    Args:
        service: The cache service holding the results.
        ttl: Time-to-live for cached results. Uses config default if None.
        tags: Tags for cache invalidation. Supports {arg_name} interpolation.
        key: Custom cache key or function to generate key.
            If string, supports {arg_name} interpolation.
            If callable, receives (*args, **kwargs) and returns key string.

    Returns:
        Decorated function.

    Example:
        @cached(service, ttl=timedelta(minutes=10), key="product:{id}")
        async def get_product(id: str) -> dict:
            return await db.fetch_product(id)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            cache_key = _build_cache_key(service, func, args, kwargs, key)
            resolved_tags = _resolve_tags(tags, func, args, kwargs)

            async def producer() -> Any:
                return await func(*args, **kwargs)

            return await service.load_or_compute(
                cache_key,
                producer,
                ttl,
                resolved_tags or None,
            )

        return wrapper  # type: ignore

    return decorator


def invalidates(
    invalidator: IInvalidator,
    scopes: list[str] | None = None,
    tags: list[str] | None = None,
) -> Callable[[F], F]:
    """Decorator for invalidating cache entries after a mutation.

    Executes the decorated function and then invalidates every entry
    under the given key scopes and tags. If the function raises, nothing
    is invalidated.

    Args:
        invalidator: The cache service (or other invalidator) to notify.
        scopes: Key prefixes to invalidate. Supports {arg_name} interpolation.
        tags: Tags to invalidate. Supports {arg_name} interpolation.

    Returns:
        Decorated function.

    Example:
        @invalidates(service, scopes=["product:{id}", "products:"])
        async def update_product(id: str, data: dict) -> dict:
            return await db.update_product(id, data)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            # Execute function first
            result = await func(*args, **kwargs)

            for scope in _resolve_tags(scopes, func, args, kwargs):
                invalidator.invalidate(scope)
            resolved_tags = _resolve_tags(tags, func, args, kwargs)
            if resolved_tags:
                invalidator.invalidate_tags(resolved_tags)

            return result

        return wrapper  # type: ignore

    return decorator


def _build_cache_key(
    service: CacheService[Any],
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    custom_key: str | Callable[..., str] | None,
) -> str:
    """Build cache key for a function call.

    Args:
        service: The cache service, whose key builder is preferred.
        func: The function being cached.
        args: Positional arguments.
        kwargs: Keyword arguments.
        custom_key: Custom key or key builder function.

    Returns:
        The cache key string.
    """
    if custom_key is not None:
        if callable(custom_key):
            return custom_key(*args, **kwargs)
        return _interpolate_string(custom_key, _bind_arguments(func, args, kwargs))

    builder = service.key_builder
    if not isinstance(builder, DefaultKeyBuilder):
        builder = _fallback_key_builder

    return builder.build_call_key(
        module=func.__module__ or "",
        name=func.__qualname__,
        args=args,
        kwargs=kwargs,
    )


def _resolve_tags(
    tags: list[str] | None,
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> list[str]:
    """Resolve tags with argument interpolation.

    Args:
        tags: Tag patterns with optional {arg} placeholders.
        func: The decorated function, whose signature names the arguments.
        args: Positional arguments.
        kwargs: Keyword arguments.

    Returns:
        List of resolved tag strings.
    """
    if not tags:
        return []

    arguments = _bind_arguments(func, args, kwargs)
    return [_interpolate_string(tag, arguments) for tag in tags]


def _bind_arguments(
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> dict[str, Any]:
    """Map every argument of a call to its parameter name.

    Positional arguments and defaults are included, so ``f("1")`` and
    ``f(id="1")`` resolve ``{id}`` identically.

    Raises:
        TypeError: If the arguments do not match the signature.
    """
    bound = inspect.signature(func).bind(*args, **kwargs)
    bound.apply_defaults()
    return dict(bound.arguments)


def _interpolate_string(template: str, arguments: dict[str, Any]) -> str:
    """Interpolate {arg_name} placeholders in string.

    Args:
        template: String with {arg_name} placeholders.
        arguments: Call arguments keyed by parameter name.

    Returns:
        Interpolated string.
    """
    pattern = r"\{(\w+)\}"

    def replacer(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in arguments:
            return str(arguments[name])
        return match.group(0)  # Keep original if not found

    return re.sub(pattern, replacer, template)
