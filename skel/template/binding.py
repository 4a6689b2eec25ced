"""Turn a template context into the resolver set consumed by the renderer.

Every context key becomes a zero-argument callable named after the token it
fills.  Top-level keys map to one resolver each; a nested mapping contributes
one resolver per inner key, named by the inner key alone.  Each resolver is
its own object holding its own key and value, so no two resolvers share
state through a loop variable.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from skel import prompt
from skel.config import RenderOptions
from skel.errors import BindingError
from skel.utils import print_debug

Resolver = Callable[[], Any]
PromptFactory = Callable[[str, Any], Resolver]


# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DefaultResolver:
    """Returns a value fixed at bind time, never asking the user."""

    name: str
    value: Any

    def __call__(self) -> Any:
        print_debug(f"{self.name}: {self.value!r}")
        return self.value


@dataclass(frozen=True)
class PromptResolver:
    """Delegates to an interactive prompt for a top-level key."""

    name: str
    prompt: Resolver

    def __call__(self) -> Any:
        return self.prompt()


@dataclass(frozen=True)
class AdvancedResolver:
    """Resolves a field of a nested group.

    The group's advanced-mode prompt is consulted on every call.  When it is
    true the field's own prompt answers; otherwise ``fallback``, the field's
    value from the context document, is returned unchanged.
    """

    name: str
    advanced: Resolver
    prompt: Resolver
    fallback: Any

    def __call__(self) -> Any:
        if self.advanced():
            return self.prompt()
        return self.fallback


# ---------------------------------------------------------------------------
# Binding
# ---------------------------------------------------------------------------


def default_value(key: str, value: Any) -> Any:
    """Return the default for a context value.

    The first element is the default of a sequence; any other value is its
    own default.

    Raises:
        BindingError: If *value* is an empty sequence.
    """
    if isinstance(value, (list, tuple)):
        if not value:
            raise BindingError(key, "an empty list has no default value")
        return value[0]
    return value


def _check_field(key: Any, value: Any) -> None:
    if not isinstance(key, str):
        raise BindingError(str(key), "context keys must be strings")
    if isinstance(value, Mapping):
        raise BindingError(key, "mappings may only be nested one level deep")
    if isinstance(value, (list, tuple)):
        for item in value:
            if isinstance(item, (Mapping, list, tuple)):
                raise BindingError(key, "list items must be plain values")
    elif value is None:
        raise BindingError(key, "null is not a supported value")


def bind_resolvers(
    context: Mapping[str, Any],
    options: RenderOptions | None = None,
    prompt_factory: PromptFactory | None = None,
) -> dict[str, Resolver]:
    """Build the resolver set for *context*.

    Args:
        context: Token context, either a ``Context`` model or a plain mapping.
        options: Execution options; ``use_defaults`` selects default-valued
            resolvers instead of interactive ones.
        prompt_factory: Callable creating a prompt from a label and a default
            value.  Defaults to ``skel.prompt.new``.

    Returns:
        Mapping of token name to resolver.  Inner keys of nested groups share
        one namespace with top-level keys; a later key overwrites an earlier
        one with the same name.

    Raises:
        BindingError: If a value does not fit the supported shapes.
    """
    options = options or RenderOptions()
    new_prompt = prompt_factory or prompt.new
    resolvers: dict[str, Resolver] = {}

    for key, value in context.items():
        if not isinstance(value, Mapping):
            _check_field(key, value)
            if options.use_defaults:
                resolvers[key] = DefaultResolver(key, default_value(key, value))
            else:
                resolvers[key] = PromptResolver(key, new_prompt(key, value))
            continue

        if not isinstance(key, str):
            raise BindingError(str(key), "context keys must be strings")

        advanced = None if options.use_defaults else new_prompt(key, False)
        for field_key, field_value in value.items():
            _check_field(field_key, field_value)
            if field_key in resolvers:
                print_debug(f"'{field_key}' in group '{key}' overrides an earlier token")

            if advanced is None:
                resolvers[field_key] = DefaultResolver(
                    field_key, default_value(field_key, field_value)
                )
            else:
                resolvers[field_key] = AdvancedResolver(
                    name=field_key,
                    advanced=advanced,
                    prompt=new_prompt(field_key, field_value),
                    fallback=field_value,
                )

    return resolvers
