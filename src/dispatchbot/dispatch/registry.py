"""
Handler registry and event dispatch.

Registration happens once at startup::

    dispatcher = Dispatcher()
    dispatcher.register("slash_command", on_options, identifier="options",
                        params=[Param("fruit"), Param("user", ParamType.USER)])
    dispatcher.freeze(schema)

after which :meth:`Dispatcher.dispatch` routes every inbound event to the
handlers registered under its key, in registration order.
"""

from __future__ import annotations

import inspect
import logging
from collections import defaultdict
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, Iterable, List, Tuple

from .errors import DispatchConfigError, DispatcherNotReady, ParameterError
from .events import EventKind, InboundEvent
from .params import Param

if TYPE_CHECKING:
    from ..schema import CommandSchema

logger = logging.getLogger(__name__)

Handler = Callable[..., Awaitable[Any]]
RouteKey = Tuple[EventKind, str | None, str | None]

_PARAM_KINDS = frozenset(
    {EventKind.SLASH_COMMAND, EventKind.AUTOCOMPLETE, EventKind.MODAL_SUBMIT}
)


class DispatcherState(str, Enum):
    UNREGISTERED = "unregistered"
    READY = "ready"


@dataclass(frozen=True, slots=True)
class HandlerRegistration:
    """A handler bound to one route key."""

    kind: EventKind
    identifier: str | None
    focused_option: str | None
    handler: Handler
    params: Tuple[Param, ...] = ()

    @property
    def key(self) -> RouteKey:
        return (self.kind, self.identifier, self.focused_option)

    @property
    def label(self) -> str:
        name = getattr(self.handler, "__qualname__", repr(self.handler))
        return f"{name} [{self.kind.value}:{self.identifier or '*'}]"


def _coerce_kind(kind: EventKind | str) -> EventKind:
    try:
        return EventKind(kind)
    except ValueError:
        raise DispatchConfigError(f"Unrecognized event kind: {kind!r}") from None


class Dispatcher:
    """Routes :class:`InboundEvent` objects to registered handlers."""

    def __init__(self) -> None:
        self._pending: List[HandlerRegistration] = []
        self._routes: Dict[RouteKey, Tuple[HandlerRegistration, ...]] = {}
        self.state = DispatcherState.UNREGISTERED

    @property
    def ready(self) -> bool:
        return self.state is DispatcherState.READY

    def register(
        self,
        kind: EventKind | str,
        handler: Handler,
        *,
        identifier: str | None = None,
        focused_option: str | None = None,
        params: Iterable[Param] = (),
    ) -> HandlerRegistration:
        """
        Queue ``handler`` for events of ``kind``.

        :raises DispatchConfigError: The registration is malformed or the
            dispatcher is already frozen.
        """

        if self.ready:
            raise DispatchConfigError("Dispatcher is frozen; register handlers before freeze()")

        event_kind = _coerce_kind(kind)
        name = getattr(handler, "__qualname__", repr(handler))
        params = tuple(params)

        if not inspect.iscoroutinefunction(handler):
            raise DispatchConfigError(f"Handler {handler!r} must be an async function")

        if event_kind.requires_identifier:
            if not isinstance(identifier, str) or not identifier.strip():
                raise DispatchConfigError(
                    f"{event_kind.value} handler {name} needs an identifier"
                )
        elif identifier is not None:
            raise DispatchConfigError(
                f"{event_kind.value} handlers do not take an identifier (got {identifier!r})"
            )

        if event_kind is EventKind.AUTOCOMPLETE:
            if not isinstance(focused_option, str) or not focused_option.strip():
                raise DispatchConfigError(
                    f"Autocomplete handler {name} needs a focused option"
                )
        elif focused_option is not None:
            raise DispatchConfigError("focused_option only applies to autocomplete handlers")

        if params and event_kind not in _PARAM_KINDS:
            raise DispatchConfigError(f"{event_kind.value} handlers cannot declare parameters")
        names = [p.name for p in params]
        if len(set(names)) != len(names):
            raise DispatchConfigError(f"Duplicate parameter names for {name}: {names}")

        registration = HandlerRegistration(event_kind, identifier, focused_option, handler, params)
        self._pending.append(registration)
        return registration

    def freeze(self, schema: "CommandSchema") -> None:
        """
        Validate every registration against ``schema`` and start serving.

        Nothing is published on failure; the dispatcher stays unregistered.
        """

        if self.ready:
            raise DispatchConfigError("Dispatcher already frozen")

        routes: Dict[RouteKey, List[HandlerRegistration]] = defaultdict(list)
        for reg in self._pending:
            reg = self._validate(reg, schema)
            routes[reg.key].append(reg)

        self._routes = {key: tuple(regs) for key, regs in routes.items()}
        self.state = DispatcherState.READY
        logger.info(
            "Dispatcher ready with %d handler(s) across %d route(s)",
            len(self._pending),
            len(self._routes),
        )

    @staticmethod
    def _validate(reg: HandlerRegistration, schema: "CommandSchema") -> HandlerRegistration:
        if not reg.kind.requires_identifier:
            return reg

        fields = schema.fields_for(reg.kind, reg.identifier)
        if fields is None:
            raise DispatchConfigError(
                f"{reg.label}: no {reg.kind.value} named '{reg.identifier}' is declared"
            )

        if reg.kind is EventKind.AUTOCOMPLETE:
            focused = fields.get(reg.focused_option)
            if focused is None or not focused.autocomplete:
                raise DispatchConfigError(
                    f"{reg.label}: option '{reg.focused_option}' is not an autocomplete option"
                )

        resolved: List[Param] = []
        for param in reg.params:
            spec = fields.get(param.name)
            if spec is None:
                raise DispatchConfigError(f"{reg.label}: unknown option '{param.name}'")
            if spec.type is not param.type:
                raise DispatchConfigError(
                    f"{reg.label}: option '{param.name}' is {spec.type.value}, "
                    f"not {param.type.value}"
                )
            if param.required is None:
                param = replace(param, required=spec.required)
            resolved.append(param)

        return replace(reg, params=tuple(resolved))

    def handlers_for(self, event: InboundEvent) -> Tuple[HandlerRegistration, ...]:
        return self._routes.get(event.route_key, ())

    async def dispatch(self, event: InboundEvent) -> int:
        """
        Invoke every handler matching ``event``.

        :returns: Number of handlers that were invoked.
        :raises DispatcherNotReady: :meth:`freeze` has not completed.
        """

        if not self.ready:
            raise DispatcherNotReady("Dispatcher received an event before freeze()")

        matches = self.handlers_for(event)
        if not matches:
            logger.debug("No handler for %s", event.route_key)
            return 0

        invoked = 0
        for reg in matches:
            try:
                args = [param.extract(event) for param in reg.params]
            except ParameterError as exc:
                logger.error("Skipping %s: %s", reg.label, exc)
                continue

            invoked += 1
            try:
                await reg.handler(event, *args)
            except Exception:
                logger.exception("Handler %s failed", reg.label)

        return invoked
