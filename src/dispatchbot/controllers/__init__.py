"""
Auto-discovery & registry for event controllers.

Any module inside ``controllers/handlers`` that defines::

    from dispatchbot.controllers import Controller, register_controller

    @register_controller
    class MyController(Controller):
        def commands(self): ...
        def register(self, dispatcher): ...

is picked up automatically at import-time. Invoking :func:`setup` builds
every registered controller with the bot client, lets it register its
handlers, and returns the aggregated command schema.
"""

from __future__ import annotations

import logging
from importlib import import_module
from pathlib import Path
from pkgutil import iter_modules
from typing import Any, Iterable, List, Optional, Type

from ..dispatch import Dispatcher
from ..schema import CommandSchema, CommandSpec, ModalSpec

logger = logging.getLogger(__name__)


class Controller:
    """Base class for handler groups; receives the bot client explicitly."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def commands(self) -> Iterable[CommandSpec | ModalSpec]:
        """Commands and modals this controller owns."""

        return ()

    def register(self, dispatcher: Dispatcher) -> None:
        raise NotImplementedError


_CONTROLLER_CLASSES: List[Type[Controller]] = []


def register_controller(cls: Optional[Type[Controller]] = None):
    """Decorator registering a Controller class for later construction."""

    def _register(controller_cls: Type[Controller]):
        if not issubclass(controller_cls, Controller):
            raise TypeError("register_controller expects a Controller subclass")

        if controller_cls not in _CONTROLLER_CLASSES:
            _CONTROLLER_CLASSES.append(controller_cls)
        return controller_cls

    if cls is None:
        return _register
    return _register(cls)


def setup(
    client: Any,
    dispatcher: Dispatcher,
    controller_classes: Iterable[Type[Controller]] | None = None,
) -> CommandSchema:
    """
    Register every controller's handlers on ``dispatcher``.

    :returns: The aggregated schema of all controllers, ready to be passed to
        :meth:`Dispatcher.freeze` and published once.
    """

    classes = list(_CONTROLLER_CLASSES if controller_classes is None else controller_classes)
    definitions: List[CommandSpec | ModalSpec] = []
    for controller_cls in classes:
        controller = controller_cls(client)
        controller.register(dispatcher)
        definitions.extend(controller.commands())

    if classes:
        logger.info("Registered %d controller(s)", len(classes))
    else:
        logger.warning("No controllers discovered; every event will be ignored")

    return CommandSchema.aggregate(definitions)


_pkg_path = Path(__file__).resolve().parent / "handlers"
for _, modname, _ in iter_modules([str(_pkg_path)]):
    if modname.startswith("_"):
        continue
    import_module(f"{__name__}.handlers.{modname}")


__all__ = [
    "Controller",
    "register_controller",
    "setup",
]
