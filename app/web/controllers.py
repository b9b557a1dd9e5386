from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, ClassVar, Iterable, Optional, Sequence

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.templating import Jinja2Templates
from starlette import status

from app.web.route_pattern import RoutePattern

logger = logging.getLogger(__name__)

ActionMethod = Callable[..., Awaitable[Response]]

# Route values consumed by dispatch itself; everything else is offered to the action.
_DISPATCH_KEYS = ("controller", "action")


def action(func: ActionMethod) -> ActionMethod:
    """Mark a controller coroutine as routable."""

    func.__controller_action__ = True  # type: ignore[attr-defined]
    return func


class Controller:
    """Base class for conventionally routed controllers.

    ``HomeController`` answers to the ``Home`` route value; public actions are the
    coroutines decorated with :func:`action`, looked up case-insensitively.
    """

    route_name: ClassVar[str] = ""

    def __init__(self, request: Request, templates: Jinja2Templates) -> None:
        self.request = request
        self.templates = templates

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if not cls.__dict__.get("route_name"):
            name = cls.__name__
            cls.route_name = name[: -len("Controller")] if name.endswith("Controller") else name

    @classmethod
    def find_action(cls, name: str) -> Optional[str]:
        wanted = name.lower()
        for attr_name, member in inspect.getmembers(cls, inspect.iscoroutinefunction):
            if getattr(member, "__controller_action__", False) and attr_name.lower() == wanted:
                return attr_name
        return None

    async def authorize(self, action_name: str) -> bool:
        """Authorization hook; return False to reject the action with 403."""

        return True

    def view(self, template: str, context: Optional[dict[str, Any]] = None, *, status_code: int = 200) -> Response:
        """Render ``<controller>/<template>.html`` (or an explicit ``folder/name`` path)."""

        path = template if "/" in template else f"{self.route_name.lower()}/{template}"
        ctx = {"controller": self.route_name, **(context or {})}
        return self.templates.TemplateResponse(self.request, f"{path}.html", ctx, status_code=status_code)


def _action_kwargs(method: ActionMethod, values: dict[str, Optional[str]]) -> dict[str, Any]:
    params = inspect.signature(method).parameters
    return {
        key: value
        for key, value in values.items()
        if key not in _DISPATCH_KEYS and key in params and value is not None
    }


def map_controller_route(
    app: FastAPI,
    *,
    name: str,
    pattern: str,
    controllers: Iterable[type[Controller]],
    templates: Jinja2Templates,
    methods: Sequence[str] = ("GET", "POST"),
) -> RoutePattern:
    """Register a conventional route that dispatches to controller actions.

    Must be called after every other route and mount: it catches all remaining paths.
    """

    route = RoutePattern.parse(pattern)
    registry = {c.route_name.lower(): c for c in controllers}

    async def dispatch(request: Request, path: str) -> Response:
        values = route.match(path)
        if values is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

        controller_cls = registry.get((values.get("controller") or "").lower())
        if controller_cls is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

        action_name = controller_cls.find_action(values.get("action") or "")
        if action_name is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

        controller = controller_cls(request, templates)
        if not await controller.authorize(action_name):
            logger.info("Authorization denied for %s.%s", controller_cls.route_name, action_name)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)

        method = getattr(controller, action_name)
        return await method(**_action_kwargs(method, values))

    app.add_api_route(
        "/{path:path}",
        dispatch,
        methods=list(methods),
        name=name,
        include_in_schema=False,
    )
    return route
