"""Diagram prop registry.

Maps each diagram component name to the prop shapes it accepts and checks
payloads against them before they reach a renderer. Without this check a
missing field only shows up as a blank spot in the rendered diagram.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ValidationError

from coursebook_core.errors import SchemaError
from coursebook_core.schemas.diagrams import DEFAULT_DIAGRAM_SHAPES
from coursebook_core.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ValidatedProps:
    """Props that matched a registered shape.

    ``props`` is the payload exactly as authored, for handing to the renderer
    unchanged; ``model`` is the parsed shape.
    """

    component: str
    shape: str
    props: Mapping[str, Any]
    model: BaseModel


def _format_loc(loc: tuple[int | str, ...]) -> str:
    return ".".join(["props", *(str(part) for part in loc)])


class DiagramPropRegistry:
    """Immutable mapping from component name to accepted prop shapes."""

    def __init__(self, shapes: Mapping[str, Sequence[type[BaseModel]]]) -> None:
        registered: dict[str, tuple[type[BaseModel], ...]] = {}
        for component, models in shapes.items():
            if not component:
                raise ValueError("Diagram component name must not be empty")
            if not models:
                raise ValueError(f"Diagram component {component!r} has no shapes")
            registered[component] = tuple(models)
        self._shapes = MappingProxyType(registered)

    def __contains__(self, component: object) -> bool:
        return isinstance(component, str) and component in self._shapes

    def __len__(self) -> int:
        return len(self._shapes)

    def components(self) -> tuple[str, ...]:
        """Registered component names, sorted."""
        return tuple(sorted(self._shapes))

    def shapes_for(self, component: str) -> tuple[type[BaseModel], ...]:
        """Shapes accepted by a component.

        Raises:
            SchemaError: If the component is not registered
        """
        try:
            return self._shapes[component]
        except KeyError:
            raise SchemaError(
                component, "component", f"unknown diagram component {component!r}"
            ) from None

    def with_component(
        self, component: str, *shapes: type[BaseModel]
    ) -> DiagramPropRegistry:
        """Return a new registry that also knows ``component``.

        Existing components keep their shapes; registering a name twice is an
        error because chapters already depend on the first definition.

        Raises:
            ValueError: If the component is already registered
        """
        if component in self._shapes:
            raise ValueError(f"Diagram component {component!r} is already registered")
        return DiagramPropRegistry({**self._shapes, component: shapes})

    def validate(self, component: str, props: Any) -> ValidatedProps:
        """Check props against the shapes registered for a component.

        Props must fully match one shape. When none matches, the error
        describes the first problem with the closest shape (the one with the
        fewest errors, earlier registrations winning ties).

        Args:
            component: Diagram component name
            props: Props payload from the diagram block

        Returns:
            ValidatedProps for the matching shape

        Raises:
            SchemaError: If the component is empty or unknown, or the props
                match none of its shapes
        """
        if not isinstance(component, str) or not component:
            raise SchemaError("", "component", "diagram component must be a non-empty string")
        shapes = self.shapes_for(component)
        if not isinstance(props, Mapping):
            raise SchemaError(
                component, "props", f"props must be an object, got {type(props).__name__}"
            )

        closest: tuple[type[BaseModel], ValidationError] | None = None
        for shape in shapes:
            try:
                model = shape.model_validate(dict(props))
            except ValidationError as exc:
                if closest is None or exc.error_count() < closest[1].error_count():
                    closest = (shape, exc)
                continue
            logger.debug(f"{component} props matched {shape.__name__}")
            return ValidatedProps(
                component=component, shape=shape.__name__, props=props, model=model
            )

        assert closest is not None
        shape, exc = closest
        first = exc.errors()[0]
        field = _format_loc(tuple(first["loc"]))
        message = first["msg"]
        if len(shapes) > 1:
            names = ", ".join(s.__name__ for s in shapes)
            message = (
                f"props match none of the accepted shapes ({names}); "
                f"closest is {shape.__name__}: {message}"
            )
        raise SchemaError(component, field, message)


@lru_cache(maxsize=1)
def default_registry() -> DiagramPropRegistry:
    """The process-wide registry of built-in diagram components."""
    registry = DiagramPropRegistry(DEFAULT_DIAGRAM_SHAPES)
    logger.debug(f"Diagram registry built with {len(registry)} components")
    return registry


def validate_diagram_props(
    component: str,
    props: Any,
    registry: DiagramPropRegistry | None = None,
) -> ValidatedProps:
    """Validate diagram props against the registry.

    Args:
        component: Diagram component name
        props: Props payload
        registry: Registry to use (defaults to the built-in one)

    Returns:
        ValidatedProps for the matching shape

    Raises:
        SchemaError: If the props cannot be rendered by the component
    """
    if registry is None:
        registry = default_registry()
    return registry.validate(component, props)
