"""Engine default values, keyed by (entity kind, property name).

Extractors consult this one table to decide whether a value is worth
emitting: anything equal to the default is left to the framework.
"""

from __future__ import annotations

from typing import Any

from tres_compiler.scene import CameraKind, GeometryKind, LightKind, MaterialKind, Side

NEUTRAL_POSITION = (0.0, 0.0, 0.0)
NEUTRAL_ROTATION = (0.0, 0.0, 0.0)
NEUTRAL_SCALE = (1.0, 1.0, 1.0)

WHITE_HEX = "ffffff"
BLACK_HEX = "000000"

DEFAULTS: dict[tuple[str, str], Any] = {
    # Transforms (absent attribute == framework default)
    ("transform", "position"): NEUTRAL_POSITION,
    ("transform", "rotation"): NEUTRAL_ROTATION,
    ("transform", "scale"): NEUTRAL_SCALE,
    # Geometry constructor arguments
    ("box", "width"): 1,
    ("box", "height"): 1,
    ("box", "depth"): 1,
    ("sphere", "radius"): 1,
    ("sphere", "widthSegments"): 32,
    ("sphere", "heightSegments"): 16,
    ("plane", "width"): 1,
    ("plane", "height"): 1,
    ("cylinder", "radiusTop"): 1,
    ("cylinder", "radiusBottom"): 1,
    ("cylinder", "height"): 1,
    # Properties every material has
    ("material", "color"): WHITE_HEX,
    ("material", "transparent"): False,
    ("material", "opacity"): 1.0,
    ("material", "side"): Side.FRONT,
    # Kind-specific material properties
    ("standard", "roughness"): 1.0,
    ("standard", "metalness"): 0.0,
    ("standard", "emissive"): BLACK_HEX,
    ("physical", "roughness"): 1.0,
    ("physical", "metalness"): 0.0,
    ("physical", "emissive"): BLACK_HEX,
    ("physical", "clearcoat"): 0.0,
    ("lambert", "emissive"): BLACK_HEX,
    # Lights
    ("light", "color"): WHITE_HEX,
    ("light", "intensity"): 1.0,  # Listed for reference, always emitted
    ("light", "distance"): 0.0,
    ("spot", "angle"): 1.0471975511965976,  # pi / 3
    ("spot", "penumbra"): 0.0,
}

# Ordered constructor arguments per parametric geometry
GEOMETRY_ARGS: dict[GeometryKind, tuple[str, ...]] = {
    GeometryKind.BOX: ("width", "height", "depth"),
    GeometryKind.SPHERE: ("radius", "widthSegments", "heightSegments"),
    GeometryKind.PLANE: ("width", "height"),
    GeometryKind.CYLINDER: ("radiusTop", "radiusBottom", "height"),
}

# Kind-specific material properties, in emission order
MATERIAL_PROPS: dict[MaterialKind, tuple[str, ...]] = {
    MaterialKind.PHYSICAL: ("roughness", "metalness", "clearcoat", "emissive"),
    MaterialKind.STANDARD: ("roughness", "metalness", "emissive"),
    MaterialKind.LAMBERT: ("emissive",),
    MaterialKind.BASIC: (),
}

LIGHT_PROPS: dict[LightKind, tuple[str, ...]] = {
    LightKind.DIRECTIONAL: ("intensity",),
    LightKind.AMBIENT: ("intensity",),
    LightKind.POINT: ("intensity", "distance"),
    LightKind.SPOT: ("intensity", "distance", "angle", "penumbra"),
}

CAMERA_PROPS: dict[CameraKind, tuple[str, ...]] = {
    CameraKind.PERSPECTIVE: ("fov", "aspect", "near", "far"),
    CameraKind.ORTHOGRAPHIC: ("left", "right", "top", "bottom", "near", "far"),
}


def default_for(entity_kind: str, prop: str) -> Any:
    """Default for *prop* on *entity_kind* (e.g. ("standard", "roughness"))."""
    try:
        return DEFAULTS[(entity_kind, prop)]
    except KeyError:
        raise KeyError(f"No default registered for {entity_kind}.{prop}") from None


def is_default(entity_kind: str, prop: str, value: Any) -> bool:
    return DEFAULTS.get((entity_kind, prop), _MISSING) == value


_MISSING = object()
