"""
Entity extraction from scene nodes.

One extractor per node payload. Each maps the payload's kind to an emitted
tag plus a property bag holding only values that differ from the engine
defaults (see defaults.py). Unsupported kinds are reported by returning None;
the caller leaves those to the scene escape hatch.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from tres_compiler.defaults import (
    CAMERA_PROPS,
    GEOMETRY_ARGS,
    LIGHT_PROPS,
    MATERIAL_PROPS,
    NEUTRAL_POSITION,
    NEUTRAL_ROTATION,
    NEUTRAL_SCALE,
    default_for,
    is_default,
)
from tres_compiler.ir import (
    CameraEntry,
    Expression,
    GeometryDescriptor,
    LightEntry,
    MaterialDescriptor,
    TransformDescriptor,
)
from tres_compiler.numeric import color_to_hex, elide_default, is_neutral, round_scalar, round_vector
from tres_compiler.scene import (
    Camera,
    CameraKind,
    Geometry,
    Light,
    LightKind,
    Material,
    SceneNode,
    Side,
)

log = logging.getLogger(__name__)

TAG_PREFIX = "Tres"


# ---------------------------------------------------------------------------
# Transform
# ---------------------------------------------------------------------------


def extract_transform(node: SceneNode, precision: int = 3) -> TransformDescriptor:
    """
    Round the node's local transform and drop neutral triples.

    Rounding happens before the neutral check, so a position of
    (0.0001, 0, 0) at precision 3 counts as the origin.
    """

    def keep(values, neutral):
        rounded = round_vector(values, precision)
        return None if is_neutral(rounded, neutral) else rounded

    return TransformDescriptor(
        position=keep(node.position, NEUTRAL_POSITION),
        rotation=keep(node.rotation, NEUTRAL_ROTATION),
        scale=keep(node.scale, NEUTRAL_SCALE),
    )


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


def extract_geometry(geometry: Geometry | None, precision: int = 3) -> GeometryDescriptor:
    """
    Map a geometry to its Tres tag and positional constructor args.

    Parametric kinds (box, sphere, plane, cylinder) fill each missing
    parameter from the defaults table. Any other kind gets an empty argument
    list; its vertex data is only reachable through the scene escape hatch.
    """
    if geometry is None:
        geometry = Geometry()

    tag = f"{TAG_PREFIX}{geometry.stem}Geometry"
    arg_names = GEOMETRY_ARGS.get(geometry.kind)
    if arg_names is None:
        log.debug("No constructor args for %s, emitting bare <%s>", geometry.type_name, tag)
        return GeometryDescriptor(tag=tag)

    entity = geometry.kind.value.lower()
    args = []
    for name in arg_names:
        value = geometry.parameters.get(name)
        if value is None:
            value = default_for(entity, name)
        args.append(round_scalar(value, precision))
    return GeometryDescriptor(tag=tag, args=tuple(args))


# ---------------------------------------------------------------------------
# Material
# ---------------------------------------------------------------------------


def _hex_prop(entity: str, prop: str, rgb) -> str | None:
    value = color_to_hex(rgb)
    if is_default(entity, prop, value):
        return None
    return f"#{value}"


def extract_material(
    material: Material | Sequence[Material] | None, precision: int = 3
) -> MaterialDescriptor:
    """
    Pick the material kind (physical > standard > lambert > basic) and
    collect its non-default properties.

    Multi-material meshes only keep their first material.
    """
    if isinstance(material, Sequence):
        if len(material) > 1:
            log.debug("Multi-material mesh: keeping the first of %d materials", len(material))
        material = material[0] if material else None
    if material is None:
        material = Material()

    kind = material.kind
    entity = kind.value.lower()
    props: dict[str, Any] = {}

    color = _hex_prop("material", "color", material.color)
    if color is not None:
        props["color"] = color

    for name in MATERIAL_PROPS[kind]:
        if name == "emissive":
            value = _hex_prop(entity, name, material.emissive)
        else:
            value = elide_default(getattr(material, name), default_for(entity, name), precision)
        if value is not None:
            props[name] = value

    if material.transparent:
        props["transparent"] = True
    opacity = elide_default(material.opacity, default_for("material", "opacity"), precision)
    if opacity is not None:
        props["opacity"] = opacity
    if material.side is not Side.FRONT:
        props["side"] = Expression(material.side.value)

    return MaterialDescriptor(
        kind=entity,
        tag=f"{TAG_PREFIX}Mesh{kind.value}Material",
        props=props,
    )


# ---------------------------------------------------------------------------
# Lights and cameras
# ---------------------------------------------------------------------------


def extract_light(node: SceneNode, precision: int = 3) -> LightEntry | None:
    """
    Map a light node to its Tres tag.

    Intensity is always emitted; point and spot lights add distance, spot
    lights add angle and penumbra. Colour only when not white.
    """
    light = node.light or Light(type_name=node.type_name or "Light")
    kind = light.kind
    if kind is LightKind.OTHER:
        return None

    props: dict[str, Any] = {
        name: round_scalar(getattr(light, name), precision) for name in LIGHT_PROPS[kind]
    }
    color = _hex_prop("light", "color", light.color)
    if color is not None:
        props["color"] = color

    return LightEntry(
        tag=f"{TAG_PREFIX}{kind.value}Light",
        props=props,
        transform=extract_transform(node, precision),
    )


def extract_camera(node: SceneNode, precision: int = 3) -> CameraEntry | None:
    """Map a camera node to its Tres tag. All projection parameters are kept."""
    camera = node.camera or Camera(type_name=node.type_name or "Camera")
    kind = camera.kind
    if kind is CameraKind.OTHER:
        return None

    return CameraEntry(
        tag=f"{TAG_PREFIX}{kind.value}Camera",
        props={name: round_scalar(getattr(camera, name), precision) for name in CAMERA_PROPS[kind]},
        transform=extract_transform(node, precision),
    )
