"""Scene graph types consumed by the compiler.

These mirror the object model a glTF loader hands back (three.js vocabulary):
a tree of nodes, each tagged with a kind, carrying a local transform and a
kind-specific payload. The compiler only reads them.

Coordinate convention:
    - Y-up (three.js / glTF default)
    - rotation is XYZ Euler in radians
    - colours are RGB floats in [0, 1], taken as already display-encoded

Building from plain data (e.g. a JSON dump of a loaded scene):

    model = LoadedModel.from_dict({
        "scene": {"type": "Scene", "children": [
            {"type": "Mesh", "name": "Cube.001",
             "geometry": {"type": "BoxGeometry"},
             "material": {"type": "MeshBasicMaterial", "color": 0xff0000}},
        ]},
        "animations": [{"name": "Walk"}],
    })
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping, Sequence

import numpy as np

Vec3 = tuple[float, float, float]
RGB = tuple[float, float, float]

WHITE: RGB = (1.0, 1.0, 1.0)
BLACK: RGB = (0.0, 0.0, 0.0)


class SceneFormatError(ValueError):
    """A scene document could not be turned into SceneNodes."""


# ---------------------------------------------------------------------------
# Kind enumerations
# ---------------------------------------------------------------------------


class NodeKind(Enum):
    """What a scene node represents."""

    MESH = "mesh"
    LIGHT = "light"
    CAMERA = "camera"
    GROUP = "group"  # Pure container, descended but never emitted
    OTHER = "other"  # Anything else (bones, sprites, lines, ...)

    @classmethod
    def from_type_name(cls, type_name: str) -> NodeKind:
        if type_name in _MESH_TYPES:
            return cls.MESH
        if type_name.endswith("Light"):
            return cls.LIGHT
        if type_name.endswith("Camera"):
            return cls.CAMERA
        if type_name in _GROUP_TYPES:
            return cls.GROUP
        return cls.OTHER


_MESH_TYPES = frozenset({"Mesh", "SkinnedMesh", "InstancedMesh"})
_GROUP_TYPES = frozenset({"Group", "Scene", "Object3D"})


class GeometryKind(Enum):
    BOX = "Box"
    SPHERE = "Sphere"
    PLANE = "Plane"
    CYLINDER = "Cylinder"
    OTHER = "Other"


class MaterialKind(Enum):
    """Material kinds, listed in match priority order."""

    PHYSICAL = "Physical"
    STANDARD = "Standard"
    LAMBERT = "Lambert"
    BASIC = "Basic"  # Fallback for everything unmatched


class LightKind(Enum):
    DIRECTIONAL = "Directional"
    AMBIENT = "Ambient"
    POINT = "Point"
    SPOT = "Spot"
    OTHER = "Other"


class CameraKind(Enum):
    PERSPECTIVE = "Perspective"
    ORTHOGRAPHIC = "Orthographic"
    OTHER = "Other"


class Side(Enum):
    """Which faces a material renders (three.js side constants)."""

    FRONT = "FrontSide"
    BACK = "BackSide"
    DOUBLE = "DoubleSide"


def _kind_from_suffix(enum_cls, type_name: str, suffix: str):
    stem = type_name.removesuffix(suffix)
    for kind in enum_cls:
        if kind.value == stem:
            return kind
    return enum_cls.OTHER


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Geometry:
    """Geometry reference. *parameters* holds the constructor arguments for
    parametric geometries (BoxGeometry width/height/depth, ...)."""

    type_name: str = "BufferGeometry"
    parameters: Mapping[str, float] = field(default_factory=dict)

    @property
    def kind(self) -> GeometryKind:
        return _kind_from_suffix(GeometryKind, self.type_name, "Geometry")

    @property
    def stem(self) -> str:
        """Type name without the "Geometry" suffix ("BoxGeometry" -> "Box")."""
        return self.type_name.replace("Geometry", "") or "Buffer"


@dataclass(frozen=True)
class Material:
    type_name: str = "MeshBasicMaterial"
    color: RGB = WHITE
    emissive: RGB = BLACK
    roughness: float = 1.0
    metalness: float = 0.0
    clearcoat: float = 0.0
    transparent: bool = False
    opacity: float = 1.0
    side: Side = Side.FRONT

    @property
    def kind(self) -> MaterialKind:
        # First marker found wins: a "MeshPhysicalMaterial" is also a
        # standard material in three.js, so order matters.
        for kind in MaterialKind:
            if kind.value in self.type_name:
                return kind
        return MaterialKind.BASIC


@dataclass(frozen=True)
class Light:
    type_name: str = "AmbientLight"
    color: RGB = WHITE
    intensity: float = 1.0
    distance: float = 0.0
    angle: float = float(np.pi / 3)
    penumbra: float = 0.0

    @property
    def kind(self) -> LightKind:
        return _kind_from_suffix(LightKind, self.type_name, "Light")


@dataclass(frozen=True)
class Camera:
    type_name: str = "PerspectiveCamera"
    fov: float = 50.0
    aspect: float = 1.0
    near: float = 0.1
    far: float = 2000.0
    left: float = -1.0
    right: float = 1.0
    top: float = 1.0
    bottom: float = -1.0

    @property
    def kind(self) -> CameraKind:
        return _kind_from_suffix(CameraKind, self.type_name, "Camera")


@dataclass(frozen=True, eq=False)
class AnimationClip:
    """A named animation. Clips compare by identity: two distinct clips
    may share a name, and the same clip object may be listed twice."""

    name: str = ""
    duration: float = -1.0


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SceneNode:
    """One node of the scene tree.

    Attributes:
        kind: Node kind tag, drives extractor dispatch
        name: Name from the model file, possibly empty or repeated
        position: Local translation (x, y, z)
        rotation: Local XYZ Euler rotation in radians
        scale: Local scale
        children: Child nodes, in file order
        geometry, material: Mesh payload (material may be a tuple for
            multi-material meshes)
        light: Light payload
        camera: Camera payload
    """

    kind: NodeKind = NodeKind.GROUP
    name: str = ""
    position: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    scale: Vec3 = (1.0, 1.0, 1.0)
    children: tuple[SceneNode, ...] = ()
    geometry: Geometry | None = None
    material: Material | tuple[Material, ...] | None = None
    light: Light | None = None
    camera: Camera | None = None
    cast_shadow: bool = False
    receive_shadow: bool = False
    type_name: str = ""

    def traverse(self) -> Iterator[SceneNode]:
        """Depth-first pre-order walk, self first. Assumes a tree."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def descendants(self) -> Iterator[SceneNode]:
        """Like traverse(), without the node itself."""
        nodes = self.traverse()
        next(nodes)
        yield from nodes

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SceneNode:
        """Build a node tree from three.js-style object data."""
        return _node_from_dict(data, path="scene")


@dataclass(frozen=True)
class LoadedModel:
    """What the model loader returns: the scene root plus its clips."""

    scene: SceneNode
    animations: tuple[AnimationClip, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LoadedModel:
        if not isinstance(data, Mapping) or "scene" not in data:
            raise SceneFormatError("model document needs a 'scene' entry")
        clips = data.get("animations") or ()
        return cls(
            scene=SceneNode.from_dict(data["scene"]),
            animations=tuple(
                AnimationClip(
                    name=str(clip.get("name") or ""),
                    duration=float(clip.get("duration", -1.0)),
                )
                for clip in clips
            ),
        )


# ---------------------------------------------------------------------------
# Dict decoding
# ---------------------------------------------------------------------------


def quaternion_to_euler(q: Sequence[float]) -> Vec3:
    """Quaternion (x, y, z, w) -> XYZ Euler angles (three.js order)."""
    x, y, z, w = (float(c) for c in q)
    norm = np.sqrt(x * x + y * y + z * z + w * w)
    if norm == 0:
        return (0.0, 0.0, 0.0)
    x, y, z, w = x / norm, y / norm, z / norm, w / norm

    # Rotation matrix elements needed for the XYZ decomposition
    m11 = 1 - 2 * (y * y + z * z)
    m12 = 2 * (x * y - z * w)
    m13 = 2 * (x * z + y * w)
    m22 = 1 - 2 * (x * x + z * z)
    m23 = 2 * (y * z - x * w)
    m32 = 2 * (y * z + x * w)
    m33 = 1 - 2 * (x * x + y * y)

    ry = float(np.arcsin(np.clip(m13, -1.0, 1.0)))
    if abs(m13) < 0.9999999:
        rx = float(np.arctan2(-m23, m33))
        rz = float(np.arctan2(-m12, m11))
    else:
        # Gimbal lock
        rx = float(np.arctan2(m32, m22))
        rz = 0.0
    return (rx, ry, rz)


def parse_color(value: Any, default: RGB = WHITE) -> RGB:
    """Accept 0xRRGGBB ints, "#rrggbb" strings or RGB float triples."""
    if value is None:
        return default
    if isinstance(value, bool):
        raise SceneFormatError(f"invalid colour {value!r}")
    if isinstance(value, int):
        return ((value >> 16 & 0xFF) / 255, (value >> 8 & 0xFF) / 255, (value & 0xFF) / 255)
    if isinstance(value, str):
        text = value.strip().lstrip("#")
        if text.lower().startswith("0x"):
            text = text[2:]
        try:
            return parse_color(int(text, 16))
        except ValueError:
            raise SceneFormatError(f"invalid colour {value!r}") from None
    return _vec3(value, "color")


def _vec3(value: Any, what: str) -> Vec3:
    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError):
        raise SceneFormatError(f"{what}: expected 3 numbers, got {value!r}") from None
    if arr.shape != (3,):
        raise SceneFormatError(f"{what}: expected 3 numbers, got {value!r}")
    return tuple(arr.tolist())


def _material_from_dict(data: Mapping[str, Any]) -> Material:
    if not isinstance(data, Mapping):
        raise SceneFormatError(f"material: expected an object, got {type(data).__name__}")
    side = data.get("side", Side.FRONT.value)
    if isinstance(side, int):
        # three.js numeric constants
        side = (Side.FRONT, Side.BACK, Side.DOUBLE)[side] if 0 <= side <= 2 else Side.FRONT
    else:
        try:
            side = Side(side)
        except ValueError:
            raise SceneFormatError(f"invalid material side {side!r}") from None
    return Material(
        type_name=str(data.get("type", "MeshBasicMaterial")),
        color=parse_color(data.get("color")),
        emissive=parse_color(data.get("emissive"), default=BLACK),
        roughness=float(data.get("roughness", 1.0)),
        metalness=float(data.get("metalness", 0.0)),
        clearcoat=float(data.get("clearcoat", 0.0)),
        transparent=bool(data.get("transparent", False)),
        opacity=float(data.get("opacity", 1.0)),
        side=side,
    )


def _node_from_dict(data: Any, path: str) -> SceneNode:
    if not isinstance(data, Mapping):
        raise SceneFormatError(f"{path}: expected an object, got {type(data).__name__}")

    type_name = str(data.get("type", "Object3D"))
    if "kind" in data:
        try:
            kind = NodeKind(data["kind"])
        except ValueError:
            kind = NodeKind.OTHER
    else:
        kind = NodeKind.from_type_name(type_name)

    if "quaternion" in data:
        quat = np.asarray(data["quaternion"], dtype=float)
        if quat.shape != (4,):
            raise SceneFormatError(f"{path}.quaternion: expected 4 numbers")
        rotation = quaternion_to_euler(quat)
    else:
        rotation = _vec3(data.get("rotation", (0.0, 0.0, 0.0)), f"{path}.rotation")

    payload: dict[str, Any] = {}
    if kind is NodeKind.MESH:
        geometry = data.get("geometry") or {}
        if not isinstance(geometry, Mapping):
            raise SceneFormatError(f"{path}.geometry: expected an object")
        payload["geometry"] = Geometry(
            type_name=str(geometry.get("type", "BufferGeometry")),
            parameters=dict(geometry.get("parameters") or {}),
        )
        material = data.get("material")
        if isinstance(material, Sequence) and not isinstance(material, str):
            payload["material"] = tuple(_material_from_dict(m) for m in material)
        elif material is not None:
            payload["material"] = _material_from_dict(material)
    elif kind is NodeKind.LIGHT:
        defaults = Light()
        payload["light"] = Light(
            type_name=type_name,
            color=parse_color(data.get("color")),
            intensity=float(data.get("intensity", defaults.intensity)),
            distance=float(data.get("distance", defaults.distance)),
            angle=float(data.get("angle", defaults.angle)),
            penumbra=float(data.get("penumbra", defaults.penumbra)),
        )
    elif kind is NodeKind.CAMERA:
        defaults = Camera()
        payload["camera"] = Camera(
            type_name=type_name,
            **{
                name: float(data.get(name, getattr(defaults, name)))
                for name in ("fov", "aspect", "near", "far", "left", "right", "top", "bottom")
            },
        )

    children = data.get("children") or ()
    return SceneNode(
        kind=kind,
        name=str(data.get("name") or ""),
        position=_vec3(data.get("position", (0.0, 0.0, 0.0)), f"{path}.position"),
        rotation=rotation,
        scale=_vec3(data.get("scale", (1.0, 1.0, 1.0)), f"{path}.scale"),
        children=tuple(
            _node_from_dict(child, f"{path}.children[{i}]") for i, child in enumerate(children)
        ),
        cast_shadow=bool(data.get("castShadow", False)),
        receive_shadow=bool(data.get("receiveShadow", False)),
        type_name=type_name,
        **payload,
    )
