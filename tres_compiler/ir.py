"""Intermediate representation: the flattened, typed list of entities to emit.

Built once per conversion by the scene walker, read once by the emitter.
Everything here is frozen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from tres_compiler.numeric import Vec3


@dataclass(frozen=True)
class TransformDescriptor:
    """Rounded local transform. A triple is None when it equals the neutral
    value, meaning the framework default applies."""

    position: Vec3 | None = None
    rotation: Vec3 | None = None
    scale: Vec3 | None = None

    def attributes(self) -> tuple[tuple[str, Vec3], ...]:
        return tuple(
            (name, value)
            for name, value in (
                ("position", self.position),
                ("rotation", self.rotation),
                ("scale", self.scale),
            )
            if value is not None
        )

    @property
    def is_identity(self) -> bool:
        return not self.attributes()


@dataclass(frozen=True)
class Expression:
    """A script-side identifier used as a bound attribute value."""

    source: str


@dataclass(frozen=True)
class GeometryDescriptor:
    tag: str  # e.g. "TresBoxGeometry"
    args: tuple[float, ...] = ()


@dataclass(frozen=True)
class MaterialDescriptor:
    kind: str  # "physical", "standard", "lambert", "basic"
    tag: str  # e.g. "TresMeshStandardMaterial"
    props: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MeshEntry:
    name: str
    geometry: GeometryDescriptor
    material: MaterialDescriptor
    transform: TransformDescriptor = TransformDescriptor()
    cast_shadow: bool = False
    receive_shadow: bool = False


@dataclass(frozen=True)
class LightEntry:
    tag: str
    props: Mapping[str, Any] = field(default_factory=dict)
    transform: TransformDescriptor = TransformDescriptor()


@dataclass(frozen=True)
class CameraEntry:
    tag: str
    props: Mapping[str, Any] = field(default_factory=dict)
    transform: TransformDescriptor = TransformDescriptor()


@dataclass(frozen=True)
class SceneIR:
    """Everything the emitter needs, in emission order per category."""

    meshes: tuple[MeshEntry, ...] = ()
    lights: tuple[LightEntry, ...] = ()
    cameras: tuple[CameraEntry, ...] = ()
    animation_names: tuple[str, ...] = ()
    required_imports: frozenset[str] = frozenset()
    unsupported: tuple[str, ...] = ()  # Nodes left to the scene escape hatch
    # Position of each named clip in the model's clip list; positional when empty
    animation_indices: tuple[int, ...] = ()

    @property
    def has_animations(self) -> bool:
        return bool(self.animation_names)

    def animation_slots(self) -> tuple[tuple[int, str], ...]:
        """(clip list index, name) for every clip to play on mount."""
        indices = self.animation_indices or range(len(self.animation_names))
        return tuple(zip(indices, self.animation_names))

    def summary(self) -> str:
        return (
            f"{len(self.meshes)} meshes, {len(self.lights)} lights, "
            f"{len(self.cameras)} cameras, {len(self.animation_names)} animations"
        )
