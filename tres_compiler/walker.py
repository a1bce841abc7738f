"""
Scene walker: one traversal of the scene graph into a SceneIR.

The root node itself is never emitted, only its descendants. Each visited
node is dispatched on its kind to the matching extractor; results are
partitioned per category and frozen into the IR in one step.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Union

from tres_compiler.animations import ANIMATION_HELPER, collect_animations
from tres_compiler.extractors import (
    TAG_PREFIX,
    extract_camera,
    extract_geometry,
    extract_light,
    extract_material,
    extract_transform,
)
from tres_compiler.ir import CameraEntry, Expression, LightEntry, MeshEntry, SceneIR
from tres_compiler.naming import sanitize
from tres_compiler.scene import AnimationClip, NodeKind, SceneNode

if TYPE_CHECKING:
    from config import ConversionConfig

log = logging.getLogger(__name__)

MESH_TAG = f"{TAG_PREFIX}Mesh"

Entity = Union[MeshEntry, LightEntry, CameraEntry]


def _label(node: SceneNode) -> str:
    return f"{node.name or '<unnamed>'} ({node.type_name or node.kind.value})"


def _extract_mesh(
    node: SceneNode, mesh_index: int, precision: int, shadows: bool
) -> MeshEntry:
    return MeshEntry(
        name=sanitize(node.name, "Mesh", mesh_index),
        geometry=extract_geometry(node.geometry, precision),
        material=extract_material(node.material, precision),
        transform=extract_transform(node, precision),
        cast_shadow=shadows or node.cast_shadow,
        receive_shadow=shadows or node.receive_shadow,
    )


def required_imports(entities: Iterable[Entity], has_animations: bool) -> frozenset[str]:
    """Tags and helpers referenced by the extracted entities."""
    names: set[str] = set()
    for entity in entities:
        if isinstance(entity, MeshEntry):
            names.update((MESH_TAG, entity.geometry.tag, entity.material.tag))
            props = entity.material.props
        else:
            names.add(entity.tag)
            props = entity.props
        names.update(v.source for v in props.values() if isinstance(v, Expression))
    if has_animations:
        names.add(ANIMATION_HELPER)
    return frozenset(names)


def walk(
    root: SceneNode,
    config: ConversionConfig | None = None,
    animations: Iterable[AnimationClip] = (),
) -> SceneIR:
    """
    Traverse *root* once (depth-first, pre-order) and build the IR.

    Args:
        root: Scene root; only its descendants become entities
        config: Conversion options (precision, shadows); defaults if None
        animations: The model's clip list, collected independently of the tree

    Returns:
        A frozen SceneIR
    """
    if config is None:
        from config import ConversionConfig

        config = ConversionConfig()

    precision = config.decimal_precision
    meshes: list[MeshEntry] = []
    lights: list[LightEntry] = []
    cameras: list[CameraEntry] = []
    unsupported: list[str] = []

    for node in root.descendants():
        kind = node.kind
        if kind is NodeKind.MESH:
            meshes.append(_extract_mesh(node, len(meshes), precision, config.shadows_enabled))
        elif kind is NodeKind.LIGHT:
            light = extract_light(node, precision)
            if light is None:
                log.debug("Unsupported light %s left to the scene primitive", _label(node))
                unsupported.append(_label(node))
            else:
                lights.append(light)
        elif kind is NodeKind.CAMERA:
            camera = extract_camera(node, precision)
            if camera is None:
                log.debug("Unsupported camera %s left to the scene primitive", _label(node))
                unsupported.append(_label(node))
            else:
                cameras.append(camera)
        elif kind is NodeKind.GROUP:
            continue
        else:
            log.debug("Unsupported node %s left to the scene primitive", _label(node))
            unsupported.append(_label(node))

    clips = collect_animations(animations)
    animation_names = tuple(name for _, name in clips)

    return SceneIR(
        meshes=tuple(meshes),
        lights=tuple(lights),
        cameras=tuple(cameras),
        animation_names=animation_names,
        animation_indices=tuple(index for index, _ in clips),
        required_imports=required_imports(
            [*lights, *meshes, *cameras], has_animations=bool(animation_names)
        ),
        unsupported=tuple(unsupported),
    )
