"""
Conversion entry point: scene graph in, component source out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from config import ConversionConfig
from tres_compiler.emitter import ComponentEmitter
from tres_compiler.ir import SceneIR
from tres_compiler.scene import LoadedModel
from tres_compiler.viewer import emit_viewer
from tres_compiler.walker import walk

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    """
    Output of one conversion.

    Attributes:
        source: The generated component (.vue text)
        viewer_source: Host page mounting the component
        component_name: Name the component is registered / imported under
        required_imports: Every identifier the component imports
        dependencies: npm modules the component imports from
        ir: The intermediate representation the source was emitted from
    """

    source: str
    viewer_source: str
    component_name: str
    required_imports: frozenset[str]
    dependencies: frozenset[str]
    ir: SceneIR


def convert(model: LoadedModel, config: ConversionConfig | None = None) -> ConversionResult:
    """
    Convert a loaded model into a TresJS component.

    Args:
        model: Loader output (scene root plus animation clips)
        config: Conversion options, defaults if None

    Returns:
        ConversionResult with the component source and its import set

    Raises:
        ValueError: If no model was loaded
    """
    if model is None or model.scene is None:
        raise ValueError("No scene graph to convert (model failed to load?)")
    if config is None:
        config = ConversionConfig()
    log.debug("Conversion options: %s", config.to_flat_dict())

    ir = walk(model.scene, config, model.animations)
    if ir.unsupported:
        log.debug("%d nodes rendered only through the scene primitive", len(ir.unsupported))

    emitter = ComponentEmitter(ir, config.to_emit_config())
    imports = emitter.collect_imports()
    source = emitter.generate()

    log.info(
        "Converted %s -> %s (%s)",
        config.file_name,
        config.component_name,
        ir.summary(),
    )

    return ConversionResult(
        source=source,
        viewer_source=emit_viewer(config),
        component_name=config.component_name,
        required_imports=frozenset(name for names in imports.values() for name in names),
        dependencies=frozenset(imports),
        ir=ir,
    )
