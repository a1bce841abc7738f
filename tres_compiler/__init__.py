"""Scene graph to TresJS component compiler.

Turns a loaded 3D scene (meshes, lights, cameras, animation clips) into the
source of a Vue single-file component that rebuilds it declaratively. Each
conversion walks the scene once into a frozen IR, then emits the component
from that IR.

Usage:
    from config import ConversionConfig
    from tres_compiler import LoadedModel, convert

    model = LoadedModel.from_dict(scene_document)
    result = convert(model, ConversionConfig(file_name="robot.glb"))
    print(result.source)               # Robot.vue
    print(sorted(result.dependencies)) # npm modules it imports
"""

from tres_compiler.compiler import ConversionResult, convert
from tres_compiler.emitter import ComponentEmitter, emit
from tres_compiler.ir import SceneIR
from tres_compiler.naming import sanitize
from tres_compiler.scene import AnimationClip, LoadedModel, NodeKind, SceneFormatError, SceneNode
from tres_compiler.viewer import emit_viewer
from tres_compiler.walker import walk

__all__ = [
    "convert",
    "ConversionResult",
    "walk",
    "emit",
    "emit_viewer",
    "ComponentEmitter",
    "SceneIR",
    "SceneNode",
    "LoadedModel",
    "AnimationClip",
    "NodeKind",
    "SceneFormatError",
    "sanitize",
]
