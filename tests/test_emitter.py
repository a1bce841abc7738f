"""Component source generation from hand-built IRs."""

import re

import pytest

from config import EmitConfig
from tres_compiler.emitter import ComponentEmitter, emit, render_attribute, render_attributes
from tres_compiler.ir import (
    CameraEntry,
    Expression,
    GeometryDescriptor,
    LightEntry,
    MaterialDescriptor,
    MeshEntry,
    SceneIR,
    TransformDescriptor,
)
from tres_compiler.scene import AnimationClip, SceneNode
from tres_compiler.walker import walk

BOX = GeometryDescriptor("TresBoxGeometry", (1.0, 1.0, 1.0))
BASIC = MaterialDescriptor("basic", "TresMeshBasicMaterial")
RED_BASIC = MaterialDescriptor("basic", "TresMeshBasicMaterial", {"color": "#ff0000"})


def make_ir(meshes=(), lights=(), cameras=(), animation_names=(), extra_imports=()):
    names = set(extra_imports)
    for mesh in meshes:
        names.update(("TresMesh", mesh.geometry.tag, mesh.material.tag))
    names.update(entry.tag for entry in (*lights, *cameras))
    if animation_names:
        names.add("useAnimations")
    return SceneIR(
        meshes=tuple(meshes),
        lights=tuple(lights),
        cameras=tuple(cameras),
        animation_names=tuple(animation_names),
        required_imports=frozenset(names),
    )


def emitter(ir, **kwargs):
    return ComponentEmitter(ir, EmitConfig(**kwargs))


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


class TestAttributes:
    @pytest.mark.parametrize(
        "key, value, expected",
        [
            ("color", "#ff0000", 'color="#ff0000"'),
            ("transparent", True, "transparent"),
            ("opacity", 0.5, ':opacity="0.5"'),
            ("intensity", 1.0, ':intensity="1"'),
            ("args", [1.0, 2.0, 3.0], ':args="[1,2,3]"'),
            ("side", Expression("DoubleSide"), ':side="DoubleSide"'),
        ],
    )
    def test_render_attribute(self, key, value, expected):
        assert render_attribute(key, value) == expected

    def test_transform_before_props(self):
        transform = TransformDescriptor(position=(10.0, 10.0, 5.0))
        rendered = render_attributes({"intensity": 1.0}, transform)
        assert rendered == ' :position="[10,10,5]" :intensity="1"'

    def test_empty(self):
        assert render_attributes({}) == ""
        assert render_attributes({}, TransformDescriptor()) == ""


# ---------------------------------------------------------------------------
# Imports
# ---------------------------------------------------------------------------


class TestImports:
    def test_minimal_scene(self):
        imports = emitter(make_ir()).collect_imports()
        assert imports == {
            "@tresjs/core": ("TresGroup",),
            "@tresjs/cientos": ("useGLTF",),
        }

    def test_tags_sorted_and_deduplicated(self):
        ir = make_ir(
            meshes=[
                MeshEntry("A", BOX, BASIC),
                MeshEntry("B", BOX, BASIC),
            ],
            lights=[LightEntry("TresDirectionalLight", {"intensity": 1.0})],
        )
        imports = emitter(ir).collect_imports()
        assert imports["@tresjs/core"] == (
            "TresBoxGeometry",
            "TresDirectionalLight",
            "TresGroup",
            "TresMesh",
            "TresMeshBasicMaterial",
        )

    def test_animations(self):
        imports = emitter(make_ir(animation_names=["Walk"])).collect_imports()
        assert imports["vue"] == ("onMounted", "ref")
        assert imports["@tresjs/cientos"] == ("useAnimations", "useGLTF")

    def test_three_constants(self):
        material = MaterialDescriptor("basic", "TresMeshBasicMaterial", {"side": Expression("BackSide")})
        ir = make_ir(meshes=[MeshEntry("A", BOX, material)], extra_imports=["BackSide"])
        imports = emitter(ir).collect_imports()
        assert imports["three"] == ("BackSide",)
        assert "BackSide" not in imports["@tresjs/core"]

    def test_module_order(self):
        ir = make_ir(animation_names=["Walk"], extra_imports=["DoubleSide"])
        assert list(emitter(ir).collect_imports()) == ["vue", "@tresjs/core", "three", "@tresjs/cientos"]

    def test_server_rendered_omits_core(self):
        ir = make_ir(meshes=[MeshEntry("A", BOX, BASIC)])
        imports = emitter(ir, target_dialect="server-rendered").collect_imports()
        assert "@tresjs/core" not in imports
        assert imports["@tresjs/cientos"] == ("useGLTF",)

    def test_typed_options_style(self):
        block = emitter(make_ir(), composition_style=False).imports_block()
        lines = block.split("\n")
        assert lines[0] == "import type { PropType } from 'vue'"
        assert "import { defineComponent } from 'vue'" in lines

    def test_block_lines(self):
        block = emitter(make_ir()).imports_block()
        assert block == (
            "import { TresGroup } from '@tresjs/core'\n"
            "import { useGLTF } from '@tresjs/cientos'"
        )


# ---------------------------------------------------------------------------
# Props
# ---------------------------------------------------------------------------


class TestProps:
    def test_typed_composition(self):
        block = emitter(make_ir(), model_reference_path="/models/robot.glb").props_block()
        assert "interface Props {" in block
        assert "  path?: string" in block
        assert "const props = withDefaults(defineProps<Props>(), {" in block
        assert "  path: '/models/robot.glb'," in block

    def test_untyped_composition(self):
        block = emitter(make_ir(), typed=False).props_block()
        assert block.startswith("const props = defineProps({")
        assert "type: String," in block
        assert "default: '/model.glb'," in block
        assert "interface" not in block

    def test_options_style(self):
        block = emitter(make_ir(), composition_style=False).props_block()
        assert block.startswith("props: {")
        assert "type: String as PropType<string>," in block

    def test_options_style_untyped(self):
        block = emitter(make_ir(), typed=False, composition_style=False).props_block()
        assert "PropType" not in block
        assert "type: String," in block

    def test_path_escaped(self):
        block = emitter(make_ir(), model_reference_path="/it's.glb").props_block()
        assert "'/it\\'s.glb'" in block


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


class TestSetup:
    def test_static_scene(self):
        block = emitter(make_ir()).setup_block()
        assert block == "// Load GLTF model\nconst { scene } = await useGLTF(props.path)"

    def test_animations_played_on_mount(self):
        block = emitter(make_ir(animation_names=["Walk", "Run"])).setup_block()
        assert "const { scene, animations } = await useGLTF(props.path)" in block
        assert "const group = ref()" in block
        assert "const { actions } = useAnimations(animations, group)" in block
        assert "onMounted(() => {" in block
        assert "  actions[animations[0].name]?.play() // Walk" in block
        assert "  actions[animations[1].name]?.play() // Run" in block

    def test_options_style(self):
        block = emitter(make_ir(animation_names=["Walk"]), composition_style=False).setup_block()
        assert block.startswith("async setup(props) {")
        assert "mounted() {" in block
        assert "this.actions[this.animations[0].name]?.play() // Walk" in block
        for name in ("group", "scene", "animations", "actions"):
            assert f"    {name}," in block

    def test_plays_clips_at_their_list_position(self):
        ir = SceneIR(
            animation_names=("Walk", "Run"),
            animation_indices=(0, 2),
            required_imports=frozenset({"useAnimations"}),
        )
        block = emitter(ir).setup_block()
        assert "actions[animations[0].name]?.play() // Walk" in block
        assert "actions[animations[2].name]?.play() // Run" in block
        assert "animations[1]" not in block

    def test_repeated_clip_does_not_shift_later_clips(self):
        walk_clip = AnimationClip("Walk")
        ir = walk(SceneNode(), animations=(walk_clip, walk_clip, AnimationClip("Run")))
        block = emitter(ir, composition_style=False).setup_block()
        assert "this.actions[this.animations[0].name]?.play() // Walk" in block
        assert "this.actions[this.animations[2].name]?.play() // Run" in block
        assert "animations[1]" not in block

    def test_options_style_exposes_three_constants(self):
        ir = make_ir(extra_imports=["DoubleSide"])
        block = emitter(ir, composition_style=False).setup_block()
        assert "    DoubleSide," in block
        assert "mounted()" not in block


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------


class TestMarkup:
    def test_empty_scene(self):
        block = emitter(make_ir()).markup_block()
        assert block == (
            "  <TresGroup>\n"
            "    <!-- GLTF scene -->\n"
            '    <primitive :object="scene" />\n'
            "  </TresGroup>"
        )

    def test_group_ref_only_with_animations(self):
        assert '<TresGroup ref="group">' in emitter(make_ir(animation_names=["Walk"])).markup_block()
        assert 'ref="group"' not in emitter(make_ir()).markup_block()

    def test_mesh(self):
        mesh = MeshEntry(
            "Cube_001",
            BOX,
            RED_BASIC,
            TransformDescriptor(position=(0.0, 1.0, 0.0)),
        )
        block = emitter(make_ir(meshes=[mesh])).markup_block()
        assert (
            "    <!-- Cube_001 -->\n"
            '    <TresMesh :position="[0,1,0]">\n'
            '      <TresBoxGeometry :args="[1,1,1]" />\n'
            '      <TresMeshBasicMaterial color="#ff0000" />\n'
            "    </TresMesh>"
        ) in block

    def test_geometry_without_args(self):
        mesh = MeshEntry("Blob", GeometryDescriptor("TresBufferGeometry"), BASIC)
        block = emitter(make_ir(meshes=[mesh])).markup_block()
        assert "<TresBufferGeometry />" in block
        assert "<TresMesh>" in block

    def test_category_order(self):
        ir = make_ir(
            meshes=[MeshEntry("Cube", BOX, BASIC)],
            lights=[LightEntry("TresAmbientLight", {"intensity": 0.5})],
            cameras=[CameraEntry("TresPerspectiveCamera", {"fov": 45.0})],
        )
        block = emitter(ir).markup_block()
        light = block.index("<TresAmbientLight")
        mesh = block.index("<TresMesh>")
        camera = block.index("<TresPerspectiveCamera")
        primitive = block.index("<primitive")
        assert light < mesh < camera < primitive

    def test_light_attributes(self):
        light = LightEntry(
            "TresDirectionalLight",
            {"intensity": 1.0},
            TransformDescriptor(position=(10.0, 10.0, 5.0)),
        )
        block = emitter(make_ir(lights=[light])).markup_block()
        assert '<TresDirectionalLight :position="[10,10,5]" :intensity="1" />' in block

    def test_shadow_markers(self):
        mesh = MeshEntry("Cube", BOX, BASIC, cast_shadow=True, receive_shadow=False)
        block = emitter(make_ir(meshes=[mesh]), shadows_enabled=True).markup_block()
        assert "<TresMesh cast-shadow>" in block

    def test_shadow_markers_need_config(self):
        mesh = MeshEntry("Cube", BOX, BASIC, cast_shadow=True, receive_shadow=True)
        block = emitter(make_ir(meshes=[mesh])).markup_block()
        assert "shadow" not in block


# ---------------------------------------------------------------------------
# Whole component
# ---------------------------------------------------------------------------


class TestGenerate:
    def test_sections(self):
        source = emit(make_ir(), EmitConfig())
        assert source.startswith("<template>\n")
        assert '<script setup lang="ts">' in source
        assert source.endswith("</style>\n")
        assert source.index("</template>") < source.index("<script") < source.index("<style")

    def test_untyped_script_tag(self):
        source = emit(make_ir(), EmitConfig(typed=False))
        assert "<script setup>" in source
        assert "lang=" not in source

    def test_options_typed(self):
        source = emit(make_ir(), EmitConfig(composition_style=False, component_name="Robot"))
        assert '<script lang="ts">' in source
        assert "export default defineComponent({" in source
        assert "  name: 'Robot'," in source
        assert "\n})\n</script>" in source

    def test_options_untyped(self):
        source = emit(make_ir(), EmitConfig(typed=False, composition_style=False))
        assert "<script>" in source
        assert "export default {" in source
        assert "defineComponent" not in source

    def test_one_mesh_element_per_entry(self):
        meshes = [MeshEntry(f"M{i}", BOX, BASIC) for i in range(3)]
        source = emit(make_ir(meshes=meshes), EmitConfig())
        assert len(re.findall(r"<TresMesh[\s>]", source)) == 3

    def test_deterministic(self):
        ir = make_ir(
            meshes=[MeshEntry("A", BOX, RED_BASIC)],
            lights=[LightEntry("TresPointLight", {"intensity": 2.0, "distance": 10.0})],
            animation_names=["Walk"],
        )
        assert emit(ir, EmitConfig()) == emit(ir, EmitConfig())
