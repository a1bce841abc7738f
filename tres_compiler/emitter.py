"""
Vue single-file-component generator.

Generates TresJS component source from a finished SceneIR. The component is
assembled from four independent blocks (imports, props, setup, markup), each
built by its own method so it can be checked against an IR in isolation.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator, Mapping

from tres_compiler.animations import ANIMATION_HELPER
from tres_compiler.extractors import TAG_PREFIX
from tres_compiler.ir import Expression, MeshEntry, SceneIR, TransformDescriptor
from tres_compiler.numeric import format_literal

if TYPE_CHECKING:
    from config import EmitConfig

INDENT = "  "

# Always imported, whatever the scene holds
BASE_CORE_IMPORTS = ("TresGroup",)
MODEL_LOADER = "useGLTF"

CORE_MODULE = "@tresjs/core"
CIENTOS_MODULE = "@tresjs/cientos"
THREE_MODULE = "three"
VUE_MODULE = "vue"

THREE_CONSTANTS = frozenset({"FrontSide", "BackSide", "DoubleSide"})

# Module order in the imports block
MODULE_ORDER = (VUE_MODULE, CORE_MODULE, THREE_MODULE, CIENTOS_MODULE)


class SourceBuilder:
    """Line accumulator with indentation scopes."""

    def __init__(self, level: int = 0):
        self.lines: list[str] = []
        self.level = level

    def line(self, text: str = "") -> SourceBuilder:
        self.lines.append(f"{INDENT * self.level}{text}" if text else "")
        return self

    def extend(self, text: str) -> SourceBuilder:
        for line in text.split("\n"):
            self.line(line)
        return self

    @contextmanager
    def indented(self) -> Iterator[SourceBuilder]:
        self.level += 1
        try:
            yield self
        finally:
            self.level -= 1

    def render(self) -> str:
        return "\n".join(self.lines)


def js_string(value: str) -> str:
    """Single-quoted JavaScript string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


def html_attr(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;").replace("<", "&lt;")


def render_attribute(key: str, value: Any) -> str:
    """
    Render one template attribute.

    Strings are static (key="value"), True is a bare flag, script
    identifiers and every other literal are bound (:key="expr").
    """
    if value is True:
        return key
    if isinstance(value, Expression):
        return f':{key}="{value.source}"'
    if isinstance(value, str):
        return f'{key}="{html_attr(value)}"'
    return f':{key}="{html_attr(format_literal(value))}"'


def render_attributes(
    props: Mapping[str, Any], transform: TransformDescriptor | None = None, leading: bool = True
) -> str:
    parts = []
    if transform is not None:
        parts.extend(render_attribute(name, value) for name, value in transform.attributes())
    parts.extend(render_attribute(key, value) for key, value in props.items())
    if not parts:
        return ""
    joined = " ".join(parts)
    return f" {joined}" if leading else joined


class ComponentEmitter:
    """Generates a TresJS component from a SceneIR."""

    def __init__(self, ir: SceneIR, config: EmitConfig):
        """
        Initialize the emitter.

        Args:
            ir: Finished intermediate representation
            config: Style, dialect and model path options
        """
        self.ir = ir
        self.config = config

    @property
    def plays_animations(self) -> bool:
        return self.ir.has_animations

    # -----------------------------------------------------------------------
    # Imports
    # -----------------------------------------------------------------------

    def collect_imports(self) -> dict[str, tuple[str, ...]]:
        """Names to import, grouped by module, in emission order."""
        required = self.ir.required_imports
        cfg = self.config

        vue: set[str] = set()
        if self.plays_animations:
            vue.add("ref")
            if cfg.composition_style:
                vue.add("onMounted")
        if cfg.typed and not cfg.composition_style:
            vue.add("defineComponent")

        core: set[str] = set()
        if cfg.target_dialect != "server-rendered":
            # The Nuxt module registers Tres components globally
            core = {name for name in required if name.startswith(TAG_PREFIX)}
            core.update(BASE_CORE_IMPORTS)

        cientos = {MODEL_LOADER}
        if ANIMATION_HELPER in required:
            cientos.add(ANIMATION_HELPER)

        modules = {
            VUE_MODULE: vue,
            CORE_MODULE: core,
            THREE_MODULE: {name for name in required if name in THREE_CONSTANTS},
            CIENTOS_MODULE: cientos,
        }
        return {module: tuple(sorted(modules[module])) for module in MODULE_ORDER if modules[module]}

    def imports_block(self) -> str:
        out = SourceBuilder()
        if self.config.typed and not self.config.composition_style:
            out.line(f"import type {{ PropType }} from {js_string(VUE_MODULE)}")
        for module, names in self.collect_imports().items():
            out.line(f"import {{ {', '.join(names)} }} from {js_string(module)}")
        return out.render()

    # -----------------------------------------------------------------------
    # Props
    # -----------------------------------------------------------------------

    def props_block(self) -> str:
        """Declaration of the single optional `path` prop."""
        default = js_string(self.config.model_reference_path)
        out = SourceBuilder()

        if not self.config.composition_style:
            out.line("props: {")
            with out.indented():
                out.line("path: {")
                with out.indented():
                    out.line("type: String as PropType<string>," if self.config.typed else "type: String,")
                    out.line(f"default: {default},")
                out.line("},")
            out.line("},")
            return out.render()

        if self.config.typed:
            out.line("interface Props {")
            with out.indented():
                out.line("path?: string")
            out.line("}")
            out.line()
            out.line("const props = withDefaults(defineProps<Props>(), {")
            with out.indented():
                out.line(f"path: {default},")
            out.line("})")
        else:
            out.line("const props = defineProps({")
            with out.indented():
                out.line("path: {")
                with out.indented():
                    out.line("type: String,")
                    out.line(f"default: {default},")
                out.line("},")
            out.line("})")
        return out.render()

    # -----------------------------------------------------------------------
    # Setup
    # -----------------------------------------------------------------------

    def _loaded_names(self) -> str:
        return "scene, animations" if self.plays_animations else "scene"

    def _play_lines(self, receiver: str) -> list[str]:
        animations = f"{receiver}animations"
        return [
            f"{receiver}actions[{animations}[{index}].name]?.play() // {name}"
            for index, name in self.ir.animation_slots()
        ]

    def setup_block(self) -> str:
        """Model loading plus, when clips exist, play-on-mount wiring."""
        if not self.config.composition_style:
            return self._options_setup()

        out = SourceBuilder()
        out.line("// Load GLTF model")
        out.line(f"const {{ {self._loaded_names()} }} = await {MODEL_LOADER}(props.path)")
        if self.plays_animations:
            out.line()
            out.line("const group = ref()")
            out.line(f"const {{ actions }} = {ANIMATION_HELPER}(animations, group)")
            out.line()
            out.line("onMounted(() => {")
            with out.indented():
                out.line("// Play all animations")
                for line in self._play_lines(""):
                    out.line(line)
            out.line("})")
        return out.render()

    def _options_setup(self) -> str:
        exposed = ["scene"]
        out = SourceBuilder()
        out.line("async setup(props) {")
        with out.indented():
            out.line(f"const {{ {self._loaded_names()} }} = await {MODEL_LOADER}(props.path)")
            if self.plays_animations:
                out.line("const group = ref()")
                out.line(f"const {{ actions }} = {ANIMATION_HELPER}(animations, group)")
                exposed = ["group", "scene", "animations", "actions"]
            exposed.extend(sorted(self.collect_imports().get(THREE_MODULE, ())))
            out.line()
            out.line("return {")
            with out.indented():
                for name in exposed:
                    out.line(f"{name},")
            out.line("}")
        out.line("},")
        if self.plays_animations:
            out.line("mounted() {")
            with out.indented():
                out.line("// Play all animations")
                for line in self._play_lines("this."):
                    out.line(line)
            out.line("},")
        return out.render()

    # -----------------------------------------------------------------------
    # Markup
    # -----------------------------------------------------------------------

    def _add_mesh(self, out: SourceBuilder, mesh: MeshEntry) -> None:
        markers = ""
        if self.config.shadows_enabled:
            if mesh.cast_shadow:
                markers += " cast-shadow"
            if mesh.receive_shadow:
                markers += " receive-shadow"

        geometry = mesh.geometry
        geometry_attrs = render_attributes({"args": list(geometry.args)} if geometry.args else {})

        out.line(f"<!-- {mesh.name} -->")
        out.line(f"<{TAG_PREFIX}Mesh{render_attributes({}, mesh.transform)}{markers}>")
        with out.indented():
            out.line(f"<{geometry.tag}{geometry_attrs} />")
            out.line(f"<{mesh.material.tag}{render_attributes(mesh.material.props)} />")
        out.line(f"</{TAG_PREFIX}Mesh>")

    def markup_block(self) -> str:
        """
        Template body: lights, then meshes, then cameras, then the whole
        loaded scene as a primitive so unmodelled nodes still render.
        """
        group_ref = ' ref="group"' if self.plays_animations else ""
        out = SourceBuilder(level=1)
        out.line(f"<TresGroup{group_ref}>")
        with out.indented():
            for light in self.ir.lights:
                out.line(f"<{light.tag}{render_attributes(light.props, light.transform)} />")
            for mesh in self.ir.meshes:
                self._add_mesh(out, mesh)
            for camera in self.ir.cameras:
                out.line(f"<{camera.tag}{render_attributes(camera.props, camera.transform)} />")
            out.line("<!-- GLTF scene -->")
            out.line('<primitive :object="scene" />')
        out.line("</TresGroup>")
        return out.render()

    # -----------------------------------------------------------------------
    # Assembly
    # -----------------------------------------------------------------------

    def _script_open(self, setup: bool) -> str:
        lang = ' lang="ts"' if self.config.typed else ""
        return f"<script{' setup' if setup else ''}{lang}>"

    def _composition_script(self) -> list[str]:
        return [
            self._script_open(setup=True),
            self.imports_block(),
            "",
            self.props_block(),
            "",
            self.setup_block(),
            "</script>",
        ]

    def _options_script(self) -> list[str]:
        opener = "export default defineComponent({" if self.config.typed else "export default {"
        closer = "})" if self.config.typed else "}"

        body = SourceBuilder(level=1)
        body.line(f"name: {js_string(self.config.component_name)},")
        body.extend(self.props_block())
        body.extend(self.setup_block())
        return [
            self._script_open(setup=False),
            self.imports_block(),
            "",
            opener,
            body.render(),
            closer,
            "</script>",
        ]

    def generate(self) -> str:
        """Generate the complete component source."""
        script = self._composition_script() if self.config.composition_style else self._options_script()
        sections = [
            "<template>",
            self.markup_block(),
            "</template>",
            "",
            *script,
            "",
            "<style scoped>",
            "/* Add any component-specific styles here */",
            "</style>",
        ]
        return "\n".join(sections) + "\n"


def emit(ir: SceneIR, config: EmitConfig) -> str:
    """
    Generate component source text from an IR.

    Args:
        ir: Finished intermediate representation
        config: Emission options

    Returns:
        The complete .vue source
    """
    return ComponentEmitter(ir, config).generate()
