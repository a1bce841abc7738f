"""Host page that mounts a generated component.

Canvas, default camera and lights, orbit controls, and the optional
environment / stage / contact-shadow rig. The component import path depends
on the target dialect (Vite app vs Nuxt pages).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tres_compiler.emitter import CIENTOS_MODULE, SourceBuilder, html_attr, js_string
from tres_compiler.numeric import format_literal, round_scalar

if TYPE_CHECKING:
    from config import ConversionConfig

CLEAR_COLOR = "#1a1a1a"


def component_import_path(component: str, dialect: str) -> str:
    if dialect == "server-rendered":
        return f"~/components/{component}.vue"
    return f"./components/{component}.vue"


def _markup(config: ConversionConfig, component: str) -> str:
    viewer = config.viewer
    out = SourceBuilder()
    out.line("<template>")
    with out.indented():
        out.line('<div class="scene-container">')
        with out.indented():
            out.line('<TresCanvas v-bind="gl" window-size>')
            with out.indented():
                out.line('<TresPerspectiveCamera :position="[0,0,5]" :fov="50" />')
                out.line()
                out.line("<Suspense>")
                with out.indented():
                    if viewer.lighting_preset:
                        stage_attrs = f'preset="{html_attr(viewer.lighting_preset)}"'
                        stage_attrs += f' :intensity="{format_literal(round_scalar(viewer.intensity))}"'
                        if config.shadows_enabled:
                            stage_attrs += " shadows"
                        out.line(f"<Stage {stage_attrs}>")
                        with out.indented():
                            out.line(f"<{component} />")
                        out.line("</Stage>")
                    else:
                        out.line("<TresGroup>")
                        with out.indented():
                            out.line(f"<{component} />")
                        out.line("</TresGroup>")
                out.line("</Suspense>")
                out.line()
                out.line('<TresAmbientLight :intensity="0.5" />')
                out.line('<TresDirectionalLight :position="[10,10,5]" :intensity="1" />')
                if viewer.environment_preset:
                    out.line(f'<Environment preset="{html_attr(viewer.environment_preset)}" />')
                if viewer.contact_shadow:
                    out.line('<ContactShadows :position="[0,-1.4,0]" :opacity="0.75" :blur="2.5" />')
                out.line("<OrbitControls auto-rotate />" if viewer.auto_rotate else "<OrbitControls />")
            out.line("</TresCanvas>")
        out.line("</div>")
    out.line("</template>")
    return out.render()


def _script(config: ConversionConfig, component: str) -> str:
    viewer = config.viewer
    helpers = {"OrbitControls"}
    if viewer.environment_preset:
        helpers.add("Environment")
    if viewer.lighting_preset:
        helpers.add("Stage")
    if viewer.contact_shadow:
        helpers.add("ContactShadows")

    lang = ' lang="ts"' if config.typed else ""
    out = SourceBuilder()
    out.line(f"<script setup{lang}>")
    if config.target_dialect != "server-rendered":
        out.line(f"import {{ TresCanvas }} from {js_string('@tresjs/core')}")
    out.line(f"import {{ {', '.join(sorted(helpers))} }} from {js_string(CIENTOS_MODULE)}")
    out.line(f"import {component} from {js_string(component_import_path(component, config.target_dialect))}")
    out.line()
    out.line("const gl = {")
    with out.indented():
        out.line(f"clearColor: {js_string(CLEAR_COLOR)},")
        out.line(f"shadows: {format_literal(config.shadows_enabled)},")
        out.line("alpha: false,")
        out.line("powerPreference: 'high-performance',")
    out.line("}")
    out.line("</script>")
    return out.render()


_STYLE = """<style scoped>
.scene-container {
  width: 100vw;
  height: 100vh;
}
</style>"""


def emit_viewer(config: ConversionConfig) -> str:
    """
    Generate the page that displays the converted component.

    Standalone projects import it from ./components/, server-rendered (Nuxt)
    projects from ~/components/ with Tres registered by the Nuxt module.
    """
    component = config.component_name
    return "\n\n".join((_markup(config, component), _script(config, component), _STYLE)) + "\n"
