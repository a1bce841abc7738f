"""
Centralized configuration for scene-to-component conversion.

All conversion options in one place. The option names used by the web UI
(camelCase) are accepted through ConversionConfig.from_options().
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Literal, Mapping

Dialect = Literal["standalone", "server-rendered"]

DIALECTS: tuple[str, ...] = ("standalone", "server-rendered")

# Framework names used by older option payloads
_DIALECT_ALIASES = {
    "vue3": "standalone",
    "vue": "standalone",
    "nuxt": "server-rendered",
}


@dataclass
class EmitConfig:
    """Options consumed by the code emitter."""

    typed: bool = True  # lang="ts" + typed props
    composition_style: bool = True  # <script setup> vs export default {...}
    shadows_enabled: bool = False  # cast-shadow / receive-shadow on meshes
    model_reference_path: str = "/model.glb"  # Runtime path the component reloads
    component_name: str = "Model"
    target_dialect: Dialect = "standalone"


@dataclass
class ViewerConfig:
    """Host page options (canvas, controls, lighting rig)."""

    auto_rotate: bool = False
    environment_preset: str | None = "city"  # None = no <Environment>
    lighting_preset: str | None = "rembrandt"  # None = no <Stage>
    intensity: float = 1.0
    contact_shadow: bool = False


@dataclass
class ConversionConfig:
    """Complete conversion configuration."""

    file_name: str = "model.glb"
    path_prefix: str = ""

    # Emission
    typed: bool = True
    composition_style: bool = True
    shadows_enabled: bool = False
    target_dialect: Dialect = "standalone"

    # Extraction
    decimal_precision: int = 3  # Digits kept for transforms and numeric props

    viewer: ViewerConfig = field(default_factory=ViewerConfig)

    def __post_init__(self):
        dialect = _DIALECT_ALIASES.get(self.target_dialect, self.target_dialect)
        if dialect not in DIALECTS:
            raise ValueError(
                f"Unknown target dialect {self.target_dialect!r} "
                f"(expected one of {', '.join(DIALECTS)})"
            )
        self.target_dialect = dialect
        if self.decimal_precision < 0:
            raise ValueError(
                f"decimal_precision must be >= 0, got {self.decimal_precision}"
            )

    @property
    def model_reference_path(self) -> str:
        from tres_compiler.naming import model_reference_path

        return model_reference_path(self.file_name, self.path_prefix)

    @property
    def component_name(self) -> str:
        from tres_compiler.naming import component_name

        return component_name(self.file_name)

    def to_emit_config(self) -> EmitConfig:
        return EmitConfig(
            typed=self.typed,
            composition_style=self.composition_style,
            shadows_enabled=self.shadows_enabled,
            model_reference_path=self.model_reference_path,
            component_name=self.component_name,
            target_dialect=self.target_dialect,
        )

    def to_flat_dict(self) -> dict:
        """
        Convert to a flat dict.

        Viewer keys are prefixed with the section name.
        Example: viewer.auto_rotate -> "viewer/auto_rotate"
        """
        result = {}
        for key, value in asdict(self).items():
            if key == "viewer":
                continue
            result[key] = value
        for key, value in asdict(self.viewer).items():
            result[f"viewer/{key}"] = value
        return result

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> ConversionConfig:
        """
        Build a config from a UI option payload.

        Unknown keys are ignored. Both the camelCase UI names and the
        snake_case field names are accepted.
        """
        top: dict[str, Any] = {}
        viewer: dict[str, Any] = {}
        own_fields = {f.name for f in fields(cls)} - {"viewer"}
        viewer_fields = {f.name for f in fields(ViewerConfig)}

        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name in own_fields:
                top[name] = value
            elif name in viewer_fields:
                viewer[name] = value

        return cls(viewer=ViewerConfig(**viewer), **top)

    @classmethod
    def for_nuxt(cls, file_name: str = "model.glb") -> ConversionConfig:
        """Typed composition component for a Nuxt project."""
        return cls(
            file_name=file_name,
            path_prefix="models",
            target_dialect="server-rendered",
        )

    @classmethod
    def for_javascript(cls, file_name: str = "model.glb") -> ConversionConfig:
        """Untyped options-style component, the plain-JS flavour."""
        return cls(
            file_name=file_name,
            typed=False,
            composition_style=False,
        )


_OPTION_ALIASES = {
    "fileName": "file_name",
    "pathPrefix": "path_prefix",
    "types": "typed",
    "useComposition": "composition_style",
    "compositionStyle": "composition_style",
    "shadows": "shadows_enabled",
    "shadowsEnabled": "shadows_enabled",
    "precision": "decimal_precision",
    "decimalPrecision": "decimal_precision",
    "targetDialect": "target_dialect",
    "framework": "target_dialect",
    "autoRotate": "auto_rotate",
    "environment": "environment_preset",
    "environmentPreset": "environment_preset",
    "preset": "lighting_preset",
    "lightingPreset": "lighting_preset",
    "contactShadow": "contact_shadow",
}
