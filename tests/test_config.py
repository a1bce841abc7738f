"""Conversion configuration parsing and presets."""

import pytest

from config import ConversionConfig, EmitConfig, ViewerConfig


class TestConversionConfig:
    def test_defaults(self):
        cfg = ConversionConfig()
        assert cfg.typed and cfg.composition_style
        assert cfg.decimal_precision == 3
        assert cfg.target_dialect == "standalone"
        assert cfg.model_reference_path == "/model.glb"
        assert cfg.component_name == "Model"

    def test_prefix_and_name(self):
        cfg = ConversionConfig(file_name="robot.glb", path_prefix="models")
        assert cfg.model_reference_path == "/models/robot.glb"
        assert cfg.component_name == "Robot"

    def test_dialect_alias(self):
        assert ConversionConfig(target_dialect="nuxt").target_dialect == "server-rendered"
        assert ConversionConfig(target_dialect="vue3").target_dialect == "standalone"

    def test_unknown_dialect_rejected(self):
        with pytest.raises(ValueError, match="dialect"):
            ConversionConfig(target_dialect="react")

    def test_negative_precision_rejected(self):
        with pytest.raises(ValueError, match="decimal_precision"):
            ConversionConfig(decimal_precision=-1)

    def test_to_emit_config(self):
        cfg = ConversionConfig(
            file_name="robot.glb",
            path_prefix="models",
            typed=False,
            shadows_enabled=True,
        )
        emit_cfg = cfg.to_emit_config()
        assert isinstance(emit_cfg, EmitConfig)
        assert emit_cfg.typed is False
        assert emit_cfg.shadows_enabled is True
        assert emit_cfg.model_reference_path == "/models/robot.glb"
        assert emit_cfg.component_name == "Robot"

    def test_flat_dict(self):
        flat = ConversionConfig().to_flat_dict()
        assert flat["decimal_precision"] == 3
        assert flat["viewer/auto_rotate"] is False
        assert "viewer" not in flat


class TestFromOptions:
    def test_ui_option_names(self):
        cfg = ConversionConfig.from_options(
            {
                "fileName": "robot.glb",
                "pathPrefix": "models",
                "types": False,
                "useComposition": False,
                "shadows": True,
                "autoRotate": True,
                "environment": "sunset",
                "preset": "soft",
                "intensity": 2,
                "precision": 2,
                "framework": "nuxt",
                "contactShadow": True,
                "instanceall": True,  # Not supported, ignored
            }
        )
        assert cfg.file_name == "robot.glb"
        assert cfg.path_prefix == "models"
        assert cfg.typed is False
        assert cfg.composition_style is False
        assert cfg.shadows_enabled is True
        assert cfg.decimal_precision == 2
        assert cfg.target_dialect == "server-rendered"
        assert cfg.viewer == ViewerConfig(
            auto_rotate=True,
            environment_preset="sunset",
            lighting_preset="soft",
            intensity=2,
            contact_shadow=True,
        )

    def test_snake_case_names(self):
        cfg = ConversionConfig.from_options({"decimal_precision": 4, "auto_rotate": True})
        assert cfg.decimal_precision == 4
        assert cfg.viewer.auto_rotate is True

    def test_spec_option_names(self):
        cfg = ConversionConfig.from_options(
            {
                "compositionStyle": False,
                "shadowsEnabled": True,
                "environmentPreset": "night",
                "lightingPreset": "portrait",
                "decimalPrecision": 1,
                "targetDialect": "server-rendered",
            }
        )
        assert cfg.composition_style is False
        assert cfg.shadows_enabled is True
        assert cfg.viewer.environment_preset == "night"
        assert cfg.viewer.lighting_preset == "portrait"
        assert cfg.decimal_precision == 1
        assert cfg.target_dialect == "server-rendered"


class TestPresets:
    def test_for_nuxt(self):
        cfg = ConversionConfig.for_nuxt("robot.glb")
        assert cfg.target_dialect == "server-rendered"
        assert cfg.model_reference_path == "/models/robot.glb"

    def test_for_javascript(self):
        cfg = ConversionConfig.for_javascript()
        assert cfg.typed is False
        assert cfg.composition_style is False
