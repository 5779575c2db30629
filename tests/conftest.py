import argparse
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

PROJECT_DIR = Path(__file__).resolve().parent.parent
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

import shader_model  # noqa: E402


@pytest.fixture
def make_args() -> Callable[..., argparse.Namespace]:
    def _make_args(**overrides: object) -> argparse.Namespace:
        base_args: dict[str, object] = {
            "list_profiles": False,
            "list_kinds": False,
            "info": None,
            "kind": None,
        }
        base_args.update(overrides)
        return argparse.Namespace(**base_args)

    return _make_args


@pytest.fixture
def make_shader_model() -> Callable[..., shader_model.ShaderModel]:
    def _make_shader_model(
        *,
        kind: shader_model.ShaderKind,
        major: int,
        minor: shader_model.MinorVersion,
        input_registers: int = 32,
        output_registers: int = 32,
        typed_uavs: bool = True,
        uav_registers: shader_model.RegisterCount = shader_model.UNLIMITED,
    ) -> shader_model.ShaderModel:
        return shader_model.ShaderModel(
            kind=kind,
            major=major,
            minor=minor,
            name=shader_model.format_profile_name(kind, major, minor),
            input_registers=input_registers,
            output_registers=output_registers,
            typed_uavs=typed_uavs,
            uav_registers=uav_registers,
        )

    return _make_shader_model


@pytest.fixture
def real_models() -> tuple[shader_model.ShaderModel, ...]:
    return shader_model.SHADER_MODELS[:-1]
