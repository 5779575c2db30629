from collections import Counter
from collections.abc import Callable

import pytest

import shader_model
from shader_model import OFFLINE, UNLIMITED, ShaderKind, ShaderModel


def test_table_has_one_record_per_profile_plus_sentinel(
    real_models: tuple[ShaderModel, ...],
) -> None:
    per_kind = Counter(sm.kind for sm in real_models)

    assert len(shader_model.SHADER_MODELS) == 92
    assert per_kind == {
        ShaderKind.PIXEL: 13,
        ShaderKind.VERTEX: 13,
        ShaderKind.GEOMETRY: 13,
        ShaderKind.HULL: 11,
        ShaderKind.DOMAIN: 11,
        ShaderKind.COMPUTE: 13,
        ShaderKind.LIBRARY: 9,
        ShaderKind.MESH: 4,
        ShaderKind.AMPLIFICATION: 4,
    }


def test_sentinel_is_last_and_zeroed() -> None:
    sentinel = shader_model.INVALID_SHADER_MODEL

    assert sentinel is shader_model.SHADER_MODELS[-1]
    assert sentinel.kind == ShaderKind.INVALID
    assert sentinel.name == "invalid"
    assert (sentinel.major, sentinel.minor) == (0, 0)
    assert (sentinel.input_registers, sentinel.output_registers) == (0, 0)
    assert sentinel.typed_uavs is False
    assert sentinel.uav_registers == 0


def test_profile_keys_strictly_increase(real_models: tuple[ShaderModel, ...]) -> None:
    keys = [shader_model.profile_key(sm.kind, sm.major, sm.minor) for sm in real_models]

    assert all(a < b for a, b in zip(keys, keys[1:]))


@pytest.mark.parametrize(
    ("kind", "major", "minor", "expected"),
    [
        (ShaderKind.PIXEL, 4, 0, 1024),
        (ShaderKind.VERTEX, 6, 8, 67080),
        (ShaderKind.LIBRARY, 6, 1, 394753),
        (ShaderKind.LIBRARY, 6, OFFLINE, 394767),
        (ShaderKind.AMPLIFICATION, 6, 8, 919048),
    ],
)
def test_profile_key_packs_kind_major_minor(
    kind: ShaderKind, major: int, minor: shader_model.MinorVersion, expected: int
) -> None:
    assert shader_model.profile_key(kind, major, minor) == expected


def test_offline_minor_only_under_library(real_models: tuple[ShaderModel, ...]) -> None:
    offline = [sm for sm in real_models if sm.minor is OFFLINE]

    assert [sm.name for sm in offline] == ["lib_6_x"]


def test_uav_limits_follow_shader_model_generation(
    real_models: tuple[ShaderModel, ...],
) -> None:
    for sm in real_models:
        if sm.major == 4:
            assert sm.uav_registers == 0
            assert sm.typed_uavs is False
        elif sm.major == 5:
            assert sm.uav_registers == 64
            assert sm.typed_uavs is True
        else:
            assert sm.uav_registers is UNLIMITED
            assert sm.typed_uavs is True


def test_supports_uavs_matches_nonzero_uav_registers(
    real_models: tuple[ShaderModel, ...],
) -> None:
    legacy = {sm.name for sm in real_models if not shader_model.supports_uavs(sm)}

    assert legacy == {
        "ps_4_0",
        "ps_4_1",
        "vs_4_0",
        "vs_4_1",
        "gs_4_0",
        "gs_4_1",
        "cs_4_0",
        "cs_4_1",
    }
    assert not shader_model.supports_uavs(shader_model.INVALID_SHADER_MODEL)


@pytest.mark.parametrize(
    ("name", "inputs", "outputs"),
    [
        ("ps_6_0", 32, 8),
        ("vs_4_0", 16, 16),
        ("gs_4_0", 16, 32),
        ("cs_6_6", 0, 0),
        ("ms_6_5", 0, 0),
        ("lib_6_x", 32, 32),
    ],
)
def test_register_limits_per_profile(name: str, inputs: int, outputs: int) -> None:
    sm = shader_model.parse(name)

    assert sm.input_registers == inputs
    assert sm.output_registers == outputs


def test_records_compare_field_wise(
    make_shader_model: Callable[..., ShaderModel],
) -> None:
    original = shader_model.parse("ps_6_5")
    copy = make_shader_model(
        kind=ShaderKind.PIXEL, major=6, minor=5, output_registers=8
    )
    different = make_shader_model(
        kind=ShaderKind.PIXEL, major=6, minor=5, output_registers=16
    )

    assert copy == original
    assert copy is not original
    assert different != original
    assert str(original) == "ps_6_5"


def test_validate_table_accepts_shipped_table() -> None:
    shader_model.validate_table(shader_model.SHADER_MODELS)


def test_validate_table_rejects_out_of_order_entries() -> None:
    table = shader_model.SHADER_MODELS
    swapped = (table[1], table[0], *table[2:])

    with pytest.raises(ValueError, match="out of order"):
        shader_model.validate_table(swapped)


def test_validate_table_rejects_duplicate_keys() -> None:
    table = shader_model.SHADER_MODELS
    duplicated = (table[0], table[0], *table[1:])

    with pytest.raises(ValueError, match="out of order"):
        shader_model.validate_table(duplicated)


def test_validate_table_requires_trailing_sentinel() -> None:
    with pytest.raises(ValueError, match="sentinel"):
        shader_model.validate_table(shader_model.SHADER_MODELS[:-1])


def test_validate_table_rejects_offline_minor_outside_library(
    make_shader_model: Callable[..., ShaderModel],
) -> None:
    bad = make_shader_model(kind=ShaderKind.PIXEL, major=6, minor=OFFLINE)

    with pytest.raises(ValueError, match="Offline minor"):
        shader_model.validate_table((bad, shader_model.INVALID_SHADER_MODEL))


def test_validate_table_rejects_mismatched_name() -> None:
    misnamed = ShaderModel(ShaderKind.PIXEL, 6, 0, "ps_60", 32, 8, True, UNLIMITED)

    with pytest.raises(ValueError, match="should be named ps_6_0"):
        shader_model.validate_table((misnamed, shader_model.INVALID_SHADER_MODEL))


def test_records_are_immutable() -> None:
    sm = shader_model.parse("cs_6_0")

    with pytest.raises(AttributeError):
        sm.major = 5  # type: ignore[misc]
