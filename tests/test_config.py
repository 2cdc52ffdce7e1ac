import pytest

from flat_triangle_renderer import ConfigurationError, RenderConfig, ShadingModel


def test_defaults() -> None:
    config = RenderConfig()
    assert config.backface_culling is True
    assert config.near_plane_policy == "clip"
    assert config.min_light == pytest.approx(0.3)
    assert config.perspective_correct_depth is False
    assert (config.workers, config.tile_size) == (1, 64)
    assert isinstance(config.shading, ShadingModel)
    assert config.shading.min_light == pytest.approx(0.3)


@pytest.mark.parametrize("kwargs", [
    {"near_plane_policy": "ignore"},
    {"min_light": -0.1},
    {"min_light": 1.5},
    {"workers": 0},
    {"tile_size": 0},
])
def test_invalid_values_rejected(kwargs) -> None:
    with pytest.raises(ConfigurationError):
        RenderConfig(**kwargs)


def test_configuration_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        RenderConfig(workers=-3)


def test_init_shading_follows_min_light() -> None:
    config = RenderConfig()
    config.min_light = 0.5
    config.init_shading()
    assert config.shading.min_light == pytest.approx(0.5)


def test_from_environ_reads_prefixed_variables() -> None:
    config = RenderConfig.from_environ({
        "FLATRENDER_WORKERS": "4",
        "FLATRENDER_TILE_SIZE": "32",
        "FLATRENDER_MIN_LIGHT": "0.25",
        "FLATRENDER_NEAR_POLICY": " Reject ",
        "FLATRENDER_NO_CULL": "yes",
        "UNRELATED": "1",
    })
    assert config.workers == 4
    assert config.tile_size == 32
    assert config.min_light == pytest.approx(0.25)
    assert config.near_plane_policy == "reject"
    assert config.backface_culling is False


def test_from_environ_empty_keeps_defaults() -> None:
    assert RenderConfig.from_environ({}) == RenderConfig()


@pytest.mark.parametrize("value", ["0", "false", ""])
def test_no_cull_needs_a_truthy_value(value) -> None:
    config = RenderConfig.from_environ({"FLATRENDER_NO_CULL": value})
    assert config.backface_culling is True


@pytest.mark.parametrize("env", [
    {"FLATRENDER_WORKERS": "many"},
    {"FLATRENDER_MIN_LIGHT": "dim"},
    {"FLATRENDER_WORKERS": "0"},
    {"FLATRENDER_NEAR_POLICY": "wrap"},
])
def test_from_environ_rejects_bad_values(env) -> None:
    with pytest.raises(ConfigurationError):
        RenderConfig.from_environ(env)


def test_from_environ_uses_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("FLATRENDER_WORKERS", "3")
    assert RenderConfig.from_environ().workers == 3
