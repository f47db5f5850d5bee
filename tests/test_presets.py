import pytest

from turingpatterns.errors import InvalidParametersError, UnknownModelError
from turingpatterns.model.identifiers import ModelId
from turingpatterns.model.parameters import (
    PARAMETER_SPECS,
    FitzHughNagumoParams,
    GrayScottParams,
    ModelParameters,
    default_parameters,
    get_parameter_spec,
)
from turingpatterns.model.presets import PRESETS, blend_parameters, get_preset, presets_for


@pytest.mark.parametrize("model", list(ModelId))
def test_every_model_has_presets(model):
    presets = presets_for(model)
    assert presets
    assert all(p.model is model for p in presets)


@pytest.mark.parametrize("preset", PRESETS, ids=lambda p: p.name)
def test_presets_are_valid(preset):
    preset.params.validate()


def test_preset_names_are_unique():
    assert len({p.name for p in PRESETS}) == len(PRESETS)


def test_get_preset():
    assert get_preset("Coral").params == GrayScottParams(F=0.0545, k=0.062)
    with pytest.raises(KeyError):
        get_preset("Leopard")


def test_presets_for_unknown_model():
    with pytest.raises(UnknownModelError):
        presets_for("schnakenberg")


def test_blend_endpoints_and_midpoint():
    a = GrayScottParams(F=0.02, k=0.05)
    b = GrayScottParams(F=0.06, k=0.07)
    assert blend_parameters(a, b, 0.0) == a
    assert blend_parameters(a, b, 1.0) == b

    mid = blend_parameters(a, b, 0.5)
    assert mid.F == pytest.approx(0.04)
    assert mid.k == pytest.approx(0.06)
    assert mid.Du == a.Du


def test_blend_factor_is_clipped():
    a = GrayScottParams(F=0.02)
    b = GrayScottParams(F=0.06)
    assert blend_parameters(a, b, -1.0) == a
    assert blend_parameters(a, b, 3.0) == b


def test_blend_across_models_is_rejected():
    with pytest.raises(InvalidParametersError):
        blend_parameters(GrayScottParams(), FitzHughNagumoParams(), 0.5)


@pytest.mark.parametrize("model", list(ModelId))
def test_parameter_specs_cover_every_parameter(model):
    assert sorted(s.key for s in PARAMETER_SPECS[model]) == sorted(default_parameters(model).keys())


def test_parameter_spec_clip():
    spec = get_parameter_spec("gray-scott", "F")
    assert spec.clip(0.5) == 0.1
    assert spec.clip(-1) == 0.0
    assert spec.clip(0.03) == 0.03
    with pytest.raises(KeyError):
        get_parameter_spec("gray-scott", "epsilon")


def test_from_dict_fills_in_defaults():
    params = ModelParameters.from_dict("fitzhugh-nagumo", {"epsilon": 0.05})
    assert params == FitzHughNagumoParams(epsilon=0.05)


def test_replace_rejects_unknown_keys():
    with pytest.raises(InvalidParametersError):
        GrayScottParams().replace(epsilon=0.1)
