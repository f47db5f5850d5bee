import numpy as np
import pytest
from scipy import ndimage

from turingpatterns.engine.field import FieldStore
from turingpatterns.engine.simulation import Simulation
from turingpatterns.engine.stepper import Stepper
from turingpatterns.model.kinetics import get_kinetics
from turingpatterns.model.parameters import BrusselatorParams, FitzHughNagumoParams, GrayScottParams


def reference_step(field, model, params):
    """Vectorised forward Euler step with scipy's periodic Laplacian."""
    u = field[..., 0]
    v = field[..., 1]
    lap_u = ndimage.laplace(u, mode="wrap")
    lap_v = ndimage.laplace(v, mode="wrap")
    if model == "gray-scott":
        uvv = u * v * v
        new_u = u + params.dt * (params.Du * lap_u - uvv + params.F * (1 - u))
        new_v = v + params.dt * (params.Dv * lap_v + uvv - (params.F + params.k) * v)
        return np.stack([np.clip(new_u, 0, 1), np.clip(new_v, 0, 1)], axis=-1)
    if model == "fitzhugh-nagumo":
        new_u = u + params.dt * (params.Du * lap_u + u - u ** 3 - v + params.stimulus)
        new_v = v + params.dt * (params.Dv * lap_v + params.epsilon * (u - params.a1 * v - params.a0))
        return np.stack([np.clip(new_u, -3, 3), np.clip(new_v, -3, 3)], axis=-1)
    u2v = u * u * v
    new_u = u + params.dt * (params.Du * lap_u + params.A_feed - (params.B_feed + 1) * u + u2v)
    new_v = v + params.dt * (params.Dv * lap_v + params.B_feed * u - u2v)
    return np.stack([np.maximum(new_u, 0), np.maximum(new_v, 0)], axis=-1)


CASES = [
    ("gray-scott", GrayScottParams(dt=0.5), (0.0, 1.0)),
    ("fitzhugh-nagumo", FitzHughNagumoParams(dt=0.05, Dv=0.3), (-1.0, 1.0)),
    ("brusselator", BrusselatorParams(), (1.0, 5.0)),
]


@pytest.mark.parametrize("model, params, value_range", CASES)
@pytest.mark.parametrize("width, height", [(1, 1), (1, 5), (7, 1), (5, 4), (16, 9)])
def test_pass_matches_periodic_reference(model, params, value_range, width, height, rng):
    store = FieldStore(width, height)
    store.active()[...] = rng.uniform(*value_range, size=(height, width, 2))
    before = store.read().copy()

    Stepper(store).step(get_kinetics(model), params, count=1)

    np.testing.assert_allclose(store.read(), reference_step(before, model, params), rtol=1e-10, atol=1e-12)


@pytest.mark.parametrize("width, height", [(1, 1), (2, 3), (8, 5)])
def test_left_and_right_edges_are_neighbours(width, height):
    params = GrayScottParams(dt=1.0, F=0.0, k=0.0, Du=0.2, Dv=0.1)
    y = height - 1

    sim = Simulation(width, height)
    sim.store.active()[y, width - 1] = (0.5, 0.5)
    sim.step("gray-scott", params)
    u, v = sim.store.cell(0, y)
    assert u < 1.0 and v > 0.0

    sim = Simulation(width, height)
    sim.store.active()[y, 0] = (0.5, 0.5)
    sim.step("gray-scott", params)
    u, v = sim.store.cell(width - 1, y)
    assert u < 1.0 and v > 0.0


def test_top_and_bottom_edges_are_neighbours():
    params = GrayScottParams(dt=1.0, F=0.0, k=0.0, Du=0.2, Dv=0.1)
    sim = Simulation(6, 6)
    sim.store.active()[0, 3] = (0.5, 0.5)
    sim.step("gray-scott", params)
    assert sim.store.cell(3, 5)[1] > 0.0
    # Two rows away from the perturbation nothing moved yet
    assert sim.store.cell(3, 2) == (1.0, 0.0)


def test_each_pass_swaps_buffers(store):
    stepper = Stepper(store)
    kinetics = get_kinetics("gray-scott")
    start = store.read_index
    stepper.step(kinetics, GrayScottParams(), count=3)
    assert store.read_index == 1 - start
    stepper.step(kinetics, GrayScottParams(), count=2)
    assert store.read_index == 1 - start


def test_zero_count_is_a_no_op(store):
    store.active()[...] = 0.3
    done = Stepper(store).step(get_kinetics("gray-scott"), GrayScottParams(), count=0)
    assert done == 0
    assert store.read_index == 0
    assert np.all(store.read() == 0.3)


def test_negative_count_is_rejected(store):
    with pytest.raises(ValueError):
        Stepper(store).step(get_kinetics("gray-scott"), GrayScottParams(), count=-1)


def test_batch_can_be_abandoned_between_passes(store):
    calls = []

    def should_continue():
        calls.append(1)
        return len(calls) <= 2

    done = Stepper(store).step(get_kinetics("gray-scott"), GrayScottParams(), count=10,
                               should_continue=should_continue)
    assert done == 2
    assert store.read_index == 0


@pytest.mark.parametrize("strategy", ["random-noise", "multi-seed", "gradient"])
@pytest.mark.parametrize("model", ["gray-scott", "fitzhugh-nagumo", "brusselator"])
def test_fields_stay_bounded(model, strategy):
    sim = Simulation(40, 40, seed=7)
    sim.switch_model(model)
    sim.initialize(strategy)
    lower, upper = sim.kinetics.bounds
    for _ in range(10):
        sim.step(count=25)
        field = sim.current_field()
        assert np.all(np.isfinite(field))
        assert field.min() >= lower
        assert field.max() <= upper


def test_clamping_bounds_aggressive_gray_scott():
    sim = Simulation(24, 24, seed=3)
    sim.initialize("random-noise")
    sim.step(params={"dt": 2.0, "Du": 0.5, "Dv": 0.25, "F": 0.1, "k": 0.0}, count=100)
    field = sim.current_field()
    assert field.min() >= 0.0 and field.max() <= 1.0


def test_clamping_bounds_aggressive_fitzhugh_nagumo():
    sim = Simulation(24, 24, model="fitzhugh-nagumo", seed=3)
    sim.initialize("random-noise")
    sim.step(params={"dt": 0.5, "Du": 1.0, "Dv": 1.0, "stimulus": 0.5}, count=100)
    field = sim.current_field()
    assert field.min() >= -3.0 and field.max() <= 3.0


@pytest.mark.parametrize("model", ["gray-scott", "fitzhugh-nagumo", "brusselator"])
@pytest.mark.parametrize("strategy", ["uniform-default", "center-seed"])
def test_identical_runs_are_bit_identical(model, strategy):
    fields = []
    for _ in range(2):
        sim = Simulation(33, 21)
        sim.switch_model(model)
        sim.initialize(strategy)
        for _ in range(4):
            sim.step(count=17)
        fields.append(sim.current_field().copy())
    assert np.array_equal(fields[0], fields[1])
