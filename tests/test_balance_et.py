import sys
from pathlib import Path

import numpy as np
import pandas as pd

# Ensure local package is importable
sys.path.append(str(Path(__file__).resolve().parents[1]))

from hymod_model.model import run
from hymod_model.parameters import Parameters
from hymod_model.states import State, Fluxes
from hymod_model.balance import HymodStatus, mass_check, mass_budget
from hymod_model.et import calc_et

PARAMS = Parameters(max_storage=100.0, a=0.5, b=2.0, Ks=0.01, Kq=0.1, n=2)


def reference_state():
    return State(storage=50.0, groundwater_storage=10.0, Sr=[1.0, 1.0])


def test_default_et_is_zero():
    assert calc_et(54.2025, None) == 0.0
    assert calc_et(0.0, {"pet": 5.0}) == 0.0


def test_kernel_calls_et_collaborator():
    calls = []

    def et_fn(soil_m, et_params):
        calls.append((soil_m, et_params))
        return et_params["pet"]

    new_state, fluxes, status = run(86400.0, PARAMS, reference_state(), 5.0,
                                    et_params={"pet": 3.0}, et_fn=et_fn)

    assert len(calls) == 1
    assert np.isclose(calls[0][0], 54.2025)
    assert fluxes.et_loss == 3.0
    assert np.isclose(new_state.storage, 54.2025 - 3.0)
    assert status == HymodStatus.NO_ERROR


def test_mass_check_flags_deficit():
    old = reference_state()
    new = State(storage=50.0, groundwater_storage=10.0, Sr=[1.0, 1.0])

    assert mass_check(PARAMS, old, 5.0, new, Fluxes(runoff=5.0)) == HymodStatus.NO_ERROR
    assert mass_check(PARAMS, old, 5.0, new, Fluxes(runoff=4.999)) == HymodStatus.MASS_BALANCE_ERROR
    # Dentro de la tolerancia
    assert mass_check(PARAMS, old, 5.0, new, Fluxes(runoff=5.0 - 5e-7)) == HymodStatus.NO_ERROR


def test_mass_check_is_one_sided():
    # Characterization: extra water at the end of a step is not reported.
    old = reference_state()
    new = State(storage=500.0, groundwater_storage=10.0, Sr=[1.0, 1.0])

    status = mass_check(PARAMS, old, 5.0, new, Fluxes(runoff=5.0))

    assert status == HymodStatus.NO_ERROR


def test_mass_check_custom_tolerance():
    old = reference_state()
    new = State(storage=50.0, groundwater_storage=10.0, Sr=[1.0, 1.0])
    fluxes = Fluxes(runoff=4.99)

    assert mass_check(PARAMS, old, 5.0, new, fluxes) == HymodStatus.MASS_BALANCE_ERROR
    assert mass_check(PARAMS, old, 5.0, new, fluxes, tolerance=0.1) == HymodStatus.NO_ERROR


def test_status_codes_match_integers():
    assert HymodStatus.NO_ERROR == 0
    assert HymodStatus.MASS_BALANCE_ERROR == 100


def test_mass_budget_terms():
    state = reference_state()
    new_state, fluxes, _ = run(86400.0, PARAMS, state, 5.0)

    budget = mass_budget(PARAMS, state, 5.0, new_state, fluxes)

    assert isinstance(budget, pd.Series)
    assert np.isclose(budget["initial_storage"], 62.0)
    assert np.isclose(budget["initial_mass"], 67.0)
    assert np.isclose(budget["final_mass"], 67.0)
    assert np.isclose(budget["runoff"], 0.1139875)
    assert abs(budget["residual"]) <= 1e-9
