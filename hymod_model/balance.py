"""Chequeo de balance de masa de un paso de HYMOD."""
from enum import IntEnum

import numpy as np
import pandas as pd

MASS_TOLERANCE = 1e-6


class HymodStatus(IntEnum):
    NO_ERROR = 0
    MASS_BALANCE_ERROR = 100


def _stored(state, n):
    return state.storage + state.groundwater_storage + float(np.sum(state.Sr[:n]))


def mass_check(params, old_state, input_flux, new_state, fluxes, tolerance=MASS_TOLERANCE):
    """Compare the water held before and after a step.

    Only a deficit larger than ``tolerance`` is flagged: a step that ends with
    more water than it started with passes, and so does a NaN residual.

    Returns
    -------
    HymodStatus
    """
    initial_mass = _stored(old_state, params.n) + input_flux
    final_mass = _stored(new_state, params.n) + (
        fluxes.et_loss + fluxes.runoff + fluxes.slow_flow
    )
    if initial_mass - final_mass > tolerance:
        return HymodStatus.MASS_BALANCE_ERROR
    return HymodStatus.NO_ERROR


def mass_budget(params, old_state, input_flux, new_state, fluxes):
    """Desglose del balance de un paso (mm) como ``pandas.Series``."""
    initial_storage = _stored(old_state, params.n)
    final_storage = _stored(new_state, params.n)
    initial_mass = initial_storage + input_flux
    final_mass = final_storage + fluxes.et_loss + fluxes.runoff + fluxes.slow_flow
    return pd.Series({
        "initial_storage": initial_storage,
        "input_flux": input_flux,
        "final_storage": final_storage,
        "et_loss": fluxes.et_loss,
        "runoff": fluxes.runoff,
        "slow_flow": fluxes.slow_flow,
        "initial_mass": initial_mass,
        "final_mass": final_mass,
        "residual": initial_mass - final_mass,
    }, dtype=float)
