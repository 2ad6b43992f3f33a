import logging
from dataclasses import dataclass

import numpy as np

from .balance import MASS_TOLERANCE, HymodStatus, mass_budget, mass_check
from .et import calc_et
from .parameters import Parameters
from .routing import LinearReservoir, NashCascade
from .states import Fluxes, State

logger = logging.getLogger(__name__)


@dataclass
class KernelConfig:
    time_unit: float = 86400.0        # s, unidad de tiempo de Ks y Kq (1 día)
    mass_tolerance: float = MASS_TOLERANCE
    validate_inputs: bool = True
    debug_balance: bool = False

    def __post_init__(self):
        if self.time_unit <= 0:
            raise ValueError("time_unit debe ser > 0.")
        if self.mass_tolerance < 0:
            raise ValueError("mass_tolerance no puede ser negativa.")


def _check_inputs(params: Parameters, state: State, out):
    if params.max_storage <= 0:
        raise ValueError(f"max_storage debe ser > 0 (recibido {params.max_storage}).")
    if not 0.0 <= params.a <= 1.0:
        raise ValueError(f"a debe estar en [0, 1] (recibido {params.a}).")
    if len(state.Sr) != params.n:
        raise ValueError(
            f"state.Sr tiene {len(state.Sr)} reservorios y params.n = {params.n}."
        )
    if out is not None:
        if len(out.Sr) != params.n:
            raise ValueError(
                f"El estado de salida tiene {len(out.Sr)} reservorios y params.n = {params.n}."
            )
        if np.shares_memory(out.Sr, state.Sr):
            raise ValueError("El estado de salida no puede compartir el buffer Sr con el de entrada.")


def run(dt, params: Parameters, state: State, input_flux, et_params=None,
        out: State = None, et_fn=calc_et, config: KernelConfig = None):
    """Run one HYMOD time step.

    ``state`` is left untouched. When ``out`` is given its ``Sr`` buffer is
    filled in place and ``out`` is returned as the new state.

    Returns
    -------
    (new_state, fluxes, status)
        ``status`` is a :class:`HymodStatus`; a failed mass check never raises.
    """
    c = config if config is not None else KernelConfig()
    if c.validate_inputs:
        _check_inputs(params, state, out)

    cascade = NashCascade(state.Sr[:params.n], params.max_storage, params.Kq, c.time_unit)
    groundwater = LinearReservoir(state.groundwater_storage, params.max_storage,
                                  params.Ks, c.time_unit)

    storage = state.storage + input_flux

    # Exceso por saturación; sin tope en max_storage
    with np.errstate(divide="ignore", invalid="ignore"):
        fs = float(1.0 - np.power(1.0 - np.float64(storage) / params.max_storage, params.b))
    if np.isnan(fs):
        logger.warning("Fracción de saturación NaN (storage=%s, max_storage=%s, b=%s).",
                       storage, params.max_storage, params.b)
    runoff = fs * params.a
    slow = fs * (1.0 - params.a)
    soil_m = storage - fs

    et = et_fn(soil_m, et_params)

    slow_flow = groundwater.response(slow, dt)
    runoff = cascade.response(runoff, dt)

    fluxes = Fluxes(slow_flow=float(slow_flow), runoff=float(runoff), et_loss=float(et))

    new_state = out if out is not None else State.zeros(len(cascade))
    new_state.storage = soil_m - et
    new_state.groundwater_storage = groundwater.get_storage()
    new_state.Sr[:] = cascade.storages

    status = mass_check(params, state, input_flux, new_state, fluxes, tolerance=c.mass_tolerance)

    if status != HymodStatus.NO_ERROR or c.debug_balance:
        budget = mass_budget(params, state, input_flux, new_state, fluxes)
        if status != HymodStatus.NO_ERROR:
            logger.warning("Error de balance de masa: residuo %.3e mm (tolerancia %.1e).",
                           budget["residual"], c.mass_tolerance)
        if c.debug_balance:
            logger.debug("Balance del paso:\n%s", budget.to_string())

    return new_state, fluxes, status


def hymod(dt, params: Parameters, state: State, new_state: State, fluxes: Fluxes,
          input_flux, et_params=None) -> int:
    """Flat entry point: fills ``new_state`` and ``fluxes``, returns 0 or 100."""
    _, computed, status = run(dt, params, state, input_flux, et_params, out=new_state)
    fluxes.slow_flow = computed.slow_flow
    fluxes.runoff = computed.runoff
    fluxes.et_loss = computed.et_loss
    return int(status)
