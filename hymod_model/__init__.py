from .model import run, hymod, KernelConfig
from .parameters import Parameters
from .states import State, Fluxes
from .routing import linear_response, LinearReservoir, NashCascade
from .balance import HymodStatus, mass_check, mass_budget
from .et import calc_et
