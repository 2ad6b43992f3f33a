from dataclasses import dataclass, field

import numpy as np


@dataclass
class State:
    storage: float = 0.0              # mm - humedad del suelo
    groundwater_storage: float = 0.0  # mm - reservorio lento
    Sr: np.ndarray = field(default_factory=lambda: np.zeros(0))  # mm - cascada rápida

    def __post_init__(self):
        self.Sr = np.asarray(self.Sr, dtype=float)

    @classmethod
    def zeros(cls, n):
        """Empty state with an ``Sr`` buffer sized for ``n`` reservoirs."""
        return cls(Sr=np.zeros(int(n)))

    def copy(self):
        return State(self.storage, self.groundwater_storage, self.Sr.copy())

    def total_storage(self):
        return float(self.storage + self.groundwater_storage + np.sum(self.Sr))


@dataclass
class Fluxes:
    slow_flow: float = 0.0  # mm/dt - salida del reservorio lento
    runoff: float = 0.0     # mm/dt - salida de la cascada
    et_loss: float = 0.0    # mm/dt - evapotranspiración

    def total(self):
        return self.slow_flow + self.runoff + self.et_loss
