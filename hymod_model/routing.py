import numpy as np


def linear_response(storage, inflow, dt, k, max_storage, time_unit=86400.0):
    """Advance one linear reservoir by one step.

    The inflow is added first, then ``k * S * dt / time_unit`` is released
    together with any storage above ``max_storage``. The release is clipped to
    ``[0, S]``.

    Returns
    -------
    (new_storage, outflow)
        ``new_storage == storage + inflow - outflow``.
    """
    s = storage + inflow
    out = k * s * (dt / time_unit)
    # Exceso sobre capacidad
    out += max(0.0, (s - out) - max_storage)
    out = min(max(out, 0.0), max(s, 0.0))
    return s - out, out


class LinearReservoir:
    def __init__(self, storage=0.0, max_storage=1.0, k=1.0, time_unit=86400.0):
        self.storage = float(storage)
        self.max_storage = float(max_storage)
        self.k = float(k)
        self.time_unit = float(time_unit)

    def response(self, inflow, dt):
        self.storage, out = linear_response(
            self.storage, inflow, dt, self.k, self.max_storage, self.time_unit
        )
        return out

    def get_storage(self):
        return self.storage


class NashCascade:
    """Chain of linear reservoirs in series.

    Stage storages live in a single float array indexed by stage number; the
    output of stage ``i`` is the input of stage ``i + 1``. With no stages the
    inflow passes through unchanged.
    """

    def __init__(self, storages, max_storage=1.0, k=1.0, time_unit=86400.0):
        self.storages = np.array(storages, dtype=float).reshape(-1)
        self.max_storage = float(max_storage)
        self.k = float(k)
        self.time_unit = float(time_unit)

    def __len__(self):
        return len(self.storages)

    def reset(self, storages):
        """Reload stage storages in place, keeping the same buffer."""
        storages = np.asarray(storages, dtype=float).reshape(-1)
        if len(storages) != len(self.storages):
            raise ValueError(
                f"Se esperaban {len(self.storages)} almacenamientos, recibidos {len(storages)}."
            )
        self.storages[:] = storages

    def response(self, inflow, dt):
        x = inflow
        for i in range(len(self.storages)):
            self.storages[i], x = linear_response(
                self.storages[i], x, dt, self.k, self.max_storage, self.time_unit
            )
        return x

    def get_storage(self, i):
        return float(self.storages[i])

    def get_storages(self):
        return self.storages.copy()
