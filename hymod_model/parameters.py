from dataclasses import dataclass

@dataclass(frozen=True)
class Parameters:
    # Capacidad/forma del almacenamiento de suelo
    max_storage: float = 100.0  # mm, capacidad máxima
    a: float = 0.5              # no-dim, fracción hacia flujo rápido
    b: float = 1.0              # no-dim, exponente del exceso por saturación

    # Coeficientes de los reservorios lineales (por unidad de tiempo)
    Ks: float = 0.01            # reservorio lento (agua subterránea)
    Kq: float = 0.1             # cascada rápida

    # Cascada de Nash
    n: int = 3                  # número de reservorios en cascada

    def __post_init__(self):
        if int(self.n) != self.n or self.n < 0:
            raise ValueError(f"n debe ser un entero no negativo (recibido {self.n!r}).")
        object.__setattr__(self, "n", int(self.n))
