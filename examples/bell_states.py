#!/usr/bin/env python3
"""Bell states and a CNOT gate written in Dirac notation.

Builds the four Bell states, checks they are orthonormal, and shows that a
CNOT written as a sum of Kronecker products maps ``|+0>`` onto the
``(|00> + |11>) / sqrt(2)`` Bell state.

Usage::

    python examples/bell_states.py
"""

from __future__ import annotations

import numpy as np

from qdirac import Tensor, dirac

BELL = {
    "phi+": "(|00> + |11>) / 1.4142135623730951",
    "phi-": "(|00> - |11>) / 1.4142135623730951",
    "psi+": "(|01> + |10>) / 1.4142135623730951",
    "psi-": "(|01> - |10>) / 1.4142135623730951",
}

CNOT = "|0><0| x (|0><0| + |1><1|) + |1><1| x (|0><1| + |1><0|)"


def gram_matrix(states: dict[str, Tensor]) -> np.ndarray:
    """Overlaps <a|b> between every pair of states."""
    names = list(states)
    gram = np.zeros((len(names), len(names)), dtype=complex)
    for i, a in enumerate(names):
        for j, b in enumerate(names):
            gram[i, j] = (states[a].dag() * states[b]).item()
    return gram


def main():
    states = {name: dirac(source) for name, source in BELL.items()}

    print("Bell state overlaps:")
    print(np.round(gram_matrix(states).real, 12))

    cnot = dirac(CNOT)
    out = cnot * dirac("|+> x |0>")
    error = (out - states["phi+"]).norm()
    print(f"\nCNOT |+0>:\n{out}")
    print(f"distance to phi+: {error:.2e}")


if __name__ == "__main__":
    main()
