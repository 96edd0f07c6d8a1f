"""JAX backend selection for the command-line driver.

``configure_backend`` must run before the first tensor is created: JAX
picks its platform when the backend is first initialised.
"""

from __future__ import annotations

import jax

_BACKEND_MAP = {
    "cpu": "cpu",
    "cuda": "cuda",
    "gpu": "cuda",
    "tpu": "tpu",
}


def configure_backend(backend: str) -> None:
    """Select the JAX platform and make sure 64-bit mode is on."""
    backend = backend.lower()
    # Tensors are complex128 throughout.
    jax.config.update("jax_enable_x64", True)
    if backend == "auto":
        return
    if backend not in _BACKEND_MAP:
        raise ValueError(
            f"Unknown backend {backend!r}. "
            f"Choose from: {', '.join(sorted(_BACKEND_MAP))} or 'auto'."
        )
    jax.config.update("jax_platforms", _BACKEND_MAP[backend])


def get_backend_info() -> dict:
    """Return runtime backend info."""
    devices = jax.devices()
    return {
        "backend": devices[0].platform if devices else "unknown",
        "device_kind": getattr(devices[0], "device_kind", "unknown") if devices else "unknown",
        "device_count": len(devices),
        "x64_enabled": bool(jax.config.jax_enable_x64),
    }
