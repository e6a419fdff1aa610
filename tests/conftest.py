"""Shared pytest fixtures.

Taichi can only be initialized once per process, so the session fixture
does it up front; the per-test fixture resets the module-level fields.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def taichi_cpu():
    """Start Taichi on the CPU backend for the whole run."""
    ti.init(arch=ti.cpu)
    yield


@pytest.fixture(autouse=True)
def reset_device_state():
    """Empty the sphere fields, switch off the light and blank the buffer."""
    # Deferred so the fields are created after ti.init()
    from src.raytracer.core.integrator import clear_render_target, disable_light
    from src.raytracer.scene.intersection import clear_scene

    def _reset():
        clear_scene()
        disable_light()
        clear_render_target()

    _reset()
    yield
    _reset()
