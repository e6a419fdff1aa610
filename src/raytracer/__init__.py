"""Phong ray tracer built on Taichi.

This package renders scenes of transformed unit spheres lit by a single
point light, shading the nearest visible hit of each camera ray with the
Phong reflection model.

Subpackages:
    core: Tuple and matrix algebra, transforms, rays, the render integrator
    geometry: Sphere primitive, intersection records and the hit policy
    materials: Phong materials, point lights and the lighting function
    scene: Sphere storage in Taichi fields and the scene manager
    camera: Wall camera with per-pixel ray generation
    preview: Canvas, PPM serialization and PNG export

The host-side modules (core.tuples, core.matrix, core.transforms, core.ray,
geometry, materials) need no ti.init() before use on the host, although
geometry and materials import taichi to define their device functions.
Modules that allocate Taichi fields (scene, camera, core.integrator,
core.renderer) must be imported after ti.init().
"""

__version__ = "0.1.0"
