"""Scene manager: the arena that owns spheres and the light.

The SceneManager keeps host-side ``Sphere`` objects keyed by their handle,
mirrors them into the Taichi scene fields, and tracks the point light. It
offers two ways to evaluate a ray:

- on the host, with ``intersect`` and ``color_at``, using float64 math;
- on the device, after ``upload``, through the integrator kernels.

Both paths apply the same hit policy and the same Phong model, so they agree
up to float32 precision.

A sphere whose transform cannot be inverted can never be intersected or
shaded. ``add_sphere`` skips such spheres with a logged warning instead of
failing the whole scene.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raytracer.core.ray import Ray
    >>> from src.raytracer.core.tuples import color, point, vector
    >>> from src.raytracer.geometry.sphere import Sphere
    >>> from src.raytracer.materials.phong import PointLight
    >>> from src.raytracer.scene.manager import SceneManager
    >>> world = SceneManager()
    >>> handle = world.add_sphere(Sphere())
    >>> world.set_light(PointLight(point(-10, 10, -10), color(1, 1, 1)))
    >>> shaded = world.color_at(Ray(point(0, 0, -5), vector(0, 0, 1)))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from src.raytracer.core.integrator import disable_light, setup_light
from src.raytracer.core.matrix import Matrix, NotInvertibleError
from src.raytracer.core.ray import Ray
from src.raytracer.core.tuples import BLACK, Color, color, point
from src.raytracer.geometry.intersections import Intersections, hit
from src.raytracer.geometry.sphere import Sphere, intersect, normal_at
from src.raytracer.materials.phong import Material, PointLight, lighting
from src.raytracer.scene.intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_sphere_count,
)

logger = logging.getLogger(__name__)

_SPHERE_KEYS = {"transform", "material"}
_MATERIAL_KEYS = {"color", "ambient", "diffuse", "specular", "shininess"}
_LIGHT_KEYS = {"position", "intensity"}


@dataclass
class SceneConfig:
    """Plain-data form of a scene, suitable for JSON.

    Attributes:
        spheres: List of sphere configurations, each with a 4x4
            ``transform`` (nested lists) and a ``material`` dict.
        light: Light configuration with ``position`` and ``intensity``
            triples, or None for an unlit scene.
    """

    spheres: list[dict[str, Any]] = field(default_factory=list)
    light: dict[str, Any] | None = None


def _check_keys(kind: str, data: dict[str, Any], allowed: set[str]) -> None:
    unknown = set(data) - allowed
    if unknown:
        raise ValueError(f"Unknown {kind} keys: {sorted(unknown)}")


def _material_to_dict(material: Material) -> dict[str, Any]:
    return {
        "color": list(material.color.to_tuple()),
        "ambient": material.ambient,
        "diffuse": material.diffuse,
        "specular": material.specular,
        "shininess": material.shininess,
    }


def _material_from_dict(data: dict[str, Any]) -> Material:
    _check_keys("material", data, _MATERIAL_KEYS)
    defaults = Material()
    color_list = data.get("color", list(defaults.color.to_tuple()))
    return Material(
        color=color(color_list[0], color_list[1], color_list[2]),
        ambient=data.get("ambient", defaults.ambient),
        diffuse=data.get("diffuse", defaults.diffuse),
        specular=data.get("specular", defaults.specular),
        shininess=data.get("shininess", defaults.shininess),
    )


class SceneManager:
    """Owns the spheres and light of a scene.

    Spheres are stored in insertion order and looked up by handle. Every
    accepted sphere also occupies one slot in the Taichi scene fields.

    Attributes:
        light: The current point light, or None.
    """

    def __init__(self) -> None:
        """Initialize an empty, unlit scene."""
        self._spheres: dict[int, Sphere] = {}
        self.light: PointLight | None = None
        self._clear_all()

    def _clear_all(self) -> None:
        clear_scene()
        disable_light()
        self._spheres.clear()
        self.light = None

    def clear(self) -> None:
        """Remove all spheres and the light, including Taichi field state."""
        self._clear_all()

    # =========================================================================
    # Primitive Management
    # =========================================================================

    def add_sphere(self, sphere: Sphere) -> int | None:
        """Register a sphere on the host and in the Taichi fields.

        Args:
            sphere: The sphere to add. Later changes to its transform or
                material are picked up by upload().

        Returns:
            The sphere's handle, or None if its transform is not invertible
            and the sphere was skipped.

        Raises:
            RuntimeError: If the Taichi fields already hold MAX_SPHERES spheres.
            ValueError: If a sphere with the same handle is already present.
        """
        if sphere.handle in self._spheres:
            raise ValueError(f"Sphere {sphere.handle} is already in the scene")

        try:
            inverse = sphere.inverse_transform()
        except NotInvertibleError:
            logger.warning("Skipping sphere %d: transform is not invertible", sphere.handle)
            return None

        add_sphere(inverse, sphere.material, sphere.handle)
        self._spheres[sphere.handle] = sphere
        return sphere.handle

    def get_sphere(self, handle: int) -> Sphere:
        """Look up a sphere by handle.

        Raises:
            KeyError: If no sphere with that handle is in the scene.
        """
        return self._spheres[handle]

    @property
    def spheres(self) -> list[Sphere]:
        """The spheres in the scene, in insertion order."""
        return list(self._spheres.values())

    def set_light(self, light: PointLight | None) -> None:
        """Set (or remove, with None) the scene's point light."""
        self.light = light
        if light is None:
            disable_light()
        else:
            setup_light(light)

    def upload(self) -> None:
        """Rewrite the Taichi scene fields and light from the host state.

        Call this after mutating spheres that are already in the scene.
        Spheres whose transform has become non-invertible are skipped with
        a warning but stay in the host scene.
        """
        clear_scene()
        for sphere in self._spheres.values():
            try:
                inverse = sphere.inverse_transform()
            except NotInvertibleError:
                logger.warning("Skipping sphere %d: transform is not invertible", sphere.handle)
                continue
            add_sphere(inverse, sphere.material, sphere.handle)
        self.set_light(self.light)
        logger.debug("Uploaded %d spheres", get_sphere_count())

    # =========================================================================
    # Host-side Queries
    # =========================================================================

    def intersect(self, ray: Ray) -> Intersections:
        """Intersect a ray with every sphere in the scene.

        Returns:
            All intersections, including those behind the ray origin,
            sorted by increasing t.
        """
        found = []
        for sphere in self._spheres.values():
            found.extend(intersect(ray, sphere))
        return Intersections(found).sorted()

    def color_at(self, ray: Ray) -> Color:
        """Shade the nearest visible hit along a ray on the host.

        The ray direction need not be normalized; the eye vector is.

        Returns:
            The Phong color of the hit, or black if the ray misses or the
            scene has no light.
        """
        closest = hit(self.intersect(ray))
        if closest is None or self.light is None:
            return BLACK

        sphere = closest.object
        world_point = ray.position(closest.t)
        normal = normal_at(sphere, world_point)
        eye = (-ray.direction).normalize()
        return lighting(sphere.material, self.light, world_point, eye, normal)

    def get_sphere_count(self) -> int:
        """Number of spheres held on the host."""
        return len(self._spheres)

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig()

        for sphere in self._spheres.values():
            config.spheres.append(
                {
                    "transform": sphere.transform.to_list(),
                    "material": _material_to_dict(sphere.material),
                }
            )

        if self.light is not None:
            config.light = {
                "position": list(self.light.position.xyz()),
                "intensity": list(self.light.intensity.to_tuple()),
            }

        return config

    def from_config(self, config: SceneConfig) -> None:
        """Replace this scene with the contents of a SceneConfig.

        Clears the current scene and loads the configuration. Each sphere
        gets a fresh handle.

        Args:
            config: Spheres and light to rebuild.

        Raises:
            ValueError: If the configuration contains unknown keys or
                malformed matrices.
        """
        self.clear()

        for entry in config.spheres:
            _check_keys("sphere", entry, _SPHERE_KEYS)
            sphere = Sphere()
            if "transform" in entry:
                sphere.set_transform(Matrix(entry["transform"]))
            sphere.set_material(_material_from_dict(entry.get("material", {})))
            self.add_sphere(sphere)

        if config.light is not None:
            _check_keys("light", config.light, _LIGHT_KEYS)
            position = config.light.get("position", [0.0, 0.0, 0.0])
            intensity = config.light.get("intensity", [1.0, 1.0, 1.0])
            self.set_light(
                PointLight(
                    point(position[0], position[1], position[2]),
                    color(intensity[0], intensity[1], intensity[2]),
                )
            )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {"spheres": config.spheres, "light": config.light}

    def from_dict(self, data: dict[str, Any]) -> None:
        """Replace this scene with the contents of a plain dict.

        Args:
            data: Dictionary with 'spheres' and 'light' keys.

        Raises:
            ValueError: If the dictionary has keys other than those.
        """
        _check_keys("scene", data, {"spheres", "light"})
        config = SceneConfig(spheres=data.get("spheres", []), light=data.get("light"))
        self.from_config(config)

    # =========================================================================
    # Capacity Information
    # =========================================================================

    @staticmethod
    def get_max_spheres() -> int:
        """Capacity of the Taichi sphere fields."""
        return MAX_SPHERES
