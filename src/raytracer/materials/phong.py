"""Phong illumination: materials, point lights and the lighting function.

The Phong model approximates the light leaving a surface point as the sum of
three terms:

    ambient  = effective_color * ambient
    diffuse  = effective_color * diffuse * (light . normal)
    specular = intensity * specular * (reflect . eye) ** shininess

where ``effective_color`` is the Hadamard product of the surface color and
the light intensity. Diffuse and specular are black when the light is behind
the surface; specular is also black when the reflection points away from the
eye. Results are not clamped here; values above 1.0 survive until an image
is serialized.

The host ``lighting`` function works on Tuple/Color values, and
``phong_lighting`` is the Taichi twin used by the render kernel.

Example:
    >>> from src.raytracer.core.tuples import color, point, vector
    >>> from src.raytracer.materials.phong import Material, PointLight, lighting
    >>> light = PointLight(point(0, 0, -10), color(1, 1, 1))
    >>> result = lighting(Material(), light, point(0, 0, 0), vector(0, 0, -1), vector(0, 0, -1))
    >>> result == color(1.9, 1.9, 1.9)
    True
"""

from dataclasses import dataclass, field

import taichi as ti
import taichi.math as tm

from src.raytracer.core import device
from src.raytracer.core.ray import reflect
from src.raytracer.core.tuples import BLACK, WHITE, Color, Tuple

# Type alias for 3D vectors
vec3 = tm.vec3


@dataclass(frozen=True)
class Material:
    """Surface properties for the Phong model.

    Attributes:
        color: The surface color.
        ambient: Fraction of ambient light reflected.
        diffuse: Fraction of diffuse light reflected.
        specular: Strength of the specular highlight.
        shininess: Specular exponent; larger values give smaller highlights.
    """

    color: Color = field(default_factory=lambda: WHITE)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0


@dataclass(frozen=True)
class PointLight:
    """An idealized light source with no size.

    Attributes:
        position: Where the light sits in world space (a point).
        intensity: The color and brightness of the light.
    """

    position: Tuple
    intensity: Color


def lighting(
    material: Material,
    light: PointLight,
    point: Tuple,
    eye: Tuple,
    normal: Tuple,
) -> Color:
    """Shade a surface point with the Phong model.

    Args:
        material: The surface material.
        light: The light illuminating the point.
        point: The world-space point being shaded.
        eye: Unit vector from the point toward the eye.
        normal: Unit surface normal at the point.

    Returns:
        The sum of the ambient, diffuse and specular contributions.
    """
    effective_color = material.color * light.intensity
    light_vector = (light.position - point).normalize()
    ambient = effective_color * material.ambient

    # Cosine of the angle between the light and the normal; negative means
    # the light is on the other side of the surface
    light_dot_normal = light_vector.dot(normal)
    if light_dot_normal < 0.0:
        return ambient

    diffuse = effective_color * material.diffuse * light_dot_normal

    reflect_vector = reflect(-light_vector, normal)
    reflect_dot_eye = reflect_vector.dot(eye)
    if reflect_dot_eye <= 0.0:
        specular = BLACK
    else:
        factor = reflect_dot_eye**material.shininess
        specular = light.intensity * material.specular * factor

    return ambient + diffuse + specular


# =============================================================================
# Device-side shading
# =============================================================================


@ti.dataclass
class PhongMaterial:
    """Phong material properties inside Taichi kernels.

    Attributes:
        color: The surface color (RGB).
        ambient: Ambient reflection coefficient.
        diffuse: Diffuse reflection coefficient.
        specular: Specular reflection coefficient.
        shininess: Specular exponent.
    """

    color: vec3
    ambient: ti.f32
    diffuse: ti.f32
    specular: ti.f32
    shininess: ti.f32


@ti.func
def phong_lighting(
    material: PhongMaterial,
    light_position: vec3,
    light_intensity: vec3,
    point: vec3,
    eye: vec3,
    normal: vec3,
) -> vec3:
    """Shade a surface point with the Phong model inside a kernel.

    Args:
        material: The surface material.
        light_position: World-space position of the point light.
        light_intensity: Light color (RGB).
        point: The world-space point being shaded.
        eye: Unit vector from the point toward the eye.
        normal: Unit surface normal at the point.

    Returns:
        The shaded color (RGB), unclamped.
    """
    effective_color = material.color * light_intensity
    light_vector = tm.normalize(light_position - point)
    ambient = effective_color * material.ambient

    diffuse = vec3(0.0, 0.0, 0.0)
    specular = vec3(0.0, 0.0, 0.0)

    light_dot_normal = tm.dot(light_vector, normal)
    if light_dot_normal >= 0.0:
        diffuse = effective_color * material.diffuse * light_dot_normal
        reflect_vector = device.reflect(-light_vector, normal)
        reflect_dot_eye = tm.dot(reflect_vector, eye)
        if reflect_dot_eye > 0.0:
            factor = tm.pow(reflect_dot_eye, material.shininess)
            specular = light_intensity * material.specular * factor

    return ambient + diffuse + specular

