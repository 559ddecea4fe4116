from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from glyphglow.shading.color import Color
from glyphglow.shading.programs import (FLAT_FRAG_SHADER, FLAT_VERT_SHADER,
                                        GLOW_VERT_SHADER, GRADIENT_FRAG_SHADER,
                                        GRADIENT_VERT_SHADER, LIT_VERT_SHADER,
                                        PHONG_HALF_VECTOR_FRAG_TEMPLATE,
                                        PHONG_REFLECT_FRAG_TEMPLATE,
                                        RIM_GLOW_FRAG_TEMPLATE, glsl_float)

UniformValue = float | tuple[float, float, float]

TIME_UNIFORM = "time"
LIGHT_POSITION_UNIFORM = "lightPosition"
COLOR_UNIFORM = "color"
AMBIENT_INTENSITY_UNIFORM = "ambientIntensity"

AMBIENT_INTENSITY = 0.224
REFLECT_SHININESS = 32.0
REFLECT_SPECULAR_STRENGTH = 0.5
HALF_VECTOR_SHININESS = 64.0
GLOW_BRIGHTNESS = 1.5
ORIGIN = (0.0, 0.0, 0.0)


class ShadingModel(StrEnum):
    FLAT = "flat"
    GRADIENT = "gradient"
    PHONG_REFLECT = "phong_reflect"
    PHONG_HALF_VECTOR = "phong_half_vector"
    RIM_GLOW = "rim_glow"


@dataclass(frozen=True)
class GlowProfile:
    """Alpha oscillation and rim falloff for the glow material."""

    base_alpha: float
    alpha_amplitude: float
    falloff_power: float

    def alpha_range(self) -> tuple[float, float]:
        return (
            self.base_alpha - self.alpha_amplitude,
            self.base_alpha + self.alpha_amplitude,
        )


INTENSE_GLOW = GlowProfile(base_alpha=0.7, alpha_amplitude=0.3, falloff_power=4.0)
SUBTLE_GLOW = GlowProfile(base_alpha=0.9, alpha_amplitude=0.1, falloff_power=2.0)


@dataclass
class Material:
    """A compiled-on-demand shader program and the uniforms it reads.

    Shading constants live in the shader source; ``uniforms`` holds every
    value the renderer uploads before drawing, so it is complete at
    construction time.
    """

    name: str
    model: ShadingModel
    vertex_shader: str
    fragment_shader: str
    uniforms: dict[str, UniformValue] = field(default_factory=dict)
    transparent: bool = False

    def has_uniform(self, name: str) -> bool:
        return name in self.uniforms

    def set_uniform(self, name: str, value: UniformValue) -> None:
        if name not in self.uniforms:
            raise KeyError(f"Material {self.name!r} has no uniform {name!r}")
        self.uniforms[name] = value


def flat_material(name: str, color: Color) -> Material:
    return Material(
        name=name,
        model=ShadingModel.FLAT,
        vertex_shader=FLAT_VERT_SHADER,
        fragment_shader=FLAT_FRAG_SHADER,
        uniforms={COLOR_UNIFORM: color.normalized()},
    )


def gradient_material(name: str) -> Material:
    return Material(
        name=name,
        model=ShadingModel.GRADIENT,
        vertex_shader=GRADIENT_VERT_SHADER,
        fragment_shader=GRADIENT_FRAG_SHADER,
    )


def phong_reflect_material(
    name: str,
    color: Color,
    *,
    ambient_intensity: float = AMBIENT_INTENSITY,
    shininess: float = REFLECT_SHININESS,
    specular_strength: float = REFLECT_SPECULAR_STRENGTH,
) -> Material:
    """Phong lighting with a white highlight from the reflected light ray."""
    fragment = PHONG_REFLECT_FRAG_TEMPLATE.substitute(
        shininess=glsl_float(shininess),
        specular_strength=glsl_float(specular_strength),
    )
    return Material(
        name=name,
        model=ShadingModel.PHONG_REFLECT,
        vertex_shader=LIT_VERT_SHADER,
        fragment_shader=fragment,
        uniforms=_lit_uniforms(color, ambient_intensity),
    )


def phong_half_vector_material(
    name: str,
    color: Color,
    *,
    ambient_intensity: float = AMBIENT_INTENSITY,
    shininess: float = HALF_VECTOR_SHININESS,
) -> Material:
    """Blinn-Phong lighting with a highlight tinted by the base color."""
    fragment = PHONG_HALF_VECTOR_FRAG_TEMPLATE.substitute(
        shininess=glsl_float(shininess),
    )
    return Material(
        name=name,
        model=ShadingModel.PHONG_HALF_VECTOR,
        vertex_shader=LIT_VERT_SHADER,
        fragment_shader=fragment,
        uniforms=_lit_uniforms(color, ambient_intensity),
    )


def rim_glow_material(name: str, profile: GlowProfile = INTENSE_GLOW) -> Material:
    fragment = RIM_GLOW_FRAG_TEMPLATE.substitute(
        falloff_power=glsl_float(profile.falloff_power),
        glow_brightness=glsl_float(GLOW_BRIGHTNESS),
        base_alpha=glsl_float(profile.base_alpha),
        alpha_amplitude=glsl_float(profile.alpha_amplitude),
    )
    return Material(
        name=name,
        model=ShadingModel.RIM_GLOW,
        vertex_shader=GLOW_VERT_SHADER,
        fragment_shader=fragment,
        uniforms={TIME_UNIFORM: 0.0},
        transparent=True,
    )


def _lit_uniforms(color: Color, ambient_intensity: float) -> dict[str, UniformValue]:
    return {
        COLOR_UNIFORM: color.normalized(),
        LIGHT_POSITION_UNIFORM: ORIGIN,
        AMBIENT_INTENSITY_UNIFORM: float(ambient_intensity),
    }
