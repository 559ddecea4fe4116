from glyphglow.shading.color import Color  # noqa: F401
from glyphglow.shading.materials import (INTENSE_GLOW, SUBTLE_GLOW,  # noqa: F401
                                         GlowProfile, Material, ShadingModel,
                                         flat_material, gradient_material,
                                         phong_half_vector_material,
                                         phong_reflect_material,
                                         rim_glow_material)
