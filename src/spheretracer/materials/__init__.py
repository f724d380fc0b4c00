"""Materials module: surface textures.

Material coefficients (emittance, reflectance, transmittance,
diffuseness) live on the scene objects themselves; this package holds the
textures that supply their surface color.
"""

from .texture import SolidColor, Texture, solid_color, texture_from_dict

__all__ = [
    "Texture",
    "SolidColor",
    "solid_color",
    "texture_from_dict",
]
