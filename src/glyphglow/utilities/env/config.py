from glyphglow.utilities.env.assets import AssetsConfiguration
from glyphglow.utilities.env.rendering import RenderingConfiguration


class Configuration(RenderingConfiguration, AssetsConfiguration):
    """Aggregate environment configuration helpers."""
