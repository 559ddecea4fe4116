"""Environment configuration helpers."""

from glyphglow.utilities.env.config import Configuration as Configuration
from glyphglow.utilities.env.enums import SceneVariant as SceneVariant
