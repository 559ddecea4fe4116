from enum import StrEnum


class SceneVariant(StrEnum):
    LIT = "lit"
    LIT_SUBTLE = "lit_subtle"
    FLAT = "flat"
    GRADIENT = "gradient"
