from __future__ import annotations

"""Error kinds raised while building and writing fabrication files."""


class ConfigurationError(ValueError):
    pass


class GeometryError(ValueError):
    pass


class CoordinateOverflowError(OverflowError):
    pass


class GlyphLookupError(LookupError):
    pass


class LayerWriteError(RuntimeError):
    """Raised when a layer fails to serialize.

    The original error is chained as ``__cause__``; ``index`` is the position
    of the failing primitive in the layer, or None when the failure is not
    tied to a single primitive.
    """

    def __init__(self, role, index: int | None, cause: Exception) -> None:
        self.role = role
        self.index = index
        where = f" at primitive {index}" if index is not None else ""
        super().__init__(f"Failed to write layer {role}{where}: {cause}")
