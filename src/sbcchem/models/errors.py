"""Error raised when a caller breaks the engine's input contract."""


class InvalidInput(ValueError):
    """A squad, slot or position code that cannot be evaluated.

    Missing optional data never raises; this is reserved for caller bugs such
    as a squad without exactly eleven slots or an unknown position code.
    """
