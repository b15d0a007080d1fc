"""Structured error hierarchy for metis."""


class MetisError(Exception):
    """Base for all metis errors."""

    pass


class GenomeConstructionError(MetisError, ValueError):
    """A marker, chromosome or genome could not be built."""

    pass


class TransmissionNotImplementedError(MetisError, NotImplementedError):
    """Chromosome kind has no transmission rule."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Transmission for {kind} chromosomes is not implemented")


class ValidationError(MetisError):
    """Input validation at boundary failed."""

    pass


class EngineStateError(MetisError):
    """Simulation driver in invalid state for requested operation."""

    pass
