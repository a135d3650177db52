"""Errors module.

Exceptions raised by the resolver and carried in failed decay outcomes.
"""


class DecayError(Exception):
    """Base class for every decay engine error."""


class ParseError(DecayError, ValueError):
    """An isotope or element string could not be understood."""


class UnsupportedModeError(DecayError):
    """A forced decay was requested with a mode that cannot be forced."""


class InvalidNucleonCountError(DecayError):
    """A transform would leave fewer than one proton or negative neutrons."""


class MissingClusterArgsError(DecayError):
    """Cluster decay needs both a proton and a neutron count."""


class NoSuitableFissionFragmentError(DecayError):
    """No fission fragment leaves a valid remainder nuclide."""


class NoDaughterFoundError(DecayError):
    """Natural decay could not select any daughter."""
