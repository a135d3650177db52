"""
OpenDecay
=========

A stochastic radioactive decay simulation engine.
"""

from .errors import *
from .decay_mode import *
from .reference_table import *
from .resolver import *
from .nuclide import *
from .settings import *
from .population import *
from .results import *
from .simulation import *
from .utilities import *
