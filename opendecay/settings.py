"""Settings module.

Contains the parameters of a simulation.
"""

import os


class Settings(object):
    """ The Settings class.

    Attributes
    ----------
    data_file : str
        Path to the reference table .json file.  Defaults to the environment
        variable "OPENDECAY_DATA" if it exists.
    tick_increment : float
        Simulated seconds per tick.
    tick_interval : float
        Real seconds between ticks, for whatever schedules them.
    seed : int
        Seed of the random source.  None draws fresh entropy.
    remove_undecayable : bool
        Whether starting a simulation removes nuclides that are not stable
        and cannot decay.
    print_out : bool
        Whether or not to print out progress.
    """

    def __init__(self):
        try:
            self.data_file = os.environ["OPENDECAY_DATA"]
        except KeyError:
            self.data_file = None

        self.tick_increment = 1
        self.tick_interval = 1.0
        self.seed = None
        self.remove_undecayable = False
        self.print_out = False
