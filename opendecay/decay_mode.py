"""DecayMode module.

The closed set of decay modes, with the symbols used by the reference table.
"""

from enum import Enum


class DecayMode(Enum):
    """ Decay modes.

    Each member's value is the symbol the reference table uses for it.
    """

    Alpha = 'α'
    BetaMinus = 'β−'
    BetaPlus = 'β+'
    NeutronEmission = 'n'
    SpontaneousFission = 'SF'
    ElectronCapture = 'EC'
    NuclearIsomerTransition = 'IT'
    ClusterDecay = 'CD'

    @property
    def symbol(self):
        """Symbol of the mode as written in the reference table."""
        return self.value

    @property
    def description(self):
        """Short description of the mode, or None."""
        return _DESCRIPTIONS.get(self)

    @classmethod
    def from_symbol(cls, symbol):
        """ Convert a reference table mode string to a DecayMode.

        The table writes compound modes such as "β−n", so the first member
        whose symbol occurs in the string wins, in declaration order.

        Parameters
        ----------
        symbol : str, DecayMode or None
            Mode string, member name or member.

        Returns
        -------
        DecayMode or None
            Matching member, None if nothing matches.
        """

        if symbol is None or isinstance(symbol, cls):
            return symbol

        if symbol in cls.__members__:
            return cls[symbol]

        for mode in cls:
            if mode.value in symbol:
                return mode
        return None

    @classmethod
    def from_exact(cls, symbol):
        """ Convert an exact mode symbol or member name to a DecayMode.

        Unlike from_symbol, no partial matches are made.

        Parameters
        ----------
        symbol : str or DecayMode
            Mode symbol, member name or member.

        Returns
        -------
        DecayMode or None
            Matching member, None if nothing matches exactly.
        """

        if isinstance(symbol, cls):
            return symbol

        if symbol in cls.__members__:
            return cls[symbol]

        try:
            return cls(symbol)
        except ValueError:
            return None


_DESCRIPTIONS = {
    DecayMode.Alpha: 'Eject an alpha particle (He-4)',
    DecayMode.BetaMinus: 'Eject an electron and an antineutrino, turning a '
                         'neutron into a proton',
    DecayMode.BetaPlus: 'Eject a positron and a neutrino, turning a proton '
                        'into a neutron',
    DecayMode.NeutronEmission: 'Eject one or more neutrons',
    DecayMode.SpontaneousFission: 'Split into a lighter fragment and a '
                                  'heavier remainder',
    DecayMode.ElectronCapture: 'Nucleus captures an orbiting electron, '
                               'converting a proton into a neutron',
    DecayMode.ClusterDecay: 'Emit a small cluster of nucleons',
}
