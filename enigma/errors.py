class EnigmaError(ValueError):
    pass


class InvalidWiring(EnigmaError):
    """A rotor or reflector cipher string is not a permutation of the alphabet."""


class InvalidConfig(EnigmaError):
    """The machine configuration can not be used to encipher."""


class InvalidPairText(EnigmaError):
    """
    A single plug / reflector pair slot holds bad text.
    The slot index is kept so a caller can point at the offending pair.
    """

    def __init__(self, slot: int, text: str, reason: str):
        self.slot = slot
        self.text = text
        self.reason = reason
        super().__init__(f'pair {slot} ({text!r}): {reason}')
