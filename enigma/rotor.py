import dataclasses

import numpy as np

from enigma import alphabet
from enigma.mapper import Direction, Mapper, inverse_permutation


def turnover_flags(turnovers: str) -> np.ndarray:
    flags = np.zeros(alphabet.N_LETTERS, dtype=bool)
    for letter in turnovers:
        flags[alphabet.char_to_index(letter)] = True
    return flags


def notch_flags(turnover: np.ndarray) -> np.ndarray:
    # the notch point sits one letter before the turnover point
    return np.roll(turnover, -1)


@dataclasses.dataclass(frozen=True)
class RotorSpec:
    """
    Static reference data of one wheel type, shared by all rotors of that type.
    """
    id: str
    cipher: str
    date: str = ''
    name: str = ''
    turnovers: str = ''
    wiring: Mapper = dataclasses.field(init=False, repr=False, compare=False)
    turnover_points: frozenset = dataclasses.field(init=False, repr=False, compare=False)
    notch_points: frozenset = dataclasses.field(init=False, repr=False, compare=False)

    def __post_init__(self):
        turnover = turnover_flags(self.turnovers)
        object.__setattr__(self, 'wiring', Mapper.from_cipher_string(self.id, self.cipher))
        object.__setattr__(self, 'turnover_points', frozenset(np.flatnonzero(turnover).tolist()))
        object.__setattr__(self, 'notch_points', frozenset(np.flatnonzero(notch_flags(turnover)).tolist()))

    def is_reflector(self) -> bool:
        return self.wiring.is_reflector_shaped()

    def is_turnover_point(self, position: int) -> bool:
        return position in self.turnover_points

    def is_notch_point(self, position: int) -> bool:
        return position in self.notch_points


class Rotor:
    def __init__(self, spec: RotorSpec, ring_setting: int = 0, offset: int = 0):
        self.spec = spec
        self.ring_setting = 0
        self.offset = 0
        self._right_map = None
        self._left_map = None

        self.set_ring_setting(ring_setting)
        self.set_offset(offset)

    @property
    def id(self) -> str:
        return self.spec.id

    def set_ring_setting(self, ring_setting: int):
        """
        Rotate the internal wiring against the alphabet ring.
        Both lookup tables are rebuilt, the offset is left alone.
        """
        self.ring_setting = ring_setting % alphabet.N_LETTERS
        positions = np.arange(alphabet.N_LETTERS)
        wiring = np.array(self.spec.wiring.forward)

        right_map = np.empty(alphabet.N_LETTERS, dtype=int)
        right_map[(positions + self.ring_setting) % alphabet.N_LETTERS] = (
                (wiring + self.ring_setting) % alphabet.N_LETTERS)
        self._right_map = right_map
        self._left_map = inverse_permutation(right_map)

    def set_offset(self, offset: int):
        self.offset = offset % alphabet.N_LETTERS

    def swap(self, direction: Direction, index: int) -> int:
        shifted = (index + self.offset) % alphabet.N_LETTERS
        if direction is Direction.FORWARD:
            looked_up = self._right_map[shifted]
        else:
            looked_up = self._left_map[shifted]
        return int((looked_up - self.offset + alphabet.N_LETTERS) % alphabet.N_LETTERS)

    def is_turnover_point(self, position: int) -> bool:
        return self.spec.is_turnover_point(position)

    def is_notch_point(self, position: int) -> bool:
        return self.spec.is_notch_point(position)

    def __repr__(self):
        return (f'<Rotor {self.id} ring={alphabet.index_to_letter(self.ring_setting)} '
                f'offset={alphabet.index_to_letter(self.offset)}>')
