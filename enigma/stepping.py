import enum

from enigma import alphabet


class Slot(enum.IntEnum):
    NONE = -1
    FOURTH = 0
    LEFT = 1
    MIDDLE = 2
    RIGHT = 3


ROTOR_SLOTS = (Slot.FOURTH, Slot.LEFT, Slot.MIDDLE, Slot.RIGHT)


def advance(offsets, middle, right) -> list:
    """
    Step the rotor offsets for one key press and return the new offsets.

    offsets is indexed by Slot (fourth, left, middle, right), middle and right
    are the rotors in those slots. The right rotor always steps. A middle rotor
    sitting on its notch steps itself and the left rotor (the double step), and
    a right rotor arriving at its turnover point steps the middle rotor.
    The fourth wheel never moves.
    """
    new = [int(offset) % alphabet.N_LETTERS for offset in offsets]
    middle_before = new[Slot.MIDDLE]

    new[Slot.RIGHT] = (new[Slot.RIGHT] + 1) % alphabet.N_LETTERS

    if middle.is_notch_point(middle_before):
        new[Slot.MIDDLE] = (new[Slot.MIDDLE] + 1) % alphabet.N_LETTERS
        new[Slot.LEFT] = (new[Slot.LEFT] + 1) % alphabet.N_LETTERS

    if right.is_turnover_point(new[Slot.RIGHT]):
        new[Slot.MIDDLE] = (new[Slot.MIDDLE] + 1) % alphabet.N_LETTERS

    return new
