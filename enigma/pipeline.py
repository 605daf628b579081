import dataclasses
import logging

from enigma import alphabet
from enigma.mapper import Direction
from enigma.stepping import ROTOR_SLOTS, Slot

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Stage:
    slot: Slot
    mapper: object
    direction: Direction

    def update_offset(self, slot: Slot, offset: int):
        if slot is not Slot.NONE and slot == self.slot:
            self.mapper.set_offset(offset)

    def swap(self, index: int) -> int:
        return self.mapper.swap(self.direction, index)

    def describe(self, index: int, output: int) -> str:
        offset = getattr(self.mapper, 'offset', None)
        position = '' if offset is None else f'[{alphabet.index_to_letter(offset)}]'
        return f'{self.mapper.id}{position}({alphabet.index_to_letter(index)}->{alphabet.index_to_letter(output)})'


class Pipeline:
    """
    The signal path of one key press, as an ordered list of stages.
    The rotor stages share their Rotor objects between the way in and the way back,
    so re-offsetting a slot moves both stages.
    """

    def __init__(self, stages):
        self.stages = list(stages)

    @classmethod
    def build(cls, keyboard, plugboard, rotors, reflector, lampboard, fourth_wheel: bool = False):
        """
        :param rotors: mapping of Slot to Rotor, the fourth slot is only used if fourth_wheel is set
        """
        wheel_slots = [Slot.RIGHT, Slot.MIDDLE, Slot.LEFT]
        if fourth_wheel:
            wheel_slots.append(Slot.FOURTH)

        stages = [Stage(Slot.NONE, keyboard, Direction.FORWARD),
                  Stage(Slot.NONE, plugboard, Direction.FORWARD)]
        stages += [Stage(slot, rotors[slot], Direction.FORWARD) for slot in wheel_slots]
        stages.append(Stage(Slot.NONE, reflector, Direction.FORWARD))
        stages += [Stage(slot, rotors[slot], Direction.BACKWARD) for slot in reversed(wheel_slots)]
        stages += [Stage(Slot.NONE, plugboard, Direction.BACKWARD),
                   Stage(Slot.NONE, lampboard, Direction.BACKWARD)]

        logger.debug('pipeline built: %s', ' '.join(stage.mapper.id for stage in stages))
        return cls(stages)

    def update_offsets(self, offsets):
        for slot, offset in zip(ROTOR_SLOTS, offsets):
            for stage in self.stages:
                stage.update_offset(slot, offset)

    def fold(self, index: int, trace: list = None) -> int:
        """Translate at the current rotor offsets, without stepping."""
        for stage in self.stages:
            output = stage.swap(index)
            if trace is not None:
                trace.append(stage.describe(index, output))
            index = output
        return index

    def translate(self, index: int, step, trace: list = None) -> int:
        """
        Translate one key press.
        step is called exactly once before the signal passes and returns the new
        offsets (fourth, left, middle, right).
        """
        self.update_offsets(step())
        return self.fold(index, trace)

    def __len__(self):
        return len(self.stages)

    def __repr__(self):
        return f'<Pipeline {" ".join(stage.mapper.id for stage in self.stages)}>'
