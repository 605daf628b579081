import dataclasses
import logging

import dill

from enigma import alphabet
from enigma.errors import InvalidConfig

logger = logging.getLogger(__name__)

ROTOR_COUNT = 4


@dataclasses.dataclass
class MachineSettings:
    """
    Everything needed to set up a machine, in the form it is exchanged and stored.
    Rotor lists run fourth, left, middle, right. Ring settings and offsets are
    indices 0..25.
    """
    reflector_choice: str = 'Reflector B'
    reconfigurable: bool = False
    pairs: list = dataclasses.field(default_factory=list)
    fourth_wheel: bool = False
    use_numbers: bool = False
    show: bool = False
    wheels: list = dataclasses.field(default_factory=lambda: ['IV', 'I', 'II', 'III'])
    ring_settings: list = dataclasses.field(default_factory=lambda: [0, 1, 10, 1])
    rotor_offsets: list = dataclasses.field(default_factory=lambda: [0, 0, 20, 25])
    plugs: list = dataclasses.field(default_factory=list)
    extended_plugboard: bool = True
    entry_wheel: str = 'ETW'

    def __post_init__(self):
        for name in ('wheels', 'ring_settings', 'rotor_offsets'):
            if len(getattr(self, name)) != ROTOR_COUNT:
                raise InvalidConfig(f'{name} needs {ROTOR_COUNT} entries (fourth, left, middle, right)')
        self.wheels = [str(wheel) for wheel in self.wheels]
        self.ring_settings = [alphabet.parse_position(value) for value in self.ring_settings]
        self.rotor_offsets = [alphabet.parse_position(value) for value in self.rotor_offsets]
        self.pairs = [str(text).upper() for text in self.pairs]
        self.plugs = [str(text).upper() for text in self.plugs]

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: dict):
        known = {field.name for field in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidConfig(f'unknown keys in settings: {", ".join(sorted(unknown))}')
        return cls(**data)


def default_settings() -> MachineSettings:
    return MachineSettings()


def save_settings(settings: MachineSettings, path):
    with open(path, 'wb') as out_file:
        dill.dump(settings.to_dict(), out_file)
    logger.debug('settings written to %s', path)


def load_settings(path) -> MachineSettings:
    """Unpickles the file with dill, so only load files from a trusted source."""
    with open(path, 'rb') as read_file:
        data = dill.load(read_file)
    logger.debug('settings read from %s', path)
    return MachineSettings.from_dict(data)
