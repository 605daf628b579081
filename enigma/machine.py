import logging

from enigma import alphabet, catalog, pairs, settings, stepping
from enigma.errors import InvalidConfig
from enigma.mapper import Mapper
from enigma.pipeline import Pipeline
from enigma.rotor import Rotor
from enigma.stepping import ROTOR_SLOTS, Slot

logger = logging.getLogger(__name__)


def to_slot(slot) -> Slot:
    if isinstance(slot, str):
        try:
            slot = Slot[slot.upper()]
        except KeyError:
            raise InvalidConfig(f'unknown rotor slot {slot!r}')
    else:
        try:
            slot = Slot(slot)
        except ValueError:
            raise InvalidConfig(f'unknown rotor slot {slot!r}')
    if slot is Slot.NONE:
        raise InvalidConfig('a rotor needs one of the slots fourth, left, middle or right')
    return slot


def check_entry_wheel(wheel_id: str):
    if wheel_id not in [spec.id for spec in catalog.ENTRY_WHEELS]:
        raise InvalidConfig(f'{wheel_id!r} is not an entry wheel')


class Machine:
    """
    One enigma machine: the configuration of its wheels, reflector and plugboard
    plus the rotor offsets that move with every key press.

    Configuration calls only record the new set-up. The signal path is rebuilt by
    rebuild(), which is also done on the next key press if anything changed.
    """

    def __init__(self, machine_settings: settings.MachineSettings = None):
        self.rotors = {}
        self.offsets = [0] * len(ROTOR_SLOTS)
        self.reflector_choice = 'Reflector B'
        self.reconfigurable = False
        self.reflector_pairs = pairs.reflector_pairs()
        self.plugs = pairs.plugboard_pairs()
        self.extended_plugboard = True
        self.fourth_wheel = False
        self.entry_wheel = 'ETW'
        self.use_numbers = False
        self.show = False
        self._pipeline = None

        if machine_settings is None:
            machine_settings = settings.default_settings()
        self.apply_settings(machine_settings)

    def configure_rotor(self, slot, wheel_id: str, ring_setting=0, start_offset=0):
        slot = to_slot(slot)
        spec = catalog.get_rotor_spec(wheel_id)
        offset = alphabet.parse_position(start_offset)
        self.rotors[slot] = Rotor(spec, alphabet.parse_position(ring_setting), offset)
        self.offsets[slot] = offset
        self._invalidate()
        logger.debug('%s rotor: %r', slot.name.lower(), self.rotors[slot])

    def set_ring_setting(self, slot, ring_setting):
        self.rotors[to_slot(slot)].set_ring_setting(alphabet.parse_position(ring_setting))
        self._invalidate()

    def set_rotor_offset(self, slot, offset):
        slot = to_slot(slot)
        self.offsets[slot] = alphabet.parse_position(offset)
        self.rotors[slot].set_offset(self.offsets[slot])

    def set_rotor_offsets(self, offsets):
        """Offsets run (fourth, left, middle, right), a 3 entry sequence leaves the fourth wheel alone."""
        offsets = list(offsets)
        if len(offsets) not in (3, 4):
            raise InvalidConfig(f'{len(offsets)} offsets given, expected 3 or 4')
        for slot, offset in zip(ROTOR_SLOTS[-len(offsets):], offsets):
            self.set_rotor_offset(slot, offset)

    @property
    def rotor_offsets(self) -> tuple:
        return tuple(self.offsets)

    def wheel_choice(self, slot) -> str:
        return self.rotors[to_slot(slot)].id

    def ring_setting(self, slot) -> int:
        return self.rotors[to_slot(slot)].ring_setting

    def active_slots(self) -> tuple:
        return ROTOR_SLOTS if self.fourth_wheel else ROTOR_SLOTS[1:]

    def window(self) -> str:
        """The rotor positions as shown in the windows of the lid, left to right."""
        separator = ' ' if self.use_numbers else ''
        return separator.join(alphabet.format_position(self.offsets[slot], self.use_numbers)
                              for slot in self.active_slots())

    def set_fourth_wheel_enabled(self, state: bool):
        self.fourth_wheel = bool(state)
        self._invalidate()

    def set_entry_wheel(self, wheel_id: str):
        check_entry_wheel(wheel_id)
        self.entry_wheel = wheel_id
        self._invalidate()

    def configure_reflector(self, named: str = None, custom_pairs=None):
        if (named is None) == (custom_pairs is None):
            raise InvalidConfig('configure the reflector either by name or by custom pairs')
        if named is not None:
            catalog.get_reflector_spec(named)
            self.reflector_choice = named
            self.reconfigurable = False
        else:
            self.reflector_pairs.set_pairs(custom_pairs)
            self.reconfigurable = True
        self._invalidate()

    def set_reflector_pair(self, index: int, text: str):
        self.reflector_pairs.set_pair(index, text)
        self._invalidate()

    def is_reflector_valid(self) -> bool:
        if self.reconfigurable:
            return self.reflector_pairs.is_valid()
        return True

    def _build_reflector(self) -> Mapper:
        if self.reconfigurable:
            return self.reflector_pairs.to_mapper('Reflector')
        return Mapper('Reflector', catalog.get_reflector_spec(self.reflector_choice).wiring.forward)

    def configure_plugboard(self, plug_pairs):
        self.plugs.set_pairs(plug_pairs)
        self._invalidate()

    def set_plug(self, index: int, text: str):
        self.plugs.set_pair(index, text)
        self._invalidate()

    def set_extended_plugboard(self, state: bool):
        self.extended_plugboard = bool(state)
        pairs.set_extended(self.plugs, self.extended_plugboard)
        self._invalidate()

    def is_plugboard_valid(self) -> bool:
        return self.plugs.is_valid()

    def is_config_valid(self) -> bool:
        return self.is_plugboard_valid() and self.is_reflector_valid()

    def config_errors(self) -> list:
        errors = list(self.plugs.errors())
        if self.reconfigurable:
            errors += self.reflector_pairs.errors()
        return errors

    def validate(self):
        self.plugs.validate('plugboard')
        if self.reconfigurable:
            self.reflector_pairs.validate('reflector')

    def _invalidate(self):
        self._pipeline = None

    def rebuild(self) -> Pipeline:
        """Build the signal path from the current configuration."""
        self.validate()
        for slot in ROTOR_SLOTS:
            if slot not in self.rotors:
                raise InvalidConfig(f'no wheel in the {slot.name.lower()} slot')

        entry = catalog.get_rotor_spec(self.entry_wheel).wiring.forward
        self._pipeline = Pipeline.build(keyboard=Mapper('Key', entry),
                                        plugboard=self.plugs.to_mapper('Plugboard'),
                                        rotors=self.rotors,
                                        reflector=self._build_reflector(),
                                        lampboard=Mapper('Lamp', entry),
                                        fourth_wheel=self.fourth_wheel)
        self._pipeline.update_offsets(self.offsets)
        return self._pipeline

    @property
    def pipeline(self) -> Pipeline:
        if self._pipeline is None:
            self.rebuild()
        return self._pipeline

    def _step(self) -> list:
        self.offsets = stepping.advance(self.offsets, self.rotors[Slot.MIDDLE], self.rotors[Slot.RIGHT])
        return self.offsets

    def translate(self, index: int) -> int:
        if not self.is_config_valid():
            self.validate()
        pipeline = self.pipeline
        trace = [f'Key: {alphabet.index_to_letter(index)}'] if self.show else None
        output = pipeline.translate(index, self._step, trace)
        if trace is not None:
            trace.append(f'Lamp: {alphabet.index_to_letter(output)}')
            logger.info('  '.join(trace))
        return output

    def encipher_char(self, char: str) -> str:
        if not self.is_config_valid():
            self.validate()
        return alphabet.index_to_letter(self.translate(alphabet.char_to_index(char)))

    def encipher_string(self, text: str) -> str:
        """Encipher every letter of text, anything else is dropped."""
        return ''.join(self.encipher_char(char) for char in text if alphabet.is_letter(char))

    def get_settings(self) -> settings.MachineSettings:
        return settings.MachineSettings(
            reflector_choice=self.reflector_choice,
            reconfigurable=self.reconfigurable,
            pairs=self.reflector_pairs.links(),
            fourth_wheel=self.fourth_wheel,
            use_numbers=self.use_numbers,
            show=self.show,
            wheels=[self.rotors[slot].id for slot in ROTOR_SLOTS],
            ring_settings=[self.rotors[slot].ring_setting for slot in ROTOR_SLOTS],
            rotor_offsets=list(self.offsets),
            plugs=self.plugs.texts(),
            extended_plugboard=self.extended_plugboard,
            entry_wheel=self.entry_wheel,
        )

    def apply_settings(self, machine_settings: settings.MachineSettings):
        # names are checked before anything is changed
        for wheel in machine_settings.wheels:
            catalog.get_rotor_spec(wheel)
        catalog.get_reflector_spec(machine_settings.reflector_choice)
        check_entry_wheel(machine_settings.entry_wheel)
        if len(machine_settings.pairs) > len(self.reflector_pairs) or len(machine_settings.plugs) > len(self.plugs):
            raise InvalidConfig('too many reflector pairs or plugs in the settings')

        for slot, wheel, ring, offset in zip(ROTOR_SLOTS, machine_settings.wheels,
                                             machine_settings.ring_settings, machine_settings.rotor_offsets):
            self.configure_rotor(slot, wheel, ring, offset)

        self.reflector_choice = machine_settings.reflector_choice
        self.reconfigurable = machine_settings.reconfigurable
        self.reflector_pairs.set_pairs(machine_settings.pairs)

        self.set_extended_plugboard(machine_settings.extended_plugboard)
        self.plugs.set_pairs(machine_settings.plugs)

        self.set_fourth_wheel_enabled(machine_settings.fourth_wheel)
        self.set_entry_wheel(machine_settings.entry_wheel)
        self.use_numbers = machine_settings.use_numbers
        self.show = machine_settings.show
        self._invalidate()

    def __repr__(self):
        wheels = ' '.join(self.rotors[slot].id for slot in self.active_slots() if slot in self.rotors)
        return f'<Machine {wheels} window={self.window()} valid={self.is_config_valid()}>'
