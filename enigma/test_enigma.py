import string

import unittest as ut

from enigma import alphabet, catalog, pairs, stepping
from enigma.errors import InvalidConfig, InvalidWiring
from enigma.machine import Machine
from enigma.mapper import Direction, Mapper
from enigma.rotor import Rotor, RotorSpec
from enigma.stepping import Slot


def classic_machine(offsets='AAA', rings='AAA', plugs=()):
    machine = Machine()
    for slot, wheel, ring, offset in zip(('left', 'middle', 'right'), ('I', 'II', 'III'), rings, offsets):
        machine.configure_rotor(slot, wheel, ring, offset)
    machine.configure_reflector(named='Reflector B')
    machine.configure_plugboard(list(plugs))
    machine.set_fourth_wheel_enabled(False)
    return machine


class AlphabetTest(ut.TestCase):
    def test_conversions(self):
        self.assertEqual(alphabet.char_to_index('a'), 0)
        self.assertEqual(alphabet.char_to_index('Z'), 25)
        self.assertEqual(alphabet.index_to_letter(20), 'U')
        self.assertEqual(alphabet.index_to_number(0), '1')
        self.assertEqual(alphabet.number_to_index('26'), 25)
        with self.assertRaises(ValueError):
            alphabet.char_to_index('1')
        with self.assertRaises(ValueError):
            alphabet.number_to_index('27')
        # non ascii letters whose upper case is ascii
        for char in ('\u0131', '\u017f', '\u00e9'):
            self.assertFalse(alphabet.is_letter(char))
            with self.assertRaises(ValueError):
                alphabet.char_to_index(char)

    def test_parse_position(self):
        self.assertEqual(alphabet.parse_position('C'), 2)
        self.assertEqual(alphabet.parse_position('3'), 2)
        self.assertEqual(alphabet.parse_position(2), 2)
        self.assertEqual(alphabet.format_position(2), 'C')
        self.assertEqual(alphabet.format_position(2, use_numbers=True), '3')
        with self.assertRaises(ValueError):
            alphabet.parse_position(26)


class MapperTest(ut.TestCase):
    def test_cipher_string(self):
        mapper = Mapper.from_cipher_string('I', 'EKMFLGDQVZNTOWYHXUSPAIBRCJ')
        self.assertEqual(mapper.translate(Direction.FORWARD, 0), 4)
        self.assertEqual(mapper.translate(Direction.BACKWARD, 4), 0)
        self.assertFalse(mapper.is_reflector_shaped())
        for i in range(26):
            self.assertEqual(mapper.translate(Direction.BACKWARD, mapper.translate(Direction.FORWARD, i)), i)
        self.assertEqual(mapper.inverse[4], 0)
        for i in range(26):
            self.assertEqual(mapper.inverse[mapper.forward[i]], i)

    def test_invalid_wiring(self):
        with self.assertRaises(InvalidWiring):
            Mapper.from_cipher_string('short', string.ascii_uppercase[:-1])
        with self.assertRaises(InvalidWiring):
            Mapper.from_cipher_string('twice', 'A' + string.ascii_uppercase[:-1])
        with self.assertRaises(InvalidWiring):
            Mapper.from_cipher_string('digit', '1' + string.ascii_uppercase[1:])

    def test_from_pairs_is_involution(self):
        mapper = Mapper.from_pairs('plugs', ['AB', 'CD', 'XZ'])
        for i in range(26):
            self.assertEqual(mapper.translate(Direction.FORWARD, mapper.translate(Direction.FORWARD, i)), i)
        self.assertEqual(mapper.translate(Direction.FORWARD, 0), 1)
        self.assertEqual(mapper.translate(Direction.FORWARD, 25), 23)
        self.assertEqual(mapper.translate(Direction.FORWARD, 4), 4)
        self.assertFalse(mapper.is_reflector_shaped())

    def test_from_pairs_duplicate_letter(self):
        with self.assertRaises(InvalidConfig):
            Mapper.from_pairs('plugs', ['AB', 'BC'])
        with self.assertRaises(InvalidConfig):
            Mapper.from_pairs('plugs', ['AA'])
        with self.assertRaises(InvalidConfig):
            Mapper.from_pairs('plugs', ['ABC'])
        with self.assertRaises(InvalidConfig):
            Mapper.from_pairs('plugs', ['AB', 'C'])

    def test_reflector_shaped(self):
        reflector = catalog.get_reflector_spec('Reflector B').wiring
        self.assertTrue(reflector.is_reflector_shaped())
        for i in range(26):
            out = reflector.translate(Direction.FORWARD, i)
            self.assertNotEqual(out, i)
            self.assertEqual(reflector.translate(Direction.FORWARD, out), i)


class RotorTest(ut.TestCase):
    def test_notch_precedes_turnover(self):
        spec = catalog.get_rotor_spec('I')
        self.assertEqual(spec.turnover_points, frozenset([17]))
        self.assertEqual(spec.notch_points, frozenset([16]))

        spec = catalog.get_rotor_spec('VI')
        self.assertEqual(spec.turnover_points, frozenset([0, 13]))
        self.assertEqual(spec.notch_points, frozenset([25, 12]))

        rotor = Rotor(spec)
        self.assertTrue(rotor.is_notch_point(25))
        self.assertTrue(rotor.is_turnover_point(0))
        self.assertFalse(rotor.is_notch_point(0))

    def test_rotor_round_trip(self):
        rotor = Rotor(catalog.get_rotor_spec('IV'))
        for ring in range(26):
            rotor.set_ring_setting(ring)
            for offset in range(26):
                rotor.set_offset(offset)
                for i in range(26):
                    self.assertEqual(rotor.swap(Direction.BACKWARD, rotor.swap(Direction.FORWARD, i)), i)

    def test_position_and_ring(self):
        rotor = Rotor(catalog.get_rotor_spec('I'))
        self.assertEqual(rotor.swap(Direction.FORWARD, 0), 4)

        rotor.set_offset(1)
        self.assertEqual(rotor.swap(Direction.FORWARD, 0), 9)

        rotor.set_offset(0)
        rotor.set_ring_setting(1)
        self.assertEqual(rotor.swap(Direction.FORWARD, 0), 10)

    def test_offset_does_not_touch_ring(self):
        rotor = Rotor(catalog.get_rotor_spec('II'), ring_setting=5, offset=30)
        self.assertEqual(rotor.offset, 4)
        self.assertEqual(rotor.ring_setting, 5)

    def test_spec_rejects_bad_cipher(self):
        with self.assertRaises(InvalidWiring):
            RotorSpec('bad', 'ABC')


class SteppingTest(ut.TestCase):
    def setUp(self):
        self.left = Rotor(catalog.get_rotor_spec('I'))
        self.middle = Rotor(catalog.get_rotor_spec('II'))
        self.right = Rotor(catalog.get_rotor_spec('III'))

    def test_right_rotor_full_turn(self):
        offsets = [0, 0, 0, 0]
        middle_moves = []
        for _ in range(26):
            new = stepping.advance(offsets, self.middle, self.right)
            if new[Slot.MIDDLE] != offsets[Slot.MIDDLE]:
                middle_moves.append(new[Slot.RIGHT])
            offsets = new
        self.assertEqual(offsets, [0, 0, 1, 0])
        # III turns over when it arrives at W
        self.assertEqual(middle_moves, [22])

    def test_double_step(self):
        # A D U -> A D V -> A E W -> B F X
        offsets = [0, 0, 3, 20]
        seen = []
        for _ in range(3):
            offsets = stepping.advance(offsets, self.middle, self.right)
            seen.append(alphabet.indices_to_text(offsets[1:]))
        self.assertListEqual(seen, ['ADV', 'AEW', 'BFX'])

    def test_fourth_never_moves(self):
        offsets = [7, 0, 0, 0]
        for _ in range(26 * 26 * 2):
            offsets = stepping.advance(offsets, self.middle, self.right)
        self.assertEqual(offsets[Slot.FOURTH], 7)

    def test_advance_returns_new_list(self):
        offsets = [0, 0, 0, 25]
        new = stepping.advance(offsets, self.middle, self.right)
        self.assertEqual(offsets, [0, 0, 0, 25])
        self.assertEqual(new, [0, 0, 0, 0])


class PipelineTest(ut.TestCase):
    def test_stage_order(self):
        machine = classic_machine()
        ids = [stage.mapper.id for stage in machine.pipeline.stages]
        self.assertListEqual(ids, ['Key', 'Plugboard', 'III', 'II', 'I', 'Reflector',
                                   'I', 'II', 'III', 'Plugboard', 'Lamp'])

        machine.configure_rotor('fourth', 'Beta', 0, 0)
        machine.set_fourth_wheel_enabled(True)
        ids = [stage.mapper.id for stage in machine.pipeline.stages]
        self.assertEqual(len(ids), 13)
        self.assertListEqual(ids[4:9], ['I', 'Beta', 'Reflector', 'Beta', 'I'])

    def test_fold_without_stepping(self):
        machine = classic_machine()
        self.assertEqual(machine.pipeline.fold(0), 20)
        self.assertEqual(machine.rotor_offsets, (0, 0, 0, 0))

    def test_translate_steps_once(self):
        machine = classic_machine()
        calls = []

        def step():
            calls.append(1)
            return [0, 0, 0, 1]

        machine.pipeline.translate(0, step)
        self.assertEqual(len(calls), 1)
        self.assertEqual(machine.rotors[Slot.RIGHT].offset, 1)

    def test_trace(self):
        machine = classic_machine()
        trace = []
        machine.pipeline.fold(0, trace)
        self.assertEqual(trace[0], 'Key(A->A)')
        self.assertEqual(trace[2], 'III[A](A->B)')
        self.assertEqual(trace[-1], 'Lamp(U->U)')


class MachineTest(ut.TestCase):
    def test_reference_message(self):
        machine = classic_machine()
        self.assertEqual(machine.encipher_string('AAAAA'), 'BDZGO')
        self.assertEqual(machine.window(), 'AAF')

    def test_first_key_at_aaa(self):
        machine = classic_machine(offsets='AAZ')
        self.assertEqual(machine.encipher_char('A'), 'U')
        self.assertEqual(machine.window(), 'AAA')

    def test_double_step_through_machine(self):
        machine = classic_machine(offsets='ADU')
        windows = []
        for _ in range(3):
            machine.encipher_char('A')
            windows.append(machine.window())
        self.assertListEqual(windows, ['ADV', 'AEW', 'BFX'])

    def test_encrypt_decrypt(self):
        test_message = 'THISISAVERYMEANINGLESSTESTMESSAGEBUTITSMORETHENTWENTYSIXCHARACTERSLONG'
        machine = classic_machine(offsets='QEV', rings='BMZ', plugs=pairs.random_pairs(10, seed=41))
        rotor_positions = machine.rotor_offsets

        encoded_message = machine.encipher_string(test_message)
        self.assertNotEqual(encoded_message, test_message)
        for plain, cipher in zip(test_message, encoded_message):
            self.assertNotEqual(plain, cipher)

        machine.set_rotor_offsets(rotor_positions)
        decoded_message = machine.encipher_string(encoded_message)
        self.assertEqual(decoded_message, test_message)

    def test_self_reciprocal_per_key(self):
        machine = classic_machine(offsets='XYZ', plugs=['AQ', 'BT'])
        start = machine.rotor_offsets
        for letter in string.ascii_uppercase:
            machine.set_rotor_offsets(start)
            out = machine.encipher_char(letter)
            machine.set_rotor_offsets(start)
            self.assertEqual(machine.encipher_char(out), letter)

    def test_four_rotor_thin_reflector(self):
        machine = classic_machine()
        machine.configure_rotor(Slot.FOURTH, 'Beta', 0, 0)
        machine.set_fourth_wheel_enabled(True)
        machine.configure_reflector(named='Reflector B Thin')
        self.assertEqual(machine.encipher_string('AAAAA'), 'BDZGO')
        self.assertEqual(machine.window(), 'AAAF')

    def test_custom_reflector(self):
        machine = classic_machine()
        machine.configure_reflector(custom_pairs=['AY', 'BR', 'CU', 'DH', 'EQ', 'FS',
                                                  'GL', 'IP', 'JX', 'KN', 'MO', 'TZ'])
        self.assertTrue(machine.is_config_valid())
        self.assertEqual(machine.encipher_string('AAAAA'), 'BDZGO')

    def test_invalid_reflector_blocks(self):
        machine = classic_machine()
        machine.configure_reflector(custom_pairs=['AY', 'BR', 'CU', 'DH', 'EQ', 'FS',
                                                  'GL', 'IP', 'JX', 'KN', 'MO'])
        self.assertFalse(machine.is_config_valid())
        with self.assertRaises(InvalidConfig):
            machine.encipher_char('A')
        self.assertEqual(machine.rotor_offsets, (0, 0, 0, 0))

        machine.set_reflector_pair(11, 'TZ')
        self.assertTrue(machine.is_config_valid())
        self.assertEqual(machine.encipher_char('A'), 'B')

    def test_invalid_plugboard_blocks(self):
        machine = classic_machine(plugs=['AB', 'BC'])
        self.assertFalse(machine.is_config_valid())
        self.assertListEqual([err.slot for err in machine.config_errors()], [0, 1])
        with self.assertRaises(InvalidConfig):
            machine.encipher_string('HELLO')

    def test_single_plug_and_extension(self):
        machine = classic_machine()
        machine.set_plug(11, 'AB')
        machine.set_rotor_offsets('AAA')
        self.assertEqual(machine.encipher_char('B'), 'A')

        machine.set_extended_plugboard(False)
        self.assertEqual(machine.get_settings().plugs[11], 'AB')
        machine.set_rotor_offsets('AAA')
        self.assertEqual(machine.encipher_char('A'), 'B')

    def test_non_letters(self):
        machine = classic_machine()
        self.assertEqual(machine.encipher_string('a a-a!'), 'BDZ')
        with self.assertRaises(ValueError):
            machine.encipher_char('1')

    def test_unknown_names(self):
        machine = classic_machine()
        with self.assertRaises(InvalidConfig):
            machine.configure_rotor('left', 'IX')
        with self.assertRaises(InvalidConfig):
            machine.configure_reflector(named='Reflector D')
        with self.assertRaises(InvalidConfig):
            machine.configure_reflector(named='I')
        with self.assertRaises(InvalidConfig):
            machine.configure_rotor('nowhere', 'I')
        with self.assertRaises(InvalidConfig):
            machine.set_entry_wheel('III')

        start = machine.rotor_offsets
        for slot in ('none', Slot.NONE, -1, 7):
            with self.assertRaises(InvalidConfig):
                machine.configure_rotor(slot, 'I', 0, 'Q')
            with self.assertRaises(InvalidConfig):
                machine.set_rotor_offset(slot, 'Q')
            with self.assertRaises(InvalidConfig):
                machine.set_ring_setting(slot, 'Q')
        self.assertEqual(machine.rotor_offsets, start)
        self.assertEqual(machine.window(), 'AAA')
        self.assertNotIn(Slot.NONE, machine.rotors)
        self.assertEqual(machine.rotors[Slot.RIGHT].offset, 0)

    def test_entry_wheel(self):
        machine = classic_machine(offsets='XYZ')
        machine.set_entry_wheel('ETW-R')
        start = machine.rotor_offsets
        cipher = machine.encipher_string('ENTRYWHEEL')
        machine.set_rotor_offsets(start)
        self.assertEqual(machine.encipher_string(cipher), 'ENTRYWHEEL')

    def test_reconfigure_rebuilds(self):
        machine = classic_machine()
        self.assertEqual(machine.encipher_char('A'), 'B')
        machine.configure_plugboard(['AB'])
        machine.set_rotor_offsets('AAA')
        # B is plugged to A, A enciphers to B at AAB, which is plugged back to A
        self.assertEqual(machine.encipher_char('B'), 'A')

    def test_default_settings(self):
        machine = Machine()
        self.assertEqual(machine.wheel_choice('left'), 'I')
        self.assertEqual(machine.window(), 'AUZ')
        machine.use_numbers = True
        self.assertEqual(machine.window(), '1 21 26')

    def test_show_logs_signal_path(self):
        machine = classic_machine()
        machine.show = True
        with self.assertLogs('enigma.machine', level='INFO') as logs:
            machine.encipher_char('A')
        self.assertIn('Key: A', logs.output[0])
        self.assertIn('Lamp: B', logs.output[0])


class CatalogTest(ut.TestCase):
    def test_split(self):
        rotor_ids = catalog.rotor_ids()
        reflector_ids = catalog.reflector_ids()
        for wheel in ('I', 'VIII', 'Beta', 'Gamma', 'ETW', 'ETW-R', 'I-K', 'IIIC'):
            self.assertIn(wheel, rotor_ids)
        for reflector in ('Reflector A', 'Reflector B', 'Reflector C', 'Reflector B Thin',
                          'Reflector C Thin', 'UKW-R', 'UKW-K'):
            self.assertIn(reflector, reflector_ids)
        self.assertFalse(set(rotor_ids) & set(reflector_ids))
        for spec in catalog.list_reflector_types():
            self.assertTrue(spec.wiring.is_reflector_shaped())

    def test_reference_data(self):
        spec = catalog.get_rotor_spec('I')
        self.assertEqual(spec.cipher, 'EKMFLGDQVZNTOWYHXUSPAIBRCJ')
        self.assertEqual(spec.turnovers, 'R')
        self.assertEqual(catalog.get_reflector_spec('Reflector B').cipher, 'YRUHQSLDPXNGOKMIEBFZCWVJAT')


if __name__ == '__main__':
    ut.main()
