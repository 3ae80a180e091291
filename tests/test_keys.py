import pytest

from protoact.keys import (
    DEFAULT_BINDINGS,
    KEY_COUNT,
    KEY_INPUT_Z,
    PAD_INPUT_1,
    Button,
    Key,
    KeyBinding,
)


def keyboard(*pressed):
    state = [0] * KEY_COUNT
    for code in pressed:
        state[code] = 1
    return state


@pytest.fixture
def key(tmp_path):
    return Key(tmp_path / "key_config.dat")


def test_missing_file_gives_defaults(key):
    assert key.get_bindings() == DEFAULT_BINDINGS
    assert key.get_bindings()[Button.JUMP] == KeyBinding(KEY_INPUT_Z, PAD_INPUT_1)


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "key_config.dat"
    first = Key(path)
    bindings = first.get_bindings()
    bindings[Button.ATTACK] = KeyBinding(17, 1 << 9)
    bindings[Button.PLUS] = KeyBinding(42, 1 << 12)
    first.set_bindings(bindings)
    first.save_setting()
    assert Key(path).get_bindings() == bindings


def test_file_has_keys_then_pads(tmp_path):
    path = tmp_path / "key_config.dat"
    Key(path).save_setting()
    lines = path.read_text().splitlines()
    assert len(lines) == 2 * len(Button)
    assert int(lines[0]) == DEFAULT_BINDINGS[Button.JUMP].key
    assert int(lines[len(Button)]) == DEFAULT_BINDINGS[Button.JUMP].pad


def test_unparsable_lines_read_as_zero(tmp_path):
    path = tmp_path / "key_config.dat"
    path.write_text("abc\n")
    bindings = Key(path).get_bindings()
    assert all(b == KeyBinding(0, 0) for b in bindings.values())


def test_set_bindings_requires_every_button(key):
    with pytest.raises(KeyError):
        key.set_bindings({Button.JUMP: KeyBinding(1, 1)})


def test_get_bindings_returns_copy(key):
    bindings = key.get_bindings()
    bindings[Button.JUMP].key = 99
    assert key.get_bindings()[Button.JUMP] == DEFAULT_BINDINGS[Button.JUMP]


def test_press_hold_release_keyboard(key):
    jump = DEFAULT_BINDINGS[Button.JUMP].key
    key.update(keyboard(jump), 0)
    assert key.check(Button.JUMP) and key.check_once(Button.JUMP)
    key.update(keyboard(jump), 0)
    assert key.check(Button.JUMP) and not key.check_once(Button.JUMP)
    key.update(keyboard(), 0)
    assert not key.check(Button.JUMP)
    assert key.check_let_go(Button.JUMP)
    key.update(keyboard(), 0)
    assert not key.check_let_go(Button.JUMP)


def test_pad_press_counts(key):
    pad = DEFAULT_BINDINGS[Button.ATTACK].pad
    key.update(keyboard(), pad)
    assert key.check_once(Button.ATTACK)
    assert not key.check(Button.JUMP)


def test_held_on_pad_not_once_when_keyboard_joins(key):
    binding = DEFAULT_BINDINGS[Button.LEFT]
    key.update(keyboard(), binding.pad)
    key.update(keyboard(binding.key), binding.pad)
    assert key.check(Button.LEFT)
    assert not key.check_once(Button.LEFT)


def test_get_key_once_reports_new_key(key):
    key.update(keyboard(5), 0)
    key.update(keyboard(5, 9), 0)
    assert key.get_key_once() == 9
    key.update(keyboard(5, 9), 0)
    assert key.get_key_once() is None


def test_get_pad_once_returns_bit(key):
    key.update(keyboard(), 1 << 3)
    key.update(keyboard(), (1 << 3) | (1 << 7))
    assert key.get_pad_once() == 1 << 7
    key.update(keyboard(), (1 << 3) | (1 << 7))
    assert key.get_pad_once() is None


def test_update_rejects_oversized_state(key):
    with pytest.raises(ValueError):
        key.update([0] * (KEY_COUNT + 1), 0)