import pytest

import sdial_core as core
from sdial_core import Lock, MoveSequence, Wheel


def _seq(text):
    seq, err = core.parse_moves(text)
    assert err is None
    return seq


def test_wheel_starts_neutral():
    w = Wheel()
    assert (w.position, w.bias) == (0, 0)
    assert str(w) == "0|"


@pytest.mark.parametrize("code", range(core.WHEEL_CODES))
@pytest.mark.parametrize("bias", [-1, 0, 1])
def test_wheel_advance_rule(code, bias):
    w = Wheel(code)
    pos, cur = w.position, w.bias
    w.advance(bias)
    assert 0 <= w.code < core.WHEEL_CODES
    assert w.bias == bias
    if cur < bias:
        assert w.position == pos
    else:
        assert w.position == (pos + 1) % core.WHEEL_POSITIONS


def test_wheel_catches_up_lean_without_step():
    w = Wheel.from_parts(2, -1)
    w.advance(0)
    assert (w.position, w.bias) == (2, 0)
    w.advance(1)
    assert (w.position, w.bias) == (2, 1)
    w.advance(1)
    assert (w.position, w.bias) == (3, 1)


def test_wheel_wraps_after_five_steps():
    w = Wheel()
    for _ in range(5):
        w.advance(0)
    assert (w.position, w.bias) == (0, 0)


def test_wheel_reset():
    w = Wheel.from_parts(4, 1)
    w.reset()
    assert w == Wheel()


@pytest.mark.parametrize("position,bias", [(5, 0), (-1, 0), (0, 2)])
def test_wheel_rejects_bad_parts(position, bias):
    with pytest.raises(ValueError):
        Wheel.from_parts(position, bias)


@pytest.mark.parametrize("code", [-1, 15, 99])
def test_wheel_rejects_bad_code(code):
    with pytest.raises(ValueError):
        Wheel(code)


def test_single_slide_moves_three_wheels():
    lock = Lock()
    lock.slide(0)
    assert str(lock) == "(1|,0>,0|,1<)"


def test_two_up_slides():
    assert str(core.replay(_seq("UU"))) == "(2|,1>,0|,2<)"


@pytest.mark.parametrize("direction", range(4))
def test_slide_is_deterministic(direction):
    a, b = Lock(), Lock()
    a.slide(direction)
    b.slide(direction)
    assert a == b
    assert a.key() == b.key()


def test_slide_rejects_bad_direction():
    with pytest.raises(ValueError):
        Lock().slide(4)


def test_lock_reset_and_key_roundtrip():
    lock = core.replay(_seq("URDLL"))
    assert Lock.from_key(lock.key()) == lock
    lock.reset()
    assert lock == Lock()
    assert lock.key() == (1, 1, 1, 1)


def test_lock_order_follows_wheel_codes():
    low = Lock.from_key((1, 3, 4, 2))
    high = Lock.from_key((2, 1, 3, 4))
    assert low < high
    assert sorted([high, low]) == [low, high]


def test_lock_from_key_rejects_bad_codes():
    with pytest.raises(ValueError):
        Lock.from_key((1, 1, 1))
    with pytest.raises(ValueError):
        Lock.from_key((1, 1, 1, 15))


def test_six_ups_return_to_one_up():
    assert core.replay(_seq("UUUUUU")) == core.replay(_seq("U"))


def test_move_sequence_rendering():
    assert str(MoveSequence((0, 1, 2, 3))) == "URDL"
    assert len(MoveSequence((0, 0))) == 2


def test_parse_moves():
    seq, err = core.parse_moves(" urdl ")
    assert err is None
    assert seq.moves == (0, 1, 2, 3)

    seq, err = core.parse_moves("UX")
    assert seq is None
    assert "X" in err

    seq, err = core.parse_moves("")
    assert seq is None
    assert err
