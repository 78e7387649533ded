import numpy as np
import pytest

from falling_block_rl.game import (
    PLAYABLE_TYPES,
    SHAPES,
    Player,
    RotationDirection,
    TetrominoType,
    kind_of,
    rotate_shape,
)


def _pattern(shape):
    return ["".join("#" if c else "." for c in row) for row in shape]


def test_catalog_bounding_boxes():
    assert SHAPES[TetrominoType.I].shape == (4, 4)
    assert SHAPES[TetrominoType.O].shape == (2, 2)
    for kind in (TetrominoType.J, TetrominoType.L, TetrominoType.S, TetrominoType.T, TetrominoType.Z):
        assert SHAPES[kind].shape == (3, 3)
    assert SHAPES[TetrominoType.NONE].shape == (1, 1)
    assert not SHAPES[TetrominoType.NONE].any()


def test_every_playable_shape_has_four_cells_tagged_with_its_kind():
    assert len(PLAYABLE_TYPES) == 7
    assert TetrominoType.NONE not in PLAYABLE_TYPES
    for kind in PLAYABLE_TYPES:
        shape = SHAPES[kind]
        assert np.count_nonzero(shape) == 4
        assert set(np.unique(shape).tolist()) <= {0, int(kind)}
        assert kind_of(shape) is kind


def test_catalog_is_read_only():
    with pytest.raises(ValueError):
        SHAPES[TetrominoType.T][0, 0] = 1


def test_clockwise_rotation_of_t():
    rotated = rotate_shape(SHAPES[TetrominoType.T], RotationDirection.CLOCKWISE)
    assert _pattern(rotated) == [".#.", "##.", ".#."]


def test_counter_clockwise_rotation_of_t():
    rotated = rotate_shape(SHAPES[TetrominoType.T], RotationDirection.COUNTER_CLOCKWISE)
    assert _pattern(rotated) == [".#.", ".##", ".#."]


@pytest.mark.parametrize("kind", PLAYABLE_TYPES)
@pytest.mark.parametrize("direction", list(RotationDirection))
def test_four_rotations_restore_shape(kind, direction):
    shape = SHAPES[kind]
    rotated = shape
    for _ in range(4):
        rotated = rotate_shape(rotated, direction)
        assert kind_of(rotated) is kind
    assert np.array_equal(rotated, shape)


@pytest.mark.parametrize("kind", PLAYABLE_TYPES)
def test_counter_clockwise_undoes_clockwise(kind):
    shape = SHAPES[kind]
    back = rotate_shape(rotate_shape(shape, RotationDirection.CLOCKWISE), RotationDirection.COUNTER_CLOCKWISE)
    assert np.array_equal(back, shape)


def test_o_piece_is_rotation_fixed_point():
    shape = SHAPES[TetrominoType.O]
    assert np.array_equal(rotate_shape(shape, RotationDirection.CLOCKWISE), shape)


def test_rotation_returns_writable_copy():
    rotated = rotate_shape(SHAPES[TetrominoType.L], RotationDirection.CLOCKWISE)
    rotated[0, 0] = 9
    assert SHAPES[TetrominoType.L][0, 0] == 0


def test_kind_of_empty_shape_is_none():
    assert kind_of(np.zeros((3, 3), dtype=np.int8)) is TetrominoType.NONE


def test_player_spawn_and_cells():
    player = Player.spawn(TetrominoType.O, 12)
    assert (player.x, player.y) == (4, 0)
    assert not player.collided
    assert sorted(player.cells_at()) == [(4, 0), (4, 1), (5, 0), (5, 1)]
    assert sorted(player.cells_at(1, 2)) == [(5, 2), (5, 3), (6, 2), (6, 3)]


def test_default_player_is_sentinel():
    player = Player()
    assert player.kind is TetrominoType.NONE
    assert player.cells_at() == []


def test_player_copy_is_independent():
    player = Player.spawn(TetrominoType.T, 12)
    clone = player.copy()
    clone.x += 3
    clone.shape[1, 1] = 0
    assert player.x == 4
    assert player.shape[1, 1] == int(TetrominoType.T)
