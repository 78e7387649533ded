import numpy as np

from falling_block_rl.game import Player, RotationDirection, Stage, TetrominoType, rotate, rotate_shape


def test_free_rotation_keeps_position():
    stage = Stage()
    player = Player.spawn(TetrominoType.T, stage.width)
    player.y = 5
    rotated = rotate(player, stage, RotationDirection.CLOCKWISE)
    assert rotated is not None
    assert (rotated.x, rotated.y) == (player.x, player.y)
    assert np.array_equal(rotated.shape, rotate_shape(player.shape, RotationDirection.CLOCKWISE))


def test_rotation_never_mutates_the_input():
    stage = Stage()
    player = Player.spawn(TetrominoType.L, stage.width)
    before = player.shape.copy()
    rotate(player, stage, RotationDirection.COUNTER_CLOCKWISE)
    assert np.array_equal(player.shape, before)
    assert player.x == 4


def test_kick_one_column_left_off_right_wall():
    stage = Stage()
    player = Player.spawn(TetrominoType.I, stage.width)
    # Vertical I one column from the right wall; horizontal it needs four columns
    player.x = stage.width - 3
    player.y = 5
    rotated = rotate(player, stage, RotationDirection.CLOCKWISE)
    assert rotated is not None
    assert rotated.x == stage.width - 4
    assert rotated.y == 5
    assert not stage.collides(rotated)


def test_i_against_right_wall_does_not_kick_two_left():
    stage = Stage()
    player = Player.spawn(TetrominoType.I, stage.width)
    # Only a net -2 shift would fit; the search stops before testing it
    player.x = stage.width - 2
    player.y = 5
    assert not stage.collides(player)
    assert rotate(player, stage, RotationDirection.CLOCKWISE) is None
    assert player.x == stage.width - 2


def test_three_wide_shape_tries_plus_two():
    stage = Stage()
    player = Player.spawn(TetrominoType.T, stage.width)
    player.y = 5
    # Block net offsets 0, +1 and -1 for the clockwise T; +2 is free
    stage.locked[6, player.x - 1:player.x + 2] = True
    rotated = rotate(player, stage, RotationDirection.CLOCKWISE)
    assert rotated is not None
    assert rotated.x == player.x + 2


def test_kick_one_column_right():
    stage = Stage()
    player = Player.spawn(TetrominoType.T, stage.width)
    player.y = 5
    # Counter-clockwise T needs the top middle cell of its box
    stage.locked[5, player.x + 1] = True
    assert not stage.collides(player)
    rotated = rotate(player, stage, RotationDirection.COUNTER_CLOCKWISE)
    assert rotated is not None
    assert rotated.x == player.x + 1


def test_rotation_fails_without_room():
    stage = Stage()
    player = Player.spawn(TetrominoType.I, stage.width)
    well = player.x + 1
    stage.locked[:, :] = True
    stage.locked[:, well] = False
    assert not stage.collides(player)
    assert rotate(player, stage, RotationDirection.CLOCKWISE) is None
    assert rotate(player, stage, RotationDirection.COUNTER_CLOCKWISE) is None


def test_o_piece_rotates_in_place():
    stage = Stage()
    player = Player.spawn(TetrominoType.O, stage.width)
    player.x = 0
    rotated = rotate(player, stage, RotationDirection.CLOCKWISE)
    assert rotated is not None
    assert rotated.x == 0
    assert np.array_equal(rotated.shape, player.shape)
