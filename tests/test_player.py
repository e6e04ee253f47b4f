import pytest

from proofofduel.player import (
    HEART_SPACING,
    MAX_HEARTS,
    Player,
    PlayerHeartsStatus,
    PlayersCounting,
    PlayerSelection,
    ShootingLock,
    game_over_messages,
    heart_position,
    label_position,
    player_label,
    player_position,
    shooting_response,
)
from proofofduel.protocol import GRID_SIZE, GameOver, ShootingStateMessage, UpdateHeartsStatus
from proofofduel.shooting import ShootingEvent


def _states(correct=5):
    return tuple(ShootingStateMessage("Q", i < correct) for i in range(5))


def test_player_selection_reset():
    selection = PlayerSelection(2, 77)
    selection.reset()
    assert (selection.player_number, selection.client_id) == (0, 0)


def test_players_counting_reset():
    counting = PlayersCounting(2)
    counting.reset()
    assert counting.count == 0


def test_player_wallet_defaults_empty():
    assert Player(3, 1).wallet == ""


def test_hearts_default_and_reset():
    hearts = PlayerHeartsStatus()
    assert (hearts.player_1_hearts, hearts.player_2_hearts) == (5, 5)
    hearts.player_1_hearts = 0
    hearts.player_2_hearts = 2
    hearts.reset()
    assert hearts == PlayerHeartsStatus(MAX_HEARTS, MAX_HEARTS)


def test_shooting_lock_cycle():
    lock = ShootingLock()
    assert lock.is_locked() is False
    lock.lock()
    assert lock.is_locked() is True
    lock.unlock()
    assert lock.is_locked() is False
    lock.lock()
    lock.reset()
    assert lock.is_locked() is False


def test_player_position_value():
    assert player_position(1) == (-480.0, -160.0, 100.0)


def test_players_are_mirrored():
    x1, y1, z1 = player_position(1)
    x2, y2, z2 = player_position(2)
    assert x1 == -x2
    assert (y1, z1) == (y2, z2)
    assert x1 < 0


@pytest.mark.parametrize("index", range(MAX_HEARTS))
def test_hearts_are_mirrored(index):
    x1, y1, _ = heart_position(1, index)
    x2, y2, _ = heart_position(2, index)
    assert x1 == -x2
    assert y1 == y2 == GRID_SIZE * 3


def test_hearts_are_evenly_spaced():
    xs = [heart_position(1, i)[0] for i in range(MAX_HEARTS)]
    assert [b - a for a, b in zip(xs, xs[1:])] == [HEART_SPACING] * (MAX_HEARTS - 1)


def test_label_positions_mirror():
    assert label_position(1)[0] == -label_position(2)[0]
    assert label_position(1)[1] == GRID_SIZE * 4.5


@pytest.mark.parametrize("bad", [0, 3])
def test_invalid_player_number(bad):
    with pytest.raises(ValueError):
        player_position(bad)


def test_invalid_heart_index():
    with pytest.raises(ValueError):
        heart_position(1, MAX_HEARTS)


def test_player_label():
    selection = PlayerSelection(2, 9)
    assert player_label(2, selection) == "You"
    assert player_label(1, selection) == "Player 1"
    assert player_label(2, PlayerSelection()) == "Player 2"


@pytest.mark.parametrize("shooter, hit", [(1, 2), (2, 1)])
def test_shooting_response_fires(shooter, hit):
    lock = ShootingLock(True)
    hearts = PlayerHeartsStatus(4, 3)
    result = shooting_response(ShootingEvent(shooter, _states()), lock, hearts)
    assert result == UpdateHeartsStatus(4, 3, hit)
    assert lock.is_locked() is False


def test_shooting_response_needs_lock():
    lock = ShootingLock(False)
    assert shooting_response(ShootingEvent(1, _states()), lock, PlayerHeartsStatus()) is None
    assert lock.is_locked() is False


def test_shooting_response_needs_all_correct():
    lock = ShootingLock(True)
    assert shooting_response(ShootingEvent(1, _states(4)), lock, PlayerHeartsStatus()) is None
    assert lock.is_locked() is True


def test_shooting_response_ignores_unknown_player():
    lock = ShootingLock(True)
    assert shooting_response(ShootingEvent(0, _states()), lock, PlayerHeartsStatus()) is None
    assert lock.is_locked() is True


def test_game_over_messages():
    assert game_over_messages(PlayerHeartsStatus(3, 2)) == []
    assert game_over_messages(PlayerHeartsStatus(0, 2)) == [GameOver(2)]
    assert game_over_messages(PlayerHeartsStatus(1, 0)) == [GameOver(1)]
    assert game_over_messages(PlayerHeartsStatus(0, 0)) == [GameOver(2), GameOver(1), GameOver(0)]