import pytest

from proofofduel.keycode import ALL_KEYS, KeyCode, key_label


def test_all_keys_labels_only_for_pool_keys():
    labels = [key_label(key) for key in ALL_KEYS]
    assert len(labels) == 194
    assert [label for label in labels if label] == ["E", "Q", "R", "W"]


def test_all_keys_are_unique_by_code_name():
    assert len({KeyCode(key.value) for key in ALL_KEYS}) == 194


def test_key_order_follows_table():
    ends = [KeyCode(key.value) for key in (ALL_KEYS[0], ALL_KEYS[-1])]
    assert ends == [KeyCode.Backquote, KeyCode.F35]


def test_lookup_by_code_name():
    assert KeyCode("KeyQ") is KeyCode.KeyQ
    with pytest.raises(ValueError):
        KeyCode("NoSuchKey")


@pytest.mark.parametrize(
    "key,label",
    [(KeyCode.KeyQ, "Q"), (KeyCode.KeyW, "W"), (KeyCode.KeyE, "E"), (KeyCode.KeyR, "R")],
)
def test_pool_labels(key, label):
    assert key_label(key) == label


def test_other_keys_have_empty_label():
    assert key_label(KeyCode.KeyA) == ""
    assert key_label(KeyCode.Space) == ""