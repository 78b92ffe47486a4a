from datetime import datetime

from pathly_cli.utils.id_utils import generate_id


def test_id_is_epoch_millis():
    now = datetime(2024, 6, 12, 10, 0, 0)
    assert generate_id(set(), now) == int(now.timestamp() * 1000)


def test_collisions_are_bumped():
    now = datetime(2024, 6, 12, 10, 0, 0)
    base = int(now.timestamp() * 1000)
    assert generate_id({base, base + 1}, now) == base + 2
