"""Unit tests for the local JSON cache"""
import json

from breadmade.core.cache import LocalCache


def test_set_get_remove(tmp_path):
    """Test values survive a new cache instance and can be removed"""
    path = tmp_path / "cache" / "auth.json"
    LocalCache(path).set("auth_user", {"id": "user-1"})

    cache = LocalCache(path)
    assert cache.get("auth_user") == {"id": "user-1"}

    cache.remove("auth_user")
    assert cache.get("auth_user") is None
    assert json.loads(path.read_text()) == {}


def test_latest_write_wins(tmp_path):
    """Test a key keeps only its most recent value"""
    cache = LocalCache(tmp_path / "auth.json")
    cache.set("auth_user", {"id": "user-1"})
    cache.set("auth_user", {"id": "user-2"})

    assert cache.get("auth_user") == {"id": "user-2"}


def test_corrupted_file_is_moved_aside(tmp_path):
    """Test an unreadable cache file reads as empty and is backed up"""
    path = tmp_path / "auth.json"
    path.write_text("{not json")

    cache = LocalCache(path)

    assert cache.get("auth_user") is None
    assert (tmp_path / "auth.bak").exists()
    cache.set("auth_session", {"access_token": "t"})
    assert cache.get("auth_session") == {"access_token": "t"}
