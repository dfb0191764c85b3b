import logging

import sdial_core as core


def test_default_search_config():
    cfg = core.default_search_config()
    assert cfg == {"max_moves": 10, "show_all": False, "show_dups": False, "show_bests": False}


def test_normalize_search_config():
    cfg = core.normalize_search_config({"max_moves": "3", "show_all": "yes", "show_dups": 0})
    assert cfg == {"max_moves": 3, "show_all": True, "show_dups": False, "show_bests": False}
    assert core.normalize_search_config(None) == core.default_search_config()


def test_normalize_warns_on_rejected_max_moves(caplog):
    with caplog.at_level(logging.WARNING, logger="sdial_core"):
        assert core.normalize_search_config({"max_moves": "abc"})["max_moves"] == 10
    assert "'abc'" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="sdial_core"):
        assert core.normalize_search_config({"max_moves": -2})["max_moves"] == 10
    assert "-2" in caplog.text


def test_normalize_accepts_valid_max_moves_quietly(caplog):
    with caplog.at_level(logging.WARNING, logger="sdial_core"):
        core.normalize_search_config({"max_moves": 0})
    assert caplog.records == []


def test_parse_max_moves():
    assert core.parse_max_moves("12") == (12, None)
    assert core.parse_max_moves(" 0 ") == (0, None)
    value, err = core.parse_max_moves("ten")
    assert value is None and "ten" in err
    value, err = core.parse_max_moves("-1")
    assert value is None and err
