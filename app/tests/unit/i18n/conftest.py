"""Feature-level fixtures for engine tests.

Provides YAML language directories for loader and factory tests.
"""

import pytest
import yaml


@pytest.fixture
def temp_lang_dir(tmp_path):
    """Create a temporary directory with sample YAML language files.

    Returns a directory structure like:
    - global.yml
    - test_en_us.yml
    - test_en_gb.yml
    - test_fr_fr.yml
    """
    global_data = {"prefix": "[Test]", "permission": {"deny": "Denied."}}
    with open(tmp_path / "global.yml", "w", encoding="utf-8") as f:
        yaml.dump(global_data, f)

    en_us = {
        "command": {
            "not_found": "Unknown command: {command}",
            "help": ["Line one", "Line two"],
        },
        "greeting": {
            "welcome": {
                "mode": "sequential",
                "pool": ["Hello, {player}!", "Welcome back, {player}!"],
            },
            "random": {"pool": ["Hi", "Hey"]},
        },
        "link": {
            "text": "[Help]",
            "command": "/help {topic}",
            "hover": ["Open help on {topic}"],
        },
        "Mixed": {"Case": "value"},
        "empty": None,
    }
    with open(tmp_path / "test_en_us.yml", "w", encoding="utf-8") as f:
        yaml.dump(en_us, f, allow_unicode=True)

    en_gb = {"greeting": {"welcome": {"mode": "SEQUENTIAL_REVERSED", "pool": ["Hiya", "Cheers"]}}}
    with open(tmp_path / "test_en_gb.yml", "w", encoding="utf-8") as f:
        yaml.dump(en_gb, f)

    fr_fr = {
        "command": {"not_found": "Commande inconnue : {command}"},
        "link": {"text": "[Aide]", "hover": "Une ligne\nDeux lignes"},
        "bad": {"mode": "shuffle", "pool": ["x"]},
    }
    with open(tmp_path / "test_fr_fr.yml", "w", encoding="utf-8") as f:
        yaml.dump(fr_fr, f, allow_unicode=True)

    return tmp_path
